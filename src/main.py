import logging
import os
import sys
from decimal import Decimal

from engine import LedgerEngine
from reader import read_transactions

OUTPUT_PRECISION = Decimal("0.0001")


def configure_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def format_decimal(value: Decimal) -> str:
    """Format decimal with up to 4 decimal places, removing trailing zeros."""
    normalized = value.quantize(OUTPUT_PRECISION).normalize()
    return f"{normalized:f}"


def main():
    configure_logging()

    if len(sys.argv) != 2:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        sys.exit(1)

    filepath = sys.argv[1]
    engine = LedgerEngine()
    accounts = engine.process_all(read_transactions(filepath))

    print("client,available,held,total,locked")
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        print(
            f"{client_id},"
            f"{format_decimal(account.available)},"
            f"{format_decimal(account.held)},"
            f"{format_decimal(account.total)},"
            f"{str(account.locked).lower()}"
        )

    print(engine.stats, file=sys.stderr)


if __name__ == "__main__":
    main()
