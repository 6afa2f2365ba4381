import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional

from models import FRACTIONAL_DIGITS, MAX_INTEGER_DIGITS, Transaction, TransactionType

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

AMOUNT_REQUIRED = {TransactionType.DEPOSIT, TransactionType.WITHDRAWAL}


def read_transactions(filepath: str) -> Iterator[Transaction]:
    """Lazily read CSV rows into Transactions, skipping malformed rows."""
    with open(filepath, "r", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            transaction = parse_row(row)
            if transaction:
                yield transaction


def parse_row(row: Dict[Optional[str], Optional[str]]) -> Optional[Transaction]:
    """Parse CSV row into Transaction."""
    try:
        # Short rows give None values, long rows put extras under a None key.
        normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

        transaction_type = TransactionType(normalized["type"].lower())
        client_id = _parse_id(normalized["client"], MAX_CLIENT_ID)
        transaction_id = _parse_id(normalized["tx"], MAX_TRANSACTION_ID)

        amount = None
        if transaction_type in AMOUNT_REQUIRED:
            amount = _parse_amount(normalized.get("amount", ""))

        return Transaction(
            transaction_type=transaction_type,
            client_id=client_id,
            transaction_id=transaction_id,
            amount=amount,
        )
    except (KeyError, ValueError, InvalidOperation) as e:
        logger.warning(f"Failed to parse row {row}: {e!r}")
        return None


def _parse_id(value: str, upper_bound: int) -> int:
    parsed = int(value)
    if not 0 <= parsed <= upper_bound:
        raise ValueError(f"id {parsed} out of range 0..{upper_bound}")
    return parsed


def _parse_amount(value: str) -> Decimal:
    if not value:
        raise ValueError("amount is required")
    amount = Decimal(value)
    if not amount.is_finite():
        raise ValueError(f"amount {value} is not a finite number")
    if amount < 0:
        raise ValueError(f"amount {value} is negative")
    if amount.adjusted() >= MAX_INTEGER_DIGITS:
        raise ValueError(f"amount {value} has more than {MAX_INTEGER_DIGITS} integer digits")
    if amount.normalize().as_tuple().exponent < -FRACTIONAL_DIGITS:
        raise ValueError(f"amount {value} has more than {FRACTIONAL_DIGITS} fractional digits")
    return amount
