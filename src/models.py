from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

FRACTIONAL_DIGITS = 4
# Integer digits left in the default 28-digit decimal context once the fractional digits are reserved.
MAX_INTEGER_DIGITS = 24
AMOUNT_LIMIT = Decimal(10) ** MAX_INTEGER_DIGITS


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class TransactionState(Enum):
    ACTIVE = "active"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


class ProcessingResult(Enum):
    SUCCESS = "success"
    IGNORED = "ignored"
    FAILED = "failed"
    REJECTED = "rejected"


@dataclass
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class TransactionRecord:
    """
    History entry for a processed deposit or withdrawal.
    `amount` is the signed effect on available funds (negative for withdrawals).
    """

    transaction_id: int
    client_id: int
    transaction_type: TransactionType
    amount: Decimal
    state: TransactionState = TransactionState.ACTIVE

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionRecord":
        amount = transaction.amount
        if transaction.transaction_type == TransactionType.WITHDRAWAL:
            amount = -amount
        return cls(
            transaction_id=transaction.transaction_id,
            client_id=transaction.client_id,
            transaction_type=transaction.transaction_type,
            amount=amount,
        )

    @property
    def is_disputed(self) -> bool:
        return self.state == TransactionState.DISPUTED


class ProcessingStats:
    """Counters for tracking per-event outcomes."""

    def __init__(self):
        self.processed = 0
        self.ignored = 0
        self.failed = 0
        self.rejected = 0

    def record(self, result: ProcessingResult) -> None:
        if result == ProcessingResult.SUCCESS:
            self.processed += 1
        elif result == ProcessingResult.IGNORED:
            self.ignored += 1
        elif result == ProcessingResult.FAILED:
            self.failed += 1
        elif result == ProcessingResult.REJECTED:
            self.rejected += 1

    @property
    def total(self) -> int:
        return self.processed + self.ignored + self.failed + self.rejected

    def __str__(self) -> str:
        return (
            f"Processed: {self.processed}, "
            f"Ignored: {self.ignored}, "
            f"Failed: {self.failed}, "
            f"Rejected: {self.rejected}"
        )
