from abc import ABC, abstractmethod
from typing import Dict, Optional

from models import TransactionRecord


class DuplicateTransaction(Exception):
    """Raised when a transaction id is inserted into history a second time."""


class TransactionHistory(ABC):
    """
    Store of deposit/withdrawal records used to look up disputed transactions.
    Records are never removed, so a dispute can reference any earlier transaction.
    """

    @abstractmethod
    def get(self, transaction_id: int) -> Optional[TransactionRecord]:
        pass

    @abstractmethod
    def insert(self, record: TransactionRecord) -> None:
        pass

    @abstractmethod
    def update(self, record: TransactionRecord) -> None:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __contains__(self, transaction_id: int) -> bool:
        return self.get(transaction_id) is not None


class InMemoryTransactionHistory(TransactionHistory):
    """
    Dict-backed history. Grows with every deposit and withdrawal for the
    lifetime of the run; there is no eviction.
    """

    def __init__(self):
        self._records: Dict[int, TransactionRecord] = {}

    def get(self, transaction_id: int) -> Optional[TransactionRecord]:
        """Retrieve stored record by ID."""
        return self._records.get(transaction_id)

    def insert(self, record: TransactionRecord) -> None:
        """Store record for future dispute lookups."""
        if record.transaction_id in self._records:
            raise DuplicateTransaction(f"tx {record.transaction_id} already recorded")
        self._records[record.transaction_id] = record

    def update(self, record: TransactionRecord) -> None:
        """Persist a dispute state change for an existing record."""
        if record.transaction_id not in self._records:
            raise KeyError(record.transaction_id)
        self._records[record.transaction_id] = record

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._records
