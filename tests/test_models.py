import sys
import os
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import (
    ProcessingResult,
    ProcessingStats,
    Transaction,
    TransactionRecord,
    TransactionState,
    TransactionType,
)


class TestTransaction:
    def test_create_deposit(self):
        transaction = Transaction(
            transaction_type=TransactionType.DEPOSIT,
            client_id=1,
            transaction_id=1,
            amount=Decimal("100.0"),
        )
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.client_id == 1
        assert transaction.transaction_id == 1
        assert transaction.amount == Decimal("100.0")

    def test_create_dispute_no_amount(self):
        transaction = Transaction(
            transaction_type=TransactionType.DISPUTE,
            client_id=1,
            transaction_id=1,
        )
        assert transaction.amount is None

    def test_type_from_csv_name(self):
        assert TransactionType("chargeback") == TransactionType.CHARGEBACK


class TestTransactionRecord:
    def test_deposit_record_has_positive_effect(self):
        transaction = Transaction(TransactionType.DEPOSIT, client_id=3, transaction_id=7, amount=Decimal("2.5"))
        record = TransactionRecord.from_transaction(transaction)

        assert record.transaction_id == 7
        assert record.client_id == 3
        assert record.transaction_type == TransactionType.DEPOSIT
        assert record.amount == Decimal("2.5")
        assert record.state == TransactionState.ACTIVE
        assert record.is_disputed is False

    def test_withdrawal_record_has_negative_effect(self):
        transaction = Transaction(TransactionType.WITHDRAWAL, client_id=3, transaction_id=8, amount=Decimal("1.25"))
        record = TransactionRecord.from_transaction(transaction)

        assert record.amount == Decimal("-1.25")

    def test_is_disputed(self):
        record = TransactionRecord(1, 1, TransactionType.DEPOSIT, Decimal("1"), TransactionState.DISPUTED)
        assert record.is_disputed is True


class TestProcessingStats:
    def test_counts_each_result(self):
        stats = ProcessingStats()
        stats.record(ProcessingResult.SUCCESS)
        stats.record(ProcessingResult.SUCCESS)
        stats.record(ProcessingResult.IGNORED)
        stats.record(ProcessingResult.FAILED)
        stats.record(ProcessingResult.REJECTED)

        assert stats.processed == 2
        assert stats.ignored == 1
        assert stats.failed == 1
        assert stats.rejected == 1
        assert stats.total == 5

    def test_summary(self):
        stats = ProcessingStats()
        stats.record(ProcessingResult.FAILED)
        assert str(stats) == "Processed: 0, Ignored: 0, Failed: 1, Rejected: 0"


class TestProcessingResult:
    def test_enum_values(self):
        assert ProcessingResult.SUCCESS.value == "success"
        assert ProcessingResult.IGNORED.value == "ignored"
        assert ProcessingResult.FAILED.value == "failed"
        assert ProcessingResult.REJECTED.value == "rejected"
