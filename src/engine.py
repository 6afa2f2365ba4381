import logging
from typing import Callable, Dict, Iterable, Optional

from account import Account, AccountError, InMemoryAccount
from history import InMemoryTransactionHistory, TransactionHistory
from models import ProcessingResult, ProcessingStats, Transaction, TransactionRecord, TransactionType

logger = logging.getLogger(__name__)


class LedgerEngine:
    """
    Replays ledger events against client accounts in arrival order.
    Owns the client accounts and the transaction history used for disputes.
    Single-threaded: each event is fully applied before the next one.
    """

    def __init__(
        self,
        history: Optional[TransactionHistory] = None,
        account_factory: Callable[[int], Account] = InMemoryAccount,
    ):
        self._accounts: Dict[int, Account] = {}
        self._history = history if history is not None else InMemoryTransactionHistory()
        self._account_factory = account_factory
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process(self, transaction: Transaction) -> ProcessingResult:
        """
        Apply a single event.

        Returns:
            SUCCESS: Balances updated
            IGNORED: Dispute lifecycle event with nothing to act on
            FAILED: Business rule violation (insufficient funds, locked account)
            REJECTED: Malformed event (bad amount, duplicate tx id, wrong client)
        """
        if transaction.transaction_type in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL):
            result = self._handle_funds_movement(transaction)
        else:
            result = self._handle_dispute_lifecycle(transaction)

        self._stats.record(result)
        return result

    def process_all(self, transactions: Iterable[Transaction]) -> Dict[int, Account]:
        """Consume the whole event stream, then return the final account states."""
        for transaction in transactions:
            self.process(transaction)
        logger.info(f"Finished processing {self._stats.total} transactions ({self._stats})")
        return self.finalize()

    def finalize(self) -> Dict[int, Account]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)

    def _get_or_create_account(self, client_id: int) -> Account:
        if client_id not in self._accounts:
            self._accounts[client_id] = self._account_factory(client_id)
        return self._accounts[client_id]

    def _handle_funds_movement(self, transaction: Transaction) -> ProcessingResult:
        kind = transaction.transaction_type.value.capitalize()

        if transaction.amount is None or transaction.amount <= 0:
            logger.warning(f"{kind} tx {transaction.transaction_id}: invalid amount {transaction.amount}")
            return ProcessingResult.REJECTED

        if transaction.transaction_id in self._history:
            logger.warning(f"{kind} tx {transaction.transaction_id}: transaction id already used, rejecting")
            return ProcessingResult.REJECTED

        account = self._get_or_create_account(transaction.client_id)
        try:
            if transaction.transaction_type == TransactionType.DEPOSIT:
                account.deposit(transaction.amount)
            else:
                account.withdraw(transaction.amount)
        except AccountError as e:
            logger.info(f"{kind} tx {transaction.transaction_id}: {type(e).__name__}: {e}")
            return ProcessingResult.FAILED

        self._history.insert(TransactionRecord.from_transaction(transaction))
        return ProcessingResult.SUCCESS

    def _handle_dispute_lifecycle(self, transaction: Transaction) -> ProcessingResult:
        kind = transaction.transaction_type.value.capitalize()
        record = self._history.get(transaction.transaction_id)

        if record is None:
            logger.info(f"{kind} for tx {transaction.transaction_id}: transaction not found, ignoring")
            return ProcessingResult.IGNORED

        if record.client_id != transaction.client_id:
            logger.warning(f"{kind} for tx {transaction.transaction_id}: client mismatch (expected {record.client_id}, got {transaction.client_id})")
            return ProcessingResult.REJECTED

        account = self._accounts.get(transaction.client_id)
        if account is None:
            logger.info(f"{kind} for tx {transaction.transaction_id}: no account for client {transaction.client_id}, ignoring")
            return ProcessingResult.IGNORED

        try:
            if transaction.transaction_type == TransactionType.DISPUTE:
                applied = account.dispute(record)
            elif transaction.transaction_type == TransactionType.RESOLVE:
                applied = account.resolve(record)
            else:
                applied = account.chargeback(record)
        except AccountError as e:
            logger.info(f"{kind} for tx {transaction.transaction_id}: {type(e).__name__}: {e}")
            return ProcessingResult.FAILED

        if not applied:
            logger.info(f"{kind} for tx {transaction.transaction_id}: not applicable in state {record.state.value} ({record.transaction_type.value}), ignoring")
            return ProcessingResult.IGNORED

        self._history.update(record)
        return ProcessingResult.SUCCESS
