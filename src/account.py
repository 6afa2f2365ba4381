from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, Inexact, localcontext

from models import AMOUNT_LIMIT, MAX_INTEGER_DIGITS, TransactionRecord, TransactionState, TransactionType


class AccountError(Exception):
    """Business rule violation raised by an account operation."""


class InsufficientFunds(AccountError):
    pass


class AccountLocked(AccountError):
    pass


class InvalidAmount(AccountError):
    pass


class AmountOverflow(AccountError):
    pass


class Account(ABC):
    """
    Capability interface for a single client's balance state.

    Implementations expose `client_id`, `available`, `held` and `locked`.
    Deposit and withdrawal raise AccountError subclasses on failure.
    Dispute, resolve and chargeback return False when the record is in the
    wrong state for the operation, leaving balances unchanged.
    """

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    @abstractmethod
    def deposit(self, amount: Decimal) -> None:
        pass

    @abstractmethod
    def withdraw(self, amount: Decimal) -> None:
        pass

    @abstractmethod
    def dispute(self, record: TransactionRecord) -> bool:
        pass

    @abstractmethod
    def resolve(self, record: TransactionRecord) -> bool:
        pass

    @abstractmethod
    def chargeback(self, record: TransactionRecord) -> bool:
        pass


@dataclass
class InMemoryAccount(Account):
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False

    def deposit(self, amount: Decimal) -> None:
        self._check_amount(amount)
        self._check_unlocked()
        self._apply(available_delta=amount)

    def withdraw(self, amount: Decimal) -> None:
        self._check_amount(amount)
        self._check_unlocked()
        if self.available < amount:
            raise InsufficientFunds(
                f"client {self.client_id}: available {self.available} is less than {amount}"
            )
        self._apply(available_delta=-amount)

    def dispute(self, record: TransactionRecord) -> bool:
        self._check_unlocked()
        # TODO: withdrawal disputes would need a way to recall funds that already left the account
        if record.transaction_type != TransactionType.DEPOSIT:
            return False
        if record.state != TransactionState.ACTIVE:
            return False

        # May drive available below zero if the funds were withdrawn after the deposit.
        self._apply(available_delta=-record.amount, held_delta=record.amount)
        record.state = TransactionState.DISPUTED
        return True

    def resolve(self, record: TransactionRecord) -> bool:
        self._check_unlocked()
        if not record.is_disputed:
            return False

        self._apply(available_delta=record.amount, held_delta=-record.amount)
        record.state = TransactionState.ACTIVE
        return True

    def chargeback(self, record: TransactionRecord) -> bool:
        self._check_unlocked()
        if not record.is_disputed:
            return False

        self._apply(held_delta=-record.amount)
        self.locked = True
        record.state = TransactionState.CHARGED_BACK
        return True

    def _apply(self, available_delta: Decimal = Decimal("0"), held_delta: Decimal = Decimal("0")) -> None:
        """Update balances only if every resulting figure stays exact and within AMOUNT_LIMIT."""
        with localcontext() as ctx:
            ctx.traps[Inexact] = True
            try:
                available = self.available + available_delta
                held = self.held + held_delta
                total = available + held
            except Inexact:
                raise AmountOverflow(f"client {self.client_id}: balance would lose precision") from None

        if any(abs(value) >= AMOUNT_LIMIT for value in (available, held, total)):
            raise AmountOverflow(f"client {self.client_id}: balance would exceed {MAX_INTEGER_DIGITS} integer digits")

        self.available = available
        self.held = held

    def _check_amount(self, amount: Decimal) -> None:
        if amount is None or amount <= 0:
            raise InvalidAmount(f"client {self.client_id}: amount must be positive, got {amount}")

    def _check_unlocked(self) -> None:
        if self.locked:
            raise AccountLocked(f"client {self.client_id}: account is locked")
