"""Ledger accounts and the chart of accounts."""

import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Iterator

from pydantic import BaseModel, ConfigDict

from .base import (
    AccountType,
    CashAccountTypeMismatch,
    IdSequence,
    InvalidAccountName,
    InvalidAccountType,
    NestEggError,
    Numeric,
    SaveLoadMixin,
    Side,
    to_amount,
)

if TYPE_CHECKING:
    from .ledger import Ledger


@dataclass(frozen=True)
class Account:
    """Ledger account. Balance is never stored, it is replayed from the journal."""

    id: int
    name: str
    type: AccountType
    is_cash_account: bool = False

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidAccountName(f"Invalid account name: {self.name!r}")
        if not isinstance(self.type, AccountType):
            raise InvalidAccountType(f"Invalid account type: {self.type!r}")
        if not isinstance(self.is_cash_account, bool):
            raise TypeError("is_cash_account must be a boolean.")
        if self.is_cash_account and self.type is not AccountType.Asset:
            raise CashAccountTypeMismatch(
                f"Cash account {self.name} must be an asset, not {self.type!r}."
            )

    @classmethod
    def create(
        cls,
        name: str,
        t: AccountType | str,
        is_cash_account: bool,
        ids: IdSequence,
    ) -> "Account":
        t = AccountType.parse(t)
        # validate before the id is taken so rejected accounts do not burn ids
        cls(0, name, t, is_cash_account)
        return cls(next(ids), name, t, is_cash_account)

    @property
    def normal_balance(self) -> Side:
        return self.type.normal_balance

    @property
    def is_debit_normal(self) -> bool:
        return self.normal_balance is Side.Debit

    def apply(self, side: Side, amount: Numeric) -> Decimal:
        """Return signed change of balance for a posting on *side*."""
        amount = to_amount(amount)
        return amount if side is self.normal_balance else -amount

    def get_balance(self, ledger: "Ledger") -> Decimal:
        return ledger.activity(self)

    def get_balance_as_of(self, ledger: "Ledger", date: datetime.date) -> Decimal:
        return ledger.activity(self, end=date)


class Chart(BaseModel, SaveLoadMixin):
    """Serializable chart of accounts, the starting configuration of a ledger."""

    model_config = ConfigDict(extra="forbid")

    cash: list[str] = []
    assets: list[str] = []
    liabilities: list[str] = []
    equity: list[str] = []
    income: list[str] = []
    expenses: list[str] = []

    def model_post_init(self, _):
        self.assert_account_names_are_valid()
        self.assert_account_names_are_unique()

    @property
    def matching(self):
        """Match attributes with account types."""
        return (
            (AccountType.Asset, "assets"),
            (AccountType.Liability, "liabilities"),
            (AccountType.Equity, "equity"),
            (AccountType.Income, "income"),
            (AccountType.Expense, "expenses"),
        )

    def add_string(self, string: str):
        """Add account by slug like `cash:Checking` or `expense:Groceries`."""
        prefix, _, account_name = string.partition(":")
        if not account_name.strip():
            raise InvalidAccountName(f"Invalid account name in {string!r}")
        if prefix.lower() == "cash":
            target = self.cash
        else:
            t = AccountType.parse(prefix)
            target = getattr(self, dict(self.matching)[t])
        NestEggError.must_not_exist(self.account_names, account_name)
        target.append(account_name)
        return self

    def entries(self) -> Iterator[tuple[str, AccountType, bool]]:
        """Yield (name, type, is_cash_account) with cash accounts first."""
        for name in self.cash:
            yield name, AccountType.Asset, True
        for t, attribute in self.matching:
            for name in getattr(self, attribute):
                yield name, t, False

    @property
    def account_names(self) -> list[str]:
        return [name for name, _, _ in self.entries()]

    @property
    def duplicates(self) -> list[str]:
        """Duplicate account names. Must be empty for valid chart."""
        names = self.account_names
        for name in set(names):
            names.remove(name)
        return names

    def assert_account_names_are_valid(self):
        for name in self.account_names:
            if not name.strip():
                raise InvalidAccountName(f"Invalid account name: {name!r}")

    def assert_account_names_are_unique(self):
        if ds := self.duplicates:
            raise NestEggError(f"Account names are not unique: {ds}")
