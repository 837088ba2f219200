"""Account taxonomy, posting sides, errors and shared helpers."""

import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Iterable

Numeric = int | float | str | Decimal


class NestEggError(Exception):
    """Base error for the nestegg ledger."""

    @staticmethod
    def must_not_exist(collection: Iterable[str], name: str):
        if name in collection:
            raise DuplicateAccountName(f"Account {name} already exists.")

    @staticmethod
    def must_exist(collection: Iterable[str], name: str):
        if name not in collection:
            raise AccountNotFound(f"Account {name} not found.")


class InvalidAccountName(NestEggError):
    pass


class InvalidAccountType(NestEggError):
    pass


class CashAccountTypeMismatch(NestEggError):
    pass


class DuplicateAccountName(NestEggError):
    pass


class AccountNotFound(NestEggError):
    pass


class InvalidAmount(NestEggError):
    pass


class InvalidPostingAmount(InvalidAmount):
    pass


class InvalidDate(NestEggError):
    pass


class InsufficientPostings(NestEggError):
    pass


class InvalidPostingSide(NestEggError):
    pass


class UnbalancedEntry(NestEggError):
    def __init__(self, debits: Decimal, credits: Decimal):
        self.debits = debits
        self.credits = credits
        super().__init__(
            f"Unbalanced journal entry: debits={debits}, credits={credits}"
        )


class NoCashAccount(NestEggError):
    pass


class NegativeWeight(NestEggError):
    pass


class Side(Enum):
    Debit = "debit"
    Credit = "credit"

    def __repr__(self):
        return self.value.capitalize()

    @property
    def opposite(self) -> "Side":
        return Side.Credit if self is Side.Debit else Side.Debit

    @classmethod
    def parse(cls, name: str) -> "Side":
        try:
            return cls(str(name).lower())
        except ValueError:
            raise InvalidPostingSide(f"Invalid posting side: {name!r}")


class AccountType(Enum):
    """Five types of accounts."""

    Asset = "asset"
    Liability = "liability"
    Equity = "equity"
    Income = "income"
    Expense = "expense"

    def __repr__(self):
        return self.value.capitalize()

    @property
    def normal_balance(self) -> Side:
        return NORMAL_BALANCE[self]

    @classmethod
    def parse(cls, name: "str | AccountType") -> "AccountType":
        """Convert account type name like `asset` or `Asset` to enum member."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).lower())
        except ValueError:
            raise InvalidAccountType(f"Invalid account type: {name!r}")


NORMAL_BALANCE: dict[AccountType, Side] = {
    AccountType.Asset: Side.Debit,
    AccountType.Expense: Side.Debit,
    AccountType.Liability: Side.Credit,
    AccountType.Equity: Side.Credit,
    AccountType.Income: Side.Credit,
}


def to_amount(value: Numeric) -> Decimal:
    """Convert a number to Decimal. Floats go through str() to keep 0.1 as 0.1."""
    if isinstance(value, bool):
        raise InvalidAmount(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (ArithmeticError, TypeError, ValueError):
        raise InvalidAmount(f"Invalid amount: {value!r}")


def positive_amount(value: Numeric, error=InvalidAmount) -> Decimal:
    amount = to_amount(value)
    if not amount.is_finite() or amount <= 0:
        raise error(f"Amount must be > 0, got {value!r}")
    return amount


def to_date(value) -> datetime.date:
    """Accept a date (or datetime, reduced to its date) or raise InvalidDate."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    raise InvalidDate(f"A valid date is required, got {value!r}")


class IdSequence:
    """Monotonic id generator, owned by a ledger."""

    def __init__(self, start: int = 1):
        self.next_id = start

    def __next__(self) -> int:
        value = self.next_id
        self.next_id += 1
        return value

    def __iter__(self):
        return self

    def skip_past(self, value: int):
        """Make sure the next id is greater than *value*."""
        self.next_id = max(self.next_id, value + 1)


class SaveLoadMixin:
    """A mix-in class for loading and saving pydantic models to files."""

    @classmethod
    def load(cls, filename: str | Path):
        return cls.model_validate_json(Path(filename).read_text())  # type: ignore

    def save(self, filename: str | Path, allow_overwrite: bool = False):
        if not allow_overwrite and Path(filename).exists():
            raise FileExistsError(f"File already exists: {filename}")
        content = self.model_dump_json(indent=2, warnings=False)  # type: ignore
        Path(filename).write_text(content)  # type: ignore
