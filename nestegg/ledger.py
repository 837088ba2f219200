"""General ledger: accounts, the append-only journal and financial statements.

The main class is `Ledger`. It owns two collections:

- `accounts` in creation order,
- `journal_entries` in the order they were recorded (not sorted by date).

Entries enter the journal only through `Ledger.record()`, which builds and
validates a `JournalEntry`. Builders (`Ledger.entry()`) and macros
(`Ledger.do`) all end up there.

Balances are never stored. Every balance and every statement is computed by
replaying the journal with `Ledger.activity()`:

- `get_balance_sheet(as_of)`: assets, liabilities, equity at a date,
- `get_income_statement(start, end)`: income and expenses over a period,
- `get_cash_flow_statement(start, end)`: operating, investing and financing
  cash flows over a period,
- `get_trial_balance(as_of)`: balance of every account at a date.

The ledger is not thread-safe, callers sharing it across threads must
serialise access themselves.
"""

import datetime
import logging
from collections import UserDict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Sequence

import simplejson as json  # type: ignore
from pydantic import BaseModel, ConfigDict

from .allocation import allocate_proportionally
from .base import (
    AccountNotFound,
    AccountType,
    IdSequence,
    InvalidDate,
    NestEggError,
    NoCashAccount,
    SaveLoadMixin,
    to_amount,
    to_date,
)
from .chart import Account, Chart
from .entry import JournalEntry, JournalEntryBuilder, Posting
from .macros import Macros

logger = logging.getLogger(__name__)


class ReportDict(UserDict[str, Decimal], SaveLoadMixin):
    """Account name to amount mapping with a total."""

    @property
    def total(self) -> Decimal:
        return Decimal(sum(self.data.values()))

    def model_dump_json(self, indent: int = 2, warnings: bool = False):
        return json.dumps(self.data, indent=indent)

    @classmethod
    def model_validate_json(cls, text: str):
        return cls(json.loads(text, use_decimal=True))


class Report(BaseModel, SaveLoadMixin):
    """Base class for financial reports."""

    model_config = ConfigDict(frozen=True)


class BalanceSheet(Report):
    """Balance sheet at a date.

    Income and expense accounts are never closed, so their net balance to
    date is shown as `current_earnings` and the check is

        balance_check = assets - liabilities - equity - current_earnings

    which is zero for every ledger. `assets - liabilities - equity` alone
    equals `current_earnings`, not zero.
    """

    date: datetime.date
    assets: Decimal
    liabilities: Decimal
    equity: Decimal
    current_earnings: Decimal
    balance_check: Decimal

    def is_balanced(self) -> bool:
        """Return True if assets equal liabilities plus equity and earnings."""
        return self.balance_check == 0


class IncomeStatement(Report):
    start_date: datetime.date
    end_date: datetime.date
    income: Decimal
    expenses: Decimal
    net_income: Decimal


class CashFlowStatement(Report):
    start_date: datetime.date
    end_date: datetime.date
    operating: Decimal
    investing: Decimal
    financing: Decimal
    net_cash_change: Decimal

    def is_reconciled(self) -> bool:
        """Return True if the three sections add up to net change in cash."""
        return self.operating + self.investing + self.financing == self.net_cash_change


class TrialBalanceLine(Report):
    id: int
    name: str
    type: AccountType
    balance: Decimal


def cash_flow_category(account: Account) -> str | None:
    """Classify a non-cash account for the cash flow statement."""
    match account.type:
        case AccountType.Income | AccountType.Expense:
            return "operating"
        case AccountType.Asset if not account.is_cash_account:
            return "investing"
        case AccountType.Equity | AccountType.Liability:
            return "financing"
    return None


def check_period(start, end) -> tuple[datetime.date, datetime.date]:
    start, end = to_date(start), to_date(end)
    if start > end:
        raise InvalidDate(f"Start date {start} is after end date {end}.")
    return start, end


@dataclass
class Ledger:
    accounts: list[Account] = field(default_factory=list)
    journal_entries: list[JournalEntry] = field(default_factory=list)
    ids: IdSequence = field(default_factory=IdSequence)
    allocation_unit: Decimal = Decimal(1)

    def __post_init__(self):
        self.allocation_unit = to_amount(self.allocation_unit)

    @classmethod
    def from_chart(cls, chart: Chart, **kwargs) -> "Ledger":
        """Create ledger with accounts from chart, cash accounts first."""
        ledger = cls(**kwargs)
        for name, t, is_cash in chart.entries():
            if is_cash:
                ledger.create_cash_account(name)
            else:
                ledger.create_non_cash_account(name, t)
        return ledger

    @property
    def do(self) -> Macros:
        """Named business transactions, eg `ledger.do.sale(Sale(...))`."""
        return Macros(self)

    # accounts

    def create_cash_account(self, name: str) -> Account:
        return self._add_account(name, AccountType.Asset, True)

    def create_non_cash_account(self, name: str, t: AccountType | str) -> Account:
        return self._add_account(name, t, False)

    def _add_account(self, name, t, is_cash_account) -> Account:
        # account names are unique within a ledger
        NestEggError.must_not_exist(self.account_names, name)
        account = Account.create(name, t, is_cash_account, self.ids)
        self.accounts.append(account)
        logger.debug("Created account #%d %s (%r)", account.id, name, account.type)
        return account

    @property
    def account_names(self) -> list[str]:
        return [account.name for account in self.accounts]

    def account(self, name: str) -> Account:
        """Find account by name."""
        for account in self.accounts:
            if account.name == name:
                return account
        raise AccountNotFound(f"Account {name} not found.")

    def by_type(self, t: AccountType) -> list[Account]:
        return [account for account in self.accounts if account.type is t]

    @property
    def cash_accounts(self) -> list[Account]:
        return [account for account in self.accounts if account.is_cash_account]

    def owns(self, account: Account) -> bool:
        return any(account == a for a in self.accounts)

    # journal

    def record(
        self, date: datetime.date, description: str, postings: Sequence[Posting]
    ) -> JournalEntry:
        """Validate and append a journal entry. The only way into the journal."""
        try:
            for posting in postings:
                if isinstance(posting, Posting) and not self.owns(posting.account):
                    raise AccountNotFound(
                        f"Account {posting.account.name} does not belong to this ledger."
                    )
            entry = JournalEntry(date, description, postings, self.ids)
        except NestEggError as e:
            logger.debug("Rejected entry %r: %s", description, e)
            raise
        self.journal_entries.append(entry)
        logger.debug(
            "Recorded entry #%d on %s: %s (%s)",
            entry.id,
            entry.date,
            description,
            entry.total_debits,
        )
        return entry

    def entry(self, date: datetime.date, description: str) -> JournalEntryBuilder:
        return JournalEntryBuilder(self, date, description)

    def entries_between(self, start=None, end=None) -> Iterable[JournalEntry]:
        """Yield recorded entries dated within [start, end], open bounds when None."""
        start = None if start is None else to_date(start)
        end = None if end is None else to_date(end)
        for entry in self.journal_entries:
            if start is not None and entry.date < start:
                continue
            if end is not None and entry.date > end:
                continue
            yield entry

    def activity(self, account: Account, start=None, end=None) -> Decimal:
        """Net change of account balance over entries dated within [start, end]."""
        total = Decimal(0)
        for entry in self.entries_between(start, end):
            for posting in entry.postings:
                if posting.account.id == account.id:
                    total += account.apply(posting.side, posting.amount)
        return total

    def _total(self, t: AccountType, start=None, end=None) -> Decimal:
        return sum(
            (self.activity(account, start, end) for account in self.by_type(t)),
            Decimal(0),
        )

    # reports

    def get_balance_sheet(self, as_of: datetime.date) -> BalanceSheet:
        as_of = to_date(as_of)
        assets = self._total(AccountType.Asset, end=as_of)
        liabilities = self._total(AccountType.Liability, end=as_of)
        equity = self._total(AccountType.Equity, end=as_of)
        current_earnings = self._total(AccountType.Income, end=as_of) - self._total(
            AccountType.Expense, end=as_of
        )
        return BalanceSheet(
            date=as_of,
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            current_earnings=current_earnings,
            balance_check=assets - liabilities - equity - current_earnings,
        )

    def get_income_statement(
        self, start: datetime.date, end: datetime.date
    ) -> IncomeStatement:
        start, end = check_period(start, end)
        income = self._total(AccountType.Income, start, end)
        expenses = self._total(AccountType.Expense, start, end)
        return IncomeStatement(
            start_date=start,
            end_date=end,
            income=income,
            expenses=expenses,
            net_income=income - expenses,
        )

    def get_cash_flow_statement(
        self, start: datetime.date, end: datetime.date
    ) -> CashFlowStatement:
        """Cash flows by category.

        Net cash change is the period activity of cash accounts. Each entry
        that touches cash has its cash movement split across its non-cash
        postings in proportion to their amounts, and every share is added to
        the category of the posting's account.
        """
        start, end = check_period(start, end)
        cash_accounts = self.cash_accounts
        if not cash_accounts:
            raise NoCashAccount("No cash account found in ledger.")
        cash_ids = {account.id for account in cash_accounts}

        net_cash_change = sum(
            (self.activity(account, start, end) for account in cash_accounts),
            Decimal(0),
        )
        buckets = dict(operating=Decimal(0), investing=Decimal(0), financing=Decimal(0))
        for entry in self.entries_between(start, end):
            cash_postings = [p for p in entry.postings if p.account.id in cash_ids]
            other_postings = [p for p in entry.postings if p.account.id not in cash_ids]
            if not cash_postings:
                continue
            cash_delta = sum((p.signed_amount for p in cash_postings), Decimal(0))
            if cash_delta == 0 or not other_postings:
                continue
            shares = allocate_proportionally(
                cash_delta, [p.amount for p in other_postings], self.allocation_unit
            )
            for posting, share in zip(other_postings, shares):
                if category := cash_flow_category(posting.account):
                    buckets[category] += share
        logger.debug("Cash flow %s..%s: %s", start, end, buckets)
        return CashFlowStatement(
            start_date=start,
            end_date=end,
            net_cash_change=net_cash_change,
            **buckets,
        )

    def get_trial_balance(self, as_of: datetime.date) -> list[TrialBalanceLine]:
        as_of = to_date(as_of)
        return [
            TrialBalanceLine(
                id=account.id,
                name=account.name,
                type=account.type,
                balance=self.activity(account, end=as_of),
            )
            for account in self.accounts
        ]

    def get_balance(self, account: Account | str, as_of=None) -> Decimal:
        """Balance of account (or account name), optionally as of a date."""
        if isinstance(account, str):
            account = self.account(account)
        return self.activity(account, end=as_of)

    @property
    def balances(self) -> ReportDict:
        """Current balance of every account by name."""
        return ReportDict(
            {account.name: self.activity(account) for account in self.accounts}
        )
