"""Detailed, per-account views of a ledger."""

import datetime
from dataclasses import dataclass
from decimal import Decimal

from .base import AccountType, Side, to_date
from .chart import Account
from .ledger import Ledger, ReportDict, check_period


@dataclass
class AccountActivity:
    date: datetime.date
    description: str
    side: Side
    amount: Decimal
    journal_entry_id: int


@dataclass
class DetailedBalanceSheet:
    date: datetime.date
    assets: ReportDict
    liabilities: ReportDict
    equity: ReportDict
    current_earnings: Decimal

    @property
    def balance_check(self) -> Decimal:
        return (
            self.assets.total
            - self.liabilities.total
            - self.equity.total
            - self.current_earnings
        )

    def is_balanced(self) -> bool:
        return self.balance_check == 0


@dataclass
class DetailedIncomeStatement:
    start: datetime.date
    end: datetime.date
    income: ReportDict
    expenses: ReportDict

    @property
    def net_income(self) -> Decimal:
        """Calculate net income as income less expenses."""
        return self.income.total - self.expenses.total


@dataclass
class DetailedTrialBalance:
    date: datetime.date
    debits: ReportDict
    credits: ReportDict

    def is_balanced(self) -> bool:
        return self.debits.total == self.credits.total


@dataclass
class PostingSummary:
    account: Account
    side: Side
    amount: Decimal


@dataclass
class JournalEntrySummary:
    id: int
    date: datetime.date
    description: str
    postings: list[PostingSummary]


@dataclass
class Analyzer:
    ledger: Ledger

    def __post_init__(self):
        if not isinstance(self.ledger, Ledger):
            raise TypeError("Analyzer requires a Ledger instance")

    def account_activity(self, account: Account) -> list[AccountActivity]:
        """All postings to account in journal order."""
        return [
            AccountActivity(entry.date, entry.description, p.side, p.amount, entry.id)
            for entry in self.ledger.journal_entries
            for p in entry.postings
            if p.account.id == account.id
        ]

    def fill(self, t: AccountType, start=None, end=None) -> ReportDict:
        """Return balances (or period activity) for accounts of a given type."""
        return ReportDict(
            {
                account.name: self.ledger.activity(account, start, end)
                for account in self.ledger.by_type(t)
            }
        )

    def balance_sheet(self, as_of: datetime.date) -> DetailedBalanceSheet:
        summary = self.ledger.get_balance_sheet(as_of)
        return DetailedBalanceSheet(
            date=summary.date,
            assets=self.fill(AccountType.Asset, end=summary.date),
            liabilities=self.fill(AccountType.Liability, end=summary.date),
            equity=self.fill(AccountType.Equity, end=summary.date),
            current_earnings=summary.current_earnings,
        )

    def income_statement(self, start, end) -> DetailedIncomeStatement:
        start, end = check_period(start, end)
        return DetailedIncomeStatement(
            start=start,
            end=end,
            income=self.fill(AccountType.Income, start, end),
            expenses=self.fill(AccountType.Expense, start, end),
        )

    def trial_balance(self, as_of: datetime.date) -> DetailedTrialBalance:
        """Two-column trial balance: each balance shown on its natural side.

        A negative balance of a debit-normal account is shown as a credit and
        vice versa.
        """
        debits, credits = ReportDict(), ReportDict()
        for line in self.ledger.get_trial_balance(as_of):
            on_debit_side = (line.type.normal_balance is Side.Debit) == (
                line.balance >= 0
            )
            if on_debit_side:
                debits[line.name] = abs(line.balance)
            else:
                credits[line.name] = abs(line.balance)
        return DetailedTrialBalance(
            date=to_date(as_of),
            debits=debits,
            credits=credits,
        )

    def journal_summary(self, start=None, end=None) -> list[JournalEntrySummary]:
        return [
            JournalEntrySummary(
                id=entry.id,
                date=entry.date,
                description=entry.description,
                postings=[PostingSummary(p.account, p.side, p.amount) for p in entry.postings],
            )
            for entry in self.ledger.entries_between(start, end)
        ]
