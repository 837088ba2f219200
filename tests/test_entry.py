import dataclasses
from datetime import date, datetime
from decimal import Decimal

import pytest

from nestegg import (
    Account,
    AccountType,
    InsufficientPostings,
    InvalidPostingAmount,
    InvalidPostingSide,
    JournalEntry,
    Posting,
    PostingBuilder,
    Side,
    UnbalancedEntry,
)
from nestegg.base import IdSequence, InvalidDate


@pytest.fixture
def cash():
    return Account(1, "Cash", AccountType.Asset, True)


@pytest.fixture
def revenue():
    return Account(2, "Revenue", AccountType.Income)


@pytest.fixture
def rent():
    return Account(3, "Rent", AccountType.Expense)


@pytest.mark.parametrize("amount", [0, -5, "nan"])
def test_posting_amount_must_be_positive(cash, amount):
    with pytest.raises(InvalidPostingAmount):
        Posting(cash, amount, Side.Debit)


def test_posting_side_must_be_side(cash):
    with pytest.raises(InvalidPostingSide):
        Posting(cash, 10, "debit")


def test_posting_signed_amount(cash, revenue):
    assert Posting(cash, 10, Side.Credit).signed_amount == Decimal(-10)
    assert Posting(revenue, 10, Side.Credit).signed_amount == Decimal(10)


def test_posting_builder_sides(cash, revenue, rent):
    postings = (
        PostingBuilder()
        .increase(cash, 100)
        .increase(revenue, 100)
        .decrease(cash, 40)
        .increase(rent, 40)
        .build()
    )
    assert [p.side for p in postings] == [
        Side.Debit,
        Side.Credit,
        Side.Credit,
        Side.Debit,
    ]


def test_entry_needs_two_postings(cash):
    with pytest.raises(InsufficientPostings):
        JournalEntry(date(2024, 1, 1), "Lonely", [Posting(cash, 1, Side.Debit)])


def test_unbalanced_entry_reports_sums(cash, revenue):
    with pytest.raises(UnbalancedEntry) as e:
        JournalEntry(
            date(2024, 1, 1),
            "Typo",
            [Posting(cash, 100, Side.Debit), Posting(revenue, 90, Side.Credit)],
        )
    assert e.value.debits == Decimal(100)
    assert e.value.credits == Decimal(90)
    assert "debits=100, credits=90" in str(e.value)


def test_entry_requires_date(cash, revenue):
    with pytest.raises(InvalidDate):
        JournalEntry(
            None,
            "No date",
            [Posting(cash, 1, Side.Debit), Posting(revenue, 1, Side.Credit)],
        )


def test_entry_datetime_becomes_date(cash, revenue):
    entry = JournalEntry(
        datetime(2024, 3, 1, 15, 30),
        "Sale",
        [Posting(cash, 1, Side.Debit), Posting(revenue, 1, Side.Credit)],
    )
    assert entry.date == date(2024, 3, 1)


def test_entry_postings_are_debits_first_then_by_name(cash, revenue, rent):
    entry = JournalEntry(
        date(2024, 1, 1),
        "Mixed",
        [
            Posting(revenue, 100, Side.Credit),
            Posting(rent, 30, Side.Debit),
            Posting(cash, 70, Side.Debit),
        ],
        IdSequence(),
    )
    assert [p.account.name for p in entry.postings] == ["Cash", "Rent", "Revenue"]
    assert isinstance(entry.postings, tuple)
    assert entry.id == 1


def test_entry_totals(cash, revenue):
    entry = JournalEntry(
        date(2024, 1, 1),
        "Sale",
        [Posting(cash, "12.50", Side.Debit), Posting(revenue, "12.50", Side.Credit)],
    )
    assert entry.total_debits == entry.total_credits == Decimal("12.50")
    assert entry.is_balanced()
    assert entry.touches(cash)


def test_entry_str(cash, revenue):
    entry = JournalEntry(
        date(2024, 1, 1),
        "Sale A",
        [Posting(revenue, 300, Side.Credit), Posting(cash, 300, Side.Debit)],
        IdSequence(start=7),
    )
    text = str(entry)
    assert text.startswith("Journal Entry #7\nDate: 2024-01-01\nDescription: Sale A")
    assert "Total Debits:  300" in text
    assert "Total Credits: 300" in text
    assert text.endswith("Status: BALANCED")


def test_builder_post(sales_ledger):
    cash, revenue = sales_ledger.accounts
    entry = (
        sales_ledger.entry(date(2024, 3, 1), "Sale C")
        .debit(cash, 50)
        .credit(revenue, 50)
        .post()
    )
    assert sales_ledger.journal_entries[-1] is entry


def test_builder_rejects_unbalanced_post(sales_ledger):
    cash, revenue = sales_ledger.accounts
    builder = sales_ledger.entry(date(2024, 3, 1), "Bad").debit(cash, 50).credit(revenue, 40)
    with pytest.raises(UnbalancedEntry):
        builder.post()
    assert len(sales_ledger.journal_entries) == 2


@pytest.mark.parametrize("attribute", ["postings", "date", "id", "description"])
def test_recorded_entry_cannot_be_changed(sales_ledger, attribute):
    entry = sales_ledger.journal_entries[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        setattr(entry, attribute, None)
    assert sales_ledger.get_balance_sheet(date(2024, 12, 31)).is_balanced()
