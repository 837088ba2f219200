"""Postings and journal entries.

A `Posting` is one leg of a journal entry: an account, a positive amount and
a side (debit or credit). A `JournalEntry` groups two or more postings whose
debits equal credits. Entries are validated once, at construction, and never
change afterwards.

`PostingBuilder` turns "increase" and "decrease" intents into correctly
sided postings, `JournalEntryBuilder` collects explicit debits and credits
and posts them to a ledger.
"""

import datetime
from dataclasses import InitVar, dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

from .base import (
    IdSequence,
    InsufficientPostings,
    InvalidPostingAmount,
    InvalidPostingSide,
    Numeric,
    Side,
    UnbalancedEntry,
    positive_amount,
    to_date,
)
from .chart import Account

if TYPE_CHECKING:
    from .ledger import Ledger

# used by entries created outside of a ledger
_free_standing_ids = IdSequence()


@dataclass(frozen=True)
class Posting:
    """One leg of a journal entry. Amount is always positive, side gives direction."""

    account: Account
    amount: Decimal
    side: Side

    def __post_init__(self):
        object.__setattr__(
            self, "amount", positive_amount(self.amount, InvalidPostingAmount)
        )
        if not isinstance(self.side, Side):
            raise InvalidPostingSide(f"Posting side must be Debit or Credit: {self.side!r}")

    @property
    def signed_amount(self) -> Decimal:
        return self.account.apply(self.side, self.amount)


def sums(postings: Sequence[Posting], side: Side) -> Decimal:
    return sum((p.amount for p in postings if p.side is side), Decimal(0))


def check_balanced(postings: Sequence[Posting]):
    """Raise error if there are less than two postings or debits differ from credits."""
    if len(postings) < 2:
        raise InsufficientPostings(
            f"A journal entry requires 2+ postings, got {len(postings)}."
        )
    debits, credits = sums(postings, Side.Debit), sums(postings, Side.Credit)
    if debits != credits:
        raise UnbalancedEntry(debits, credits)


class PostingBuilder:
    """Create postings from increase and decrease intents."""

    def __init__(self):
        self.postings: list[Posting] = []

    def increase(self, account: Account, amount: Numeric):
        return self._add(account, amount, account.normal_balance)

    def decrease(self, account: Account, amount: Numeric):
        return self._add(account, amount, account.normal_balance.opposite)

    def _add(self, account: Account, amount: Numeric, side: Side):
        self.postings.append(Posting(account, positive_amount(amount), side))
        return self

    def build(self) -> list[Posting]:
        return list(self.postings)


def _canonical_order(posting: Posting):
    rank = 0 if posting.side is Side.Debit else 1
    return rank, posting.account.name.casefold(), posting.account.name


@dataclass(frozen=True, eq=False)
class JournalEntry:
    """Balanced, immutable unit of record."""

    date: datetime.date
    description: str
    postings: Sequence[Posting]
    ids: InitVar[IdSequence | None] = None
    id: int = field(init=False)

    def __post_init__(self, ids: IdSequence | None):
        object.__setattr__(self, "date", to_date(self.date))
        postings = list(self.postings) if self.postings is not None else []
        if len(postings) < 2:
            raise InsufficientPostings(
                "A journal entry requires 2+ postings (debit and credit)."
            )
        for p in postings:
            if not isinstance(p, Posting):
                raise TypeError(f"Expected Posting, got {p!r}")
            if p.amount <= 0:
                raise InvalidPostingAmount(f"Posting amounts must be > 0: {p}")
            if p.side not in (Side.Debit, Side.Credit):
                raise InvalidPostingSide(f"Posting side must be Debit or Credit: {p}")
        check_balanced(postings)
        object.__setattr__(
            self, "id", next(ids if ids is not None else _free_standing_ids)
        )
        object.__setattr__(
            self, "postings", tuple(sorted(postings, key=_canonical_order))
        )

    @property
    def total_debits(self) -> Decimal:
        return sums(self.postings, Side.Debit)

    @property
    def total_credits(self) -> Decimal:
        return sums(self.postings, Side.Credit)

    def is_balanced(self) -> bool:
        return self.total_debits == self.total_credits

    def touches(self, account: Account) -> bool:
        return any(p.account.id == account.id for p in self.postings)

    def __str__(self):
        account_width = max([len("Account")] + [len(p.account.name) for p in self.postings])
        amount_width = max([len("Amount")] + [len(str(p.amount)) for p in self.postings])
        header = f"{'Account':<{account_width}}  {'Dr':>4}  {'Cr':>4}  {'Amount':>{amount_width}}"
        lines = [
            f"Journal Entry #{self.id}",
            f"Date: {self.date.isoformat()}",
            f"Description: {self.description}",
            "",
            header,
            "-" * len(header),
        ]
        for p in self.postings:
            dr = "Dr" if p.side is Side.Debit else ""
            cr = "Cr" if p.side is Side.Credit else ""
            lines.append(
                f"{p.account.name:<{account_width}}  {dr:>4}  {cr:>4}  {str(p.amount):>{amount_width}}"
            )
        status = "BALANCED" if self.is_balanced() else "UNBALANCED"
        lines += [
            "",
            f"Total Debits:  {self.total_debits}",
            f"Total Credits: {self.total_credits}",
            f"Status: {status}",
        ]
        return "\n".join(lines)


class JournalEntryBuilder:
    """Collect debits and credits, then post them to the ledger as one entry."""

    def __init__(self, ledger: "Ledger", date: datetime.date, description: str):
        self.ledger = ledger
        self.date = to_date(date)
        self.description = description
        self.postings: list[Posting] = []

    def debit(self, account: Account, amount: Numeric):
        self.postings.append(Posting(account, positive_amount(amount), Side.Debit))
        return self

    def credit(self, account: Account, amount: Numeric):
        self.postings.append(Posting(account, positive_amount(amount), Side.Credit))
        return self

    def post(self) -> JournalEntry:
        check_balanced(self.postings)
        return self.ledger.record(self.date, self.description, self.postings)
