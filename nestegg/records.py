"""Plain-record form of a ledger.

Accounts and journal entries are written as flat records. Postings refer to
accounts by id. Rebuilding a ledger from records replays every entry through
`Ledger.record()`, so a tampered file cannot produce an unbalanced ledger.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel

from .base import AccountNotFound, AccountType, NestEggError, SaveLoadMixin, Side
from .chart import Account
from .entry import Posting
from .ledger import Ledger


class AccountRecord(BaseModel):
    id: int
    name: str
    type: AccountType
    is_cash_account: bool = False


class PostingRecord(BaseModel):
    account_id: int
    amount: Decimal
    side: Side


class EntryRecord(BaseModel):
    id: int
    date: datetime.date
    description: str
    postings: list[PostingRecord]


class LedgerRecords(BaseModel, SaveLoadMixin):
    accounts: list[AccountRecord] = []
    entries: list[EntryRecord] = []

    @classmethod
    def from_ledger(cls, ledger: Ledger) -> "LedgerRecords":
        return cls(
            accounts=[
                AccountRecord(
                    id=a.id, name=a.name, type=a.type, is_cash_account=a.is_cash_account
                )
                for a in ledger.accounts
            ],
            entries=[
                EntryRecord(
                    id=e.id,
                    date=e.date,
                    description=e.description,
                    postings=[
                        PostingRecord(account_id=p.account.id, amount=p.amount, side=p.side)
                        for p in e.postings
                    ],
                )
                for e in ledger.journal_entries
            ],
        )

    def to_ledger(self, **kwargs) -> Ledger:
        """Re-create ledger from records, keeping the original ids."""
        ledger = Ledger(**kwargs)
        by_id: dict[int, Account] = {}
        seen: set[int] = set()

        def claim(id_: int):
            if id_ in seen:
                raise NestEggError(f"Duplicate id {id_} in records.")
            seen.add(id_)

        for r in self.accounts:
            claim(r.id)
            NestEggError.must_not_exist(ledger.account_names, r.name)
            account = Account(r.id, r.name, r.type, r.is_cash_account)
            ledger.accounts.append(account)
            by_id[r.id] = account
        for r in self.entries:
            claim(r.id)
            postings = [
                Posting(self._account(by_id, p.account_id), p.amount, p.side)
                for p in r.postings
            ]
            ledger.ids.next_id = r.id
            ledger.record(r.date, r.description, postings)
        ledger.ids.skip_past(max(seen, default=0))
        return ledger

    @staticmethod
    def _account(by_id: dict[int, Account], account_id: int) -> Account:
        try:
            return by_id[account_id]
        except KeyError:
            raise AccountNotFound(f"Posting refers to unknown account id {account_id}.")
