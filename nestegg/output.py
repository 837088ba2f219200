"""Plain-text printouts of a ledger: T-accounts, general ledger, chart of accounts."""

from .base import AccountType, InvalidDate, Side, to_date
from .chart import Account
from .ledger import Ledger


class OutputGenerator:
    def __init__(self, ledger: Ledger):
        if not isinstance(ledger, Ledger):
            raise TypeError("OutputGenerator requires a Ledger instance")
        self.ledger = ledger

    def t_account(self, account: Account) -> str:
        header = f"{account.name} (T-Account)"
        lines = [header, "-" * len(header)]
        debits, credits = [], []
        for entry in self.ledger.journal_entries:
            for p in entry.postings:
                if p.account.id != account.id:
                    continue
                row = f"{entry.date.isoformat()} | {entry.description} | {p.amount}"
                (debits if p.side is Side.Debit else credits).append(row)
        if not debits and not credits:
            lines.append("(no activity)")
            return "\n".join(lines)

        left = max([10] + [len(s) for s in debits])
        right = max([10] + [len(s) for s in credits])
        lines.append("Debit".ljust(left) + " | " + "Credit")
        lines.append("-" * (left + 3 + right))
        for i in range(max(len(debits), len(credits))):
            d = debits[i] if i < len(debits) else ""
            c = credits[i] if i < len(credits) else ""
            lines.append(d.ljust(left) + " | " + c)
        lines.append("")
        lines.append(f"Ending Balance: {account.get_balance(self.ledger)}")
        return "\n".join(lines)

    def ledger_statement(self, start=None, end=None) -> str:
        """Every journal entry in date order, optionally within [start, end]."""
        start = None if start is None else to_date(start)
        end = None if end is None else to_date(end)
        if start is not None and end is not None and start > end:
            raise InvalidDate("Start date cannot be after end date.")

        lines = ["GENERAL LEDGER", "==============", ""]
        entries = sorted(self.ledger.entries_between(start, end), key=lambda e: e.date)
        for entry in entries:
            lines += [
                f"Date: {entry.date.isoformat()}",
                f"Desc: {entry.description}",
                f"Entry #{entry.id}",
                "",
            ]
            width = max([8] + [len(p.account.name) for p in entry.postings])
            lines.append(f"  {'Account'.ljust(width)}  Dr      Cr")
            lines.append("  " + "-" * (width + 14))
            for p in entry.postings:
                dr = str(p.amount) if p.side is Side.Debit else ""
                cr = str(p.amount) if p.side is Side.Credit else ""
                lines.append(f"  {p.account.name.ljust(width)}  {dr:>6}  {cr:>6}")
            lines.append("")
        return "\n".join(lines)

    def chart_of_accounts(self) -> str:
        lines = ["CHART OF ACCOUNTS", "=================", ""]
        for t in AccountType:
            title = t.name
            lines += [title.upper(), "-" * len(title)]
            accounts = sorted(self.ledger.by_type(t), key=lambda a: a.name)
            if not accounts:
                lines.append("  (none)")
            for account in accounts:
                cash = " (cash)" if account.is_cash_account else ""
                lines.append(f"  {account.id:>3}  {account.name}{cash}")
            lines.append("")
        return "\n".join(lines)
