from datetime import date

import pytest

from nestegg import Analyzer, Side


@pytest.fixture
def analyzer(sales_ledger):
    return Analyzer(sales_ledger)


def test_requires_ledger():
    with pytest.raises(TypeError):
        Analyzer({})


def test_account_activity(analyzer, sales_ledger):
    rows = analyzer.account_activity(sales_ledger.account("Cash"))
    assert [(r.description, r.side, r.amount) for r in rows] == [
        ("Sale A", Side.Debit, 300),
        ("Sale B", Side.Debit, 200),
    ]
    assert rows[0].journal_entry_id == 3


def test_balance_sheet(analyzer):
    sheet = analyzer.balance_sheet(date(2024, 1, 31))
    assert sheet.assets == {"Cash": 300}
    assert sheet.current_earnings == 300
    assert sheet.is_balanced()


def test_income_statement(analyzer):
    statement = analyzer.income_statement(date(2024, 2, 1), date(2024, 2, 29))
    assert statement.income == {"Revenue": 200}
    assert statement.net_income == 200


def test_trial_balance(analyzer, sales_ledger):
    cash, revenue = sales_ledger.accounts
    sales_ledger.entry(date(2024, 3, 1), "Refund").debit(revenue, 600).credit(cash, 600).post()
    tb = analyzer.trial_balance(date(2024, 12, 31))
    assert tb.credits == {"Cash": 100}
    assert tb.debits == {"Revenue": 100}
    assert tb.is_balanced()


def test_journal_summary(analyzer):
    summary = analyzer.journal_summary(start=date(2024, 2, 1))
    assert [s.description for s in summary] == ["Sale B"]
    assert [p.account.name for p in summary[0].postings] == ["Cash", "Revenue"]
