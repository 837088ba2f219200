from datetime import date

import pytest

from nestegg import AccountType, Chart, Ledger


@pytest.fixture
def ledger() -> Ledger:
    return Ledger()


@pytest.fixture
def sales_ledger():
    ledger = Ledger()
    cash = ledger.create_cash_account("Cash")
    revenue = ledger.create_non_cash_account("Revenue", AccountType.Income)
    ledger.entry(date(2024, 1, 1), "Sale A").debit(cash, 300).credit(revenue, 300).post()
    ledger.entry(date(2024, 2, 1), "Sale B").debit(cash, 200).credit(revenue, 200).post()
    return ledger


@pytest.fixture
def household_chart() -> Chart:
    return Chart(
        cash=["Checking"],
        assets=["Brokerage", "401k", "Roth IRA", "Escrow"],
        liabilities=["Mortgage", "Taxes Payable"],
        equity=["Opening Balance"],
        income=["Salary", "Capital Gains", "Pension", "Social Security", "Dividends"],
        expenses=["Withholdings", "Interest", "Groceries", "Capital Losses", "Taxes"],
    )


@pytest.fixture
def household(household_chart) -> Ledger:
    return Ledger.from_chart(household_chart)
