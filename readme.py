from datetime import date

from nestegg import (
    Chart,
    Ledger,
    LedgerRecords,
    OutputGenerator,
    Payroll,
    TraditionalWithdrawal,
)

# Create chart of accounts
chart = Chart(
    cash=["checking"],
    assets=["401k"],
    equity=["opening"],
    income=["salary", "distributions"],
    expenses=["withholdings", "groceries"],
)
ledger = Ledger.from_chart(chart)
checking = ledger.account("checking")

# Post entries
# fmt: off
ledger.entry(date(2024, 1, 1), "Opening balance").debit(checking, 10_000).credit(ledger.account("opening"), 10_000).post()
ledger.entry(date(2024, 1, 5), "Groceries").debit(ledger.account("groceries"), 150).credit(checking, 150).post()
# fmt: on
ledger.do.payroll(
    Payroll(
        cash=checking,
        withholdings=ledger.account("withholdings"),
        retirement=ledger.account("401k"),
        income=ledger.account("salary"),
        gross_pay=5000,
        taxes_and_benefits=1000,
        retirement_contribution=500,
        date=date(2024, 1, 31),
    )
)
ledger.do.withdraw_from_traditional_401k(
    TraditionalWithdrawal(
        cash=checking,
        account_401k=ledger.account("401k"),
        income=ledger.account("distributions"),
        equity=ledger.account("opening"),
        amount=200,
        date=date(2024, 2, 1),
    )
)

# Statements
print(ledger.get_income_statement(date(2024, 1, 1), date(2024, 12, 31)).model_dump_json())
print(ledger.get_balance_sheet(date(2024, 12, 31)).model_dump_json())
print(OutputGenerator(ledger).t_account(checking))
assert ledger.balances == {
    "checking": 13550,
    "401k": 300,
    "opening": 9800,
    "salary": 5000,
    "distributions": 200,
    "withholdings": 1000,
    "groceries": 150,
}

# Save to JSON file in current folder
LedgerRecords.from_ledger(ledger).save("ledger.json", allow_overwrite=True)
