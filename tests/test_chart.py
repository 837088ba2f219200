from decimal import Decimal

import pytest

from nestegg import (
    Account,
    AccountType,
    CashAccountTypeMismatch,
    Chart,
    IdSequence,
    InvalidAccountName,
    InvalidAccountType,
    NestEggError,
    Side,
)


def test_account_create_takes_next_id():
    ids = IdSequence()
    a = Account.create("Checking", "asset", True, ids)
    b = Account.create("Salary", AccountType.Income, False, ids)
    assert (a.id, b.id) == (1, 2)
    assert a.is_cash_account
    assert b.type is AccountType.Income


@pytest.mark.parametrize("name", ["", "   "])
def test_account_name_must_not_be_blank(name):
    with pytest.raises(InvalidAccountName):
        Account(1, name, AccountType.Asset)


def test_account_type_must_be_known():
    with pytest.raises(InvalidAccountType):
        Account.create("Gold", "commodity", False, IdSequence())


def test_cash_account_must_be_asset():
    with pytest.raises(CashAccountTypeMismatch):
        Account(1, "Wallet", AccountType.Expense, True)


def test_rejected_account_does_not_take_id():
    ids = IdSequence()
    with pytest.raises(CashAccountTypeMismatch):
        Account.create("Wallet", AccountType.Liability, True, ids)
    assert Account.create("Wallet", AccountType.Asset, True, ids).id == 1


def test_account_apply():
    expense = Account(1, "Groceries", AccountType.Expense)
    income = Account(2, "Salary", AccountType.Income)
    assert expense.apply(Side.Debit, 10) == Decimal(10)
    assert expense.apply(Side.Credit, 10) == Decimal(-10)
    assert income.apply(Side.Credit, "2.5") == Decimal("2.5")
    assert not income.is_debit_normal


def test_chart_entries_put_cash_first(household_chart):
    first = next(household_chart.entries())
    assert first == ("Checking", AccountType.Asset, True)
    assert "Groceries" in household_chart.account_names


def test_chart_rejects_duplicate_names():
    with pytest.raises(NestEggError):
        Chart(assets=["Brokerage"], income=["Brokerage"])


def test_chart_rejects_unknown_fields():
    with pytest.raises(ValueError):
        Chart(revenue=["Sales"])


def test_chart_add_string():
    chart = Chart().add_string("cash:Checking").add_string("expense:Groceries")
    assert chart.cash == ["Checking"]
    assert chart.expenses == ["Groceries"]


def test_chart_add_string_duplicate():
    chart = Chart(cash=["Checking"])
    with pytest.raises(NestEggError):
        chart.add_string("asset:Checking")


def test_chart_save_load(tmp_path, household_chart):
    path = tmp_path / "chart.json"
    household_chart.save(path)
    assert Chart.load(path) == household_chart


def test_chart_save_does_not_overwrite(tmp_path, household_chart):
    path = tmp_path / "chart.json"
    household_chart.save(path)
    with pytest.raises(FileExistsError):
        household_chart.save(path)
