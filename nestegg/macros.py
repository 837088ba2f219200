"""Named business transactions.

Each macro is a small record of accounts and amounts. `postings()` turns it
into the legs of one balanced journal entry using increase/decrease intents,
so a macro never has to know which side an account sits on. `Macros` records
macros on a ledger and is available as `ledger.do`:

    ledger.do.sale(Sale(asset=cash, revenue=sales, amount=300))

Argument names follow the account role: `cash`, `expense`, `liability`, etc.
Date defaults to today, description defaults to the macro title.
"""

import datetime
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from .base import InvalidAmount, Numeric, to_amount
from .chart import Account
from .entry import JournalEntry, Posting, PostingBuilder

if TYPE_CHECKING:
    from .ledger import Ledger


def non_negative(value: Numeric) -> Decimal:
    amount = to_amount(value)
    if amount < 0:
        raise InvalidAmount(f"Amount must be >= 0, got {value!r}")
    return amount


@dataclass(kw_only=True)
class Macro(ABC):
    title: ClassVar[str]
    date: datetime.date | None = None
    description: str | None = None

    @abstractmethod
    def postings(self) -> list[Posting]:
        pass


@dataclass
class Sale(Macro):
    """Asset increases, revenue is recognised."""

    title = "Sale"
    asset: Account
    revenue: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .increase(self.asset, self.amount)
            .increase(self.revenue, self.amount)
            .build()
        )


@dataclass
class ExpensePayment(Macro):
    """Cash pays for an expense."""

    title = "Expense Payment"
    expense: Account
    cash: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.cash, self.amount)
            .increase(self.expense, self.amount)
            .build()
        )


@dataclass
class Transfer(Macro):
    """Move value from one asset account to another."""

    title = "Transfer"
    destination: Account
    source: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.source, self.amount)
            .increase(self.destination, self.amount)
            .build()
        )


@dataclass
class LoanDisbursement(Macro):
    """Cash received from a loan, liability created."""

    title = "Loan Disbursement"
    cash: Account
    liability: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .increase(self.cash, self.amount)
            .increase(self.liability, self.amount)
            .build()
        )


@dataclass
class LoanPayment(Macro):
    """Cash pays principal (reduces the loan) and interest (an expense).

    A zero principal or zero interest part produces no posting.
    """

    title = "Loan Payment"
    interest_expense: Account
    cash: Account
    liability: Account
    principal: Numeric
    interest: Numeric

    def postings(self):
        principal, interest = non_negative(self.principal), non_negative(self.interest)
        b = PostingBuilder().decrease(self.cash, principal + interest)
        if principal:
            b.decrease(self.liability, principal)
        if interest:
            b.increase(self.interest_expense, interest)
        return b.build()


@dataclass
class Payroll(Macro):
    """Gross pay is income, net pay goes to cash.

    Taxes and benefits are debited to the withholdings account, the
    retirement contribution to the retirement account. Zero parts are skipped.
    """

    title = "Payroll"
    cash: Account
    withholdings: Account
    retirement: Account
    income: Account
    gross_pay: Numeric
    taxes_and_benefits: Numeric = 0
    retirement_contribution: Numeric = 0

    @property
    def net_pay(self) -> Decimal:
        return (
            to_amount(self.gross_pay)
            - non_negative(self.taxes_and_benefits)
            - non_negative(self.retirement_contribution)
        )

    def postings(self):
        taxes = non_negative(self.taxes_and_benefits)
        retirement = non_negative(self.retirement_contribution)
        b = PostingBuilder().increase(self.cash, self.net_pay)
        if taxes:
            b.increase(self.withholdings, taxes)
        if retirement:
            b.increase(self.retirement, retirement)
        return b.increase(self.income, self.gross_pay).build()


@dataclass
class TraditionalContribution(Macro):
    """Cash goes into a traditional 401k."""

    title = "Traditional 401k Contribution"
    account_401k: Account
    cash: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.cash, self.amount)
            .increase(self.account_401k, self.amount)
            .build()
        )


@dataclass
class RothContribution(Macro):
    """Cash goes into a Roth account."""

    title = "Roth Contribution"
    roth: Account
    cash: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.cash, self.amount)
            .increase(self.roth, self.amount)
            .build()
        )


@dataclass
class TraditionalWithdrawal(Macro):
    """Withdrawal from a traditional 401k.

    Cash increases and the 401k decreases. The amount is also recognised as
    taxable income, offset by a matching decrease of equity.
    """

    title = "Traditional Withdrawal"
    cash: Account
    account_401k: Account
    income: Account
    equity: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .increase(self.cash, self.amount)
            .decrease(self.account_401k, self.amount)
            .increase(self.income, self.amount)
            .decrease(self.equity, self.amount)
            .build()
        )


@dataclass
class RmdWithdrawal(TraditionalWithdrawal):
    """Required minimum distribution, booked like a traditional withdrawal."""

    title = "RMD Withdrawal"


@dataclass
class RothWithdrawal(Macro):
    title = "Roth Withdrawal"
    cash: Account
    roth: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.roth, self.amount)
            .increase(self.cash, self.amount)
            .build()
        )


@dataclass
class IncomeToCash(Macro):
    """Income received in cash. Base for pension, social security, interest and dividends."""

    title = "Income"
    cash: Account
    income: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .increase(self.income, self.amount)
            .increase(self.cash, self.amount)
            .build()
        )


@dataclass
class PensionIncome(IncomeToCash):
    title = "Pension Income"


@dataclass
class SocialSecurityIncome(IncomeToCash):
    title = "Social Security Income"


@dataclass
class InterestIncome(IncomeToCash):
    title = "Interest Earned"


@dataclass
class DividendIncome(IncomeToCash):
    title = "Dividend Received"


@dataclass
class InvestmentPurchase(Macro):
    title = "Investment Purchase"
    investment: Account
    cash: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.cash, self.amount)
            .increase(self.investment, self.amount)
            .build()
        )


@dataclass
class InvestmentSale(Macro):
    title = "Investment Sale"
    cash: Account
    investment: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.investment, self.amount)
            .increase(self.cash, self.amount)
            .build()
        )


@dataclass
class CapitalGain(Macro):
    """Sell an investment and realise the gain or loss.

        Dr Cash        proceeds
        Dr Loss        basis - proceeds, if positive
        Cr Investment  basis
        Cr Gain        proceeds - basis, if positive
    """

    title = "Capital Gain Realization"
    cash: Account
    investment: Account
    gain: Account
    loss: Account
    proceeds: Numeric
    basis: Numeric

    def postings(self):
        proceeds, basis = to_amount(self.proceeds), to_amount(self.basis)
        b = PostingBuilder().decrease(self.investment, basis).increase(self.cash, proceeds)
        difference = proceeds - basis
        if difference > 0:
            b.increase(self.gain, difference)
        elif difference < 0:
            b.increase(self.loss, -difference)
        return b.build()


@dataclass
class TaxPayment(Macro):
    """Cash settles a tax liability."""

    title = "Tax Payment"
    cash: Account
    tax_liability: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.cash, self.amount)
            .decrease(self.tax_liability, self.amount)
            .build()
        )


@dataclass
class EstimatedTaxPayment(Macro):
    """Cash pays estimated tax, recognised as tax expense."""

    title = "Estimated Tax Payment"
    tax_expense: Account
    cash: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.cash, self.amount)
            .increase(self.tax_expense, self.amount)
            .build()
        )


@dataclass
class EscrowDeposit(Macro):
    title = "Escrow Deposit"
    escrow: Account
    cash: Account
    amount: Numeric

    def postings(self):
        return (
            PostingBuilder()
            .decrease(self.cash, self.amount)
            .increase(self.escrow, self.amount)
            .build()
        )


class Macros:
    """Record macros on a ledger."""

    def __init__(self, ledger: "Ledger"):
        self.ledger = ledger

    def run(self, macro: Macro) -> JournalEntry:
        date = macro.date if macro.date is not None else datetime.date.today()
        description = macro.description if macro.description is not None else macro.title
        return self.ledger.record(date, description, macro.postings())

    def _run(self, macro: Macro, cls: type[Macro]) -> JournalEntry:
        if not isinstance(macro, cls):
            raise TypeError(f"Expected {cls.__name__}, got {type(macro).__name__}")
        return self.run(macro)

    def sale(self, p: Sale):
        return self._run(p, Sale)

    def expense_payment(self, p: ExpensePayment):
        return self._run(p, ExpensePayment)

    def transfer(self, p: Transfer):
        return self._run(p, Transfer)

    def loan_disbursement(self, p: LoanDisbursement):
        return self._run(p, LoanDisbursement)

    def loan_payment(self, p: LoanPayment):
        return self._run(p, LoanPayment)

    def payroll(self, p: Payroll):
        return self._run(p, Payroll)

    def retirement_contribution_traditional(self, p: TraditionalContribution):
        return self._run(p, TraditionalContribution)

    def retirement_contribution_roth(self, p: RothContribution):
        return self._run(p, RothContribution)

    def withdraw_from_traditional_401k(self, p: TraditionalWithdrawal):
        return self._run(p, TraditionalWithdrawal)

    def rmd_withdrawal(self, p: TraditionalWithdrawal):
        """Record a traditional withdrawal titled "RMD Withdrawal"."""
        if not isinstance(p, RmdWithdrawal):
            p = RmdWithdrawal(
                cash=p.cash,
                account_401k=p.account_401k,
                income=p.income,
                equity=p.equity,
                amount=p.amount,
                date=p.date,
                description=p.description,
            )
        return self._run(p, RmdWithdrawal)

    def withdraw_from_roth(self, p: RothWithdrawal):
        return self._run(p, RothWithdrawal)

    def pension_payment(self, p: PensionIncome):
        return self._run(p, PensionIncome)

    def social_security_income(self, p: SocialSecurityIncome):
        return self._run(p, SocialSecurityIncome)

    def investment_buy(self, p: InvestmentPurchase):
        return self._run(p, InvestmentPurchase)

    def investment_sell(self, p: InvestmentSale):
        return self._run(p, InvestmentSale)

    def realize_capital_gain(self, p: CapitalGain):
        return self._run(p, CapitalGain)

    def interest_income(self, p: InterestIncome):
        return self._run(p, InterestIncome)

    def dividend_income(self, p: DividendIncome):
        return self._run(p, DividendIncome)

    def tax_payment(self, p: TaxPayment):
        return self._run(p, TaxPayment)

    def estimated_tax_payment(self, p: EstimatedTaxPayment):
        return self._run(p, EstimatedTaxPayment)

    def escrow_deposit(self, p: EscrowDeposit):
        return self._run(p, EscrowDeposit)
