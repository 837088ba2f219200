from .allocation import allocate_proportionally
from .analyzer import Analyzer
from .base import (
    AccountNotFound,
    AccountType,
    CashAccountTypeMismatch,
    DuplicateAccountName,
    IdSequence,
    InsufficientPostings,
    InvalidAccountName,
    InvalidAccountType,
    InvalidAmount,
    InvalidDate,
    InvalidPostingAmount,
    InvalidPostingSide,
    NegativeWeight,
    NestEggError,
    NoCashAccount,
    Side,
    UnbalancedEntry,
)
from .chart import Account, Chart
from .entry import JournalEntry, JournalEntryBuilder, Posting, PostingBuilder
from .ledger import (
    BalanceSheet,
    CashFlowStatement,
    IncomeStatement,
    Ledger,
    ReportDict,
    TrialBalanceLine,
)
from .macros import (
    CapitalGain,
    DividendIncome,
    EscrowDeposit,
    EstimatedTaxPayment,
    ExpensePayment,
    InterestIncome,
    InvestmentPurchase,
    InvestmentSale,
    LoanDisbursement,
    LoanPayment,
    Macro,
    Macros,
    Payroll,
    PensionIncome,
    RmdWithdrawal,
    RothContribution,
    RothWithdrawal,
    Sale,
    SocialSecurityIncome,
    TaxPayment,
    TraditionalContribution,
    TraditionalWithdrawal,
    Transfer,
)
from .output import OutputGenerator
from .records import LedgerRecords
