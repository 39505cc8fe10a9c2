"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
database schema. Aggregation results are entities too, so the engine and the
exporters agree on field names.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")


@dataclass(frozen=True)
class Account:
    """Account domain entity (one isolated set of transactions)."""

    id: int
    name: str
    is_active: bool
    account_number: int
    created_at: datetime


@dataclass(frozen=True)
class SalaryEntry:
    """Named, purposed part of a transaction's salary total."""

    id: Optional[int]
    name: str
    purpose: str
    amount: Decimal
    date: date
    transaction_id: Optional[int] = None


@dataclass(frozen=True)
class Transaction:
    """One recorded day of financial activity within an account."""

    id: int
    account_id: int
    date: date
    investment: Decimal = ZERO
    earnings: Decimal = ZERO
    spending: Decimal = ZERO
    to_be_credit: Decimal = ZERO
    salary: Decimal = ZERO
    debt: Decimal = ZERO
    interest_rate: Decimal = ZERO
    salary_entries: tuple[SalaryEntry, ...] = ()
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class InvoiceItem:
    """Invoice line item."""

    id: Optional[int]
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: int
    invoice_number: str
    account_name: str
    client_name: str
    client_email: Optional[str]
    client_address: Optional[str]
    date: date
    due_date: date
    notes: Optional[str]
    logo_url: Optional[str]
    total_amount: Decimal
    items: tuple[InvoiceItem, ...] = ()
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Profile:
    """User profile and feature settings."""

    id: int
    name: str
    phone: Optional[str]
    currency: str
    show_debt_feature: bool
    show_all_accounts_analysis: bool
    debt_principal: Optional[Decimal] = None
    debt_interest_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class SavingsGoal:
    """Savings goal held in the local store."""

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    deadline: Optional[str] = None
    category: str = "Emergency Fund"

    @property
    def remaining(self) -> Decimal:
        """Amount still needed, never negative."""
        return max(self.target_amount - self.current_amount, ZERO)


@dataclass(frozen=True)
class Note:
    """Free-form note held in the local store."""

    id: str
    title: str
    content: str
    created_at: str


class TimeUnit(Enum):
    """Granularity used when bucketing transactions."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class PeriodBucket:
    """Summed transaction fields for one day, month or year."""

    key: str
    label: str
    year: int
    month: Optional[int]
    investment: Decimal
    earnings: Decimal
    spending: Decimal
    to_be_credit: Decimal
    salary: Decimal
    profit: Decimal
    roi: Decimal
    transaction_count: int = 0


@dataclass(frozen=True)
class CategoryAmount:
    """One slice of an income or spending breakdown."""

    name: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class AccountSummary:
    """Figures shown on the summary cards for one period.

    ``remaining`` subtracts monthly interest when the debt feature is on;
    bucket ``profit`` never does.
    """

    remaining: Decimal
    income: Decimal
    expenses: Decimal
    to_be_credit: Decimal
    salary: Decimal
    debt: Decimal = ZERO
    interest: Decimal = ZERO
    show_debt: bool = False
    salary_entries: tuple[SalaryEntry, ...] = ()


@dataclass(frozen=True)
class CalendarEntry:
    """Typed amount displayed on a calendar day."""

    transaction_id: int
    date: date
    amount: Decimal
    type: str


@dataclass(frozen=True)
class YearlyAnalysis:
    """Totals and month rankings for the yearly analysis view."""

    totals: PeriodBucket
    months_by_roi: tuple[PeriodBucket, ...]
    chart: tuple[PeriodBucket, ...]
    best_month: Optional[PeriodBucket] = None
    worst_month: Optional[PeriodBucket] = None


@dataclass(frozen=True)
class AllAccountsAnalysis:
    """Cross-account totals, yearly trend and current-year month table."""

    totals: PeriodBucket
    yearly: tuple[PeriodBucket, ...]
    monthly: tuple[PeriodBucket, ...]
    best_month: Optional[PeriodBucket] = None
    worst_month: Optional[PeriodBucket] = None
    per_account: dict[str, PeriodBucket] = field(default_factory=dict)
