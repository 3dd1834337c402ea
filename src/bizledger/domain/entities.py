"""Domain model entities for bizledger.

These are pure data classes representing business concepts, independent of
database schema. Services and the aggregation core only ever see these
types; the ORM models stay behind the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from bizledger.domain.errors import ValidationError, invalid_date_range, negative_value


class EntryKind(str, Enum):
    """Direction of a ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"


class DiscountType(str, Enum):
    """How a discount value is interpreted."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    DRAFT = "draft"
    SENT = "sent"
    PARTIAL = "partial"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Granularity(str, Enum):
    """Period length used for bounds and trend series."""

    MONTH = "month"
    YEAR = "year"


class SortField(str, Enum):
    """Sort keys supported for ledger listings."""

    DATE = "date"
    AMOUNT = "amount"
    CATEGORY = "category"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class LedgerEntry:
    """One financial event. Direction is carried by ``kind``, never by sign."""

    id: str
    kind: EntryKind
    amount: Decimal
    category: str
    date: date
    created_at: datetime
    currency: str = "USD"
    description: Optional[str] = None
    sub_category: Optional[str] = None
    exchange_rate: Optional[Decimal] = None

    def __post_init__(self):
        if self.amount < 0:
            raise ValidationError(negative_value("amount", self.amount))


@dataclass(frozen=True)
class LineItem:
    """One billable invoice row."""

    quantity: Decimal
    rate: Decimal
    tax_rate: Decimal = Decimal("0")
    discount_rate: Decimal = Decimal("0")
    discount_type: DiscountType = DiscountType.PERCENTAGE
    discount_amount: Decimal = Decimal("0")
    description: Optional[str] = None
    id: Optional[int] = None
    invoice_id: Optional[int] = None


@dataclass(frozen=True)
class LineItemTotals:
    """Derived amounts for a single line item."""

    amount: Decimal
    discount: Decimal
    taxable_amount: Decimal
    tax: Decimal
    total: Decimal


@dataclass(frozen=True)
class InvoiceSettings:
    """Invoice-level tax, discount and shipping settings."""

    tax_rate: Decimal = Decimal("0")
    discount_rate: Decimal = Decimal("0")
    discount_type: DiscountType = DiscountType.PERCENTAGE
    discount_amount: Decimal = Decimal("0")
    shipping_amount: Decimal = Decimal("0")
    shipping_tax_rate: Decimal = Decimal("0")


@dataclass(frozen=True)
class InvoiceTotals:
    """Derived invoice totals. Never stored."""

    subtotal: Decimal
    total_discount: Decimal
    total_tax: Decimal
    shipping_amount: Decimal
    shipping_tax: Decimal
    total: Decimal
    line_item_totals: tuple[LineItemTotals, ...] = ()


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: int
    invoice_number: str
    client_name: str
    issue_date: date
    due_date: date
    currency: str
    status: InvoiceStatus
    settings: InvoiceSettings
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Payment:
    """Payment recorded against an invoice."""

    id: int
    invoice_id: int
    amount: Decimal
    date: date
    method: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class PaymentStatus:
    """Amounts paid and due, with the status they imply."""

    amount_paid: Decimal
    amount_due: Decimal
    status: InvoiceStatus


@dataclass(frozen=True)
class PeriodBounds:
    """Inclusive date range."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValidationError(invalid_date_range(self.start, self.end))

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True)
class CategoryAmount:
    """A category and its summed amount."""

    category: str
    amount: Decimal


def rank_categories(breakdown: Mapping[str, Decimal]) -> list[CategoryAmount]:
    """Breakdown as CategoryAmounts, largest first, ties by name ascending."""
    ordered = sorted(breakdown.items(), key=lambda item: (-item[1], item[0]))
    return [CategoryAmount(category=name, amount=amount) for name, amount in ordered]


@dataclass(frozen=True)
class PeriodSummary:
    """Totals and category breakdowns for one period.

    The breakdowns are read-only views and are left out of the hash.
    """

    start: date
    end: date
    label: str
    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    transaction_count: int
    average_transaction_amount: Decimal
    income_by_category: Mapping[str, Decimal] = field(default_factory=dict, hash=False)
    expenses_by_category: Mapping[str, Decimal] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        for name in ("income_by_category", "expenses_by_category"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @property
    def top_income_category(self) -> Optional[CategoryAmount]:
        ranked = rank_categories(self.income_by_category)
        return ranked[0] if ranked else None

    @property
    def top_expense_category(self) -> Optional[CategoryAmount]:
        ranked = rank_categories(self.expenses_by_category)
        return ranked[0] if ranked else None


@dataclass(frozen=True)
class PeriodComparison:
    """Percentage changes against the preceding period."""

    income_change: Decimal
    expense_change: Decimal
    net_change: Decimal


@dataclass(frozen=True)
class TrendAverages:
    """Mean values over a trend series."""

    income: Decimal
    expenses: Decimal
    net: Decimal


@dataclass(frozen=True)
class MonthlyAudit:
    """Report comparing one month with the month before it."""

    current: PeriodSummary
    previous: PeriodSummary
    comparison: PeriodComparison
    savings_rate: Decimal
    top_income: tuple[CategoryAmount, ...]
    top_expenses: tuple[CategoryAmount, ...]


@dataclass(frozen=True)
class FilterSpec:
    """Filter and sort settings for ledger listings.

    ``kind`` and ``category`` of None mean "all".
    """

    kind: Optional[EntryKind] = None
    category: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    search_text: Optional[str] = None
    sort_by: SortField = SortField.DATE
    sort_order: SortOrder = SortOrder.DESC
