"""Domain model entities for resellit.

These are pure data classes representing business concepts, independent of
database schema. Derived figures (completeness, cost, profit, ROI) are never
stored on them; see resellit.domain.metrics.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


PLACEHOLDER_TITLE = "No title"
PLACEHOLDER_BRAND = "No brand"
PLACEHOLDER_IMAGE = "No image"


class ProductKind(str, Enum):
    """Whether a product is sold as a single unit or as a multi-unit bundle."""

    SINGLE = "Single"
    BUNDLE = "Bundle"


class ProductCategory(str, Enum):
    """Product category used to separate stock from everything else."""

    STOCK = "Stock"
    OTHER = "Other"


class TransactionStatus(str, Enum):
    """Purchase order status, in lifecycle order."""

    PENDING = "pending"
    ORDERED = "ordered"
    PARTIALLY_DELIVERED = "partially delivered"
    FULLY_RECEIVED = "fully received"
    COLLECTED = "collected"
    COMPLETE = "complete"


FINALIZED_STATUSES = frozenset(
    {
        TransactionStatus.FULLY_RECEIVED.value,
        TransactionStatus.COLLECTED.value,
        TransactionStatus.COMPLETE.value,
    }
)

# Statuses counted as "pending" on the dashboard
OPEN_STATUSES = frozenset(
    {
        TransactionStatus.ORDERED.value,
        TransactionStatus.PARTIALLY_DELIVERED.value,
        TransactionStatus.COLLECTED.value,
    }
)


def _has_content(value: Optional[str], placeholder: str) -> bool:
    return bool(value and value.strip() and value.strip() != placeholder)


@dataclass(frozen=True)
class Product:
    """Product (ASIN) domain entity."""

    id: int
    asin: str
    title: str
    brand: str
    image_url: str
    kind: str
    pack: int
    category: str
    shipped: int
    stored: int
    weight: Optional[Decimal]
    weight_unit: Optional[str]
    fnsku: Optional[str]
    created_at: datetime

    @property
    def is_incomplete(self) -> bool:
        """True unless title, brand and image are all filled in."""
        return not (
            _has_content(self.title, PLACEHOLDER_TITLE)
            and _has_content(self.brand, PLACEHOLDER_BRAND)
            and _has_content(self.image_url, PLACEHOLDER_IMAGE)
        )

    @property
    def is_bundle(self) -> bool:
        return self.kind == ProductKind.BUNDLE.value and self.pack > 1


@dataclass(frozen=True)
class Supplier:
    """Supplier domain entity."""

    id: int
    name: str
    address: str
    email: str
    phone: str
    site: str
    notes: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Purchase order domain entity."""

    id: int
    ordered_date: Optional[date]
    delivery_date: Optional[date]
    supplier_id: Optional[int]
    po_number: str
    category: str
    payment_method: str
    status: str
    shipping_cost: Decimal
    notes: str
    created_at: datetime

    @property
    def is_finalized(self) -> bool:
        return self.status in FINALIZED_STATUSES


@dataclass(frozen=True)
class TransactionItem:
    """Line item of a purchase order."""

    id: int
    transaction_id: int
    asin: str
    quantity: int
    buy_price: Decimal
    sell_price: Decimal
    est_fee: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Budget:
    """Monthly budget domain entity."""

    id: int
    year: int
    month: int
    amount: Decimal

    @property
    def month_key(self) -> str:
        return f"{self.year}-{self.month:02d}"


@dataclass(frozen=True)
class PricingHistory:
    """Point-in-time pricing record for an ASIN."""

    id: int
    asin: str
    buy_price: Decimal
    sell_price: Decimal
    est_fee: Decimal
    created_at: datetime


@dataclass(frozen=True)
class SettlementTransaction:
    """Marketplace settlement row."""

    id: int
    date: Optional[date]
    status: str
    type: str
    order_id: str
    product_details: str
    total_product_charges: Decimal
    total_promotional_rebates: Decimal
    amazon_fees: Decimal
    other: Decimal
    total: Decimal
    avg_cog: Decimal
    created_at: datetime


# Import rows. These are only constructed from records that passed validation.


@dataclass(frozen=True)
class ProductImportRow:
    """A validated product CSV row."""

    row_num: int
    asin: str
    title: str
    brand: str
    image_url: str
    kind: str
    pack: int
    category: str
    buy_price: Decimal
    sell_price: Decimal
    est_fee: Decimal
    weight: Decimal
    weight_unit: str
    fnsku: Optional[str]

    @property
    def has_pricing(self) -> bool:
        return any(
            value != 0 for value in (self.buy_price, self.sell_price, self.est_fee)
        )


@dataclass(frozen=True)
class SettlementRow:
    """A normalized settlement report row, ready for insertion."""

    row_num: int
    date: Optional[date]
    status: str
    type: str
    order_id: str
    product_details: str
    total_product_charges: Decimal
    total_promotional_rebates: Decimal
    amazon_fees: Decimal
    other: Decimal
    total: Decimal
    avg_cog: Decimal


@dataclass(frozen=True)
class TransactionImportRow:
    """A validated purchase-order CSV row (one line item)."""

    row_num: int
    txn_id: str
    ordered_date: Optional[date]
    delivery_date: Optional[date]
    supplier_name: str
    po_number: str
    category: str
    payment_method: str
    status: str
    shipping_cost: Decimal
    notes: str
    asin: str
    quantity: int
    buy_price: Decimal
    sell_price: Decimal
    est_fee: Decimal


# Import outcomes


@dataclass(frozen=True)
class ImportResult:
    """Tallies for a finished import."""

    imported: int = 0
    updated: int = 0
    skipped: int = 0
    matched: int = 0
    errors: tuple[str, ...] = ()
    kind: str = "products"

    def summary(self) -> str:
        """Render the one-line message shown after an import."""
        if self.kind == "settlement":
            text = (
                f"Successfully imported {self.imported} transactions. "
                f"{self.matched} ASIN matches found. "
                f"{self.skipped} rows skipped. Previous data cleared."
            )
        elif self.kind == "transactions":
            text = (
                f"Successfully imported {self.imported} transactions. "
                f"{self.updated} updated, {self.skipped} skipped."
            )
        else:
            text = (
                f"Successfully imported {self.imported} ASINs. "
                f"{self.updated} updated, {self.skipped} skipped."
            )
        if self.errors:
            text += f" {len(self.errors)} error{'s' if len(self.errors) != 1 else ''}."
        return text


@dataclass(frozen=True)
class ImportIdle:
    """No import has been started."""


@dataclass(frozen=True)
class ImportRunning:
    """An import is in progress."""

    source: str


@dataclass(frozen=True)
class ImportSucceeded:
    """An import finished; row-level problems are inside the result."""

    result: ImportResult

    @property
    def summary(self) -> str:
        return self.result.summary()


@dataclass(frozen=True)
class ImportFailed:
    """An import was rejected before any row was processed."""

    reason: str


ImportState = Union[ImportIdle, ImportRunning, ImportSucceeded, ImportFailed]


# Derived metrics


@dataclass(frozen=True)
class ItemMetrics:
    """Figures derived from one transaction item."""

    item: TransactionItem
    product: Optional[Product]
    item_cost: Decimal
    estimated_profit: Decimal
    roi: Decimal
    display_quantity: int


@dataclass(frozen=True)
class TransactionMetrics:
    """Figures derived from a transaction and its items."""

    transaction: Transaction
    items: tuple[ItemMetrics, ...]
    total_cost: Decimal
    total_profit: Decimal
    total_roi: Decimal


@dataclass(frozen=True)
class BudgetPacing:
    """Current-month budget position."""

    budget_amount: Decimal
    monthly_spend: Decimal
    budget_remaining: Decimal
    budget_percentage: Decimal
    days_left_in_month: int
    daily_spend_target: Decimal


@dataclass(frozen=True)
class MonthSummary:
    """Budget, spend and profit for one calendar month."""

    month_key: str
    budget: Decimal = Decimal("0")
    spend: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")


@dataclass(frozen=True)
class ProductMetrics:
    """Stock position for one product."""

    product: Product
    average_buy_price: Decimal
    total_quantity: int
    adjusted_quantity: int
    stored: int


@dataclass(frozen=True)
class SupplierMetrics:
    """Aggregates for one supplier."""

    supplier: Supplier
    order_count: int
    total_spend: Decimal
    estimated_profit: Decimal
    roi: Decimal
    average_order_value: Decimal
    last_order_date: Optional[date]


@dataclass(frozen=True)
class DashboardMetrics:
    """Headline figures for the dashboard."""

    total_orders: int
    total_stock_ordered: int
    total_estimated_profit: Decimal
    monthly_spend: Decimal
    average_roi: Decimal
    budget_remaining: Decimal
    pending_orders: int
    delivered_orders: int
    on_time_delivery_rate: Decimal
    pacing: BudgetPacing
    history: tuple[MonthSummary, ...] = field(default_factory=tuple)
