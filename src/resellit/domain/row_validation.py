"""Per-row validation for CSV imports.

Validators look at raw string cells and collect every problem with a row
rather than stopping at the first. Typed import rows are only built from
records that validated cleanly.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from resellit.domain.entities import (
    ProductCategory,
    ProductImportRow,
    ProductKind,
    TransactionImportRow,
    TransactionStatus,
)
from resellit.domain.headers import HeaderMatch
from resellit.utils.amount_parser import (
    is_number,
    parse_amount_or_default,
    parse_int_or_default,
)
from resellit.utils.date_parser import parse_optional_date

ASIN_LENGTH = 10
MIN_TRANSACTION_ASIN_LENGTH = 3

PRODUCT_KINDS = tuple(kind.value for kind in ProductKind)
PRODUCT_CATEGORIES = tuple(category.value for category in ProductCategory)

DEFAULT_WEIGHT_UNIT = "g"
DEFAULT_PAYMENT_METHOD = "AMEX Plat"

# (field, label) pairs checked for numeric content on product rows
_PRODUCT_NUMERIC_FIELDS = (
    ("size", "Size"),
    ("buy_price", "Buy price"),
    ("sell_price", "Sell price"),
    ("est_fee", "Estimated fee"),
    ("weight", "Weight"),
)


@dataclass(frozen=True)
class RowValidation:
    """Outcome of validating a single CSV row."""

    valid: bool
    errors: tuple[str, ...] = ()


def _present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def _size(record: Mapping[str, Optional[str]]) -> Optional[str]:
    # The template column is "Size"; stored products call it pack
    return record["size"] if "size" in record else record.get("pack")


def record_from_values(match: HeaderMatch, values: Sequence[str]) -> dict[str, Optional[str]]:
    """Extract the cells of one tokenized row into a field-keyed record."""
    return {name: match.value(values, name) for name in match.indices}


def validate_product_record(record: Mapping[str, Optional[str]]) -> RowValidation:
    """Validate a raw product record.

    Args:
        record: Mapping of canonical field name to raw cell text

    Returns:
        RowValidation with every rule violation listed
    """
    errors = []

    asin = (record.get("asin") or "").strip()
    if not asin:
        errors.append("ASIN is required")
    elif len(asin) != ASIN_LENGTH:
        errors.append(f"ASIN must be exactly {ASIN_LENGTH} characters")

    kind = record.get("type")
    if _present(kind) and kind.strip() not in PRODUCT_KINDS:
        errors.append('Type must be either "Single" or "Bundle"')

    category = record.get("category")
    if _present(category) and category.strip() not in PRODUCT_CATEGORIES:
        errors.append('Category must be either "Stock" or "Other"')

    for field_name, label in _PRODUCT_NUMERIC_FIELDS:
        value = _size(record) if field_name == "size" else record.get(field_name)
        if _present(value) and not is_number(value):
            errors.append(f"{label} must be a valid number")

    return RowValidation(valid=not errors, errors=tuple(errors))


def build_product_row(row_num: int, record: Mapping[str, Optional[str]]) -> ProductImportRow:
    """Build a typed product row from a record that passed validation."""

    def text(name: str, default: str = "") -> str:
        value = record.get(name)
        return value.strip() if _present(value) else default

    pack = max(parse_int_or_default(_size(record), 1), 1)

    return ProductImportRow(
        row_num=row_num,
        asin=text("asin"),
        title=text("title"),
        brand=text("brand"),
        image_url=text("image_url"),
        kind=text("type", ProductKind.SINGLE.value),
        pack=pack,
        category=text("category", ProductCategory.STOCK.value),
        buy_price=parse_amount_or_default(record.get("buy_price")),
        sell_price=parse_amount_or_default(record.get("sell_price")),
        est_fee=parse_amount_or_default(record.get("est_fee")),
        weight=parse_amount_or_default(record.get("weight")),
        weight_unit=text("weight_unit", DEFAULT_WEIGHT_UNIT),
        fnsku=text("fnsku") or None,
    )


def validate_transaction_record(record: Mapping[str, Optional[str]]) -> RowValidation:
    """Validate a raw purchase-order line record."""
    errors = []

    if parse_optional_date(record.get("ordered_date")) is None:
        errors.append("Ordered Date is required")

    if not _present(record.get("supplier_name")):
        errors.append("Supplier Name is required")

    asin = (record.get("asin") or "").strip()
    if not asin:
        errors.append("ASIN is required")
    # Custom codes such as NO-ASIN-Z7XE are allowed here
    elif len(asin) < MIN_TRANSACTION_ASIN_LENGTH:
        errors.append(f"ASIN must be at least {MIN_TRANSACTION_ASIN_LENGTH} characters")

    quantity = record.get("quantity")
    if not is_number(quantity) or parse_int_or_default(quantity, 0) <= 0:
        errors.append("Quantity must be a valid positive number")

    buy_price = record.get("buy_price")
    if not is_number(buy_price) or parse_amount_or_default(buy_price) < 0:
        errors.append("Buy Price must be a valid positive number")

    status = record.get("status")
    statuses = [s.value for s in TransactionStatus]
    if _present(status) and status.strip().lower() not in statuses:
        errors.append(f"Status must be one of: {', '.join(statuses)}")

    return RowValidation(valid=not errors, errors=tuple(errors))


def build_transaction_row(row_num: int, record: Mapping[str, Optional[str]]) -> TransactionImportRow:
    """Build a typed purchase-order row from a record that passed validation."""

    def text(name: str, default: str = "") -> str:
        value = record.get(name)
        return value.strip() if _present(value) else default

    return TransactionImportRow(
        row_num=row_num,
        txn_id=text("txn_id"),
        ordered_date=parse_optional_date(record.get("ordered_date")),
        delivery_date=parse_optional_date(record.get("delivery_date")),
        supplier_name=text("supplier_name"),
        po_number=text("po_number"),
        category=text("category", ProductCategory.STOCK.value),
        payment_method=text("payment_method", DEFAULT_PAYMENT_METHOD),
        status=text("status", TransactionStatus.PENDING.value).lower(),
        shipping_cost=parse_amount_or_default(record.get("shipping_cost")),
        notes=text("notes"),
        asin=text("asin"),
        quantity=parse_int_or_default(record.get("quantity"), 1),
        buy_price=parse_amount_or_default(record.get("buy_price")),
        sell_price=parse_amount_or_default(record.get("sell_price")),
        est_fee=parse_amount_or_default(record.get("est_fee"), Decimal("0")),
    )
