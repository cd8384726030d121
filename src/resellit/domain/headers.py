"""Header reconciliation for human-authored CSV files.

Column names in spreadsheets drift ("Image URL", "image_url", "Image"), so
each canonical field carries a list of accepted variations. Matching is
case and whitespace insensitive and accepts a header that merely contains a
variation.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from resellit.domain.errors import MissingColumnsError


@dataclass(frozen=True)
class FieldSpec:
    """A canonical CSV field and the header spellings that map onto it.

    Attributes:
        name: Canonical field name
        variations: Accepted header spellings, in priority order
        optional: If True, absence does not reject the file
        qualifiers: Extra terms the header must also contain
    """

    name: str
    variations: tuple[str, ...]
    optional: bool = False
    qualifiers: tuple[str, ...] = ()


@dataclass(frozen=True)
class HeaderMatch:
    """Result of matching a header row against a field table."""

    indices: dict[str, int]
    missing: tuple[str, ...] = ()
    headers: tuple[str, ...] = field(default=())

    @property
    def is_complete(self) -> bool:
        return not self.missing

    @property
    def width(self) -> int:
        """Minimum number of columns a data row needs."""
        return max(self.indices.values(), default=-1) + 1

    def value(self, values: Sequence[str], name: str) -> Optional[str]:
        """Return the raw cell for a field, or None if the column is absent."""
        index = self.indices.get(name)
        if index is None or index >= len(values):
            return None
        return values[index].replace('"', "").strip()


PRODUCT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("asin", ("asin",)),
    FieldSpec("image_url", ("image url", "imageurl", "image_url", "image")),
    FieldSpec("title", ("title",)),
    FieldSpec("type", ("type",)),
    FieldSpec("size", ("size",)),
    FieldSpec("brand", ("brand",)),
    FieldSpec("category", ("category",), optional=True),
    FieldSpec(
        "buy_price",
        ("buy_price", "buy price", "cost", "cog", "purchase price", "purchase_price"),
        optional=True,
    ),
    FieldSpec(
        "sell_price",
        ("sell_price", "sell price", "selling price", "selling_price", "price"),
        optional=True,
    ),
    FieldSpec(
        "est_fee",
        ("est_fee", "est fee", "estimated fee", "estimated_fee", "fee", "fees", "amazon fee"),
        optional=True,
    ),
    FieldSpec("weight", ("weight", "weight_g", "product weight"), optional=True),
    FieldSpec("weight_unit", ("weight_unit", "weight unit", "unit"), optional=True),
    FieldSpec("fnsku", ("fnsku", "fulfillment network sku"), optional=True),
)

PRODUCT_TEMPLATE_HEADERS: tuple[str, ...] = (
    "ASIN",
    "Image URL",
    "Title",
    "Type",
    "Size",
    "Brand",
    "Category",
    "buy_price",
    "sell_price",
    "est_fee",
    "weight",
    "weight_unit",
    "fnsku",
)

SETTLEMENT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("date", ("date",)),
    FieldSpec("transaction_status", ("transaction status",)),
    FieldSpec("transaction_type", ("transaction type",)),
    FieldSpec("order_id", ("order id",)),
    FieldSpec("product_details", ("product details",)),
    FieldSpec("total_product_charges", ("total product charges",)),
    FieldSpec("total_promotional_rebates", ("total promotional rebates",)),
    FieldSpec("amazon_fees", ("amazon fees",)),
    FieldSpec("other", ("other",)),
    FieldSpec("total", ("total",), qualifiers=("gbp",)),
)

TRANSACTION_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        "txn_id",
        ("txn id", "txn_id", "transaction id", "transaction_id"),
        optional=True,
    ),
    FieldSpec("ordered_date", ("ordered date", "ordered_date", "order date")),
    FieldSpec(
        "delivery_date",
        ("delivery date", "delivery_date", "delivered date"),
        optional=True,
    ),
    FieldSpec("supplier_name", ("supplier name", "supplier_name", "supplier")),
    FieldSpec(
        "po_number",
        ("po number", "po_number", "purchase order"),
        optional=True,
    ),
    FieldSpec("category", ("category",), optional=True),
    FieldSpec(
        "payment_method",
        ("payment method", "payment_method", "payment"),
        optional=True,
    ),
    FieldSpec("status", ("status",), optional=True),
    FieldSpec(
        "shipping_cost",
        ("shipping cost", "shipping_cost", "shipping"),
        optional=True,
    ),
    FieldSpec("notes", ("notes", "note"), optional=True),
    FieldSpec("asin", ("asin",)),
    FieldSpec("quantity", ("quantity", "qty")),
    FieldSpec("buy_price", ("buy price", "buy_price", "cost", "cog")),
    FieldSpec(
        "sell_price",
        ("sell price", "sell_price", "selling price"),
        optional=True,
    ),
    FieldSpec(
        "est_fee",
        ("est fees", "est_fees", "estimated fees", "fees"),
        optional=True,
    ),
)

TRANSACTION_TEMPLATE_HEADERS: tuple[str, ...] = (
    "TXN ID",
    "Ordered Date",
    "Delivery Date",
    "Supplier Name",
    "PO Number",
    "Category",
    "Payment Method",
    "Status",
    "Shipping Cost",
    "Notes",
    "ASIN",
    "Quantity",
    "Buy Price",
    "Sell Price",
    "Est Fees",
)

_WHITESPACE = re.compile(r"\s+")


def normalize_header(value: str) -> str:
    """Lower-case a header and strip quotes and all whitespace."""
    return _WHITESPACE.sub("", value.replace('"', "").lower())


def _header_matches(header: str, spec: FieldSpec, exact: bool) -> bool:
    if not header:
        return False
    if any(normalize_header(q) not in header for q in spec.qualifiers):
        return False
    for variation in spec.variations:
        wanted = normalize_header(variation)
        if header == wanted or (not exact and wanted in header):
            return True
    return False


def _find_column(normalized: Sequence[str], spec: FieldSpec) -> Optional[int]:
    for exact in (True, False):
        for i, header in enumerate(normalized):
            if _header_matches(header, spec, exact):
                return i
    return None


def reconcile_headers(header_row: Sequence[str], fields: Sequence[FieldSpec]) -> HeaderMatch:
    """Map header cells onto canonical fields.

    Each field takes the first (left-most) header that matches any of its
    variations. An exact match anywhere in the row beats a substring match,
    so "buy_price" is not claimed by the "price" spelling of sell_price.
    This differs from a single left-to-right scan: for ["Product Title",
    "Title"] the title field resolves to column 1, not column 0.
    The same column may satisfy more than one field.

    Args:
        header_row: Tokenized header line
        fields: Ordered field table

    Returns:
        HeaderMatch with resolved indices and missing required fields
    """
    normalized = [normalize_header(cell) for cell in header_row]
    indices: dict[str, int] = {}
    missing: list[str] = []

    for spec in fields:
        index = _find_column(normalized, spec)
        if index is not None:
            indices[spec.name] = index
        elif not spec.optional:
            missing.append(spec.name)

    return HeaderMatch(indices=indices, missing=tuple(missing), headers=tuple(header_row))


def require_headers(header_row: Sequence[str], fields: Sequence[FieldSpec]) -> HeaderMatch:
    """Reconcile headers and reject the file if any required field is absent.

    Raises:
        MissingColumnsError: Listing every missing required field
    """
    match = reconcile_headers(header_row, fields)
    if match.missing:
        raise MissingColumnsError(match.missing)
    return match
