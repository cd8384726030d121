"""Purchase order CSV import service.

Each CSV row is one line item. Rows are grouped into purchase orders by
TXN ID (which updates an existing order) or, failing that, by PO number.
Rows without either are grouped by supplier and order date.
"""

import logging
from decimal import Decimal

from resellit.database.base import Database
from resellit.domain.entities import ImportResult, TransactionImportRow
from resellit.domain.errors import ValidationError, too_few_lines
from resellit.domain.headers import TRANSACTION_FIELDS, require_headers
from resellit.domain.product import ProductService
from resellit.domain.row_validation import (
    build_transaction_row,
    record_from_values,
    validate_transaction_record,
)
from resellit.domain.supplier import SupplierService
from resellit.domain.transaction import TransactionService
from resellit.utils.csv_tokenizer import read_csv_file, split_lines, tokenize_line

logger = logging.getLogger(__name__)

# Fields every row of one purchase order must agree on
GROUP_FIELDS = (
    "supplier_name",
    "ordered_date",
    "delivery_date",
    "category",
    "payment_method",
    "status",
)


def group_key(row: TransactionImportRow) -> str:
    """Return the purchase order a row belongs to."""
    if row.txn_id:
        return f"txn:{row.txn_id}"
    if row.po_number:
        return f"po:{row.po_number}"
    ordered = row.ordered_date.isoformat() if row.ordered_date else ""
    return f"po:{row.supplier_name.lower()}-{ordered}"


def group_rows(rows: list[TransactionImportRow]) -> dict[str, list[TransactionImportRow]]:
    """Group rows by purchase order, keeping first-seen order."""
    groups: dict[str, list[TransactionImportRow]] = {}
    for row in rows:
        groups.setdefault(group_key(row), []).append(row)
    return groups


def inconsistent_fields(rows: list[TransactionImportRow]) -> list[str]:
    """List the order-level fields whose values differ within a group."""
    return [
        name for name in GROUP_FIELDS if len({getattr(row, name) for row in rows}) > 1
    ]


class TransactionImportService:
    """Service for importing purchase orders from CSV files."""

    def __init__(self, db: Database):
        """Initialize transaction import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)
        self.supplier_service = SupplierService(db)
        self.product_service = ProductService(db)

    def import_csv(self, csv_file_path: str) -> ImportResult:
        """Import purchase orders from a CSV file.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValidationError: If the file is structurally invalid
        """
        return self.import_text(read_csv_file(csv_file_path))

    def import_text(self, text: str) -> ImportResult:
        """Import purchase orders from CSV content.

        Returns:
            ImportResult where imported counts new orders, updated counts
            orders matched by TXN ID and skipped counts rejected groups

        Raises:
            ValidationError: Fewer than two non-blank lines
            MissingColumnsError: A required header is absent
        """
        lines = split_lines(text)
        if len(lines) < 2:
            raise ValidationError(too_few_lines())

        match = require_headers(tokenize_line(lines[0]), TRANSACTION_FIELDS)

        rows: list[TransactionImportRow] = []
        errors: list[str] = []

        for i, line in enumerate(lines[1:], start=2):
            values = tokenize_line(line)
            if len(values) < match.width:
                errors.append(f"Row {i}: Insufficient columns")
                continue

            record = record_from_values(match, values)
            validation = validate_transaction_record(record)
            if not validation.valid:
                errors.append(f"Row {i}: {', '.join(validation.errors)}")
                continue

            rows.append(build_transaction_row(i, record))

        imported = 0
        updated = 0
        skipped = 0

        for key, group in group_rows(rows).items():
            mismatched = inconsistent_fields(group)
            if mismatched:
                errors.append(f"Group {key}: Inconsistent data in fields: {', '.join(mismatched)}")
                skipped += 1
                continue

            try:
                transaction_id, is_update = self._save_order(group)
            except Exception as e:
                logger.warning("Failed to process transaction group %s: %s", key, e)
                errors.append(f"Failed to process transaction group {key}: {e}")
                skipped += 1
                continue

            items_created = 0
            for row in group:
                try:
                    self.product_service.find_or_create_stub(row.asin, row.category)
                    self.transaction_service.add_item(
                        transaction_id=transaction_id,
                        asin=row.asin,
                        quantity=row.quantity,
                        buy_price=row.buy_price,
                        sell_price=row.sell_price,
                        est_fee=row.est_fee,
                    )
                    items_created += 1
                except Exception as e:
                    logger.warning("Failed to create item %s: %s", row.asin, e)
                    errors.append(
                        f"Failed to create item {row.asin} for transaction {transaction_id}: {e}"
                    )

            if items_created == 0:
                errors.append(f"No items could be created for transaction group {key}")
                skipped += 1
            elif is_update:
                updated += 1
            else:
                imported += 1

        return ImportResult(
            imported=imported,
            updated=updated,
            skipped=skipped,
            errors=tuple(errors),
            kind="transactions",
        )

    def _save_order(self, group: list[TransactionImportRow]) -> tuple[int, bool]:
        """Create or update the order for a group. Returns (id, was_update)."""
        first = group[0]
        supplier = self.supplier_service.find_or_create(first.supplier_name)
        shipping_cost = sum((row.shipping_cost for row in group), Decimal("0"))

        fields = dict(
            ordered_date=first.ordered_date,
            delivery_date=first.delivery_date,
            supplier_id=supplier.id,
            po_number=first.po_number,
            category=first.category,
            payment_method=first.payment_method,
            status=first.status,
            shipping_cost=shipping_cost,
            notes=first.notes,
        )

        existing_id = int(first.txn_id) if first.txn_id.isdigit() else None
        if existing_id is not None and self.db.get_transaction(existing_id) is not None:
            logger.info("Updating existing transaction %d", existing_id)
            if not fields["po_number"]:
                # Keep the stored PO number rather than blanking it
                del fields["po_number"]
            self.transaction_service.update_transaction(existing_id, **fields)
            return existing_id, True

        transaction_id = self.transaction_service.create_transaction(**fields)
        return transaction_id, False
