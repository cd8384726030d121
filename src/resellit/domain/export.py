"""CSV templates, product export and the expense backup archive."""

import csv
import io
import logging
import zipfile
from datetime import date
from pathlib import Path
from typing import Optional

from resellit.database.base import Database
from resellit.domain.headers import PRODUCT_TEMPLATE_HEADERS, TRANSACTION_TEMPLATE_HEADERS
from resellit.domain.metrics import ZERO
from resellit.domain.reporting import ReportingService
from resellit.storage.base import ReceiptStore

logger = logging.getLogger(__name__)

PRODUCT_TEMPLATE_FILENAME = "asin_template.csv"
TRANSACTION_TEMPLATE_FILENAME = "transaction_template.csv"

TRANSACTION_SAMPLE_ROWS = (
    (
        "",
        "2025-01-15",
        "2025-01-20",
        "Example Supplier",
        "PO-001",
        "Stock",
        "AMEX Plat",
        "ordered",
        "5.99",
        "Sample transaction notes",
        "B08N5WRWNW",
        "10",
        "12.50",
        "25.00",
        "3.75",
    ),
    (
        "",
        "2025-01-15",
        "2025-01-20",
        "Example Supplier",
        "PO-001",
        "Stock",
        "AMEX Plat",
        "ordered",
        "0",
        "",
        "B07XJ8C8F5",
        "5",
        "8.99",
        "18.50",
        "2.25",
    ),
)

EXPENSE_REPORT_HEADERS = (
    "TXN ID",
    "ORDERED DATE",
    "DELIVERY DATE",
    "SUPPLIER",
    "CATEGORY",
    "PAYMENT METHOD",
    "TOTAL COST",
    "ROI",
    "RECEIPTS",
)


def short_id(transaction_id: int) -> str:
    """Eight character transaction reference used in reports."""
    return f"{transaction_id:08d}"


def receipt_archive_name(transaction_id: int, index: int, path: str) -> str:
    """Name of the index-th (1-based) receipt inside the backup archive."""
    name = path.rsplit("/", 1)[-1]
    extension = name.rsplit(".", 1)[-1] if "." in name else "bin"
    return f"{short_id(transaction_id)}-R{index:02d}.{extension}"


def _write_csv(rows: list[tuple], output_path: Optional[str] = None) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    content = buffer.getvalue()
    if output_path is not None:
        Path(output_path).write_text(content, encoding="utf-8")
    return content


def product_template(output_path: Optional[str] = None) -> str:
    """Write the product import template: the header row only."""
    return _write_csv([PRODUCT_TEMPLATE_HEADERS], output_path)


def transaction_template(output_path: Optional[str] = None) -> str:
    """Write the purchase order import template with two sample rows."""
    return _write_csv([TRANSACTION_TEMPLATE_HEADERS, *TRANSACTION_SAMPLE_ROWS], output_path)


class ExportService:
    """Service for exporting data out of resellit."""

    def __init__(self, db: Database, store: Optional[ReceiptStore] = None):
        """Initialize export service.

        Args:
            db: Database instance
            store: Receipt storage, needed only for backups
        """
        self.db = db
        self.store = store
        self.reporting = ReportingService(db)

    def export_products(self, output_path: Optional[str] = None) -> str:
        """Export every product in import-template layout.

        Pricing columns carry the latest pricing history for each ASIN, so
        the file can be edited and imported back.

        Returns:
            The CSV content
        """
        rows: list[tuple] = [PRODUCT_TEMPLATE_HEADERS]
        for product in self.db.list_products():
            pricing = self.db.get_latest_pricing(product.asin)
            rows.append(
                (
                    product.asin,
                    product.image_url,
                    product.title,
                    product.kind,
                    product.pack,
                    product.brand,
                    product.category,
                    pricing.buy_price if pricing else ZERO,
                    pricing.sell_price if pricing else ZERO,
                    pricing.est_fee if pricing else ZERO,
                    product.weight if product.weight is not None else "",
                    product.weight_unit or "",
                    product.fnsku or "",
                )
            )
        return _write_csv(rows, output_path)

    def expense_report(self, receipt_names: dict[int, list[str]]) -> str:
        """CSV expense report of every transaction, newest first."""
        suppliers = {s.id: s.name for s in self.db.list_suppliers()}
        rows: list[tuple] = [EXPENSE_REPORT_HEADERS]
        for m in self.reporting.transaction_metrics():
            txn = m.transaction
            rows.append(
                (
                    short_id(txn.id),
                    txn.ordered_date.isoformat() if txn.ordered_date else "N/A",
                    txn.delivery_date.isoformat() if txn.delivery_date else "N/A",
                    suppliers.get(txn.supplier_id, "N/A"),
                    txn.category or "N/A",
                    txn.payment_method or "N/A",
                    f"{m.total_cost:.2f}",
                    f"{m.total_roi:.0f}%",
                    " ".join(receipt_names.get(txn.id, [])),
                )
            )
        return _write_csv(rows)

    def create_backup(self, output_dir: str, owner: str, today: Optional[date] = None) -> Path:
        """Write expense-backup-<date>.zip with the report and all receipts.

        Receipts are renamed <ID8>-R01.<ext>, <ID8>-R02.<ext>, ... per
        transaction. Receipts that cannot be read are logged and left out.

        Returns:
            Path of the written archive
        """
        if self.store is None:
            raise ValueError("Receipt storage is not configured")

        today = today or date.today()
        stamp = today.isoformat()
        zip_path = Path(output_dir) / f"expense-backup-{stamp}.zip"
        zip_path.parent.mkdir(parents=True, exist_ok=True)

        renamed: dict[int, list[tuple[str, str]]] = {}
        for txn in self.db.list_transactions():
            paths = self.store.list_for_transaction(owner, txn.id)
            renamed[txn.id] = [
                (path, receipt_archive_name(txn.id, i, path))
                for i, path in enumerate(paths, start=1)
            ]

        logger.info("Writing backup %s", zip_path)
        try:
            with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zipf:
                report = self.expense_report(
                    {txn_id: [name for _, name in pairs] for txn_id, pairs in renamed.items()}
                )
                zipf.writestr(f"expense-report-{stamp}.csv", report)

                for pairs in renamed.values():
                    for path, name in pairs:
                        try:
                            content = self.store.read(path)
                        except (OSError, ValueError) as e:
                            logger.warning("Failed to read receipt %s: %s", path, e)
                            continue
                        zipf.writestr(f"receipts/{name}", content)
        except Exception as e:
            logger.error("Backup failed: %s", e)
            if zip_path.exists():
                zip_path.unlink()
            raise

        return zip_path
