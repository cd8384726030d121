"""Marketplace settlement report import service."""

import logging
from decimal import Decimal
from typing import Optional, Sequence

from resellit.database.base import Database
from resellit.domain.entities import ImportResult, Product, SettlementRow
from resellit.domain.errors import ValidationError, too_few_lines
from resellit.domain.headers import SETTLEMENT_FIELDS, HeaderMatch, require_headers
from resellit.utils.amount_parser import parse_amount_or_default
from resellit.utils.csv_tokenizer import read_csv_file, split_lines, tokenize_line
from resellit.utils.date_parser import parse_day_first_date

logger = logging.getLogger(__name__)

# Settlement descriptions are truncated product titles
TITLE_PREFIX_LENGTH = 24


def match_product_by_title(details: str, products: Sequence[Product]) -> Optional[Product]:
    """Find the product whose title starts like a settlement description.

    Only the first 24 characters are compared, ignoring case. Descriptions
    shorter than that never match.
    """
    if len(details) < TITLE_PREFIX_LENGTH:
        return None
    prefix = details[:TITLE_PREFIX_LENGTH].lower()
    for product in products:
        if product.title and product.title[:TITLE_PREFIX_LENGTH].lower() == prefix:
            return product
    return None


def build_settlement_row(row_num: int, match: HeaderMatch, values: Sequence[str]) -> SettlementRow:
    """Normalize one settlement report row. Unparseable numbers become 0."""

    def text(name: str) -> str:
        return match.value(values, name) or ""

    def amount(name: str) -> Decimal:
        return parse_amount_or_default(match.value(values, name))

    return SettlementRow(
        row_num=row_num,
        date=parse_day_first_date(match.value(values, "date")),
        status=text("transaction_status"),
        type=text("transaction_type"),
        order_id=text("order_id"),
        product_details=text("product_details"),
        total_product_charges=amount("total_product_charges"),
        total_promotional_rebates=amount("total_promotional_rebates"),
        amazon_fees=amount("amazon_fees"),
        other=amount("other"),
        total=amount("total"),
        avg_cog=Decimal("0"),
    )


class SettlementImportService:
    """Service for replacing stored settlement rows with a new report."""

    def __init__(self, db: Database):
        """Initialize settlement import service.

        Args:
            db: Database instance
        """
        self.db = db

    def import_csv(self, csv_file_path: str) -> ImportResult:
        """Import a settlement report file.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValidationError: If the file is structurally invalid
        """
        return self.import_text(read_csv_file(csv_file_path))

    def import_text(self, text: str) -> ImportResult:
        """Replace all settlement rows with the rows of a report.

        Existing rows are deleted before the file is even checked, so a
        rejected file still leaves the table empty. Re-importing the same
        report is the recovery path.

        Args:
            text: Whole settlement CSV, header row first

        Returns:
            ImportResult with imported, matched and skipped counts

        Raises:
            ValidationError: Fewer than two non-blank lines
            MissingColumnsError: A required header is absent
        """
        deleted = self.db.delete_all_settlement_transactions()
        logger.info("Cleared %d settlement rows", deleted)

        lines = split_lines(text)
        if len(lines) < 2:
            raise ValidationError(too_few_lines())

        match = require_headers(tokenize_line(lines[0]), SETTLEMENT_FIELDS)
        products = self.db.list_products()

        imported = 0
        skipped = 0
        matched = 0

        for i, line in enumerate(lines[1:], start=2):
            values = tokenize_line(line)
            if len(values) < match.width:
                logger.debug("Row %d: Insufficient columns", i)
                skipped += 1
                continue

            try:
                row = build_settlement_row(i, match, values)
                # TODO: backfill avg_cog from the matched product's average buy price
                if match_product_by_title(row.product_details, products) is not None:
                    matched += 1

                self.db.create_settlement_transaction(
                    date=row.date,
                    status=row.status,
                    type=row.type,
                    order_id=row.order_id,
                    product_details=row.product_details,
                    total_product_charges=row.total_product_charges,
                    total_promotional_rebates=row.total_promotional_rebates,
                    amazon_fees=row.amazon_fees,
                    other=row.other,
                    total=row.total,
                    avg_cog=row.avg_cog,
                )
                imported += 1
            except Exception as e:
                logger.warning("Error importing settlement row %d: %s", i, e)
                skipped += 1

        return ImportResult(
            imported=imported,
            skipped=skipped,
            matched=matched,
            kind="settlement",
        )
