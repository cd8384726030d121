"""Product (ASIN) CSV import service."""

import logging

from resellit.database.base import Database
from resellit.domain.entities import ImportResult, ProductImportRow
from resellit.domain.errors import ValidationError, too_few_lines
from resellit.domain.headers import PRODUCT_FIELDS, require_headers
from resellit.domain.row_validation import (
    build_product_row,
    record_from_values,
    validate_product_record,
)
from resellit.utils.csv_tokenizer import read_csv_file, split_lines, tokenize_line

logger = logging.getLogger(__name__)


class ProductImportService:
    """Service for importing product catalogue CSV files.

    Products are keyed by ASIN, so importing the same file twice updates the
    records created by the first run instead of duplicating them.
    """

    def __init__(self, db: Database):
        """Initialize product import service.

        Args:
            db: Database instance
        """
        self.db = db

    def import_csv(self, csv_file_path: str) -> ImportResult:
        """Import products from a CSV file.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValidationError: If the file is structurally invalid
        """
        return self.import_text(read_csv_file(csv_file_path))

    def import_text(self, text: str) -> ImportResult:
        """Import products from CSV content.

        Args:
            text: Whole CSV document, header row first

        Returns:
            ImportResult with imported, updated and skipped counts plus row errors

        Raises:
            ValidationError: Fewer than two non-blank lines
            MissingColumnsError: A required header is absent
        """
        lines = split_lines(text)
        if len(lines) < 2:
            raise ValidationError(too_few_lines())

        match = require_headers(tokenize_line(lines[0]), PRODUCT_FIELDS)

        rows: list[ProductImportRow] = []
        errors: list[str] = []

        for i, line in enumerate(lines[1:], start=2):
            values = tokenize_line(line)
            if len(values) < match.width:
                errors.append(f"Row {i}: Insufficient columns")
                continue

            record = record_from_values(match, values)
            validation = validate_product_record(record)
            if not validation.valid:
                errors.append(f"Row {i}: {', '.join(validation.errors)}")
                continue

            rows.append(build_product_row(i, record))

        logger.debug("Parsed %d valid product rows, %d rejected", len(rows), len(errors))

        imported = 0
        updated = 0
        skipped = 0

        for row in rows:
            try:
                existing = self.db.get_product_by_asin(row.asin)
                if existing is None:
                    self._create(row)
                    imported += 1
                else:
                    self._update(existing.id, row)
                    updated += 1
            except Exception as e:
                logger.warning("Failed to import ASIN %s: %s", row.asin, e)
                errors.append(f"ASIN {row.asin}: {e}")
                skipped += 1

        return ImportResult(
            imported=imported,
            updated=updated,
            skipped=skipped,
            errors=tuple(errors),
            kind="products",
        )

    def _create(self, row: ProductImportRow) -> None:
        self.db.create_product(
            asin=row.asin,
            title=row.title,
            brand=row.brand,
            image_url=row.image_url,
            kind=row.kind,
            pack=row.pack,
            category=row.category,
            weight=row.weight,
            weight_unit=row.weight_unit,
            fnsku=row.fnsku,
        )

        if not row.has_pricing:
            return
        # Pricing history is best effort and never fails the row
        try:
            self.db.add_pricing_history(
                asin=row.asin,
                buy_price=row.buy_price,
                sell_price=row.sell_price,
                est_fee=row.est_fee,
            )
        except Exception as e:
            logger.warning("Failed to record pricing history for %s: %s", row.asin, e)

    def _update(self, product_id: int, row: ProductImportRow) -> None:
        self.db.update_product(
            product_id,
            title=row.title,
            brand=row.brand,
            image_url=row.image_url,
            kind=row.kind,
            pack=row.pack,
            category=row.category,
            weight=row.weight,
            weight_unit=row.weight_unit,
            fnsku=row.fnsku,
        )
