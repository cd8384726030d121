"""Product domain service."""

import logging
from decimal import Decimal
from typing import Optional

from resellit.database.base import Database
from resellit.domain.entities import PricingHistory, Product, ProductCategory, ProductKind
from resellit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_product,
    product_not_found,
)
from resellit.domain.row_validation import validate_product_record

logger = logging.getLogger(__name__)


class ProductService:
    """Service for managing products (ASINs)."""

    def __init__(self, db: Database):
        """Initialize product service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_product(
        self,
        asin: str,
        title: str = "",
        brand: str = "",
        image_url: str = "",
        kind: str = ProductKind.SINGLE.value,
        pack: int = 1,
        category: str = ProductCategory.STOCK.value,
        weight: Optional[Decimal] = None,
        weight_unit: Optional[str] = None,
        fnsku: Optional[str] = None,
    ) -> int:
        """Create a new product.

        Args:
            asin: 10-character ASIN
            title: Product title
            brand: Brand name
            image_url: Image URL
            kind: "Single" or "Bundle"
            pack: Units per bundle
            category: "Stock" or "Other"
            weight: Optional weight
            weight_unit: Unit for weight
            fnsku: Optional fulfilment SKU

        Returns:
            Product ID

        Raises:
            ValidationError: If the fields break product rules
            ConflictError: If the ASIN already exists
        """
        asin = asin.strip()
        validation = validate_product_record(
            {"asin": asin, "type": kind, "category": category, "size": str(pack)}
        )
        if not validation.valid:
            raise ValidationError(", ".join(validation.errors))
        if pack < 1:
            raise ValidationError("Size must be at least 1")

        if self.db.get_product_by_asin(asin) is not None:
            raise ConflictError(duplicate_product(asin))

        return self.db.create_product(
            asin=asin,
            title=title,
            brand=brand,
            image_url=image_url,
            kind=kind,
            pack=pack,
            category=category,
            weight=weight,
            weight_unit=weight_unit,
            fnsku=fnsku,
        )

    def find_or_create_stub(self, asin: str, category: str = ProductCategory.OTHER.value) -> Product:
        """Return the product for an ASIN, creating an incomplete stub if needed.

        Purchase orders may reference custom codes (e.g. NO-ASIN-Z7XE), so
        the ASIN length rule is not applied here.
        """
        existing = self.db.get_product_by_asin(asin)
        if existing is not None:
            return existing

        if category not in (c.value for c in ProductCategory):
            category = ProductCategory.OTHER.value

        logger.info("Creating stub product for %s", asin)
        product_id = self.db.create_product(asin=asin, category=category)
        product = self.db.get_product(product_id)
        if product is None:
            raise NotFoundError(product_not_found(asin))
        return product

    def get_product(self, asin: str) -> Optional[Product]:
        """Get a product by ASIN."""
        return self.db.get_product_by_asin(asin.strip())

    def require_product(self, asin: str) -> Product:
        """Get a product by ASIN.

        Raises:
            NotFoundError: If no product has that ASIN
        """
        product = self.get_product(asin)
        if product is None:
            raise NotFoundError(product_not_found(asin))
        return product

    def list_products(self, incomplete_only: bool = False) -> list[Product]:
        """List products.

        Args:
            incomplete_only: If True, only products missing title, brand or image
        """
        products = self.db.list_products()
        if incomplete_only:
            return [p for p in products if p.is_incomplete]
        return products

    def set_shipped(self, asin: str, shipped: int) -> None:
        """Record how many units of a product have been shipped.

        Raises:
            NotFoundError: If no product has that ASIN
            ValidationError: If shipped is negative
        """
        if shipped < 0:
            raise ValidationError("Shipped must not be negative")
        product = self.require_product(asin)
        self.db.update_product(product.id, shipped=shipped)

    def record_pricing(
        self, asin: str, buy_price: Decimal, sell_price: Decimal, est_fee: Decimal
    ) -> int:
        """Append a pricing history record for an existing product."""
        product = self.require_product(asin)
        return self.db.add_pricing_history(
            asin=product.asin, buy_price=buy_price, sell_price=sell_price, est_fee=est_fee
        )

    def latest_pricing(self, asin: str) -> Optional[PricingHistory]:
        """Get the most recent pricing record for an ASIN."""
        return self.db.get_latest_pricing(asin)
