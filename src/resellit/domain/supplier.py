"""Supplier domain service."""

import logging
from typing import Optional

from resellit.database.base import Database
from resellit.domain.entities import Supplier
from resellit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_supplier,
    supplier_not_found,
)

logger = logging.getLogger(__name__)


class SupplierService:
    """Service for managing suppliers."""

    def __init__(self, db: Database):
        """Initialize supplier service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_supplier(
        self,
        name: str,
        address: str = "",
        email: str = "",
        phone: str = "",
        site: str = "",
        notes: str = "",
    ) -> int:
        """Create a new supplier.

        Returns:
            Supplier ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a supplier with the same name (any case) exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Supplier name is required")
        if self.db.get_supplier_by_name(name) is not None:
            raise ConflictError(duplicate_supplier(name))

        return self.db.create_supplier(
            name=name, address=address, email=email, phone=phone, site=site, notes=notes
        )

    def find_or_create(self, name: str) -> Supplier:
        """Return the supplier with this name (ignoring case), creating it if needed."""
        existing = self.db.get_supplier_by_name(name)
        if existing is not None:
            return existing

        logger.info("Creating supplier %s", name.strip())
        supplier_id = self.create_supplier(name)
        return self.require_supplier(supplier_id)

    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        """Get supplier by ID."""
        return self.db.get_supplier(supplier_id)

    def require_supplier(self, supplier_id: int) -> Supplier:
        """Get supplier by ID.

        Raises:
            NotFoundError: If the supplier doesn't exist
        """
        supplier = self.db.get_supplier(supplier_id)
        if supplier is None:
            raise NotFoundError(supplier_not_found(supplier_id))
        return supplier

    def list_suppliers(self) -> list[Supplier]:
        """List all suppliers."""
        return self.db.list_suppliers()
