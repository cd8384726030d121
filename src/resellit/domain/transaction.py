"""Transaction (purchase order) domain service."""

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from resellit.database.base import Database
from resellit.domain.entities import (
    ProductCategory,
    Transaction,
    TransactionItem,
    TransactionStatus,
)
from resellit.domain.errors import (
    NotFoundError,
    ValidationError,
    supplier_not_found,
    transaction_not_found,
)
from resellit.domain.row_validation import DEFAULT_PAYMENT_METHOD

logger = logging.getLogger(__name__)

PO_PREFIX = "ASH-"
_PO_PATTERN = re.compile(rf"^{PO_PREFIX}(\d+)$")


def _validate_status(status: str) -> str:
    status = status.strip().lower()
    statuses = [s.value for s in TransactionStatus]
    if status not in statuses:
        raise ValidationError(f"Status must be one of: {', '.join(statuses)}")
    return status


class TransactionService:
    """Service for managing purchase orders and their line items."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def next_po_number(self) -> str:
        """Return the next auto-generated PO number, e.g. ASH-00042."""
        highest = 0
        for txn in self.db.list_transactions():
            match = _PO_PATTERN.match(txn.po_number or "")
            if match:
                highest = max(highest, int(match.group(1)))
        return f"{PO_PREFIX}{highest + 1:05d}"

    def create_transaction(
        self,
        ordered_date: Optional[date],
        supplier_id: Optional[int],
        po_number: str = "",
        category: str = "",
        payment_method: str = "",
        status: str = TransactionStatus.PENDING.value,
        shipping_cost: Decimal = Decimal("0"),
        notes: str = "",
        delivery_date: Optional[date] = None,
    ) -> int:
        """Create a new purchase order.

        Blank PO numbers are auto-generated; blank category and payment
        method fall back to Stock and the default card.

        Returns:
            Transaction ID

        Raises:
            ValidationError: If status or shipping cost is invalid
            NotFoundError: If the supplier doesn't exist
        """
        status = _validate_status(status)
        if shipping_cost < 0:
            raise ValidationError("Shipping cost must not be negative")
        if supplier_id is not None and self.db.get_supplier(supplier_id) is None:
            raise NotFoundError(supplier_not_found(supplier_id))

        if not po_number.strip():
            po_number = self.next_po_number()

        transaction_id = self.db.create_transaction(
            ordered_date=ordered_date,
            delivery_date=delivery_date,
            supplier_id=supplier_id,
            po_number=po_number.strip(),
            category=category.strip() or ProductCategory.STOCK.value,
            payment_method=payment_method.strip() or DEFAULT_PAYMENT_METHOD,
            status=status,
            shipping_cost=shipping_cost,
            notes=notes,
        )
        logger.debug("Created transaction %d (%s)", transaction_id, po_number)
        return transaction_id

    def update_transaction(self, transaction_id: int, **fields: Any) -> None:
        """Overwrite transaction-level fields.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If a new status is invalid
        """
        self.require_transaction(transaction_id)
        if "status" in fields:
            fields["status"] = _validate_status(fields["status"])
        self.db.update_transaction(transaction_id, **fields)

    def update_status(self, transaction_id: int, status: str) -> None:
        """Move a transaction to a new status."""
        self.update_transaction(transaction_id, status=status)

    def add_item(
        self,
        transaction_id: int,
        asin: str,
        quantity: int,
        buy_price: Decimal,
        sell_price: Decimal = Decimal("0"),
        est_fee: Decimal = Decimal("0"),
    ) -> int:
        """Add a line item to a transaction.

        Returns:
            Item ID

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If quantity or prices are invalid
        """
        self.require_transaction(transaction_id)
        if quantity <= 0:
            raise ValidationError("Quantity must be a valid positive number")
        if buy_price < 0 or sell_price < 0 or est_fee < 0:
            raise ValidationError("Prices and fees must not be negative")

        return self.db.create_transaction_item(
            transaction_id=transaction_id,
            asin=asin.strip(),
            quantity=quantity,
            buy_price=buy_price,
            sell_price=sell_price,
            est_fee=est_fee,
        )

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> Transaction:
        """Get transaction by ID.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        supplier_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters."""
        if status is not None:
            status = _validate_status(status)
        return self.db.list_transactions(
            start_date=start_date, end_date=end_date, supplier_id=supplier_id, status=status
        )

    def list_items(self, transaction_id: Optional[int] = None) -> list[TransactionItem]:
        """List items of one transaction, or of every transaction."""
        return self.db.list_transaction_items(transaction_id)
