"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from resellit.domain.entities import (
    Budget,
    PricingHistory,
    Product,
    SettlementTransaction,
    Supplier,
    Transaction,
    TransactionItem,
)


class Database(ABC):
    """Abstract record store for resellit."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Product operations
    @abstractmethod
    def create_product(
        self,
        asin: str,
        title: str = "",
        brand: str = "",
        image_url: str = "",
        kind: str = "Single",
        pack: int = 1,
        category: str = "Stock",
        weight: Optional[Decimal] = None,
        weight_unit: Optional[str] = None,
        fnsku: Optional[str] = None,
    ) -> int:
        """Create a product. Returns product ID."""
        pass

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        """Get product by ID."""
        pass

    @abstractmethod
    def get_product_by_asin(self, asin: str) -> Optional[Product]:
        """Get product by its ASIN."""
        pass

    @abstractmethod
    def update_product(self, product_id: int, **fields: Any) -> None:
        """Overwrite the given product fields."""
        pass

    @abstractmethod
    def list_products(self) -> list[Product]:
        """List all products ordered by ASIN."""
        pass

    # Supplier operations
    @abstractmethod
    def create_supplier(
        self,
        name: str,
        address: str = "",
        email: str = "",
        phone: str = "",
        site: str = "",
        notes: str = "",
    ) -> int:
        """Create a supplier. Returns supplier ID."""
        pass

    @abstractmethod
    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        """Get supplier by ID."""
        pass

    @abstractmethod
    def get_supplier_by_name(self, name: str) -> Optional[Supplier]:
        """Get supplier by name, ignoring case."""
        pass

    @abstractmethod
    def list_suppliers(self) -> list[Supplier]:
        """List all suppliers ordered by name."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        ordered_date: Optional[date],
        supplier_id: Optional[int],
        po_number: str = "",
        category: str = "Stock",
        payment_method: str = "",
        status: str = "pending",
        shipping_cost: Decimal = Decimal("0"),
        notes: str = "",
        delivery_date: Optional[date] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, **fields: Any) -> None:
        """Overwrite the given transaction fields."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        supplier_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions, newest order first, with optional filters.

        Args:
            start_date: Optional earliest ordered date
            end_date: Optional latest ordered date
            supplier_id: Optional supplier ID filter
            status: Optional status filter
        """
        pass

    # Transaction item operations
    @abstractmethod
    def create_transaction_item(
        self,
        transaction_id: int,
        asin: str,
        quantity: int,
        buy_price: Decimal,
        sell_price: Decimal = Decimal("0"),
        est_fee: Decimal = Decimal("0"),
    ) -> int:
        """Create a transaction item. Returns item ID."""
        pass

    @abstractmethod
    def list_transaction_items(self, transaction_id: Optional[int] = None) -> list[TransactionItem]:
        """List items of one transaction, or every item when no ID is given."""
        pass

    # Budget operations
    @abstractmethod
    def upsert_budget(self, year: int, month: int, amount: Decimal) -> int:
        """Create or replace the budget for a month. Returns budget ID."""
        pass

    @abstractmethod
    def get_budget(self, year: int, month: int) -> Optional[Budget]:
        """Get the budget for a month."""
        pass

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """List all budgets, oldest month first."""
        pass

    # Pricing history operations
    @abstractmethod
    def add_pricing_history(
        self, asin: str, buy_price: Decimal, sell_price: Decimal, est_fee: Decimal
    ) -> int:
        """Append a pricing record. Returns record ID."""
        pass

    @abstractmethod
    def list_pricing_history(self, asin: str) -> list[PricingHistory]:
        """List pricing records for an ASIN, newest first."""
        pass

    @abstractmethod
    def get_latest_pricing(self, asin: str) -> Optional[PricingHistory]:
        """Get the most recent pricing record for an ASIN."""
        pass

    # Settlement operations
    @abstractmethod
    def create_settlement_transaction(
        self,
        date: Optional[date],
        status: str,
        type: str,
        order_id: str,
        product_details: str,
        total_product_charges: Decimal,
        total_promotional_rebates: Decimal,
        amazon_fees: Decimal,
        other: Decimal,
        total: Decimal,
        avg_cog: Decimal = Decimal("0"),
    ) -> int:
        """Insert a settlement row. Returns row ID."""
        pass

    @abstractmethod
    def delete_all_settlement_transactions(self) -> int:
        """Delete every settlement row. Returns the number deleted."""
        pass

    @abstractmethod
    def list_settlement_transactions(self) -> list[SettlementTransaction]:
        """List settlement rows, newest date first."""
        pass
