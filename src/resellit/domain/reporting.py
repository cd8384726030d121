"""Reporting domain service.

Loads records from the database and hands them to the pure functions in
resellit.domain.metrics.
"""

from datetime import date
from typing import Optional

from resellit.database.base import Database
from resellit.domain import metrics
from resellit.domain.entities import (
    DashboardMetrics,
    ProductCategory,
    ProductMetrics,
    SupplierMetrics,
    TransactionMetrics,
)
from resellit.domain.errors import NotFoundError, transaction_not_found


class ReportingService:
    """Service for computing derived financial figures."""

    def __init__(self, db: Database):
        """Initialize reporting service.

        Args:
            db: Database instance
        """
        self.db = db

    def transaction_metrics(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        supplier_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[TransactionMetrics]:
        """Metrics for every matching transaction, newest order first."""
        transactions = self.db.list_transactions(
            start_date=start_date, end_date=end_date, supplier_id=supplier_id, status=status
        )
        return metrics.build_transaction_metrics(
            transactions, self.db.list_transaction_items(), self.db.list_products()
        )

    def transaction_detail(self, transaction_id: int) -> TransactionMetrics:
        """Metrics for a single transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        products = {p.asin: p for p in self.db.list_products()}
        return metrics.transaction_metrics(
            transaction, self.db.list_transaction_items(transaction_id), products
        )

    def dashboard(self, today: Optional[date] = None) -> DashboardMetrics:
        """Headline figures, budget pacing and the three-month history."""
        today = today or date.today()
        return metrics.dashboard_metrics(
            self.transaction_metrics(), self.db.list_budgets(), today
        )

    def supplier_report(self) -> list[SupplierMetrics]:
        """Per-supplier aggregates, busiest supplier first."""
        return metrics.supplier_metrics(self.db.list_suppliers(), self.transaction_metrics())

    def product_report(self, stock_only: bool = True) -> list[ProductMetrics]:
        """Stock position for each product.

        Args:
            stock_only: If True, skip products in the Other category
        """
        items = self.db.list_transaction_items()
        products = self.db.list_products()
        if stock_only:
            products = [p for p in products if p.category == ProductCategory.STOCK.value]
        return [metrics.product_metrics(p, items) for p in products]
