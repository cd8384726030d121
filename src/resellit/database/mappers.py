"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the domain entities stay free of
ORM state.
"""

from decimal import Decimal

from resellit.domain import entities as domain
from resellit.database.models import (
    Budget as ORMBudget,
    PricingHistory as ORMPricingHistory,
    Product as ORMProduct,
    SettlementTransaction as ORMSettlementTransaction,
    Supplier as ORMSupplier,
    Transaction as ORMTransaction,
    TransactionItem as ORMTransactionItem,
)


def _money(value) -> Decimal:
    return Decimal(value) if value is not None else Decimal("0")


def product_to_domain(orm_product: ORMProduct) -> domain.Product:
    """Convert SQLAlchemy Product model to domain Product entity."""
    return domain.Product(
        id=orm_product.id,
        asin=orm_product.asin,
        title=orm_product.title or "",
        brand=orm_product.brand or "",
        image_url=orm_product.image_url or "",
        kind=orm_product.kind,
        pack=orm_product.pack or 1,
        category=orm_product.category,
        shipped=orm_product.shipped or 0,
        stored=orm_product.stored or 0,
        weight=orm_product.weight,
        weight_unit=orm_product.weight_unit,
        fnsku=orm_product.fnsku,
        created_at=orm_product.created_at,
    )


def supplier_to_domain(orm_supplier: ORMSupplier) -> domain.Supplier:
    """Convert SQLAlchemy Supplier model to domain Supplier entity."""
    return domain.Supplier(
        id=orm_supplier.id,
        name=orm_supplier.name,
        address=orm_supplier.address or "",
        email=orm_supplier.email or "",
        phone=orm_supplier.phone or "",
        site=orm_supplier.site or "",
        notes=orm_supplier.notes or "",
        created_at=orm_supplier.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        ordered_date=orm_transaction.ordered_date,
        delivery_date=orm_transaction.delivery_date,
        supplier_id=orm_transaction.supplier_id,
        po_number=orm_transaction.po_number or "",
        category=orm_transaction.category,
        payment_method=orm_transaction.payment_method or "",
        status=orm_transaction.status,
        shipping_cost=_money(orm_transaction.shipping_cost),
        notes=orm_transaction.notes or "",
        created_at=orm_transaction.created_at,
    )


def transaction_item_to_domain(orm_item: ORMTransactionItem) -> domain.TransactionItem:
    """Convert SQLAlchemy TransactionItem model to domain TransactionItem entity."""
    return domain.TransactionItem(
        id=orm_item.id,
        transaction_id=orm_item.transaction_id,
        asin=orm_item.asin,
        quantity=orm_item.quantity,
        buy_price=_money(orm_item.buy_price),
        sell_price=_money(orm_item.sell_price),
        est_fee=_money(orm_item.est_fee),
        created_at=orm_item.created_at,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        year=orm_budget.year,
        month=orm_budget.month,
        amount=_money(orm_budget.amount),
    )


def pricing_history_to_domain(orm_pricing: ORMPricingHistory) -> domain.PricingHistory:
    """Convert SQLAlchemy PricingHistory model to domain PricingHistory entity."""
    return domain.PricingHistory(
        id=orm_pricing.id,
        asin=orm_pricing.asin,
        buy_price=_money(orm_pricing.buy_price),
        sell_price=_money(orm_pricing.sell_price),
        est_fee=_money(orm_pricing.est_fee),
        created_at=orm_pricing.created_at,
    )


def settlement_to_domain(orm_row: ORMSettlementTransaction) -> domain.SettlementTransaction:
    """Convert SQLAlchemy SettlementTransaction model to its domain entity."""
    return domain.SettlementTransaction(
        id=orm_row.id,
        date=orm_row.date,
        status=orm_row.status or "",
        type=orm_row.type or "",
        order_id=orm_row.order_id or "",
        product_details=orm_row.product_details or "",
        total_product_charges=_money(orm_row.total_product_charges),
        total_promotional_rebates=_money(orm_row.total_promotional_rebates),
        amazon_fees=_money(orm_row.amazon_fees),
        other=_money(orm_row.other),
        total=_money(orm_row.total),
        avg_cog=_money(orm_row.avg_cog),
        created_at=orm_row.created_at,
    )
