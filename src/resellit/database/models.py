"""SQLAlchemy models for resellit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Supplier(Base):
    """Supplier model."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    address = Column(String, default="", nullable=False)
    email = Column(String, default="", nullable=False)
    phone = Column(String, default="", nullable=False)
    site = Column(String, default="", nullable=False)
    notes = Column(String, default="", nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="supplier")


class Product(Base):
    """Product (ASIN) model."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    asin = Column(String(32), unique=True, nullable=False)
    title = Column(String, default="", nullable=False)
    brand = Column(String, default="", nullable=False)
    image_url = Column(String, default="", nullable=False)
    kind = Column(String, default="Single", nullable=False)
    pack = Column(Integer, default=1, nullable=False)
    category = Column(String, default="Stock", nullable=False)
    shipped = Column(Integer, default=0, nullable=False)
    stored = Column(Integer, default=0, nullable=False)
    weight = Column(Numeric(10, 2), nullable=True)
    weight_unit = Column(String, nullable=True)
    fnsku = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class Transaction(Base):
    """Purchase order model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    ordered_date = Column(Date, nullable=True)
    delivery_date = Column(Date, nullable=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    po_number = Column(String, default="", nullable=False)
    category = Column(String, default="Stock", nullable=False)
    payment_method = Column(String, default="", nullable=False)
    status = Column(String, default="pending", nullable=False)
    shipping_cost = Column(Numeric(10, 2), default=0, nullable=False)
    notes = Column(String, default="", nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    supplier = relationship("Supplier", back_populates="transactions")
    items = relationship(
        "TransactionItem", back_populates="transaction", cascade="all, delete-orphan"
    )


class TransactionItem(Base):
    """Transaction line item model."""

    __tablename__ = "transaction_items"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    asin = Column(String(32), nullable=False)
    quantity = Column(Integer, nullable=False)
    buy_price = Column(Numeric(10, 2), nullable=False)
    sell_price = Column(Numeric(10, 2), default=0, nullable=False)
    est_fee = Column(Numeric(10, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="items")


class Budget(Base):
    """Monthly budget model."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # One budget per calendar month
    __table_args__ = (UniqueConstraint("year", "month", name="uq_budget_year_month"),)


class PricingHistory(Base):
    """Append-only pricing history per ASIN."""

    __tablename__ = "pricing_history"

    id = Column(Integer, primary_key=True)
    asin = Column(String(32), nullable=False, index=True)
    buy_price = Column(Numeric(10, 2), nullable=False)
    sell_price = Column(Numeric(10, 2), nullable=False)
    est_fee = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class SettlementTransaction(Base):
    """Marketplace settlement row model."""

    __tablename__ = "settlement_transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=True)
    status = Column(String, default="", nullable=False)
    type = Column(String, default="", nullable=False)
    order_id = Column(String, default="", nullable=False)
    product_details = Column(String, default="", nullable=False)
    total_product_charges = Column(Numeric(10, 2), default=0, nullable=False)
    total_promotional_rebates = Column(Numeric(10, 2), default=0, nullable=False)
    amazon_fees = Column(Numeric(10, 2), default=0, nullable=False)
    other = Column(Numeric(10, 2), default=0, nullable=False)
    total = Column(Numeric(10, 2), default=0, nullable=False)
    avg_cog = Column(Numeric(10, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
