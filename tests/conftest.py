"""Shared pytest fixtures for resellit tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from resellit.database.factories import create_sqlite_database
from resellit.domain.budget import BudgetService
from resellit.domain.product import ProductService
from resellit.domain.supplier import SupplierService
from resellit.domain.transaction import TransactionService
from resellit.storage.local import LocalReceiptStore


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def product_service(temp_db):
    """Create a ProductService with a temporary database."""
    return ProductService(temp_db)


@pytest.fixture
def supplier_service(temp_db):
    """Create a SupplierService with a temporary database."""
    return SupplierService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def sample_supplier(supplier_service):
    """Create a sample supplier for testing."""
    supplier_id = supplier_service.create_supplier(name="Acme Wholesale", email="sales@acme.test")
    return supplier_service.get_supplier(supplier_id)


@pytest.fixture
def sample_product(product_service):
    """Create a complete single-unit product."""
    product_service.create_product(
        asin="B08N5WRWNW",
        title="Adjustable Desk Lamp with USB Charging Port",
        brand="Acme",
        image_url="https://example.com/lamp.jpg",
    )
    return product_service.get_product("B08N5WRWNW")


@pytest.fixture
def sample_transaction(transaction_service, sample_supplier, sample_product):
    """Create a purchase order with one line item: 3 x 2.00, selling at 5.00."""
    transaction_id = transaction_service.create_transaction(
        ordered_date=date(2024, 6, 3),
        supplier_id=sample_supplier.id,
        po_number="PO-100",
        status="ordered",
    )
    transaction_service.add_item(
        transaction_id=transaction_id,
        asin=sample_product.asin,
        quantity=3,
        buy_price=Decimal("2.00"),
        sell_price=Decimal("5.00"),
        est_fee=Decimal("0.50"),
    )
    return transaction_service.get_transaction(transaction_id)


@pytest.fixture
def receipt_store(tmp_path):
    """Create a receipt store rooted in a temporary directory."""
    root = tmp_path / "receipts"
    root.mkdir()
    return LocalReceiptStore(root)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
