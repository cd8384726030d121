"""Tests for per-row CSV validation."""

from datetime import date
from decimal import Decimal

from resellit.domain.row_validation import (
    DEFAULT_PAYMENT_METHOD,
    DEFAULT_WEIGHT_UNIT,
    build_product_row,
    build_transaction_row,
    validate_product_record,
    validate_transaction_record,
)


def _product_record(**overrides):
    record = {
        "asin": "B08N5WRWNW",
        "image_url": "https://example.com/a.jpg",
        "title": "Desk lamp",
        "type": "Single",
        "size": "1",
        "brand": "Acme",
    }
    record.update(overrides)
    return record


def _transaction_record(**overrides):
    record = {
        "ordered_date": "2025-01-15",
        "supplier_name": "Acme",
        "asin": "B08N5WRWNW",
        "quantity": "10",
        "buy_price": "12.50",
    }
    record.update(overrides)
    return record


class TestProductValidation:
    """Tests for validate_product_record."""

    def test_valid_record(self):
        result = validate_product_record(_product_record())
        assert result.valid
        assert result.errors == ()

    def test_asin_required(self):
        result = validate_product_record(_product_record(asin="  "))
        assert result.errors == ("ASIN is required",)

    def test_asin_length(self):
        result = validate_product_record(_product_record(asin="B08N5"))
        assert result.errors == ("ASIN must be exactly 10 characters",)

    def test_blank_type_and_category_are_allowed(self):
        assert validate_product_record(_product_record(type="", category="")).valid

    def test_collects_every_error(self):
        result = validate_product_record(
            _product_record(type="Triple", category="Misc", size="four", buy_price="cheap")
        )
        assert not result.valid
        assert result.errors == (
            'Type must be either "Single" or "Bundle"',
            'Category must be either "Stock" or "Other"',
            "Size must be a valid number",
            "Buy price must be a valid number",
        )


def test_build_product_row_applies_defaults():
    row = build_product_row(2, _product_record(type="", size="", weight=None))
    assert row.row_num == 2
    assert row.kind == "Single"
    assert row.pack == 1
    assert row.category == "Stock"
    assert row.buy_price == Decimal("0")
    assert row.weight_unit == DEFAULT_WEIGHT_UNIT
    assert row.fnsku is None
    assert not row.has_pricing


def test_build_product_row_bundle_with_pricing():
    row = build_product_row(
        3, _product_record(type="Bundle", size="4", buy_price="8.99", fnsku="X001")
    )
    assert row.kind == "Bundle"
    assert row.pack == 4
    assert row.buy_price == Decimal("8.99")
    assert row.fnsku == "X001"
    assert row.has_pricing


class TestTransactionValidation:
    """Tests for validate_transaction_record."""

    def test_valid_record(self):
        assert validate_transaction_record(_transaction_record()).valid

    def test_custom_codes_are_allowed(self):
        assert validate_transaction_record(_transaction_record(asin="NO-ASIN-Z7XE")).valid

    def test_short_asin(self):
        result = validate_transaction_record(_transaction_record(asin="AB"))
        assert result.errors == ("ASIN must be at least 3 characters",)

    def test_missing_date_and_supplier(self):
        result = validate_transaction_record(
            _transaction_record(ordered_date="", supplier_name=None)
        )
        assert result.errors == ("Ordered Date is required", "Supplier Name is required")

    def test_quantity_and_price(self):
        result = validate_transaction_record(_transaction_record(quantity="0", buy_price="-1"))
        assert result.errors == (
            "Quantity must be a valid positive number",
            "Buy Price must be a valid positive number",
        )

    def test_status_must_be_known(self):
        result = validate_transaction_record(_transaction_record(status="shipped"))
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Status must be one of: pending, ordered")

    def test_status_is_case_insensitive(self):
        assert validate_transaction_record(_transaction_record(status="Fully Received")).valid


def test_build_transaction_row_applies_defaults():
    row = build_transaction_row(2, _transaction_record())
    assert row.ordered_date == date(2025, 1, 15)
    assert row.delivery_date is None
    assert row.category == "Stock"
    assert row.payment_method == DEFAULT_PAYMENT_METHOD
    assert row.status == "pending"
    assert row.quantity == 10
    assert row.buy_price == Decimal("12.50")
    assert row.shipping_cost == Decimal("0")
    assert row.txn_id == ""
