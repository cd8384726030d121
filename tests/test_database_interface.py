"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from resellit.domain import entities


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_product_returns_domain_model(self, temp_db):
        """Test that get_product returns a domain Product entity."""
        product_id = temp_db.create_product(asin="B08N5WRWNW", title="Lamp", weight=Decimal("250"))

        product = temp_db.get_product(product_id)

        assert isinstance(product, entities.Product)
        assert product.asin == "B08N5WRWNW"
        assert product.pack == 1
        assert product.weight == Decimal("250")
        assert isinstance(product.created_at, datetime)

    def test_missing_records_return_none(self, temp_db):
        assert temp_db.get_product(1) is None
        assert temp_db.get_product_by_asin("B08N5WRWNW") is None
        assert temp_db.get_supplier(1) is None
        assert temp_db.get_supplier_by_name("Nobody") is None
        assert temp_db.get_transaction(1) is None
        assert temp_db.get_latest_pricing("B08N5WRWNW") is None

    def test_update_product(self, temp_db):
        product_id = temp_db.create_product(asin="B08N5WRWNW")
        temp_db.update_product(product_id, title="Lamp", shipped=3)

        product = temp_db.get_product(product_id)
        assert product.title == "Lamp"
        assert product.shipped == 3

    def test_update_product_rejects_unknown_field(self, temp_db):
        product_id = temp_db.create_product(asin="B08N5WRWNW")
        with pytest.raises(ValueError, match="Unknown product fields: colour"):
            temp_db.update_product(product_id, colour="red")

    def test_duplicate_asin_keeps_session_usable(self, temp_db):
        temp_db.create_product(asin="B08N5WRWNW")
        with pytest.raises(Exception):
            temp_db.create_product(asin="B08N5WRWNW")

        # The failed insert was rolled back, so later writes still work
        temp_db.create_product(asin="B000000001")
        assert len(temp_db.list_products()) == 2

    def test_supplier_lookup_ignores_case(self, temp_db):
        supplier_id = temp_db.create_supplier(name="Acme Wholesale")
        supplier = temp_db.get_supplier_by_name("  ACME wholesale ")
        assert isinstance(supplier, entities.Supplier)
        assert supplier.id == supplier_id

    def test_transaction_round_trip(self, temp_db):
        supplier_id = temp_db.create_supplier(name="Acme")
        transaction_id = temp_db.create_transaction(
            ordered_date=date(2024, 6, 3),
            delivery_date=date(2024, 6, 5),
            supplier_id=supplier_id,
            po_number="PO-1",
            shipping_cost=Decimal("4.99"),
        )
        temp_db.create_transaction_item(
            transaction_id=transaction_id, asin="B08N5WRWNW", quantity=2, buy_price=Decimal("3.10")
        )

        txn = temp_db.get_transaction(transaction_id)
        assert isinstance(txn, entities.Transaction)
        assert txn.shipping_cost == Decimal("4.99")
        assert txn.delivery_date == date(2024, 6, 5)

        [item] = temp_db.list_transaction_items()
        assert isinstance(item, entities.TransactionItem)
        assert item.buy_price == Decimal("3.10")
        assert item.sell_price == Decimal("0")

    def test_settlement_rows_are_deleted_in_bulk(self, temp_db):
        for order_id in ("A", "B"):
            temp_db.create_settlement_transaction(
                date=date(2024, 2, 3),
                status="Released",
                type="Order Payment",
                order_id=order_id,
                product_details="Widget",
                total_product_charges=Decimal("10"),
                total_promotional_rebates=Decimal("0"),
                amazon_fees=Decimal("-2"),
                other=Decimal("0"),
                total=Decimal("8"),
            )

        assert temp_db.delete_all_settlement_transactions() == 2
        assert temp_db.list_settlement_transactions() == []
