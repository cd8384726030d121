"""Domain tests for the supplier service."""

import pytest

from resellit.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_supplier(supplier_service):
    supplier_id = supplier_service.create_supplier(name="  Acme  ", site="https://acme.test")
    supplier = supplier_service.get_supplier(supplier_id)
    assert supplier.name == "Acme"
    assert supplier.site == "https://acme.test"
    assert supplier.email == ""


def test_create_supplier_blank_name(supplier_service):
    with pytest.raises(ValidationError):
        supplier_service.create_supplier(name="   ")


def test_duplicate_name_ignores_case(supplier_service, sample_supplier):
    with pytest.raises(ConflictError):
        supplier_service.create_supplier(name=sample_supplier.name.upper())


def test_find_or_create(supplier_service, sample_supplier):
    assert supplier_service.find_or_create("acme wholesale") == sample_supplier

    created = supplier_service.find_or_create("New Supplier")
    assert created.name == "New Supplier"
    assert [s.name for s in supplier_service.list_suppliers()] == ["Acme Wholesale", "New Supplier"]


def test_require_supplier_missing(supplier_service):
    with pytest.raises(NotFoundError, match="Supplier 42 not found"):
        supplier_service.require_supplier(42)
