"""Shared domain error messages and error types."""

from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class MissingColumnsError(ValidationError):
    """A CSV header row lacks one or more required columns."""

    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(missing_columns(self.missing))


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def missing_columns(names: Iterable[str]) -> str:
    """Return message for a header row missing required columns."""
    return f"Missing required columns: {', '.join(names)}"


def too_few_lines() -> str:
    """Return message for a CSV without header and data rows."""
    return "CSV file must contain at least a header row and one data row"


def product_not_found(asin: str) -> str:
    """Return message for missing product."""
    return f"ASIN '{asin}' not found"


def supplier_not_found(supplier_id: int) -> str:
    """Return message for missing supplier."""
    return f"Supplier {supplier_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_product(asin: str) -> str:
    """Return message for duplicate ASIN."""
    return f"ASIN '{asin}' already exists"


def duplicate_supplier(name: str) -> str:
    """Return message for duplicate supplier name."""
    return f"Supplier with name '{name}' already exists"
