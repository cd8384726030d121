"""Budget domain service."""

from decimal import Decimal
from typing import Optional

from resellit.database.base import Database
from resellit.domain.entities import Budget
from resellit.domain.errors import ValidationError


class BudgetService:
    """Service for managing monthly budgets."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def set_budget(self, year: int, month: int, amount: Decimal) -> int:
        """Set the budget for a month, replacing any existing one.

        Returns:
            Budget ID

        Raises:
            ValidationError: If month is out of range or amount is negative
        """
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        if amount < 0:
            raise ValidationError("Budget amount must not be negative")
        return self.db.upsert_budget(year=year, month=month, amount=amount)

    def get_budget(self, year: int, month: int) -> Optional[Budget]:
        return self.db.get_budget(year, month)

    def list_budgets(self) -> list[Budget]:
        return self.db.list_budgets()
