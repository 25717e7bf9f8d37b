"""Abstract interface for expense storage."""

from abc import ABC, abstractmethod

from studio.core.entities.expense import Expense, ExpenseCategory


class IExpenseStore(ABC):
    """Interface for expenses and expense categories."""

    @abstractmethod
    async def get_or_create_category(self, name: str) -> ExpenseCategory:
        """Find a category by case-insensitive name, creating it if missing."""
        pass

    @abstractmethod
    async def create_expense(self, expense: Expense) -> Expense:
        """Record an expense."""
        pass

    @abstractmethod
    async def get_expense(self, expense_id: int) -> Expense | None:
        """Get an expense by ID."""
        pass
