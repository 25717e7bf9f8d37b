"""Expense entities written alongside inventory purchases."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from studio.core.entities.base import utc_now


class ExpenseCategory(BaseModel):
    id: int | None = None
    name: str


class Expense(BaseModel):
    """A cost recorded for financial reporting."""

    id: int | None = None
    description: str
    amount: Decimal
    category_id: int
    expense_date: date = Field(default_factory=lambda: utc_now().date())
    notes: str | None = None
    created_by_id: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
