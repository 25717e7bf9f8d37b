"""SQLite implementation of expense storage."""

import aiosqlite

from studio.config import get_logger
from studio.core.entities.expense import Expense, ExpenseCategory
from studio.core.interfaces.expense_store import IExpenseStore
from studio.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from studio.infrastructure.storage.sqlite.rows import dec, dec_text, parse_date, parse_datetime

logger = get_logger(__name__)


class SQLiteExpenseStore(IExpenseStore):
    """SQLite implementation of expenses and expense categories."""

    async def get_or_create_category(self, name: str) -> ExpenseCategory:
        """Find a category by case-insensitive name, creating it if missing."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT id, name FROM expense_categories WHERE name = ? COLLATE NOCASE",
                (name,),
            )
            row = await cursor.fetchone()
            if row is not None:
                return ExpenseCategory(id=row["id"], name=row["name"])

            cursor = await conn.execute(
                "INSERT INTO expense_categories (name) VALUES (?)", (name,)
            )
            logger.info("expense_category_created", category_id=cursor.lastrowid, name=name)
            return ExpenseCategory(id=cursor.lastrowid, name=name)

    async def create_expense(self, expense: Expense) -> Expense:
        """Record an expense."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO expenses (
                    description, amount, category_id, expense_date,
                    notes, created_by_id, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    expense.description,
                    dec_text(expense.amount),
                    expense.category_id,
                    expense.expense_date.isoformat(),
                    expense.notes,
                    expense.created_by_id,
                    expense.created_at.isoformat(),
                ),
            )
            expense.id = cursor.lastrowid
            return expense

    async def get_expense(self, expense_id: int) -> Expense | None:
        """Get an expense by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM expenses WHERE id = ?", (expense_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_expense(row)

    @staticmethod
    def _row_to_expense(row: aiosqlite.Row) -> Expense:
        return Expense(
            id=row["id"],
            description=row["description"],
            amount=dec(row["amount"]),
            category_id=row["category_id"],
            expense_date=parse_date(row["expense_date"]),
            notes=row["notes"],
            created_by_id=row["created_by_id"],
            created_at=parse_datetime(row["created_at"]),
        )
