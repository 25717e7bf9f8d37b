"""SQLite implementation of the cost-of-sale recipe."""

import aiosqlite

from studio.config import get_logger
from studio.core.entities.base import utc_now
from studio.core.entities.inventory import CostOfSaleItem
from studio.core.exceptions import DuplicateCostOfSaleItemError
from studio.core.interfaces.cost_of_sale_store import ICostOfSaleStore
from studio.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from studio.infrastructure.storage.sqlite.rows import dec, dec_text, parse_datetime

logger = get_logger(__name__)

_SELECT = """
    SELECT c.*, i.name AS item_name, i.unit AS item_unit
    FROM cost_of_sale_items c
    JOIN inventory_items i ON i.id = c.item_id
"""


class SQLiteCostOfSaleStore(ICostOfSaleStore):
    """SQLite implementation of cost-of-sale configuration rows."""

    async def list_items(self) -> list[CostOfSaleItem]:
        """List configured items, oldest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_SELECT} ORDER BY c.created_at, c.id")
            rows = await cursor.fetchall()
            return [self._row_to_cost_of_sale_item(row) for row in rows]

    async def get(self, cos_id: int) -> CostOfSaleItem | None:
        """Get a configuration row by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_SELECT} WHERE c.id = ?", (cos_id,))
            row = await cursor.fetchone()
            return self._row_to_cost_of_sale_item(row) if row else None

    async def get_by_item(self, item_id: int) -> CostOfSaleItem | None:
        """Get the configuration row of an inventory item."""
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_SELECT} WHERE c.item_id = ?", (item_id,))
            row = await cursor.fetchone()
            return self._row_to_cost_of_sale_item(row) if row else None

    async def create(self, cos_item: CostOfSaleItem) -> CostOfSaleItem:
        """Add an item to the recipe."""
        now = utc_now()
        cos_item.created_at = now
        cos_item.updated_at = now
        async with get_transaction() as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO cost_of_sale_items (
                        item_id, quantity_per_person, created_at, updated_at
                    ) VALUES (?, ?, ?, ?)
                    """,
                    (
                        cos_item.item_id,
                        dec_text(cos_item.quantity_per_person),
                        cos_item.created_at.isoformat(),
                        cos_item.updated_at.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                if "UNIQUE" in str(e):
                    raise DuplicateCostOfSaleItemError(cos_item.item_id) from e
                raise
            cos_item.id = cursor.lastrowid
            logger.info(
                "cost_of_sale_item_created",
                cos_id=cos_item.id,
                item_id=cos_item.item_id,
            )
            return cos_item

    async def update(self, cos_item: CostOfSaleItem) -> CostOfSaleItem:
        """Update quantity per person."""
        cos_item.updated_at = utc_now()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE cost_of_sale_items SET quantity_per_person = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    dec_text(cos_item.quantity_per_person),
                    cos_item.updated_at.isoformat(),
                    cos_item.id,
                ),
            )
            return cos_item

    async def delete(self, cos_id: int) -> bool:
        """Remove a row. Returns False if it did not exist."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM cost_of_sale_items WHERE id = ?", (cos_id,)
            )
            return cursor.rowcount > 0

    async def delete_by_item(self, item_id: int) -> int:
        """Remove the row of an inventory item. Returns rows deleted."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM cost_of_sale_items WHERE item_id = ?", (item_id,)
            )
            return cursor.rowcount

    @staticmethod
    def _row_to_cost_of_sale_item(row: aiosqlite.Row) -> CostOfSaleItem:
        return CostOfSaleItem(
            id=row["id"],
            item_id=row["item_id"],
            quantity_per_person=dec(row["quantity_per_person"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
            item_name=row["item_name"],
            item_unit=row["item_unit"],
        )
