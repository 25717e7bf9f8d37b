"""SQLite implementation of inventory storage."""

import aiosqlite

from studio.config import get_logger
from studio.core.entities.base import utc_now
from studio.core.entities.inventory import (
    InventoryItem,
    InventoryPriceHistory,
    InventorySummary,
)
from studio.core.interfaces.inventory_store import IInventoryStore
from studio.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from studio.infrastructure.storage.sqlite.rows import dec, dec_text, parse_datetime

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory item and price history storage."""

    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """Create a new inventory item."""
        now = utc_now()
        item.created_at = now
        item.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO inventory_items (
                    name, description, unit, current_stock, current_cost,
                    reorder_level, created_by_id, is_deleted, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?, ?)
                """,
                (
                    item.name,
                    item.description,
                    item.unit,
                    dec_text(item.current_stock),
                    dec_text(item.current_cost),
                    dec_text(item.reorder_level),
                    item.created_by_id,
                    item.created_at.isoformat(),
                    item.updated_at.isoformat(),
                ),
            )
            item.id = cursor.lastrowid
            logger.info("inventory_item_created", item_id=item.id, name=item.name)
            return item

    async def get_item(
        self, item_id: int, include_deleted: bool = False
    ) -> InventoryItem | None:
        """Get inventory item by ID. Soft-deleted items are hidden by default."""
        query = "SELECT * FROM inventory_items WHERE id = ?"
        if not include_deleted:
            query += " AND is_deleted = 0"
        async with get_connection() as conn:
            cursor = await conn.execute(query, (item_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_inventory_item(row)

    async def update_item(self, item: InventoryItem) -> InventoryItem:
        """Update inventory item."""
        item.updated_at = utc_now()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE inventory_items SET
                    name = ?,
                    description = ?,
                    unit = ?,
                    current_stock = ?,
                    current_cost = ?,
                    reorder_level = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    item.name,
                    item.description,
                    item.unit,
                    dec_text(item.current_stock),
                    dec_text(item.current_cost),
                    dec_text(item.reorder_level),
                    item.updated_at.isoformat(),
                    item.id,
                ),
            )
            logger.debug("inventory_item_updated", item_id=item.id)
            return item

    async def soft_delete_item(self, item_id: int) -> bool:
        """Mark an item deleted. Returns False if it did not exist."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_items SET is_deleted = 1, updated_at = ?
                WHERE id = ? AND is_deleted = 0
                """,
                (utc_now().isoformat(), item_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("inventory_item_deleted", item_id=item_id)
            return deleted

    async def list_items(self, limit: int = 500, offset: int = 0) -> list[InventoryItem]:
        """List active inventory items ordered by name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_items
                WHERE is_deleted = 0
                ORDER BY name COLLATE NOCASE, id
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_inventory_item(row) for row in rows]

    async def get_summary(self) -> InventorySummary:
        """Totals over all active items. Values are summed as Decimals."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT current_stock, current_cost, reorder_level
                FROM inventory_items
                WHERE is_deleted = 0
                """
            )
            rows = await cursor.fetchall()

        summary = InventorySummary()
        for row in rows:
            stock = dec(row["current_stock"])
            reorder_level = dec(row["reorder_level"])
            summary.total_items += 1
            summary.total_stock_value += stock * dec(row["current_cost"])
            if reorder_level is not None and stock <= reorder_level:
                summary.low_stock_count += 1
        return summary

    async def add_price_history(
        self, entry: InventoryPriceHistory
    ) -> InventoryPriceHistory:
        """Append a price history row."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO inventory_price_history (
                    item_id, old_price, new_price, changed_by, reason, effective_date
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.item_id,
                    dec_text(entry.old_price),
                    dec_text(entry.new_price),
                    entry.changed_by,
                    entry.reason,
                    entry.effective_date.isoformat(),
                ),
            )
            entry.id = cursor.lastrowid
            return entry

    async def get_price_history(self, item_id: int) -> list[InventoryPriceHistory]:
        """Get price history for an item, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_price_history
                WHERE item_id = ?
                ORDER BY effective_date DESC, id DESC
                """,
                (item_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_price_history(row) for row in rows]

    @staticmethod
    def _row_to_inventory_item(row: aiosqlite.Row) -> InventoryItem:
        """Convert a database row to an InventoryItem entity."""
        return InventoryItem(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            unit=row["unit"],
            current_stock=dec(row["current_stock"]),
            current_cost=dec(row["current_cost"]),
            reorder_level=dec(row["reorder_level"]),
            created_by_id=row["created_by_id"],
            is_deleted=bool(row["is_deleted"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )

    @staticmethod
    def _row_to_price_history(row: aiosqlite.Row) -> InventoryPriceHistory:
        return InventoryPriceHistory(
            id=row["id"],
            item_id=row["item_id"],
            old_price=dec(row["old_price"]),
            new_price=dec(row["new_price"]),
            changed_by=row["changed_by"],
            reason=row["reason"],
            effective_date=parse_datetime(row["effective_date"]),
        )
