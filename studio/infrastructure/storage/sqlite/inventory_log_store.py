"""SQLite implementation of the inventory audit log."""

import json
from datetime import datetime
from typing import Any

import aiosqlite
from pydantic import ValidationError as PydanticValidationError

from studio.config import get_logger
from studio.core.entities.inventory_log import (
    InventoryAction,
    InventoryLog,
    inventory_log_adapter,
)
from studio.core.exceptions import CorruptAuditDataError
from studio.core.interfaces.inventory_log_store import IInventoryLogStore
from studio.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from studio.infrastructure.storage.sqlite.rows import dec_text

logger = get_logger(__name__)


class SQLiteInventoryLogStore(IInventoryLogStore):
    """
    Append-only audit log.

    Snapshots are stored as JSON text and validated back into the typed log
    variant on read; a row that does not validate raises
    ``CorruptAuditDataError``.
    """

    async def add_log(self, log: InventoryLog) -> InventoryLog:
        """Append a log entry."""
        data = log.model_dump(mode="json")
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO inventory_logs (
                    item_id, action, old_value, new_value, quantity, notes,
                    is_purchase, supplier, reversed_log_id,
                    performed_by_id, booking_id, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    log.item_id,
                    log.action,
                    _dump(data.get("old_value")),
                    _dump(data.get("new_value")),
                    dec_text(log.quantity),
                    log.notes,
                    1 if data.get("is_purchase") else 0,
                    data.get("supplier"),
                    data.get("reversed_log_id"),
                    log.performed_by_id,
                    log.booking_id,
                    log.created_at.isoformat(),
                ),
            )
            log.id = cursor.lastrowid
            logger.debug(
                "inventory_log_added",
                log_id=log.id,
                item_id=log.item_id,
                action=log.action,
                quantity=data.get("quantity"),
            )
            return log

    async def get_log(self, log_id: int) -> InventoryLog | None:
        """Get a log entry by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_logs WHERE id = ?", (log_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    async def delete_log(self, log_id: int) -> bool:
        """Delete a log entry. Returns False if it did not exist."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM inventory_logs WHERE id = ?", (log_id,)
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("inventory_log_deleted", log_id=log_id)
            return deleted

    async def list_logs(self, item_id: int, limit: int = 100) -> list[InventoryLog]:
        """Get logs for an item, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_logs
                WHERE item_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (item_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def list_purchases(self, item_id: int) -> list[InventoryLog]:
        """Get reversible purchase logs for an item, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_logs
                WHERE item_id = ? AND action = ? AND is_purchase = 1
                ORDER BY created_at DESC, id DESC
                """,
                (item_id, InventoryAction.STOCK_ADJUSTED.value),
            )
            rows = await cursor.fetchall()
            logs = [self._row_to_log(row) for row in rows]
            return [log for log in logs if log.quantity is not None and log.quantity > 0]

    async def list_booking_logs(self, booking_id: int) -> list[InventoryLog]:
        """Get every log correlated with a booking, oldest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_logs
                WHERE booking_id = ?
                ORDER BY created_at, id
                """,
                (booking_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def list_logs_between(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        action: InventoryAction | None = None,
    ) -> list[InventoryLog]:
        """Get logs created in [start, end), optionally filtered by action."""
        query = "SELECT * FROM inventory_logs WHERE 1 = 1"
        params: list[Any] = []
        if start is not None:
            query += " AND created_at >= ?"
            params.append(start.isoformat())
        if end is not None:
            query += " AND created_at < ?"
            params.append(end.isoformat())
        if action is not None:
            query += " AND action = ?"
            params.append(action.value)
        query += " ORDER BY created_at, id"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    @staticmethod
    def _row_to_log(row: aiosqlite.Row) -> InventoryLog:
        """Convert a database row to the typed log variant for its action."""
        try:
            data: dict[str, Any] = {
                "id": row["id"],
                "item_id": row["item_id"],
                "action": row["action"],
                "old_value": _load(row["old_value"]),
                "new_value": _load(row["new_value"]),
                "quantity": row["quantity"],
                "notes": row["notes"],
                "performed_by_id": row["performed_by_id"],
                "booking_id": row["booking_id"],
                "created_at": row["created_at"],
            }
        except json.JSONDecodeError as e:
            raise CorruptAuditDataError(row["id"], f"snapshot is not valid JSON: {e}") from e

        if row["action"] == InventoryAction.STOCK_ADJUSTED.value:
            data["is_purchase"] = bool(row["is_purchase"])
            data["supplier"] = row["supplier"]
            data["reversed_log_id"] = row["reversed_log_id"]

        try:
            return inventory_log_adapter.validate_python(data)
        except PydanticValidationError as e:
            logger.error("corrupt_audit_row", log_id=row["id"], error=str(e))
            raise CorruptAuditDataError(row["id"], str(e)) from e


def _dump(value: Any) -> str | None:
    if value is None:
        return None
    return json.dumps(value)


def _load(value: str | None) -> Any:
    if value is None or value == "":
        return None
    return json.loads(value)
