"""SQLite implementation of booking storage."""

from datetime import date
from typing import Any

import aiosqlite

from studio.config import get_logger
from studio.core.entities.base import utc_now
from studio.core.entities.booking import (
    Booking,
    BookingStatus,
    BookingType,
    SessionTime,
)
from studio.core.interfaces.booking_store import IBookingStore
from studio.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from studio.infrastructure.storage.sqlite.rows import parse_date, parse_datetime

logger = get_logger(__name__)

# Slot names sort in the order the sessions run
_ORDER_BY = "ORDER BY session_date, session_time, created_at, id"


class SQLiteBookingStore(IBookingStore):
    """SQLite implementation of booking storage."""

    async def create_booking(self, booking: Booking) -> Booking:
        """Create a booking."""
        now = utc_now()
        booking.created_at = now
        booking.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO bookings (
                    student_name, student_email, student_phone, number_of_people,
                    session_date, session_time, booking_type, status, notes,
                    created_by_id, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    booking.student_name,
                    booking.student_email,
                    booking.student_phone,
                    booking.number_of_people,
                    booking.session_date.isoformat(),
                    booking.session_time.value,
                    booking.booking_type.value,
                    booking.status.value,
                    booking.notes,
                    booking.created_by_id,
                    booking.created_at.isoformat(),
                    booking.updated_at.isoformat(),
                ),
            )
            booking.id = cursor.lastrowid
            logger.info(
                "booking_stored",
                booking_id=booking.id,
                session_date=booking.session_date.isoformat(),
                session_time=booking.session_time.value,
            )
            return booking

    async def get_booking(self, booking_id: int) -> Booking | None:
        """Get booking by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM bookings WHERE id = ?", (booking_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_booking(row)

    async def update_booking(self, booking: Booking) -> Booking:
        """Update a booking."""
        booking.updated_at = utc_now()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE bookings SET
                    student_name = ?,
                    student_email = ?,
                    student_phone = ?,
                    number_of_people = ?,
                    session_date = ?,
                    session_time = ?,
                    booking_type = ?,
                    status = ?,
                    notes = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    booking.student_name,
                    booking.student_email,
                    booking.student_phone,
                    booking.number_of_people,
                    booking.session_date.isoformat(),
                    booking.session_time.value,
                    booking.booking_type.value,
                    booking.status.value,
                    booking.notes,
                    booking.updated_at.isoformat(),
                    booking.id,
                ),
            )
            return booking

    async def delete_booking(self, booking_id: int) -> bool:
        """Delete a booking. Returns False if it did not exist."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM bookings WHERE id = ?", (booking_id,)
            )
            return cursor.rowcount > 0

    async def list_bookings(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        session_time: SessionTime | None = None,
        status: BookingStatus | None = None,
        include_cancelled: bool = True,
    ) -> list[Booking]:
        """List bookings in [date_from, date_to] ordered by date, slot, creation."""
        query = "SELECT * FROM bookings WHERE 1 = 1"
        params: list[Any] = []
        if date_from is not None:
            query += " AND session_date >= ?"
            params.append(date_from.isoformat())
        if date_to is not None:
            query += " AND session_date <= ?"
            params.append(date_to.isoformat())
        if session_time is not None:
            query += " AND session_time = ?"
            params.append(session_time.value)
        if status is not None:
            query += " AND status = ?"
            params.append(status.value)
        if not include_cancelled:
            query += " AND status != ?"
            params.append(BookingStatus.CANCELLED.value)
        query += f" {_ORDER_BY}"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_booking(row) for row in rows]

    async def sum_booked_people(
        self,
        session_date: date,
        session_time: SessionTime,
        excluding_booking_id: int | None = None,
    ) -> int:
        """Sum number_of_people over non-cancelled bookings of one slot."""
        query = """
            SELECT COALESCE(SUM(number_of_people), 0) FROM bookings
            WHERE session_date = ? AND session_time = ? AND status != ?
        """
        params: list[Any] = [
            session_date.isoformat(),
            session_time.value,
            BookingStatus.CANCELLED.value,
        ]
        if excluding_booking_id is not None:
            query += " AND id != ?"
            params.append(excluding_booking_id)

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            row = await cursor.fetchone()
            return int(row[0]) if row else 0

    @staticmethod
    def _row_to_booking(row: aiosqlite.Row) -> Booking:
        """Convert a database row to a Booking entity."""
        return Booking(
            id=row["id"],
            student_name=row["student_name"],
            student_email=row["student_email"],
            student_phone=row["student_phone"],
            number_of_people=row["number_of_people"],
            session_date=parse_date(row["session_date"]),
            session_time=SessionTime(row["session_time"]),
            booking_type=BookingType(row["booking_type"]),
            status=BookingStatus(row["status"]),
            notes=row["notes"],
            created_by_id=row["created_by_id"],
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
