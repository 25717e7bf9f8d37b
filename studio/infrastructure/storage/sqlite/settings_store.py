"""SQLite implementation of the studio settings singleton."""

from datetime import time

from studio.config import get_logger
from studio.core.entities.app_settings import AppSettings, ClassTiming, Currency
from studio.core.entities.base import utc_now
from studio.core.entities.booking import SessionTime
from studio.core.interfaces.settings_store import ISettingsStore
from studio.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from studio.infrastructure.storage.sqlite.rows import parse_datetime

logger = get_logger(__name__)

SINGLETON_ID = "singleton"


class SQLiteSettingsStore(ISettingsStore):
    """Settings row plus its class timetable."""

    def __init__(
        self,
        default_max_persons_per_class: int = 10,
        default_currency: Currency = Currency.INR,
    ):
        self.default_max_persons_per_class = default_max_persons_per_class
        self.default_currency = Currency(default_currency)

    async def get(self) -> AppSettings | None:
        """Get settings, or None if the row was never materialized."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM app_settings WHERE id = ?", (SINGLETON_ID,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            cursor = await conn.execute(
                "SELECT * FROM class_timings ORDER BY day_of_week, session_time"
            )
            timings = [
                ClassTiming(
                    day_of_week=t["day_of_week"],
                    session_time=SessionTime(t["session_time"]),
                    start_time=time.fromisoformat(t["start_time"]),
                    end_time=time.fromisoformat(t["end_time"]),
                )
                for t in await cursor.fetchall()
            ]

            return AppSettings(
                max_persons_per_class=row["max_persons_per_class"],
                currency=Currency(row["currency"]),
                class_timings=timings,
                updated_at=parse_datetime(row["updated_at"]),
            )

    async def get_or_create(self) -> AppSettings:
        """Get settings, creating the row with configured defaults if absent."""
        settings = await self.get()
        if settings is not None:
            return settings

        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT OR IGNORE INTO app_settings (
                    id, max_persons_per_class, currency, updated_at
                ) VALUES (?, ?, ?, ?)
                """,
                (
                    SINGLETON_ID,
                    self.default_max_persons_per_class,
                    self.default_currency.value,
                    utc_now().isoformat(),
                ),
            )
        logger.info(
            "settings_materialized",
            max_persons_per_class=self.default_max_persons_per_class,
            currency=self.default_currency.value,
        )
        return await self.get()  # type: ignore[return-value]

    async def save(self, settings: AppSettings) -> AppSettings:
        """Replace the settings row (including class timings)."""
        settings.updated_at = utc_now()
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO app_settings (id, max_persons_per_class, currency, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    max_persons_per_class = excluded.max_persons_per_class,
                    currency = excluded.currency,
                    updated_at = excluded.updated_at
                """,
                (
                    SINGLETON_ID,
                    settings.max_persons_per_class,
                    settings.currency.value,
                    settings.updated_at.isoformat(),
                ),
            )
            await conn.execute("DELETE FROM class_timings")
            await conn.executemany(
                """
                INSERT INTO class_timings (day_of_week, session_time, start_time, end_time)
                VALUES (?, ?, ?, ?)
                """,
                [
                    (
                        t.day_of_week,
                        t.session_time.value,
                        t.start_time.isoformat(timespec="minutes"),
                        t.end_time.isoformat(timespec="minutes"),
                    )
                    for t in settings.class_timings
                ],
            )
        logger.info(
            "settings_saved",
            max_persons_per_class=settings.max_persons_per_class,
            currency=settings.currency.value,
            timings=len(settings.class_timings),
        )
        return settings
