"""Column conversions shared by the SQLite stores."""

from datetime import date, datetime
from decimal import Decimal

from studio.core.entities.base import utc_now


def dec(value: str | int | float | None) -> Decimal | None:
    """Read a TEXT money/quantity column back into a Decimal."""
    if value is None:
        return None
    return Decimal(str(value))


def dec_text(value: Decimal | None) -> str | None:
    """Store a Decimal as TEXT, keeping its exact digits."""
    if value is None:
        return None
    return str(value)


def parse_datetime(value: str | None) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return utc_now()


def parse_date(value: str | None) -> date:
    if value:
        try:
            return date.fromisoformat(value[:10])
        except (ValueError, TypeError):
            pass
    return utc_now().date()
