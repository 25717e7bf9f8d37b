"""Studio-wide settings entity (singleton row)."""

from datetime import datetime, time
from enum import Enum

from pydantic import BaseModel, Field

from studio.core.entities.base import utc_now
from studio.core.entities.booking import SessionTime


class Currency(str, Enum):
    INR = "INR"
    USD = "USD"
    EUR = "EUR"

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS[self]


CURRENCY_SYMBOLS: dict[Currency, str] = {
    Currency.INR: "₹",
    Currency.USD: "$",
    Currency.EUR: "€",
}


class ClassTiming(BaseModel):
    """Start and end time of a session slot on a weekday (0 = Monday)."""

    day_of_week: int = Field(..., ge=0, le=6)
    session_time: SessionTime
    start_time: time
    end_time: time


class AppSettings(BaseModel):
    """Singleton settings: capacity ceiling, currency and class timetable."""

    max_persons_per_class: int = Field(default=10, ge=1)
    currency: Currency = Currency.INR
    class_timings: list[ClassTiming] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=utc_now)
