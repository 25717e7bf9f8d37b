"""Abstract interface for the studio settings singleton."""

from abc import ABC, abstractmethod

from studio.core.entities.app_settings import AppSettings


class ISettingsStore(ABC):
    """Interface for the singleton settings row."""

    @abstractmethod
    async def get(self) -> AppSettings | None:
        """Get settings, or None if the row was never materialized."""
        pass

    @abstractmethod
    async def get_or_create(self) -> AppSettings:
        """Get settings, creating the row with configured defaults if absent."""
        pass

    @abstractmethod
    async def save(self, settings: AppSettings) -> AppSettings:
        """Replace the settings row (including class timings)."""
        pass
