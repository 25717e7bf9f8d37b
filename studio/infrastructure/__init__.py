"""Infrastructure layer implementations."""

from studio.infrastructure import storage

__all__ = ["storage"]
