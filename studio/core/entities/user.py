"""Identity of the caller performing an operation."""

from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"


class Caller(BaseModel):
    """Authenticated user as seen by the use cases. The name is a display snapshot."""

    id: str
    name: str | None = None
    role: UserRole = UserRole.STAFF

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def display_name(self) -> str:
        return self.name or self.id
