"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

USER_ROLE_USER = "user"
USER_ROLE_MODERATOR = "moderator"
USER_ROLE_ADMIN = "admin"

USER_ROLES = (USER_ROLE_USER, USER_ROLE_MODERATOR, USER_ROLE_ADMIN)


@dataclass
class User:
    """Core attributes describing an account of the social network."""

    id: int | None
    username: str
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None
    avatar: str | None = None
    bio: str | None = None
    role: str = USER_ROLE_USER
    is_verified: bool = False
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role matches ``alias``."""

        return self.role.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(USER_ROLE_ADMIN)
