"""Normalized identity of the user performing an operation."""

from __future__ import annotations

from dataclasses import dataclass

from .user import USER_ROLE_ADMIN, USER_ROLE_USER, User


@dataclass(frozen=True)
class Actor:
    """Authenticated caller resolved once per request or connection."""

    user_id: int
    username: str
    role: str = USER_ROLE_USER

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        if user.id is None:
            raise ValueError("Cannot build an actor for an unsaved user")
        return cls(user_id=user.id, username=user.username, role=user.role)

    @property
    def display_name(self) -> str:
        return self.username or "Someone"

    def is_admin(self) -> bool:
        return self.role.lower() == USER_ROLE_ADMIN


__all__ = ["Actor"]
