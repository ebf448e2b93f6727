"""Use cases for retrieving users and their follow lists."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import UserRepository

USER_NOT_FOUND = "User not found"


def get_user(session: Session, user_id: int, *, include_inactive: bool = False) -> User:
    """Return the requested user or raise an error if it does not exist."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None or (not include_inactive and not user.is_active):
        raise NotFoundError(USER_NOT_FOUND)
    return user


def list_followers(session: Session, user_id: int) -> Sequence[User]:
    get_user(session, user_id)
    return UserRepository(session).list_followers(user_id)


def list_following(session: Session, user_id: int) -> Sequence[User]:
    get_user(session, user_id)
    return UserRepository(session).list_following(user_id)
