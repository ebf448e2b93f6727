"""Use case for registering users."""

from sqlalchemy.orm import Session

from app.domain.entities import USER_ROLE_USER, User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone

from .validators import ensure_valid_email, ensure_valid_username

MIN_PASSWORD_LENGTH = 6


def create_user(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
    role: str = USER_ROLE_USER,
) -> User:
    """Create a new user ensuring unique usernames and email addresses."""

    username = ensure_valid_username(username)
    email = ensure_valid_email(email)
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValueError("Email is already registered")
    if repository.get_by_username(username):
        raise ValueError("Username is already taken")

    user = User(
        id=None,
        username=username,
        email=email,
        password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
