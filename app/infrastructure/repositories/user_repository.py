"""Persistence layer for user accounts and the follow graph."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.models import UserModel, follow_table
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities and follow edges."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter(UserModel.email == email).first()
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = (
            self.session.query(UserModel).filter(UserModel.username == username).first()
        )
        return self._to_entity(model) if model else None

    def get_by_login(self, login: str) -> User | None:
        """Return the user whose email or username equals ``login``."""

        model = (
            self.session.query(UserModel)
            .filter((UserModel.email == login) | (UserModel.username == login))
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        model.created_at = ensure_app_naive_datetime(
            user.created_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def is_following(self, follower_id: int, followed_id: int) -> bool:
        statement = select(follow_table.c.follower_id).where(
            follow_table.c.follower_id == follower_id,
            follow_table.c.followed_id == followed_id,
        )
        return self.session.execute(statement).first() is not None

    def follow(self, follower_id: int, followed_id: int) -> None:
        if self.is_following(follower_id, followed_id):
            return
        self.session.execute(
            insert(follow_table).values(
                follower_id=follower_id,
                followed_id=followed_id,
                created_at=ensure_app_naive_datetime(now_in_app_timezone()),
            )
        )
        self.session.commit()

    def unfollow(self, follower_id: int, followed_id: int) -> None:
        self.session.execute(
            delete(follow_table).where(
                follow_table.c.follower_id == follower_id,
                follow_table.c.followed_id == followed_id,
            )
        )
        self.session.commit()

    def list_follower_ids(self, user_id: int) -> list[int]:
        statement = select(follow_table.c.follower_id).where(
            follow_table.c.followed_id == user_id
        )
        return [follower_id for (follower_id,) in self.session.execute(statement)]

    def list_following_ids(self, user_id: int) -> list[int]:
        statement = select(follow_table.c.followed_id).where(
            follow_table.c.follower_id == user_id
        )
        return [followed_id for (followed_id,) in self.session.execute(statement)]

    def list_followers(self, user_id: int) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .join(follow_table, follow_table.c.follower_id == UserModel.id)
            .filter(follow_table.c.followed_id == user_id)
            .order_by(UserModel.username)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_following(self, user_id: int) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .join(follow_table, follow_table.c.followed_id == UserModel.id)
            .filter(follow_table.c.follower_id == user_id)
            .order_by(UserModel.username)
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.username = user.username
        model.email = user.email
        model.password = user.password
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.avatar = user.avatar
        model.bio = user.bio
        model.role = user.role
        model.is_verified = user.is_verified
        model.is_active = user.is_active

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password=model.password,
            first_name=model.first_name,
            last_name=model.last_name,
            avatar=model.avatar,
            bio=model.bio,
            role=model.role,
            is_verified=model.is_verified,
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["UserRepository"]
