"""Endpoints for accounts and the follow graph."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationFanout
from app.application.use_cases.users import (
    create_user as create_user_uc,
    follow_user as follow_user_uc,
    get_user as get_user_uc,
    list_followers as list_followers_uc,
    list_following as list_following_uc,
)
from app.domain.entities import Actor, User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    get_current_active_user,
    get_current_actor,
    get_fanout,
)
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    FollowToggleResponse,
    UserCreate,
    UserRead,
    UserSummary,
)

router = APIRouter(prefix="/users", tags=["users"])

logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    """Create a new account."""

    try:
        user = create_user_uc(
            db,
            username=user_in.username,
            email=str(user_in.email),
            password=user_in.password,
            first_name=user_in.first_name,
            last_name=user_in.last_name,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    logger.info("Registered user %s", user.id)
    return _to_read_model(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Return the authenticated user."""

    return _to_read_model(current_user)


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_actor),
):
    try:
        user = get_user_uc(db, user_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(user)


@router.post("/{user_id}/follow", response_model=FollowToggleResponse)
async def toggle_follow(
    user_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    fanout: NotificationFanout = Depends(get_fanout),
):
    """Follow the user, or unfollow them when already following."""

    try:
        result = await follow_user_uc(db, fanout, actor=actor, target_id=user_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return FollowToggleResponse(
        message="User followed successfully" if result.following else "User unfollowed successfully",
        following=result.following,
        following_ids=result.following_ids,
    )


@router.get("/{user_id}/followers", response_model=list[UserSummary])
def read_followers(
    user_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_actor),
):
    try:
        followers = list_followers_uc(db, user_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [UserSummary.model_validate(user) for user in followers]


@router.get("/{user_id}/following", response_model=list[UserSummary])
def read_following(
    user_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_actor),
):
    try:
        following = list_following_uc(db, user_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [UserSummary.model_validate(user) for user in following]
