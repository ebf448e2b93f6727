"""Endpoints for posts, comments and likes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationFanout
from app.application.use_cases.posts import (
    PostPage,
    add_comment as add_comment_uc,
    create_post as create_post_uc,
    delete_post as delete_post_uc,
    get_feed as get_feed_uc,
    get_post as get_post_uc,
    list_comments as list_comments_uc,
    list_posts as list_posts_uc,
    toggle_like as toggle_like_uc,
    update_post as update_post_uc,
)
from app.domain.entities import Actor
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_actor, get_fanout
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    CommentCreate,
    CommentRead,
    LikeToggleResponse,
    PostCreate,
    PostPageRead,
    PostRead,
    PostUpdate,
)

router = APIRouter(prefix="/posts", tags=["posts"])


def page_to_schema(page: PostPage) -> PostPageRead:
    return PostPageRead(
        posts=[PostRead.model_validate(post) for post in page.posts],
        total_posts=page.total,
        page=page.page,
        limit=page.limit,
        total_pages=page.total_pages,
    )


@router.get("/", response_model=PostPageRead)
def list_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Return every post, newest first."""

    return page_to_schema(list_posts_uc(db, page=page, limit=limit))


@router.get("/feed", response_model=PostPageRead)
def read_feed(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """Return posts from the caller and the users they follow."""

    try:
        result = get_feed_uc(db, actor, page=page, limit=limit)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return page_to_schema(result)


@router.post("/", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_in: PostCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    fanout: NotificationFanout = Depends(get_fanout),
):
    try:
        post = await create_post_uc(
            db, fanout, actor=actor, content=post_in.content, images=post_in.images
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return PostRead.model_validate(post)


@router.get("/{post_id}", response_model=PostRead)
def read_post(post_id: int, db: Session = Depends(get_db)):
    try:
        post = get_post_uc(db, post_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return PostRead.model_validate(post)


@router.put("/{post_id}", response_model=PostRead)
async def update_post(
    post_id: int,
    post_in: PostUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    fanout: NotificationFanout = Depends(get_fanout),
):
    """Edit a post; only its author may do so."""

    try:
        post = await update_post_uc(
            db,
            fanout,
            actor=actor,
            post_id=post_id,
            content=post_in.content,
            images=post_in.images,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return PostRead.model_validate(post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    fanout: NotificationFanout = Depends(get_fanout),
):
    try:
        await delete_post_uc(db, fanout, actor=actor, post_id=post_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/like", response_model=LikeToggleResponse)
async def toggle_like(
    post_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    fanout: NotificationFanout = Depends(get_fanout),
):
    try:
        result = await toggle_like_uc(db, fanout, actor=actor, post_id=post_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return LikeToggleResponse(
        message="Like+ successfully" if result.liked else "Like- successfully",
        liked=result.liked,
        like_count=result.like_count,
    )


@router.post(
    "/{post_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    fanout: NotificationFanout = Depends(get_fanout),
):
    try:
        comment = await add_comment_uc(
            db,
            fanout,
            actor=actor,
            post_id=post_id,
            content=comment_in.content,
            image=comment_in.image,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return CommentRead.model_validate(comment)


@router.get("/{post_id}/comments", response_model=list[CommentRead])
def read_comments(post_id: int, db: Session = Depends(get_db)):
    try:
        comments = list_comments_uc(db, post_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [CommentRead.model_validate(comment) for comment in comments]
