"""Hashtag search endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.application.use_cases.posts import (
    popular_tags as popular_tags_uc,
    search_by_tag as search_by_tag_uc,
)
from app.infrastructure.database import get_db
from app.interfaces.api.routes.posts import page_to_schema
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import PostPageRead, TagCount

router = APIRouter(prefix="/search", tags=["search"])


@router.get("/tags/popular", response_model=list[TagCount])
def read_popular_tags(db: Session = Depends(get_db)):
    """Return the five most used hashtags."""

    return [TagCount(tag=tag, count=count) for tag, count in popular_tags_uc(db)]


@router.get("/tags/{tag}", response_model=PostPageRead)
def search_posts_by_tag(
    tag: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    try:
        result = search_by_tag_uc(db, tag, page=page, limit=limit)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return page_to_schema(result)
