"""Public blog routes. No authentication; published posts only."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.core.config import Settings, get_settings
from app.routes.dependencies import get_blog_service
from app.schemas.error import NoLeakNotFoundError
from app.schemas.post import Post, PostList
from app.services.blog import BlogService

router = APIRouter(prefix="/blog", tags=["Blog"])


@router.get("/posts", response_model=PostList)
async def list_published_posts(
    service: Annotated[BlogService, Depends(get_blog_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
    tag: Annotated[str | None, Query(min_length=1)] = None,
    hotel_id: Annotated[str | None, Query(min_length=1)] = None,
) -> PostList:
    return service.list_published(limit=limit or settings.blog_page_size, tag=tag, hotel_id=hotel_id)


@router.get(
    "/posts/{slug}",
    response_model=Post,
    responses={404: {"model": NoLeakNotFoundError}},
)
async def get_published_post(
    slug: Annotated[str, Path(min_length=1)],
    service: Annotated[BlogService, Depends(get_blog_service)],
    hotel_id: Annotated[str | None, Query(min_length=1)] = None,
) -> Post:
    return service.get_published(slug=slug, hotel_id=hotel_id)
