"""Post API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class PostStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class _PostFields(BaseModel):
    title: str = Field(min_length=1, max_length=300)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("title must not be blank")
        return stripped


class CreatePostRequest(_PostFields):
    content: str = ""
    excerpt: str = ""
    meta_description: str = Field(default="", max_length=320)
    keywords: str = ""
    featured_image: str | None = None
    status: PostStatus = PostStatus.DRAFT
    hotel_id: str | None = None


class UpdatePostRequest(_PostFields):
    """Full-title update; omitted optional fields keep their stored value."""

    content: str | None = None
    excerpt: str | None = None
    meta_description: str | None = Field(default=None, max_length=320)
    keywords: str | None = None
    featured_image: str | None = None
    status: PostStatus | None = None


class Post(BaseModel):
    id: str
    title: str
    slug: str
    content: str
    excerpt: str
    meta_description: str
    keywords: str
    featured_image: str | None = None
    status: PostStatus
    author_id: str
    author_email: str | None = None
    hotel_id: str
    created_at: datetime
    updated_at: datetime


class PostList(BaseModel):
    posts: list[Post]
    total: int
