"""Administration API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.domain.access import Role


class CreateUserRequest(BaseModel):
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    role: Role = Role.AUTHOR
    hotel_id: str | None = None


class User(BaseModel):
    id: str
    email: str
    role: Role
    hotel_id: str | None = None
    created_at: datetime


class UserList(BaseModel):
    users: list[User]


class PlatformStats(BaseModel):
    total_posts: int
    total_users: int
    published_posts: int
    draft_posts: int
