"""Authentication schemas."""

from pydantic import BaseModel, Field


class AuthPrincipal(BaseModel):
    """Verified identity claims as produced by a token verifier."""

    user_id: str = Field(min_length=1)
    role: str = Field(default="author", min_length=1)
    tenant_id: str | None = None
    email: str | None = None
