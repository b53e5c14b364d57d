"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.adapters.auth import (
    AuthVerificationError,
    FirebaseTokenVerifier,
    MockTokenVerifier,
    TokenVerifier,
)
from app.core.config import Settings, get_settings
from app.core.logging_safety import safe_log_identifier
from app.domain.access import AuthContext, resolve_context
from app.domain.slugs import SlugAllocator
from app.errors import Unauthenticated
from app.repositories.memory import InMemoryStore
from app.schemas.auth import AuthPrincipal
from app.services.admin import AdminService
from app.services.blog import BlogService
from app.services.hotels import HotelService
from app.services.posts import PostService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_token_verifier(settings: Annotated[Settings, Depends(get_settings)]) -> TokenVerifier:
    """Resolve provider adapter from configuration."""
    if settings.auth_provider == "firebase":
        return FirebaseTokenVerifier(
            project_id=settings.firebase_project_id,
            audience=settings.firebase_audience,
        )
    return MockTokenVerifier()


async def get_authenticated_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> AuthPrincipal:
    """Validate bearer token and attach the verified claims to request context."""
    safe_correlation_id = safe_log_identifier(_request_correlation_id(request), prefix="cid")
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=invalid_or_missing_bearer",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise Unauthenticated("Invalid or missing bearer token")

    try:
        principal = verifier.verify_token(credentials.credentials)
    except AuthVerificationError as exc:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=token_verification_failed",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise Unauthenticated(str(exc) or "Invalid bearer token") from exc

    request.state.auth_principal = principal
    return principal


async def get_auth_context(
    request: Request,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
) -> AuthContext:
    """Resolve verified claims into the authorization context used by services."""
    safe_correlation_id = safe_log_identifier(_request_correlation_id(request), prefix="cid")
    try:
        context = resolve_context(principal)
    except Unauthenticated:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=malformed_claims",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s role=%s tenant_id=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(context.principal_id, prefix="pid"),
        context.role.value,
        safe_log_identifier(context.tenant_id, prefix="tid"),
    )
    request.state.auth_context = context
    return context


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_slug_allocator(
    store: Annotated[InMemoryStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SlugAllocator:
    return SlugAllocator(
        store.slug_exists,
        max_attempts=settings.slug_max_attempts,
        conflict_retries=settings.slug_conflict_retries,
    )


def get_post_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    allocator: Annotated[SlugAllocator, Depends(get_slug_allocator)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PostService:
    return PostService(store, allocator, slug_scope=settings.slug_scope)


def get_blog_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    posts: Annotated[PostService, Depends(get_post_service)],
) -> BlogService:
    return BlogService(store, posts)


def get_hotel_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> HotelService:
    return HotelService(store)


def get_admin_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> AdminService:
    return AdminService(store)
