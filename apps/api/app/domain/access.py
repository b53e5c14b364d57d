"""Tenant and role scoped authorization decisions.

Every content-mutating path resolves the caller's claims into an
:class:`AuthContext` once and then asks :func:`authorize` for a decision.
Denials are ordinary return values; only :func:`require` turns them into a
``Forbidden`` error for request handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from app.core.logging_safety import safe_log_identifier
from app.errors import Forbidden, Unauthenticated
from app.schemas.auth import AuthPrincipal

logger = logging.getLogger(__name__)

SCOPE_DENIAL_REASON = "insufficient role/tenant scope"
UNBOUND_DENIAL_REASON = "principal is not bound to a tenant"


class Role(str, Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    AUTHOR = "AUTHOR"


class Action(str, Enum):
    READ = "READ"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LIST_ALL = "LIST_ALL"
    # Platform administration: provisioning and cross-tenant statistics.
    MANAGE = "MANAGE"


_READ_ACTIONS = frozenset({Action.READ, Action.LIST_ALL})
_WRITE_ACTIONS = frozenset({Action.UPDATE, Action.DELETE})


@dataclass(frozen=True, slots=True)
class AuthContext:
    principal_id: str
    role: Role
    tenant_id: str | None = None


@dataclass(frozen=True, slots=True)
class ResourceRef:
    """Scope of the resource an action targets; ``None`` fields are unscoped."""

    tenant_id: str | None = None
    author_id: str | None = None


@dataclass(frozen=True, slots=True)
class Decision:
    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> Decision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> Decision:
        return cls(allowed=False, reason=reason)


def resolve_context(claims: AuthPrincipal | None) -> AuthContext:
    """Normalize verified claims into an authorization context."""
    if claims is None:
        raise Unauthenticated("Missing identity claims")

    principal_id = claims.user_id.strip()
    if not principal_id:
        raise Unauthenticated("Identity claims missing user identity")

    try:
        role = Role(claims.role.strip().upper())
    except ValueError as exc:
        raise Unauthenticated("Identity claims carry an unknown role") from exc

    tenant_id = (claims.tenant_id or "").strip() or None
    return AuthContext(principal_id=principal_id, role=role, tenant_id=tenant_id)


def authorize(context: AuthContext, action: Action, target: ResourceRef | None = None) -> Decision:
    """Evaluate the decision table; the first matching rule wins."""
    target = target or ResourceRef()

    if context.role is Role.ADMIN:
        return Decision.allow()

    if action is Action.CREATE:
        if context.tenant_id is not None:
            return Decision.allow()
        return Decision.deny(UNBOUND_DENIAL_REASON)

    same_tenant = context.tenant_id is not None and target.tenant_id == context.tenant_id

    if action in _READ_ACTIONS and same_tenant:
        return Decision.allow()

    if action in _WRITE_ACTIONS and same_tenant:
        if context.role is Role.EDITOR:
            return Decision.allow()
        if context.role is Role.AUTHOR and target.author_id == context.principal_id:
            return Decision.allow()

    return Decision.deny(SCOPE_DENIAL_REASON)


def require(context: AuthContext, action: Action, target: ResourceRef | None = None) -> None:
    """Raise ``Forbidden`` unless ``authorize`` allows the action."""
    decision = authorize(context, action, target)
    if decision.allowed:
        return

    reason = decision.reason or SCOPE_DENIAL_REASON
    logger.warning(
        "authz.denied principal_id=%s role=%s action=%s reason=%s",
        safe_log_identifier(context.principal_id, prefix="pid"),
        context.role.value,
        action.value,
        reason,
    )
    raise Forbidden(reason)


__all__ = [
    "Action",
    "AuthContext",
    "Decision",
    "ResourceRef",
    "Role",
    "authorize",
    "require",
    "resolve_context",
]
