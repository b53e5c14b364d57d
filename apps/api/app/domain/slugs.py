"""Slug derivation and scope-wide unique allocation."""

from __future__ import annotations

from collections.abc import Callable
import logging
import re
from typing import Literal, Protocol, TypeVar
import unicodedata

from app.errors import SlugAllocationExhausted, SlugConflictError

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "post"
DEFAULT_MAX_ATTEMPTS = 10_000
DEFAULT_CONFLICT_RETRIES = 3

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

T = TypeVar("T")


class SlugExists(Protocol):
    def __call__(self, slug: str, scope: str | None, exclude_id: str | None) -> bool: ...


def normalize(title: str) -> str:
    """Convert a title to a lower-case ASCII slug.

    Examples:
        "Café com Leite!" -> "cafe-com-leite"
        "###" -> "post"
    """
    decomposed = unicodedata.normalize("NFKD", title.lower())
    ascii_text = "".join(char for char in decomposed if not unicodedata.combining(char))
    slug = _NON_ALNUM_RE.sub("-", ascii_text).strip("-")
    return slug or DEFAULT_SLUG


def slug_scope_for(tenant_id: str, mode: Literal["global", "tenant"]) -> str | None:
    """Map a post's tenant to its uniqueness scope; ``None`` is the global scope."""
    return tenant_id if mode == "tenant" else None


class SlugAllocator:
    """Finds the first free ``candidate`` / ``candidate-N`` in a scope.

    Storage is reached only through the injected ``slug_exists`` query and the
    ``write`` callback given to :meth:`allocate_and_write`.
    """

    def __init__(
        self,
        slug_exists: SlugExists,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        conflict_retries: int = DEFAULT_CONFLICT_RETRIES,
    ) -> None:
        self._slug_exists = slug_exists
        self._max_attempts = max_attempts
        self._conflict_retries = conflict_retries

    def allocate(
        self,
        candidate: str,
        scope: str | None,
        exclude_id: str | None = None,
        *,
        skip: frozenset[str] | set[str] = frozenset(),
    ) -> str:
        if not candidate:
            raise ValueError("candidate slug must not be empty")

        for suffix in range(self._max_attempts):
            slug = candidate if suffix == 0 else f"{candidate}-{suffix}"
            if slug in skip:
                continue
            if not self._slug_exists(slug, scope, exclude_id):
                return slug

        logger.error(
            "slug.exhausted candidate=%s attempts=%s",
            candidate,
            self._max_attempts,
        )
        raise SlugAllocationExhausted(candidate, self._max_attempts)

    def allocate_and_write(
        self,
        candidate: str,
        scope: str | None,
        write: Callable[[str], T],
        exclude_id: str | None = None,
    ) -> T:
        """Allocate a slug and persist it, retrying on unique-constraint races."""
        rejected: set[str] = set()
        for attempt in range(self._conflict_retries + 1):
            slug = self.allocate(candidate, scope, exclude_id, skip=rejected)
            try:
                return write(slug)
            except SlugConflictError:
                logger.warning(
                    "slug.write_conflict candidate=%s slug=%s attempt=%s",
                    candidate,
                    slug,
                    attempt + 1,
                )
                rejected.add(slug)

        logger.error(
            "slug.retries_exhausted candidate=%s retries=%s",
            candidate,
            self._conflict_retries,
        )
        raise SlugAllocationExhausted(candidate, self._conflict_retries + 1)


__all__ = [
    "DEFAULT_SLUG",
    "SlugAllocator",
    "SlugExists",
    "normalize",
    "slug_scope_for",
]
