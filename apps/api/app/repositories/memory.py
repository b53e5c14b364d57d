"""In-memory repositories used by the API scaffold and tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
import threading
from uuid import uuid4

from app.domain.access import Role
from app.errors import SlugConflictError
from app.schemas.post import PostStatus

SlugWriteHook = Callable[[str | None, str], None]


@dataclass(slots=True)
class TenantRecord:
    id: str
    name: str
    created_at: datetime
    address: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None


@dataclass(slots=True)
class PrincipalRecord:
    id: str
    email: str
    role: Role
    tenant_id: str | None
    created_at: datetime


@dataclass(slots=True)
class PostRecord:
    id: str
    title: str
    slug: str
    slug_scope: str | None
    content: str
    excerpt: str
    meta_description: str
    keywords: str
    featured_image: str | None
    status: PostStatus
    author_id: str
    tenant_id: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class InMemoryStore:
    """Deterministic persistence layer with relational unique constraints.

    ``slug_index`` plays the role of a ``UNIQUE (slug_scope, slug)`` index:
    every post write goes through it under ``_lock`` and a collision raises
    :class:`SlugConflictError` before the row is touched.
    """

    tenants: dict[str, TenantRecord] = field(default_factory=dict)
    principals: dict[str, PrincipalRecord] = field(default_factory=dict)
    posts: dict[str, PostRecord] = field(default_factory=dict)
    slug_index: dict[tuple[str | None, str], str] = field(default_factory=dict)
    post_write_count: int = 0
    principal_write_count: int = 0
    # One-shot hook run inside the write path, before the unique check.
    before_slug_write: SlugWriteHook | None = None
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    # Tenants

    def create_tenant(
        self,
        *,
        name: str,
        address: str | None = None,
        neighborhood: str | None = None,
        city: str | None = None,
        state: str | None = None,
        country: str | None = None,
        tenant_id: str | None = None,
    ) -> TenantRecord:
        tenant = TenantRecord(
            id=tenant_id or str(uuid4()),
            name=name,
            created_at=datetime.now(UTC),
            address=address,
            neighborhood=neighborhood,
            city=city,
            state=state,
            country=country,
        )
        with self._lock:
            self.tenants[tenant.id] = tenant
        return tenant

    def get_tenant(self, tenant_id: str) -> TenantRecord | None:
        return self.tenants.get(tenant_id)

    def list_tenants(self) -> list[TenantRecord]:
        return sorted(self.tenants.values(), key=lambda record: record.name.lower())

    # Principals

    def create_principal(
        self,
        *,
        email: str,
        role: Role,
        tenant_id: str | None,
        principal_id: str | None = None,
    ) -> PrincipalRecord:
        principal = PrincipalRecord(
            id=principal_id or str(uuid4()),
            email=email,
            role=role,
            tenant_id=tenant_id,
            created_at=datetime.now(UTC),
        )
        with self._lock:
            self.principals[principal.id] = principal
            self.principal_write_count += 1
        return principal

    def get_principal(self, principal_id: str) -> PrincipalRecord | None:
        return self.principals.get(principal_id)

    def get_principal_by_email(self, email: str) -> PrincipalRecord | None:
        needle = email.strip().lower()
        for principal in self.principals.values():
            if principal.email.lower() == needle:
                return principal
        return None

    def list_principals(self) -> list[PrincipalRecord]:
        principals = list(self.principals.values())
        principals.sort(key=lambda record: record.created_at, reverse=True)
        return principals

    # Posts

    def slug_exists(self, slug: str, scope: str | None, exclude_id: str | None = None) -> bool:
        owner_id = self.slug_index.get((scope, slug))
        return owner_id is not None and owner_id != exclude_id

    def insert_post(
        self,
        *,
        title: str,
        slug: str,
        slug_scope: str | None,
        content: str,
        excerpt: str,
        meta_description: str,
        keywords: str,
        featured_image: str | None,
        status: PostStatus,
        author_id: str,
        tenant_id: str,
    ) -> PostRecord:
        now = datetime.now(UTC)
        post = PostRecord(
            id=str(uuid4()),
            title=title,
            slug=slug,
            slug_scope=slug_scope,
            content=content,
            excerpt=excerpt,
            meta_description=meta_description,
            keywords=keywords,
            featured_image=featured_image,
            status=status,
            author_id=author_id,
            tenant_id=tenant_id,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._claim_slug(scope=slug_scope, slug=slug, post_id=post.id)
            self.posts[post.id] = post
            self.post_write_count += 1
        return post

    def update_post(
        self,
        post: PostRecord,
        *,
        title: str,
        slug: str,
        content: str,
        excerpt: str,
        meta_description: str,
        keywords: str,
        featured_image: str | None,
        status: PostStatus,
    ) -> PostRecord:
        with self._lock:
            if slug != post.slug:
                self._claim_slug(scope=post.slug_scope, slug=slug, post_id=post.id)
                self.slug_index.pop((post.slug_scope, post.slug), None)
            post.title = title
            post.slug = slug
            post.content = content
            post.excerpt = excerpt
            post.meta_description = meta_description
            post.keywords = keywords
            post.featured_image = featured_image
            post.status = status
            post.updated_at = datetime.now(UTC)
            self.post_write_count += 1
        return post

    def delete_post(self, post: PostRecord) -> None:
        with self._lock:
            self.posts.pop(post.id, None)
            if self.slug_index.get((post.slug_scope, post.slug)) == post.id:
                self.slug_index.pop((post.slug_scope, post.slug), None)
            self.post_write_count += 1

    def get_post(self, post_id: str) -> PostRecord | None:
        return self.posts.get(post_id)

    def list_posts(self, *, tenant_id: str | None = None) -> list[PostRecord]:
        """Return posts newest first, optionally restricted to one tenant."""
        posts = [
            record
            for record in self.posts.values()
            if tenant_id is None or record.tenant_id == tenant_id
        ]
        posts.sort(key=lambda record: record.created_at, reverse=True)
        return posts

    def list_published_posts(
        self,
        *,
        limit: int,
        tag: str | None = None,
        tenant_id: str | None = None,
    ) -> list[PostRecord]:
        needle = tag.strip().lower() if tag else None
        published = [
            record
            for record in self.list_posts(tenant_id=tenant_id)
            if record.status == PostStatus.PUBLISHED
            and (needle is None or needle in record.keywords.lower())
        ]
        return published[:limit]

    def get_published_post_by_slug(self, slug: str, *, tenant_id: str | None = None) -> PostRecord | None:
        matches = [
            record
            for record in self.posts.values()
            if record.slug == slug
            and record.status == PostStatus.PUBLISHED
            and (tenant_id is None or record.tenant_id == tenant_id)
        ]
        if not matches:
            return None
        return min(matches, key=lambda record: record.created_at)

    def count_posts(self, *, status: PostStatus | None = None) -> int:
        return sum(1 for record in self.posts.values() if status is None or record.status == status)

    def _claim_slug(self, *, scope: str | None, slug: str, post_id: str) -> None:
        hook = self.before_slug_write
        if hook is not None:
            self.before_slug_write = None
            hook(scope, slug)

        owner_id = self.slug_index.get((scope, slug))
        if owner_id is not None and owner_id != post_id:
            raise SlugConflictError(slug, scope)
        self.slug_index[(scope, slug)] = post_id
