"""Post service layer."""

from typing import Literal, TypeVar
import logging

from app.core.logging_safety import safe_log_identifier
from app.domain.access import Action, AuthContext, ResourceRef, Role, require
from app.domain.slugs import SlugAllocator, normalize, slug_scope_for
from app.errors import ApiError, Forbidden, NotFound
from app.repositories.memory import InMemoryStore, PostRecord
from app.schemas.post import CreatePostRequest, Post, PostList, UpdatePostRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PostService:
    def __init__(
        self,
        store: InMemoryStore,
        allocator: SlugAllocator,
        *,
        slug_scope: Literal["global", "tenant"] = "global",
    ) -> None:
        self._store = store
        self._allocator = allocator
        self._slug_scope = slug_scope

    def create_post(self, *, context: AuthContext, payload: CreatePostRequest) -> Post:
        require(context, Action.CREATE, ResourceRef(tenant_id=payload.hotel_id))
        tenant_id = self._resolve_target_tenant(context=context, requested_tenant_id=payload.hotel_id)

        def write(slug: str) -> PostRecord:
            return self._store.insert_post(
                title=payload.title,
                slug=slug,
                slug_scope=slug_scope_for(tenant_id, self._slug_scope),
                content=payload.content,
                excerpt=payload.excerpt,
                meta_description=payload.meta_description,
                keywords=payload.keywords,
                featured_image=payload.featured_image,
                status=payload.status,
                author_id=context.principal_id,
                tenant_id=tenant_id,
            )

        record = self._allocator.allocate_and_write(
            normalize(payload.title),
            slug_scope_for(tenant_id, self._slug_scope),
            write,
        )
        logger.info(
            "post.created post_id=%s principal_id=%s slug=%s status=%s",
            safe_log_identifier(record.id, prefix="post"),
            safe_log_identifier(context.principal_id, prefix="pid"),
            record.slug,
            record.status.value,
        )
        return self.to_post(record)

    def list_posts(self, *, context: AuthContext) -> PostList:
        if context.role is Role.ADMIN:
            records = self._store.list_posts()
        else:
            require(context, Action.LIST_ALL, ResourceRef(tenant_id=context.tenant_id))
            records = self._store.list_posts(tenant_id=context.tenant_id)

        posts = [self.to_post(record) for record in records]
        return PostList(posts=posts, total=len(posts))

    def get_post(self, *, context: AuthContext, post_id: str) -> Post:
        record = self._get_authorized(context=context, post_id=post_id, action=Action.READ)
        return self.to_post(record)

    def update_post(self, *, context: AuthContext, post_id: str, payload: UpdatePostRequest) -> Post:
        record = self._get_authorized(context=context, post_id=post_id, action=Action.UPDATE)

        def write(slug: str) -> PostRecord:
            return self._store.update_post(
                record,
                title=payload.title,
                slug=slug,
                content=_keep(payload.content, record.content),
                excerpt=_keep(payload.excerpt, record.excerpt),
                meta_description=_keep(payload.meta_description, record.meta_description),
                keywords=_keep(payload.keywords, record.keywords),
                featured_image=_keep(payload.featured_image, record.featured_image),
                status=_keep(payload.status, record.status),
            )

        previous_slug = record.slug
        if payload.title == record.title:
            # Unchanged title keeps the slug so inbound links survive unrelated edits.
            updated = write(record.slug)
        else:
            updated = self._allocator.allocate_and_write(
                normalize(payload.title),
                record.slug_scope,
                write,
                exclude_id=record.id,
            )

        logger.info(
            "post.updated post_id=%s principal_id=%s slug_changed=%s status=%s",
            safe_log_identifier(updated.id, prefix="post"),
            safe_log_identifier(context.principal_id, prefix="pid"),
            updated.slug != previous_slug,
            updated.status.value,
        )
        return self.to_post(updated)

    def delete_post(self, *, context: AuthContext, post_id: str) -> None:
        record = self._get_authorized(context=context, post_id=post_id, action=Action.DELETE)
        self._store.delete_post(record)
        logger.info(
            "post.deleted post_id=%s principal_id=%s",
            safe_log_identifier(record.id, prefix="post"),
            safe_log_identifier(context.principal_id, prefix="pid"),
        )

    def to_post(self, record: PostRecord) -> Post:
        author = self._store.get_principal(record.author_id)
        return Post(
            id=record.id,
            title=record.title,
            slug=record.slug,
            content=record.content,
            excerpt=record.excerpt,
            meta_description=record.meta_description,
            keywords=record.keywords,
            featured_image=record.featured_image,
            status=record.status,
            author_id=record.author_id,
            author_email=author.email if author is not None else None,
            hotel_id=record.tenant_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def _get_authorized(self, *, context: AuthContext, post_id: str, action: Action) -> PostRecord:
        record = self._store.get_post(post_id)
        if record is None:
            raise NotFound()

        require(context, action, ResourceRef(tenant_id=record.tenant_id, author_id=record.author_id))
        return record

    def _resolve_target_tenant(self, *, context: AuthContext, requested_tenant_id: str | None) -> str:
        if context.role is Role.ADMIN:
            if requested_tenant_id is None:
                raise ApiError(
                    status_code=400,
                    code="HOTEL_REQUIRED",
                    message="hotel_id is required when an administrator creates a post",
                )
            if self._store.get_tenant(requested_tenant_id) is None:
                raise NotFound()
            return requested_tenant_id

        # CREATE was allowed, so a non-admin context always carries a tenant here.
        assert context.tenant_id is not None
        if requested_tenant_id is not None and requested_tenant_id != context.tenant_id:
            logger.warning(
                "authz.denied principal_id=%s role=%s action=CREATE reason=foreign_tenant",
                safe_log_identifier(context.principal_id, prefix="pid"),
                context.role.value,
            )
            raise Forbidden("cannot create posts outside the principal's tenant")
        return context.tenant_id


def _keep(value: T | None, current: T) -> T:
    return current if value is None else value
