"""Platform administration service layer."""

import logging

from app.core.logging_safety import safe_log_identifier
from app.domain.access import Action, AuthContext, Role, require
from app.errors import ApiError, NotFound
from app.repositories.memory import InMemoryStore, PrincipalRecord
from app.schemas.admin import CreateUserRequest, PlatformStats, User, UserList
from app.schemas.post import PostStatus

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def stats(self, *, context: AuthContext) -> PlatformStats:
        require(context, Action.MANAGE)
        return PlatformStats(
            total_posts=self._store.count_posts(),
            total_users=len(self._store.principals),
            published_posts=self._store.count_posts(status=PostStatus.PUBLISHED),
            draft_posts=self._store.count_posts(status=PostStatus.DRAFT),
        )

    def list_users(self, *, context: AuthContext) -> UserList:
        require(context, Action.MANAGE)
        return UserList(users=[self._to_user(record) for record in self._store.list_principals()])

    def create_user(self, *, context: AuthContext, payload: CreateUserRequest) -> User:
        require(context, Action.MANAGE)

        hotel_id = payload.hotel_id
        if payload.role is not Role.ADMIN:
            if hotel_id is None:
                raise ApiError(
                    status_code=400,
                    code="HOTEL_REQUIRED",
                    message="Editors and authors must be bound to a hotel",
                )
            if self._store.get_tenant(hotel_id) is None:
                raise NotFound()

        if self._store.get_principal_by_email(payload.email) is not None:
            raise ApiError(
                status_code=409,
                code="EMAIL_ALREADY_EXISTS",
                message="A user with this email already exists",
            )

        record = self._store.create_principal(
            email=payload.email.strip().lower(),
            role=payload.role,
            tenant_id=hotel_id,
        )
        logger.info(
            "user.created user_id=%s principal_id=%s role=%s",
            safe_log_identifier(record.id, prefix="pid"),
            safe_log_identifier(context.principal_id, prefix="pid"),
            record.role.value,
        )
        return self._to_user(record)

    @staticmethod
    def _to_user(record: PrincipalRecord) -> User:
        return User(
            id=record.id,
            email=record.email,
            role=record.role,
            hotel_id=record.tenant_id,
            created_at=record.created_at,
        )
