"""Hotel (tenant) service layer."""

import logging

from app.core.logging_safety import safe_log_identifier
from app.domain.access import Action, AuthContext, ResourceRef, require
from app.errors import NotFound
from app.repositories.memory import InMemoryStore, TenantRecord
from app.schemas.hotel import CreateHotelRequest, Hotel

logger = logging.getLogger(__name__)


class HotelService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_hotels(self, *, context: AuthContext) -> list[Hotel]:
        # An unscoped target covers every tenant, which only an administrator may list.
        require(context, Action.LIST_ALL, ResourceRef())
        return [self._to_hotel(record) for record in self._store.list_tenants()]

    def get_hotel(self, *, context: AuthContext, hotel_id: str) -> Hotel:
        require(context, Action.READ, ResourceRef(tenant_id=hotel_id))
        record = self._store.get_tenant(hotel_id)
        if record is None:
            raise NotFound()

        return self._to_hotel(record)

    def create_hotel(self, *, context: AuthContext, payload: CreateHotelRequest) -> Hotel:
        require(context, Action.MANAGE)
        record = self._store.create_tenant(
            name=payload.name,
            address=payload.address,
            neighborhood=payload.neighborhood,
            city=payload.city,
            state=payload.state,
            country=payload.country,
        )
        logger.info(
            "hotel.created hotel_id=%s principal_id=%s",
            safe_log_identifier(record.id, prefix="hotel"),
            safe_log_identifier(context.principal_id, prefix="pid"),
        )
        return self._to_hotel(record)

    @staticmethod
    def _to_hotel(record: TenantRecord) -> Hotel:
        return Hotel(
            id=record.id,
            name=record.name,
            address=record.address,
            neighborhood=record.neighborhood,
            city=record.city,
            state=record.state,
            country=record.country,
            created_at=record.created_at,
        )
