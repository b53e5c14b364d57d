"""Administration routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.domain.access import AuthContext
from app.routes.dependencies import get_admin_service, get_auth_context
from app.schemas.admin import CreateUserRequest, PlatformStats, User, UserList
from app.schemas.error import ErrorResponse
from app.services.admin import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])

_ADMIN_RESPONSES: dict[int | str, dict] = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


@router.get("/stats", response_model=PlatformStats, responses=_ADMIN_RESPONSES)
async def get_stats(
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> PlatformStats:
    return service.stats(context=context)


@router.get("/users", response_model=UserList, responses=_ADMIN_RESPONSES)
async def list_users(
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> UserList:
    return service.list_users(context=context)


@router.post(
    "/users",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={**_ADMIN_RESPONSES, 409: {"model": ErrorResponse}},
)
async def create_user(
    payload: CreateUserRequest,
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> User:
    return service.create_user(context=context, payload=payload)
