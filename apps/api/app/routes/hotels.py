"""Hotel routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.domain.access import AuthContext
from app.routes.dependencies import get_auth_context, get_hotel_service
from app.schemas.error import ErrorResponse, NoLeakNotFoundError
from app.schemas.hotel import CreateHotelRequest, Hotel
from app.services.hotels import HotelService

router = APIRouter(prefix="/hotels", tags=["Hotels"])


@router.get(
    "",
    response_model=list[Hotel],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def list_hotels(
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[HotelService, Depends(get_hotel_service)],
) -> list[Hotel]:
    return service.list_hotels(context=context)


@router.post(
    "",
    response_model=Hotel,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def create_hotel(
    payload: CreateHotelRequest,
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[HotelService, Depends(get_hotel_service)],
) -> Hotel:
    return service.create_hotel(context=context, payload=payload)


@router.get(
    "/{hotelId}",
    response_model=Hotel,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": NoLeakNotFoundError},
    },
)
async def get_hotel(
    hotel_id: Annotated[str, Path(alias="hotelId")],
    context: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[HotelService, Depends(get_hotel_service)],
) -> Hotel:
    return service.get_hotel(context=context, hotel_id=hotel_id)
