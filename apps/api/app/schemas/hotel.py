"""Hotel API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class CreateHotelRequest(BaseModel):
    name: str = Field(min_length=1)
    address: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None


class Hotel(BaseModel):
    id: str
    name: str
    address: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    created_at: datetime
