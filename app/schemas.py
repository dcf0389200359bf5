# app/schemas.py

from datetime import datetime, date, time
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models import MAX_ID


class CamelModel(BaseModel):
    # Wire format is camelCase (barberId, bookedTimes, ...), snake_case also accepted
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _format_time(value):
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return value


class ShopCreate(CamelModel):
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    postcode: Optional[str] = None
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    base_price_pence: int = Field(ge=0)
    styles: List[str] = []
    supports_silent: bool = False
    image_url: Optional[str] = None


class ShopPublic(CamelModel):
    id: int
    name: str
    address: str
    postcode: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    base_price_pence: int
    styles: List[str] = []
    supports_silent: bool
    image_url: Optional[str] = None


class ShopWithDistance(ShopPublic):
    distance_km: float


class AvailabilityResponse(CamelModel):
    barber_id: str
    date: date
    booked_times: List[str]


class BookingCreate(CamelModel):
    barber_id: str
    barber_name: Optional[str] = None
    customer_name: str
    date: date
    time: time
    is_silent: bool = False
    requirements: Optional[str] = None
    customer_token: Optional[str] = None

    @field_validator("barber_id", mode="before")
    @classmethod
    def barber_id_as_text(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("barberId is required")
        return v

    @field_validator("customer_name")
    @classmethod
    def customer_name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("customerName must not be empty")
        return v

    @field_validator("time")
    @classmethod
    def minute_precision(cls, v: time) -> time:
        return v.replace(second=0, microsecond=0, tzinfo=None)


class BookingPublic(CamelModel):
    id: int
    barber_id: str
    barber_name: Optional[str] = None
    customer_name: Optional[str] = None
    date: date
    time: str
    is_silent: bool
    requirements: Optional[str] = None
    created_at: datetime

    @field_validator("barber_id", mode="before")
    @classmethod
    def barber_id_as_text(cls, v):
        return str(v)

    @field_validator("time", mode="before")
    @classmethod
    def time_as_text(cls, v):
        return _format_time(v)


class BookingCreated(BookingPublic):
    # Only ever returned to the customer who made the booking
    customer_token: str


class SlotCreate(CamelModel):
    shop_id: int = Field(ge=1, le=MAX_ID)
    date: date
    times: Optional[List[time]] = None
    mins: int = Field(default=45, gt=0, le=240)


class SlotPublic(CamelModel):
    id: int
    shop_id: int
    starts_at: datetime
    mins: int
    is_booked: bool


class SlotBookingCreate(CamelModel):
    customer_name: str
    is_silent: bool = False
    requirements: Optional[str] = None
    customer_token: Optional[str] = None

    @field_validator("customer_name")
    @classmethod
    def customer_name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("customerName must not be empty")
        return v


class ShopRemoved(BaseModel):
    removed: int
