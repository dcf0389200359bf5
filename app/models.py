# app/models.py

from typing import Optional, List
from datetime import datetime, date as Date, time as Time

from sqlalchemy import DateTime, UniqueConstraint
from sqlalchemy.types import JSON
from sqlmodel import SQLModel, Field, Column

# Largest id the store can hold (signed 64-bit INTEGER)
MAX_ID = 2**63 - 1


class Shop(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    name: str = Field(index=True)
    address: str
    postcode: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    base_price_pence: int
    styles: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    supports_silent: bool = False
    image_url: Optional[str] = None


class Booking(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("barber_id", "date", "time", name="uq_booking_slot"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    barber_id: int = Field(foreign_key="shop.id", index=True)
    barber_name: Optional[str] = None
    customer_name: str
    date: Date = Field(index=True)
    time: Time
    is_silent: bool = False
    requirements: Optional[str] = None
    customer_token: str = Field(index=True)
    slot_id: Optional[int] = Field(default=None, foreign_key="slot.id", unique=True)
    # Naive UTC, stored as a plain DATETIME
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
    )


class Slot(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("shop_id", "starts_at", name="uq_shop_start"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    shop_id: int = Field(foreign_key="shop.id", index=True)
    starts_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    mins: int = 45
    is_booked: bool = False
