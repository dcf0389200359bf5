# app/routers/bookings_routes.py

from datetime import date as Date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response
from sqlmodel import Session

from app.auth import require_barber, require_customer_token
from app.db import get_session
from app.ledger import (
    booked_times,
    bookings_for_token,
    cancel_booking,
    create_booking,
    get_shop,
    list_bookings,
    parse_shop_id,
)
from app.models import MAX_ID
from app.schemas import AvailabilityResponse, BookingCreate, BookingCreated, BookingPublic

router = APIRouter(
    tags=["bookings"],
)


# Public: booked time slots for a shop on a date (no personal data)
@router.get("/availability", response_model=AvailabilityResponse)
def availability(
    barber_id: str = Query(alias="barberId"),
    date: Date = Query(),
    session: Session = Depends(get_session),
):
    shop_id = parse_shop_id(barber_id)
    return {
        "barber_id": barber_id,
        "date": date,
        "booked_times": booked_times(session, shop_id, date),
    }


@router.post("/bookings", response_model=BookingCreated, status_code=201)
def create_customer_booking(
    booking: BookingCreate,
    session: Session = Depends(get_session),
):
    shop = get_shop(session, parse_shop_id(booking.barber_id))

    return create_booking(
        session,
        shop,
        customer_name=booking.customer_name,
        on_date=booking.date,
        at_time=booking.time,
        is_silent=booking.is_silent,
        requirements=booking.requirements,
        customer_token=booking.customer_token,
        barber_name=booking.barber_name,
    )


@router.get("/my-bookings", response_model=List[BookingPublic])
def my_bookings(
    token: str = Depends(require_customer_token),
    session: Session = Depends(get_session),
):
    return bookings_for_token(session, token)


# Barber view (TEMP MVP, shared API key)
@router.get("/bookings", response_model=List[BookingPublic], dependencies=[Depends(require_barber)])
def barber_bookings(
    date: Optional[Date] = None,
    barber_id: Optional[str] = Query(default=None, alias="barberId"),
    session: Session = Depends(get_session),
):
    shop_id = parse_shop_id(barber_id) if barber_id is not None else None
    return list_bookings(session, on_date=date, shop_id=shop_id)


@router.delete("/bookings/{booking_id}", status_code=204, dependencies=[Depends(require_barber)])
def barber_cancel_booking(
    booking_id: int = Path(ge=1, le=MAX_ID),
    session: Session = Depends(get_session),
):
    cancel_booking(session, booking_id)
    return Response(status_code=204)
