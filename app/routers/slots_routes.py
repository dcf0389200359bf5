# app/routers/slots_routes.py

from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlmodel import Session

from app.auth import require_barber
from app.data import DEFAULT_TIMES
from app.db import get_session
from app.ledger import book_slot, get_shop, materialize_slots, open_slots
from app.models import MAX_ID
from app.schemas import BookingCreated, SlotBookingCreate, SlotCreate, SlotPublic

router = APIRouter(
    prefix="/slots",
    tags=["slots"],
)


@router.get("", response_model=List[SlotPublic])
def list_open_slots(
    shop_id: int = Query(alias="shopId", ge=1, le=MAX_ID),
    session: Session = Depends(get_session),
):
    return open_slots(session, shop_id)


@router.post("", response_model=List[SlotPublic], status_code=201, dependencies=[Depends(require_barber)])
def create_slots(
    body: SlotCreate,
    session: Session = Depends(get_session),
):
    shop = get_shop(session, body.shop_id)
    times = body.times if body.times else DEFAULT_TIMES
    return materialize_slots(session, shop, body.date, times, body.mins)


@router.post("/{slot_id}/book", response_model=BookingCreated, status_code=201)
def book_open_slot(
    body: SlotBookingCreate,
    slot_id: int = Path(ge=1, le=MAX_ID),
    session: Session = Depends(get_session),
):
    return book_slot(
        session,
        slot_id,
        customer_name=body.customer_name,
        is_silent=body.is_silent,
        requirements=body.requirements,
        customer_token=body.customer_token,
    )
