# app/ledger.py

"""
Booking ledger: availability, booking creation and cancellation, and the
pre-materialized slot calendar.

A (shop, date, time) holds at most one booking. The pre-insert lookup gives
a clean 409; the ``uq_booking_slot`` constraint catches whatever races past it.
"""
import logging
import uuid
from datetime import datetime, date as Date, time as Time
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.errors import InvalidRequest, NotFound, SlotAlreadyBooked
from app.models import MAX_ID, Booking, Shop, Slot

logger = logging.getLogger(__name__)


def parse_shop_id(raw) -> int:
    try:
        shop_id = int(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidRequest("Invalid barberId")
    if not 1 <= shop_id <= MAX_ID:
        raise InvalidRequest("Invalid barberId")
    return shop_id


def get_shop(session: Session, shop_id: int) -> Shop:
    shop = session.get(Shop, shop_id)
    if shop is None:
        raise NotFound("Shop not found")
    return shop


def booked_times(session: Session, shop_id: int, on_date: Date) -> List[str]:
    rows = session.exec(
        select(Booking.time)
        .where(Booking.barber_id == shop_id)
        .where(Booking.date == on_date)
        .distinct()
        .order_by(Booking.time)
    ).all()
    return [t.strftime("%H:%M") for t in rows]


def find_booking_at(session: Session, shop_id: int, on_date: Date, at_time: Time) -> Optional[Booking]:
    return session.exec(
        select(Booking)
        .where(Booking.barber_id == shop_id)
        .where(Booking.date == on_date)
        .where(Booking.time == at_time)
    ).first()


def create_booking(
    session: Session,
    shop: Shop,
    *,
    customer_name: str,
    on_date: Date,
    at_time: Time,
    is_silent: bool = False,
    requirements: Optional[str] = None,
    customer_token: Optional[str] = None,
    barber_name: Optional[str] = None,
    slot: Optional[Slot] = None,
) -> Booking:
    # The shop record decides, never the client's claim
    if shop.supports_silent:
        final_silent = bool(is_silent)
        final_requirements = (requirements or "").strip() or None
    else:
        final_silent = False
        final_requirements = None

    token = (customer_token or "").strip() or str(uuid.uuid4())

    if find_booking_at(session, shop.id, on_date, at_time) is not None:
        logger.info("Slot conflict for shop %s on %s at %s", shop.id, on_date, at_time)
        raise SlotAlreadyBooked()

    # A direct booking still claims the matching calendar slot, if there is one
    if slot is None:
        slot = session.exec(
            select(Slot)
            .where(Slot.shop_id == shop.id)
            .where(Slot.starts_at == datetime.combine(on_date, at_time))
        ).first()

    booking = Booking(
        barber_id=shop.id,
        barber_name=barber_name or shop.name,
        customer_name=customer_name,
        date=on_date,
        time=at_time,
        is_silent=final_silent,
        requirements=final_requirements,
        customer_token=token,
        slot_id=slot.id if slot is not None else None,
    )
    session.add(booking)
    if slot is not None:
        slot.is_booked = True
        session.add(slot)

    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.warning("Unique constraint rejected shop %s on %s at %s", shop.id, on_date, at_time)
        raise SlotAlreadyBooked()

    session.refresh(booking)
    logger.info("Booking %s created for shop %s on %s at %s", booking.id, shop.id, on_date, at_time)
    return booking


def list_bookings(
    session: Session,
    on_date: Optional[Date] = None,
    shop_id: Optional[int] = None,
) -> Sequence[Booking]:
    stmt = select(Booking)
    if on_date is not None:
        stmt = stmt.where(Booking.date == on_date)
    if shop_id is not None:
        stmt = stmt.where(Booking.barber_id == shop_id)
    stmt = stmt.order_by(Booking.date, Booking.time)
    return session.exec(stmt).all()


def bookings_for_token(session: Session, token: str) -> Sequence[Booking]:
    return session.exec(
        select(Booking)
        .where(Booking.customer_token == token)
        .order_by(Booking.date.desc(), Booking.time.desc())
    ).all()


def cancel_booking(session: Session, booking_id: int) -> None:
    booking = session.get(Booking, booking_id)
    if booking is None:
        raise NotFound("Booking not found")

    if booking.slot_id is not None:
        slot = session.get(Slot, booking.slot_id)
        if slot is not None:
            slot.is_booked = False
            session.add(slot)

    shop_id, on_date, at_time = booking.barber_id, booking.date, booking.time
    session.delete(booking)
    session.commit()
    logger.info("Booking %s cancelled, shop %s %s %s is free again",
                booking_id, shop_id, on_date, at_time)


def delete_shop(session: Session, shop_id: int) -> None:
    shop = get_shop(session, shop_id)
    for booking in session.exec(select(Booking).where(Booking.barber_id == shop_id)).all():
        session.delete(booking)
    session.flush()
    for slot in session.exec(select(Slot).where(Slot.shop_id == shop_id)).all():
        session.delete(slot)
    session.flush()
    session.delete(shop)
    session.commit()
    logger.info("Shop %s removed with its bookings and slots", shop_id)


# ---------------- SLOTS ----------------

def materialize_slots(
    session: Session,
    shop: Shop,
    on_date: Date,
    times: Sequence[Time],
    mins: int,
) -> List[Slot]:
    """Create the day's slots for ``shop``; starts that already exist are skipped."""
    existing = set(
        session.exec(
            select(Slot.starts_at)
            .where(Slot.shop_id == shop.id)
            .where(Slot.starts_at >= datetime.combine(on_date, Time.min))
            .where(Slot.starts_at <= datetime.combine(on_date, Time.max))
        ).all()
    )

    # Times already booked directly come out of the calendar as taken
    booked = {
        b.time: b
        for b in session.exec(
            select(Booking)
            .where(Booking.barber_id == shop.id)
            .where(Booking.date == on_date)
        ).all()
    }

    created = []
    claims = []
    for t in sorted(set(times)):
        starts_at = datetime.combine(on_date, t.replace(second=0, microsecond=0, tzinfo=None))
        if starts_at in existing:
            continue
        slot = Slot(shop_id=shop.id, starts_at=starts_at, mins=mins)
        booking = booked.get(starts_at.time())
        if booking is not None and booking.slot_id is None:
            slot.is_booked = True
            claims.append((booking, slot))
        session.add(slot)
        created.append(slot)
        existing.add(starts_at)

    session.flush()
    for booking, slot in claims:
        booking.slot_id = slot.id
        session.add(booking)
    session.commit()
    for slot in created:
        session.refresh(slot)
    return created


def open_slots(session: Session, shop_id: int) -> Sequence[Slot]:
    return session.exec(
        select(Slot)
        .where(Slot.shop_id == shop_id)
        .where(Slot.is_booked == False)  # noqa: E712
        .order_by(Slot.starts_at)
    ).all()


def book_slot(
    session: Session,
    slot_id: int,
    *,
    customer_name: str,
    is_silent: bool = False,
    requirements: Optional[str] = None,
    customer_token: Optional[str] = None,
) -> Booking:
    slot = session.get(Slot, slot_id)
    if slot is None:
        raise NotFound("Slot not found")
    if slot.is_booked:
        raise SlotAlreadyBooked("Slot is already booked")

    shop = get_shop(session, slot.shop_id)
    return create_booking(
        session,
        shop,
        customer_name=customer_name,
        on_date=slot.starts_at.date(),
        at_time=slot.starts_at.time(),
        is_silent=is_silent,
        requirements=requirements,
        customer_token=customer_token,
        slot=slot,
    )
