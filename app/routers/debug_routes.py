# app/routers/debug_routes.py

import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.config import settings
from app.db import get_session
from app.deps import require_db_test, require_debug
from app.models import Booking
from app.schemas import BookingPublic

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["debug"],
    include_in_schema=False,
)

ROUTES = [
    "GET /",
    "GET /health",
    "GET /barbers",
    "GET /barbers/near",
    "GET /barbers/{id}",
    "POST /shops",
    "DELETE /shops/{id}",
    "GET /availability",
    "POST /bookings",
    "GET /bookings",
    "GET /my-bookings",
    "DELETE /bookings/{id}",
    "GET /slots",
    "POST /slots",
    "POST /slots/{id}/book",
]


@router.get("/debug", dependencies=[Depends(require_debug)])
def debug_info():
    routes = ROUTES + [
        "GET /db-test" if settings.ENABLE_DB_TEST else "(db-test disabled)",
        "GET /bookings-db-test",
    ]
    return {
        "ok": True,
        "env": {
            "isProd": settings.is_production,
            "enableDbTest": settings.ENABLE_DB_TEST,
            "allowDebug": settings.debug_enabled,
            "hasDatabaseUrl": bool(settings.DATABASE_URL),
            "allowedOrigins": settings.allowed_origins,
        },
        "routes": routes,
        "time": datetime.utcnow().isoformat(),
    }


@router.get("/db-test", dependencies=[Depends(require_db_test)])
def db_test(session: Session = Depends(get_session)):
    try:
        ok = session.connection().execute(text("select 1")).scalar()
    except SQLAlchemyError as exc:
        logger.error("DB test failed: %s", exc)
        return JSONResponse(status_code=500, content={"connected": False, "error": "database unreachable"})
    return {"connected": True, "ok": ok}


@router.get("/bookings-db-test", dependencies=[Depends(require_debug)])
def recent_bookings(session: Session = Depends(get_session)):
    rows = session.exec(select(Booking).order_by(Booking.id.desc()).limit(10)).all()
    return {
        "ok": True,
        "rows": [BookingPublic.model_validate(b).model_dump(mode="json", by_alias=True) for b in rows],
    }
