# app/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from app.config import settings
from app.data import seed_shops
from app.db import engine, init_db
from app.errors import register_exception_handlers
from app.routers import bookings_routes, debug_routes, shops_routes, slots_routes

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)


@app.on_event("startup")
def on_startup():
    logger.info(
        "Starting %s (production=%s, debug=%s, db_test=%s)",
        settings.PROJECT_NAME, settings.is_production, settings.debug_enabled, settings.ENABLE_DB_TEST,
    )
    init_db()
    if settings.SEED_SHOPS:
        with Session(engine) as session:
            seed_shops(session)


@app.get("/")
def root():
    return {"message": "Trimmute backend is running"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(shops_routes.router)
app.include_router(bookings_routes.router)
app.include_router(slots_routes.router)
app.include_router(debug_routes.router)
