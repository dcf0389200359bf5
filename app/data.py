# app/data.py

import logging
from datetime import time

from sqlmodel import Session, select

from app.models import Shop

logger = logging.getLogger(__name__)

# Day grid offered by the booking page (no 12:30 slot, lunch)
DEFAULT_TIMES = [
    time(9, 0), time(9, 30),
    time(10, 0), time(10, 30),
    time(11, 0), time(11, 30),
    time(12, 0),
    time(13, 0), time(13, 30),
    time(14, 0), time(14, 30),
    time(15, 0), time(15, 30),
    time(16, 0),
]

DEFAULT_SLOT_MINUTES = 45

SHOPS = [
    {
        "name": "Silent Snips",
        "address": "12 Quiet Lane, London SW1A 1AA",
        "postcode": "SW1A 1AA",
        "lat": 51.5014,
        "lng": -0.1419,
        "base_price_pence": 2500,
        "styles": ["Silent cut available", "Skin fade"],
        "supports_silent": True,
        "image_url": "https://placehold.co/600x400?text=Trimmute+Barbers",
    },
    {
        "name": "Trim & Chill",
        "address": "44 Mute Street, Manchester M1 1AE",
        "postcode": "M1 1AE",
        "lat": 53.4794,
        "lng": -2.2453,
        "base_price_pence": 2000,
        "styles": ["Silent cut available", "Buzz cut"],
        "supports_silent": True,
    },
    {
        "name": "Quiet Cuts",
        "address": "8 Whisper Road, Leeds LS1 4HT",
        "postcode": "LS1 4HT",
        "lat": 53.8008,
        "lng": -1.5491,
        "base_price_pence": 1800,
        "styles": ["Standard cut"],
        "supports_silent": False,
    },
    {
        "name": "No-Chatter Clippers",
        "address": "3 Stillwater Road, Birmingham B1 1AA",
        "postcode": "B1 1AA",
        "lat": 52.4797,
        "lng": -1.9027,
        "base_price_pence": 2200,
        "styles": ["Silent cut available", "Beard trim"],
        "supports_silent": True,
    },
    {
        "name": "Mute & Fade",
        "address": "19 Calm Crescent, Bristol BS1 3LP",
        "postcode": "BS1 3LP",
        "lat": 51.4545,
        "lng": -2.5879,
        "base_price_pence": 2300,
        "styles": ["Skin fade", "Standard cut"],
        "supports_silent": False,
    },
]


def seed_shops(session: Session) -> int:
    """Insert the reference shop directory if the table is empty. Returns rows added."""
    if session.exec(select(Shop)).first() is not None:
        return 0

    for row in SHOPS:
        session.add(Shop(**row))
    session.commit()

    logger.info("Seeded %d shops", len(SHOPS))
    return len(SHOPS)
