# app/seed.py

"""
Seed the database: reference shops plus a slot calendar for the coming days.

    trimmute-seed --days 7
"""
import argparse
import logging
from datetime import date, timedelta

from sqlmodel import Session, select

from app.data import DEFAULT_SLOT_MINUTES, DEFAULT_TIMES, seed_shops
from app.db import engine, init_db
from app.ledger import materialize_slots
from app.models import Shop

logger = logging.getLogger(__name__)


def seed(days: int, start: date = None) -> int:
    """Returns the number of slots created."""
    start = start or date.today()
    init_db()

    created = 0
    with Session(engine) as session:
        seed_shops(session)
        shops = session.exec(select(Shop).order_by(Shop.id)).all()
        for offset in range(days):
            on_date = start + timedelta(days=offset)
            for shop in shops:
                created += len(materialize_slots(session, shop, on_date, DEFAULT_TIMES, DEFAULT_SLOT_MINUTES))

    logger.info("Seeded %d slots over %d days", created, days)
    return created


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed Trimmute shops and slots")
    parser.add_argument("--days", type=int, default=7, help="days of slots to create, starting today")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    created = seed(args.days)
    print(f"Seeded: {created} slots")


if __name__ == "__main__":
    main()
