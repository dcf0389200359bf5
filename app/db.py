# app/db.py

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, create_engine

from app.config import settings

logger = logging.getLogger(__name__)

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # required for SQLite + FastAPI

# Engine = connection pool to the database
engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    connect_args=connect_args,
)


def init_db():
    # Importing registers the tables on SQLModel.metadata
    from app import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        try:
            yield session
        except SQLAlchemyError:
            logger.exception("Rolling back session after database error")
            session.rollback()
            raise
