"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata.
"""

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

from marketplace.db.session import engine as default_engine
from marketplace.models.base import Base
from marketplace.models import bid, offer, user  # noqa: F401

logger = logging.getLogger(__name__)


def check_connection(engine: Engine = default_engine) -> None:
    """
    Round-trip a trivial query. Raises SQLAlchemyError if the store is unreachable.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def init_db(engine: Engine = default_engine) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready")
