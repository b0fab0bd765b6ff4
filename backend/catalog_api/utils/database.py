"""Database engine and schema creation

The relational schema mirrors the catalog but is not read or written by
the in-memory store; init_db() only creates the tables.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from ..config import Settings
from ..models.base import Base
from .logging import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str) -> Engine:
    """
    Create an engine, making sure a sqlite file's directory exists

    Args:
        database_url: SQLAlchemy connection URL
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(database_url, pool_pre_ping=True)


def init_db(engine: Optional[Engine] = None, settings: Optional[Settings] = None) -> Engine:
    """
    Initialize database tables

    Creates the items and ai_analytics tables if they do not exist.
    """
    if engine is None:
        engine = build_engine((settings or Settings()).DATABASE_URL)

    # Import all models to ensure they're registered
    from ..models import ItemRecord, AIAnalytics  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created", tables=sorted(Base.metadata.tables))
    return engine
