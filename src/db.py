import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import JSON, BigInteger, Integer, create_engine
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import declarative_base

from core.config import config

logger = logging.getLogger(__name__)

Base = declarative_base()

# SQLite only autoincrements INTEGER PRIMARY KEY columns
BigIntPK = BigInteger().with_variant(Integer, "sqlite")
JSONDocument = JSON().with_variant(JSONB, "postgresql")

_engine: Optional[Engine] = None


def init_engine(url: Optional[str] = None, **kwargs) -> Engine:
    """
    (Re)create the process-wide engine.

    Called lazily on first use with DATABASE_URL; tests call it directly with
    an in-memory SQLite URL.
    """
    global _engine
    url = url or config.database.url
    if url.startswith("postgres://"):
        # SQLAlchemy only accepts the postgresql:// scheme
        url = "postgresql://" + url[len("postgres://"):]

    if url.startswith("postgresql"):
        kwargs.setdefault("pool_size", config.database.pool_size)
        kwargs.setdefault("max_overflow", config.database.max_overflow)
        kwargs.setdefault("pool_timeout", config.database.pool_timeout)
        kwargs.setdefault("pool_recycle", config.database.pool_recycle)

    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(url, echo=config.database.echo, pool_pre_ping=True, **kwargs)
    logger.info(f"Database engine ready ({_engine.url.get_backend_name()})")
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        return init_engine()
    return _engine


@contextmanager
def get_connection() -> Iterator[Connection]:
    """Connection scoped to a block; callers commit explicitly."""
    with get_engine().connect() as conn:
        yield conn


def create_tables() -> None:
    # Import models so they are registered on Base.metadata
    import models  # noqa: F401

    Base.metadata.create_all(get_engine())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_tables()
