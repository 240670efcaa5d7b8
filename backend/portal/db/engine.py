"""Database engine, session factory and key-value backend selection."""

import redis
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from backend.portal.config import Settings
from backend.portal.db.inmemory import InMemoryKeyValueStore
from backend.portal.db.models import Base
from backend.portal.db.redis_store import RedisKeyValueStore
from backend.portal.db.repositories import KeyValueStore
from backend.portal.db.sql_store import SqlKeyValueStore


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create SQLAlchemy engine from settings.

    Raises:
        ValueError: If DATABASE_URL is unset or empty.
    """
    if not settings.database_url:
        raise ValueError(
            "DATABASE_URL must be set to a valid connection string. "
            "Please configure the database_url setting."
        )

    return create_engine(settings.database_url, pool_pre_ping=True, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create sessionmaker for creating database sessions.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_kv_store(settings: Settings) -> KeyValueStore:
    """Build the configured key-value backend.

    The SQL backend creates its single table on first use.

    Raises:
        ValueError: If the redis backend is selected without REDIS_URL.
    """
    if settings.storage_backend == "sql":
        engine = create_engine_from_settings(settings)
        Base.metadata.create_all(engine)
        return SqlKeyValueStore(create_session_factory(engine))

    if settings.storage_backend == "redis":
        if not settings.redis_url:
            raise ValueError("REDIS_URL must be set when STORAGE_BACKEND=redis.")
        client = redis.from_url(settings.redis_url, decode_responses=True)  # type: ignore[no-untyped-call]
        return RedisKeyValueStore(client, namespace=settings.redis_namespace)

    return InMemoryKeyValueStore()
