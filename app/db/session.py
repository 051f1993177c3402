from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, settings


def create_engine_with_settings(config: Settings) -> Engine:
    """Build the engine, applying pool limits only on server databases."""
    url = make_url(config.DATABASE_URL)
    backend = url.get_backend_name()

    if backend == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases only exist per connection
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(config.DATABASE_URL, **kwargs)

    connect_args = {}
    if backend.startswith("postgresql"):
        connect_args["options"] = "-c timezone=utc"

    return create_engine(
        config.DATABASE_URL,
        pool_pre_ping=True,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_timeout=config.DB_POOL_TIMEOUT,
        pool_recycle=config.DB_POOL_RECYCLE,
        connect_args=connect_args,
    )


engine = create_engine_with_settings(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
