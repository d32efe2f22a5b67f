import uuid
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, Column, DateTime, Uuid
from sqlalchemy.orm import sessionmaker, DeclarativeBase


def normalize_database_url(url: str) -> str:
    """Ensure we use the psycopg v3 driver (not psycopg2)."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    return url


def connect_args_for(url: str) -> dict:
    # Cloud Postgres providers (Supabase, Neon) require SSL connections
    if "supabase" in url or "neon.tech" in url:
        if "sslmode" not in url:
            return {"sslmode": "require"}
    return {}


class Database:
    """Owns the engine (connection pool) and the session factory.

    Built once at application startup and disposed on shutdown; handlers
    get sessions through ``get_db`` rather than importing a global engine.
    """

    def __init__(self, url: str, **engine_kwargs):
        self.url = normalize_database_url(url)
        engine_kwargs.setdefault("pool_pre_ping", True)
        self.engine = create_engine(
            self.url, connect_args=connect_args_for(self.url), **engine_kwargs
        )
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self):
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


class Base(DeclarativeBase):
    pass


class BaseMixin:
    """Adds UUID primary key and timestamps to all models."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
