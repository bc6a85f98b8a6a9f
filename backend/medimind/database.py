"""Async SQLAlchemy engine, session factory, and declarative base."""

import time
import uuid
from collections.abc import AsyncGenerator
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from medimind.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session per request.

    Commits when the request handler returns normally, rolls back otherwise.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def new_id() -> str:
    """Generate an opaque record key."""
    return uuid.uuid4().hex


_last_sortable_ns = 0


def new_sortable_id() -> str:
    """Generate a record key that sorts in creation order.

    20 hex digits of nanosecond wall time, strictly increasing within the
    process, followed by 12 random hex digits.
    """
    global _last_sortable_ns
    _last_sortable_ns = max(time.time_ns(), _last_sortable_ns + 1)
    return f"{_last_sortable_ns:020x}{uuid.uuid4().hex[:12]}"


def utcnow() -> datetime:
    """Timezone-aware current time, used as the default for timestamp columns."""
    return datetime.now(timezone.utc)
