"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- Test database engine and sessions (SQLite in memory unless DATABASE_TEST_URL is set)
- HTTP client for API testing with auth and reply-generation stubs
- Doctor/patient profiles and common portal records
"""

import os

import pytest
import pytest_asyncio
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from medimind.auth import bearer_scheme, verify_bearer_token
from medimind.database import Base, get_db
from medimind.main import app
from medimind.models import AiInstruction, PatientRecord, UserProfile, UserType
from medimind.routes.chat import get_reply_generator

DOCTOR_ID = "doctor-1"
OTHER_DOCTOR_ID = "doctor-2"
PATIENT_UID = "patient-1"


async def stub_verify_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Stub auth dependency: the bearer token is the user id."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
        )
    return credentials.credentials


class FakeReplyGenerator:
    """Records generation calls and returns a canned reply (or raises)."""

    def __init__(self, reply: str = "Hello!", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def generate_reply(self, system_instructions: str, user_message: str) -> str:
        self.calls.append((system_instructions, user_message))
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self) -> None:
        pass


def auth_headers_for(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_id}"}


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with automatic schema management.

    Creates all tables before tests, drops them after.
    Uses DATABASE_TEST_URL env var if set, otherwise an in-memory SQLite database
    shared across connections.
    """
    db_url = os.environ.get("DATABASE_TEST_URL")
    if db_url:
        engine = create_async_engine(db_url, echo=False)
    else:
        engine = create_async_engine(
            "sqlite+aiosqlite://",
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncSession:
    """Create test database session with automatic rollback."""
    async with session_maker() as session:
        yield session
        await session.rollback()


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest.fixture
def reply_generator() -> FakeReplyGenerator:
    """Reply generator injected into the chat route."""
    return FakeReplyGenerator()


@pytest_asyncio.fixture
async def client(session_maker, reply_generator):
    """Async test client for FastAPI app with test database.

    Overrides the app's get_db dependency to use the test database, the bearer
    token check with a stub that treats the token as the user id, and the reply
    generator with ``reply_generator``.
    """

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_get_reply_generator():
        yield reply_generator

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[verify_bearer_token] = stub_verify_bearer_token
    app.dependency_overrides[get_reply_generator] = override_get_reply_generator

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(verify_bearer_token, None)
    app.dependency_overrides.pop(get_reply_generator, None)


@pytest.fixture
def doctor_headers() -> dict[str, str]:
    return auth_headers_for(DOCTOR_ID)


@pytest.fixture
def other_doctor_headers() -> dict[str, str]:
    return auth_headers_for(OTHER_DOCTOR_ID)


@pytest.fixture
def patient_headers() -> dict[str, str]:
    return auth_headers_for(PATIENT_UID)


# =============================================================================
# Portal Data Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def profiles(session_maker) -> dict[str, str]:
    """Create two doctors and one patient profile."""
    async with session_maker() as session:
        session.add_all([
            UserProfile(
                user_id=DOCTOR_ID,
                user_type=UserType.DOCTOR,
                first_name="Ada",
                last_name="Quinn",
                specialization="Family medicine",
            ),
            UserProfile(
                user_id=OTHER_DOCTOR_ID,
                user_type=UserType.DOCTOR,
                first_name="Ben",
                last_name="Ortiz",
            ),
            UserProfile(
                user_id=PATIENT_UID,
                user_type=UserType.PATIENT,
                first_name="Pat",
                last_name="Lee",
            ),
        ])
        await session.commit()
    return {"doctor": DOCTOR_ID, "other_doctor": OTHER_DOCTOR_ID, "patient": PATIENT_UID}


@pytest_asyncio.fixture
async def linked_record(session_maker, profiles) -> PatientRecord:
    """A record owned by DOCTOR_ID and linked to PATIENT_UID."""
    async with session_maker() as session:
        record = PatientRecord(
            doctor_id=DOCTOR_ID,
            linked_auth_uid=PATIENT_UID,
            first_name="Pat",
            last_name="Lee",
            id_number="P001",
            patient_specific_prompts="Keep answers short.",
        )
        session.add(record)
        await session.commit()
    return record


@pytest_asyncio.fixture
async def doctor_instruction(session_maker, profiles) -> AiInstruction:
    """AI instructions for DOCTOR_ID."""
    async with session_maker() as session:
        instruction = AiInstruction(
            doctor_id=DOCTOR_ID,
            instruction_text="You are Dr. A's assistant.",
            prompt_text="Q: hours? A: 9-5.",
        )
        session.add(instruction)
        await session.commit()
    return instruction
