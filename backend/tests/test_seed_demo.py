"""Tests for the demo seed script."""

import pytest
from sqlalchemy import func, select

from medimind.config import settings
from medimind.models import AiInstruction, BetterAuthSession, PatientRecord, UserProfile, UserType
from medimind.repositories import DatabaseContextStore
from medimind.scripts.seed_demo import DEMO_INSTRUCTION, DEMO_PATIENT_PROMPT, seed_demo
from medimind.services.chat_context import ChatContextResolver


async def count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar()


class TestSeedDemo:
    """seed_demo creates a working doctor/patient pair."""

    @pytest.mark.asyncio
    async def test_creates_demo_rows(self, db_session):
        seeded = await seed_demo(db_session)

        doctor = await db_session.get(UserProfile, seeded["doctor_id"])
        patient = await db_session.get(UserProfile, seeded["patient_auth_uid"])
        record = await db_session.get(PatientRecord, seeded["patient_record_id"])

        assert doctor.user_type == UserType.DOCTOR
        assert patient.user_type == UserType.PATIENT
        assert record.linked_auth_uid == settings.demo_patient_auth_uid
        assert record.doctor_id == settings.demo_doctor_id
        assert (await db_session.get(AiInstruction, doctor.user_id)).instruction_text == DEMO_INSTRUCTION

    @pytest.mark.asyncio
    async def test_tokens_match_sessions(self, db_session):
        seeded = await seed_demo(db_session)

        result = await db_session.execute(
            select(BetterAuthSession.userId).where(BetterAuthSession.token == seeded["patient_token"])
        )
        assert result.scalar_one() == seeded["patient_auth_uid"]

    @pytest.mark.asyncio
    async def test_idempotent(self, db_session):
        first = await seed_demo(db_session)
        second = await seed_demo(db_session)

        assert first == second
        assert await count(db_session, PatientRecord) == 1
        assert await count(db_session, BetterAuthSession) == 2
        assert await count(db_session, UserProfile) == 2

    @pytest.mark.asyncio
    async def test_seeded_patient_gets_doctor_persona(self, db_session):
        seeded = await seed_demo(db_session)
        calls = []

        async def reply(system_instructions, user_message):
            calls.append(system_instructions)
            return "Hi!"

        resolver = ChatContextResolver(DatabaseContextStore(db_session), reply)
        await resolver.resolve_chat_reply(seeded["patient_auth_uid"], "Hello")

        assert calls[0].startswith(DEMO_INSTRUCTION)
        assert calls[0].endswith(DEMO_PATIENT_PROMPT)
