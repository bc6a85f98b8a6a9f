"""Seed a demo doctor, patient, and assistant configuration.

Creates Better-Auth user + session rows (so the printed bearer tokens work
immediately), portal profiles for both users, a patient record owned by the
doctor and linked to the patient, and the doctor's AI instructions.

Usage:
    python -m medimind.scripts.seed_demo

Idempotent: existing rows are left untouched.
"""

import asyncio
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.config import settings
from medimind.database import async_session_maker, engine
from medimind.models import (
    AiInstruction,
    BetterAuthSession,
    BetterAuthUser,
    PatientRecord,
    UserProfile,
    UserType,
)

DEMO_INSTRUCTION = (
    "You are the virtual assistant of Dr. Demo's family practice. Be warm and concise. "
    "Never diagnose; direct urgent symptoms to emergency services."
)
DEMO_PROMPT = "Q: What are the clinic hours? A: Monday to Friday, 9:00 to 17:00."
DEMO_PATIENT_PROMPT = "Keep answers short and avoid medical jargon."


async def _ensure_user(
    db: AsyncSession,
    user_id: str,
    first_name: str,
    last_name: str,
    email: str,
    user_type: UserType,
) -> str:
    """Create user, session, and profile rows if missing. Returns a valid bearer token."""
    now = datetime.now(timezone.utc)

    if await db.get(BetterAuthUser, user_id) is None:
        db.add(BetterAuthUser(
            id=user_id,
            name=f"{first_name} {last_name}",
            email=email,
            emailVerified=True,
            createdAt=now,
            updatedAt=now,
        ))

    if await db.get(UserProfile, user_id) is None:
        db.add(UserProfile(
            user_id=user_id,
            user_type=user_type,
            first_name=first_name,
            last_name=last_name,
            email=email,
        ))

    result = await db.execute(
        select(BetterAuthSession).where(
            BetterAuthSession.userId == user_id,
            BetterAuthSession.expiresAt > now,
        )
    )
    session = result.scalars().first()
    if session is None:
        session = BetterAuthSession(
            id=secrets.token_hex(16),
            token=secrets.token_urlsafe(32),
            userId=user_id,
            expiresAt=now + timedelta(days=30),
            createdAt=now,
            updatedAt=now,
        )
        db.add(session)

    await db.flush()
    return session.token


async def seed_demo(db: AsyncSession) -> dict[str, str]:
    """Seed demo rows into ``db`` and return the ids and tokens created or found."""
    doctor_id = settings.demo_doctor_id
    patient_uid = settings.demo_patient_auth_uid

    doctor_token = await _ensure_user(
        db, doctor_id, "Demo", "Doctor", "doctor@medimind.local", UserType.DOCTOR
    )
    patient_token = await _ensure_user(
        db, patient_uid, "Demo", "Patient", "patient@medimind.local", UserType.PATIENT
    )

    result = await db.execute(
        select(PatientRecord).where(PatientRecord.linked_auth_uid == patient_uid)
    )
    record = result.scalars().first()
    if record is None:
        record = PatientRecord(
            doctor_id=doctor_id,
            linked_auth_uid=patient_uid,
            first_name="Demo",
            last_name="Patient",
            id_number="P001",
            email="patient@medimind.local",
            patient_specific_prompts=DEMO_PATIENT_PROMPT,
        )
        db.add(record)

    if await db.get(AiInstruction, doctor_id) is None:
        db.add(AiInstruction(
            doctor_id=doctor_id,
            instruction_text=DEMO_INSTRUCTION,
            prompt_text=DEMO_PROMPT,
        ))

    await db.flush()
    return {
        "doctor_id": doctor_id,
        "doctor_token": doctor_token,
        "patient_auth_uid": patient_uid,
        "patient_token": patient_token,
        "patient_record_id": record.id,
    }


async def _main() -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))

    async with async_session_maker() as db:
        seeded = await seed_demo(db)
        await db.commit()

    print("=" * 50)
    print("MediMind Demo Seed")
    print("=" * 50)
    for key, value in seeded.items():
        print(f"  {key}: {value}")


def main() -> None:
    """Main entry point for the seed script."""
    asyncio.run(_main())


if __name__ == "__main__":
    main()
