"""Pill reminder routes (patient-facing)."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.auth import require_patient
from medimind.database import get_db
from medimind.models.clinical import PillReminder
from medimind.models.user import UserProfile
from medimind.schemas.clinical import (
    PillReminderCreate,
    PillReminderResponse,
    PillReminderUpdate,
)

router = APIRouter(prefix="/pill-reminders", tags=["pill-reminders"])


async def _get_own_reminder(db: AsyncSession, reminder_id: str, patient_uid: str) -> PillReminder:
    reminder = await db.get(PillReminder, reminder_id)
    if reminder is None or reminder.patient_auth_uid != patient_uid:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Pill reminder not found",
        )
    return reminder


@router.get("", response_model=list[PillReminderResponse])
async def list_reminders(
    db: AsyncSession = Depends(get_db),
    patient: UserProfile = Depends(require_patient),
) -> list[PillReminderResponse]:
    """List the caller's pill reminders, oldest first."""
    result = await db.execute(
        select(PillReminder)
        .where(PillReminder.patient_auth_uid == patient.user_id)
        .order_by(PillReminder.created_at.asc())
    )
    return [PillReminderResponse.model_validate(r) for r in result.scalars().all()]


@router.post("", response_model=PillReminderResponse, status_code=status.HTTP_201_CREATED)
async def create_reminder(
    data: PillReminderCreate,
    db: AsyncSession = Depends(get_db),
    patient: UserProfile = Depends(require_patient),
) -> PillReminderResponse:
    """Create a pill reminder."""
    reminder = PillReminder(patient_auth_uid=patient.user_id, **data.model_dump())
    db.add(reminder)
    await db.flush()
    await db.refresh(reminder)
    return PillReminderResponse.model_validate(reminder)


@router.patch("/{reminder_id}", response_model=PillReminderResponse)
async def update_reminder(
    reminder_id: str,
    data: PillReminderUpdate,
    db: AsyncSession = Depends(get_db),
    patient: UserProfile = Depends(require_patient),
) -> PillReminderResponse:
    """Partially update one of the caller's pill reminders."""
    reminder = await _get_own_reminder(db, reminder_id, patient.user_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field != "notes":
            continue
        setattr(reminder, field, value)
    await db.flush()
    await db.refresh(reminder)
    return PillReminderResponse.model_validate(reminder)


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reminder(
    reminder_id: str,
    db: AsyncSession = Depends(get_db),
    patient: UserProfile = Depends(require_patient),
) -> Response:
    """Delete one of the caller's pill reminders."""
    reminder = await _get_own_reminder(db, reminder_id, patient.user_id)
    await db.delete(reminder)
    await db.flush()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
