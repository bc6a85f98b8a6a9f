"""Diagnosis routes, nested under a doctor's patient record."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.auth import require_doctor
from medimind.database import get_db
from medimind.models.clinical import Diagnosis
from medimind.models.user import UserProfile
from medimind.repositories import PatientRecordNotFoundError, PatientRecordRepository
from medimind.schemas.clinical import DiagnosisCreate, DiagnosisResponse

router = APIRouter(prefix="/patients/{record_id}/diagnoses", tags=["diagnoses"])


async def _ensure_owned(db: AsyncSession, record_id: str, doctor_id: str) -> None:
    try:
        await PatientRecordRepository(db).get_for_doctor(record_id, doctor_id)
    except PatientRecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Patient not found",
        )


@router.get("", response_model=list[DiagnosisResponse])
async def list_diagnoses(
    record_id: str,
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
) -> list[DiagnosisResponse]:
    """List diagnoses for a patient record, most recent diagnosis date first."""
    await _ensure_owned(db, record_id, doctor.user_id)
    result = await db.execute(
        select(Diagnosis)
        .where(Diagnosis.patient_record_id == record_id)
        .order_by(Diagnosis.diagnosis_date.desc(), Diagnosis.created_at.desc())
    )
    return [DiagnosisResponse.model_validate(d) for d in result.scalars().all()]


@router.post("", response_model=DiagnosisResponse, status_code=status.HTTP_201_CREATED)
async def add_diagnosis(
    record_id: str,
    data: DiagnosisCreate,
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
) -> DiagnosisResponse:
    """Record a diagnosis for a patient, attributed to the calling doctor."""
    await _ensure_owned(db, record_id, doctor.user_id)
    diagnosis = Diagnosis(
        patient_record_id=record_id,
        diagnosis_text=data.diagnosis_text,
        diagnosis_date=data.diagnosis_date,
        diagnosed_by=doctor.user_id,
        doctor_name=f"Dr. {doctor.display_name}",
    )
    db.add(diagnosis)
    await db.flush()
    await db.refresh(diagnosis)
    return DiagnosisResponse.model_validate(diagnosis)
