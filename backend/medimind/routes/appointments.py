"""Appointment routes.

Patients book and see their own appointments; doctors see the appointments
booked with them.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.auth import get_current_profile, require_patient
from medimind.database import get_db
from medimind.models.clinical import Appointment
from medimind.models.user import UserProfile, UserType
from medimind.repositories import PatientRecordRepository
from medimind.schemas.clinical import AppointmentCreate, AppointmentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(get_current_profile),
) -> list[AppointmentResponse]:
    """List the caller's appointments in chronological order."""
    query = select(Appointment)
    if profile.user_type == UserType.DOCTOR:
        query = query.where(Appointment.doctor_id == profile.user_id)
    else:
        query = query.where(Appointment.patient_auth_uid == profile.user_id)

    result = await db.execute(query.order_by(Appointment.appointment_date.asc()))
    return [AppointmentResponse.model_validate(a) for a in result.scalars().all()]


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    data: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
    patient: UserProfile = Depends(require_patient),
) -> AppointmentResponse:
    """Book an appointment with a doctor.

    The patient's record is attached when one resolves, via the auth link
    first and the record key second.

    Raises:
        HTTPException: 404 if ``doctor_id`` is not a doctor.
    """
    doctor = await db.get(UserProfile, data.doctor_id)
    if doctor is None or doctor.user_type != UserType.DOCTOR:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Doctor not found",
        )

    repo = PatientRecordRepository(db)
    record = await repo.find_by_linked_auth_uid(patient.user_id)
    if record is None:
        record = await repo.get(patient.user_id)

    appointment = Appointment(
        patient_auth_uid=patient.user_id,
        patient_record_id=record.id if record is not None else None,
        doctor_id=doctor.user_id,
        appointment_date=data.appointment_date,
        reason=data.reason,
        notes=data.notes,
        patient_name=patient.display_name,
    )
    db.add(appointment)
    await db.flush()
    await db.refresh(appointment)
    logger.info("Appointment %s booked with doctor %s", appointment.id, doctor.user_id)
    return AppointmentResponse.model_validate(appointment)
