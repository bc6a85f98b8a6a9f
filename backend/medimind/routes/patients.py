"""Patient record API routes (doctor-facing)."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.auth import require_doctor
from medimind.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from medimind.database import get_db
from medimind.models.user import UserProfile
from medimind.repositories import (
    AuthUidAlreadyLinkedError,
    PatientRecordNotFoundError,
    PatientRecordRepository,
)
from medimind.schemas.patient import (
    PatientLinkRequest,
    PatientRecordCreate,
    PatientRecordListResponse,
    PatientRecordResponse,
    PatientRecordUpdate,
)

router = APIRouter(prefix="/patients", tags=["patients"])


async def _get_owned_record(repo: PatientRecordRepository, record_id: str, doctor_id: str):
    try:
        return await repo.get_for_doctor(record_id, doctor_id)
    except PatientRecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Patient not found",
        )


@router.get("", response_model=PatientRecordListResponse)
async def list_patients(
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
    skip: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> PatientRecordListResponse:
    """List the calling doctor's patient records, newest first.

    Args:
        skip: Number of records to skip (pagination offset).
        limit: Maximum number of records to return.
    """
    records, total = await PatientRecordRepository(db).list_for_doctor(
        doctor.user_id, skip=skip, limit=limit
    )
    return PatientRecordListResponse(
        items=[PatientRecordResponse.model_validate(r) for r in records],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=PatientRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    data: PatientRecordCreate,
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
) -> PatientRecordResponse:
    """Create a patient record owned by the calling doctor."""
    record = await PatientRecordRepository(db).create(doctor.user_id, data)
    return PatientRecordResponse.model_validate(record)


@router.get("/{record_id}", response_model=PatientRecordResponse)
async def get_patient(
    record_id: str,
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
) -> PatientRecordResponse:
    """Get one of the calling doctor's patient records.

    Raises:
        HTTPException: 404 if missing or owned by another doctor.
    """
    record = await _get_owned_record(PatientRecordRepository(db), record_id, doctor.user_id)
    return PatientRecordResponse.model_validate(record)


@router.patch("/{record_id}", response_model=PatientRecordResponse)
async def update_patient(
    record_id: str,
    data: PatientRecordUpdate,
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
) -> PatientRecordResponse:
    """Partially update a patient record, including its assistant guidance."""
    repo = PatientRecordRepository(db)
    record = await _get_owned_record(repo, record_id, doctor.user_id)
    record = await repo.update(record, data)
    return PatientRecordResponse.model_validate(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(
    record_id: str,
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
) -> Response:
    """Delete a patient record."""
    repo = PatientRecordRepository(db)
    record = await _get_owned_record(repo, record_id, doctor.user_id)
    await repo.delete(record)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{record_id}/link", response_model=PatientRecordResponse)
async def link_patient(
    record_id: str,
    link: PatientLinkRequest,
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
) -> PatientRecordResponse:
    """Link a patient record to the patient's identity-provider uid.

    Raises:
        HTTPException: 404 if the record is not the doctor's, 409 if the uid
            is already linked to a different record.
    """
    repo = PatientRecordRepository(db)
    record = await _get_owned_record(repo, record_id, doctor.user_id)
    try:
        record = await repo.link_auth_uid(record, link.auth_uid)
    except AuthUidAlreadyLinkedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    return PatientRecordResponse.model_validate(record)
