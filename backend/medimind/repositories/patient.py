"""Patient record repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.models.patient import PatientRecord

if TYPE_CHECKING:
    from medimind.schemas.patient import PatientRecordCreate, PatientRecordUpdate

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = frozenset({"first_name", "last_name", "id_number"})


class PatientRecordNotFoundError(ValueError):
    """Raised when a patient record does not exist or belongs to another doctor."""

    pass


class AuthUidAlreadyLinkedError(ValueError):
    """Raised when linking an auth uid that is already linked to another record."""

    pass


class PatientRecordRepository:
    """Data access for doctor-managed patient records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, record_id: str) -> PatientRecord | None:
        """Primary-key lookup."""
        return await self.db.get(PatientRecord, record_id)

    async def find_by_linked_auth_uid(self, auth_uid: str) -> PatientRecord | None:
        """Find the record linked to an identity-provider uid.

        Linking is meant to be unique, but nothing in the schema enforces it.
        When several records share the uid, the oldest one (by ``created_at``,
        then ``id``) wins.
        """
        stmt = (
            select(PatientRecord)
            .where(PatientRecord.linked_auth_uid == auth_uid)
            .order_by(PatientRecord.created_at.asc(), PatientRecord.id.asc())
            .limit(2)
        )
        result = await self.db.execute(stmt)
        records = list(result.scalars().all())
        if not records:
            return None
        if len(records) > 1:
            logger.warning(
                "Multiple patient records linked to auth uid %s; using oldest %s",
                auth_uid, records[0].id,
            )
        return records[0]

    async def get_for_doctor(self, record_id: str, doctor_id: str) -> PatientRecord:
        """Fetch a record owned by ``doctor_id``.

        Raises:
            PatientRecordNotFoundError: If missing or owned by another doctor.
        """
        record = await self.get(record_id)
        if record is None or record.doctor_id != doctor_id:
            raise PatientRecordNotFoundError(f"Patient record {record_id} not found")
        return record

    async def list_for_doctor(
        self,
        doctor_id: str,
        skip: int = 0,
        limit: int = 50,
    ) -> tuple[list[PatientRecord], int]:
        """List a doctor's records, newest first, with the total count."""
        count_stmt = (
            select(func.count())
            .select_from(PatientRecord)
            .where(PatientRecord.doctor_id == doctor_id)
        )
        total = (await self.db.execute(count_stmt)).scalar() or 0

        stmt = (
            select(PatientRecord)
            .where(PatientRecord.doctor_id == doctor_id)
            .order_by(PatientRecord.created_at.desc(), PatientRecord.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def create(self, doctor_id: str, data: PatientRecordCreate) -> PatientRecord:
        record = PatientRecord(doctor_id=doctor_id, **data.model_dump())
        self.db.add(record)
        await self.db.flush()
        await self.db.refresh(record)
        return record

    async def update(self, record: PatientRecord, data: PatientRecordUpdate) -> PatientRecord:
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(record, field, value)
        await self.db.flush()
        await self.db.refresh(record)
        return record

    async def delete(self, record: PatientRecord) -> None:
        await self.db.delete(record)
        await self.db.flush()

    async def link_auth_uid(self, record: PatientRecord, auth_uid: str) -> PatientRecord:
        """Link a record to a patient's identity-provider uid.

        Raises:
            AuthUidAlreadyLinkedError: If another record already holds the uid.
        """
        existing = await self.find_by_linked_auth_uid(auth_uid)
        if existing is not None and existing.id != record.id:
            raise AuthUidAlreadyLinkedError(
                f"Auth uid {auth_uid} is already linked to another patient record"
            )
        record.linked_auth_uid = auth_uid
        await self.db.flush()
        await self.db.refresh(record)
        logger.info("Linked patient record %s to auth uid %s", record.id, auth_uid)
        return record
