"""Database-backed record store for the chat context resolver."""

from sqlalchemy.ext.asyncio import AsyncSession

from medimind.models.instruction import AiInstruction
from medimind.models.patient import PatientRecord
from medimind.repositories.instruction import AiInstructionRepository
from medimind.repositories.patient import PatientRecordRepository


class DatabaseContextStore:
    """Read-only lookups the chat context resolver needs, over one session.

    Each lookup runs inside a SAVEPOINT. A failed read rolls back only itself,
    so the caller's transaction (e.g. the already-flushed patient chat turn)
    stays usable after the resolver swallows the error.
    """

    def __init__(self, db: AsyncSession):
        self._db = db
        self._patients = PatientRecordRepository(db)
        self._instructions = AiInstructionRepository(db)

    async def find_patient_record_by_linked_auth_uid(self, auth_uid: str) -> PatientRecord | None:
        async with self._db.begin_nested():
            return await self._patients.find_by_linked_auth_uid(auth_uid)

    async def get_patient_record(self, record_id: str) -> PatientRecord | None:
        async with self._db.begin_nested():
            return await self._patients.get(record_id)

    async def get_ai_instruction(self, doctor_id: str) -> AiInstruction | None:
        async with self._db.begin_nested():
            return await self._instructions.get(doctor_id)
