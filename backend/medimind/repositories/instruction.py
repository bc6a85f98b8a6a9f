"""AI instruction repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from medimind.database import utcnow
from medimind.models.instruction import AiInstruction

if TYPE_CHECKING:
    from medimind.schemas.instruction import AiInstructionUpsert


class AiInstructionRepository:
    """Data access for per-doctor assistant instructions."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, doctor_id: str) -> AiInstruction | None:
        return await self.db.get(AiInstruction, doctor_id)

    async def upsert(self, doctor_id: str, data: AiInstructionUpsert) -> AiInstruction:
        """Create the doctor's instructions or replace the existing ones."""
        instruction = await self.get(doctor_id)
        if instruction is None:
            instruction = AiInstruction(
                doctor_id=doctor_id,
                instruction_text=data.instruction_text,
                prompt_text=data.prompt_text,
            )
            self.db.add(instruction)
        else:
            instruction.instruction_text = data.instruction_text
            instruction.prompt_text = data.prompt_text
            instruction.updated_at = utcnow()
        await self.db.flush()
        await self.db.refresh(instruction)
        return instruction
