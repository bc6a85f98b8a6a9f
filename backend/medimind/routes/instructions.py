"""AI assistant customization routes (doctor-facing)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.auth import require_doctor
from medimind.database import get_db
from medimind.models.user import UserProfile
from medimind.repositories import AiInstructionRepository
from medimind.schemas.instruction import AiInstructionResponse, AiInstructionUpsert

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai-instructions", tags=["ai-instructions"])


@router.get("", response_model=AiInstructionResponse)
async def get_instructions(
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
) -> AiInstructionResponse:
    """Get the calling doctor's assistant instructions.

    Raises:
        HTTPException: 404 if the doctor has not customized the assistant.
    """
    instruction = await AiInstructionRepository(db).get(doctor.user_id)
    if instruction is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No AI instructions configured",
        )
    return AiInstructionResponse.model_validate(instruction)


@router.put("", response_model=AiInstructionResponse)
async def upsert_instructions(
    data: AiInstructionUpsert,
    db: AsyncSession = Depends(get_db),
    doctor: UserProfile = Depends(require_doctor),
) -> AiInstructionResponse:
    """Create or replace the calling doctor's assistant instructions."""
    instruction = await AiInstructionRepository(db).upsert(doctor.user_id, data)
    logger.info("AI instructions saved for doctor %s", doctor.user_id)
    return AiInstructionResponse.model_validate(instruction)
