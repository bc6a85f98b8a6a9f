"""Pydantic schemas for the AI customization API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from medimind.constants import MAX_PROMPT_LENGTH


class AiInstructionUpsert(BaseModel):
    """Create or replace the caller's assistant instructions."""

    instruction_text: str = Field(
        min_length=1,
        max_length=MAX_PROMPT_LENGTH,
        description="Core system prompt: persona, tone, constraints",
    )
    prompt_text: str | None = Field(
        default=None,
        max_length=MAX_PROMPT_LENGTH,
        description="Supplementary guidelines or example Q&A pairs",
    )


class AiInstructionResponse(BaseModel):
    """Schema for assistant instructions in API responses."""

    model_config = ConfigDict(from_attributes=True)

    doctor_id: str
    instruction_text: str
    prompt_text: str | None
    created_at: datetime
    updated_at: datetime
