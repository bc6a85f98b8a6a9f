"""Pydantic schemas for the patient chat API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from medimind.constants import MAX_MESSAGE_LENGTH
from medimind.models.chat import SenderRole


class ChatRequest(BaseModel):
    """Request body for the chat endpoint."""

    message: str = Field(
        min_length=1,
        max_length=MAX_MESSAGE_LENGTH,
        description="The patient's message",
    )

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class ChatReply(BaseModel):
    """The assistant's reply.

    Serialized as ``{"aiResponse": ...}`` to match what the portal frontend reads.
    """

    model_config = ConfigDict(populate_by_name=True)

    ai_response: str = Field(alias="aiResponse", description="The assistant's reply text")


class ChatMessageResponse(BaseModel):
    """A persisted chat turn."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    patient_auth_uid: str
    sender_role: SenderRole
    sender_name: str
    message_text: str
    sent_at: datetime
    is_user: bool


class ChatHistoryResponse(BaseModel):
    """A patient's chat turns, oldest first."""

    items: list[ChatMessageResponse]
