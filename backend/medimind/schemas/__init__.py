"""Pydantic schemas."""

from medimind.schemas.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatReply,
    ChatRequest,
)
from medimind.schemas.clinical import (
    AppointmentCreate,
    AppointmentResponse,
    DiagnosisCreate,
    DiagnosisResponse,
    PillReminderCreate,
    PillReminderResponse,
    PillReminderUpdate,
)
from medimind.schemas.instruction import AiInstructionResponse, AiInstructionUpsert
from medimind.schemas.patient import (
    PatientLinkRequest,
    PatientRecordCreate,
    PatientRecordListResponse,
    PatientRecordResponse,
    PatientRecordUpdate,
)

__all__ = [
    # Chat schemas
    "ChatHistoryResponse",
    "ChatMessageResponse",
    "ChatReply",
    "ChatRequest",
    # Clinical schemas
    "AppointmentCreate",
    "AppointmentResponse",
    "DiagnosisCreate",
    "DiagnosisResponse",
    "PillReminderCreate",
    "PillReminderResponse",
    "PillReminderUpdate",
    # Assistant customization
    "AiInstructionResponse",
    "AiInstructionUpsert",
    # Patient records
    "PatientLinkRequest",
    "PatientRecordCreate",
    "PatientRecordListResponse",
    "PatientRecordResponse",
    "PatientRecordUpdate",
]
