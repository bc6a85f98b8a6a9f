"""Pydantic schemas for the patient record API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from medimind.constants import MAX_PROMPT_LENGTH

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class PatientRecordBase(BaseModel):
    """Fields shared by create and response schemas."""

    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    id_number: str = Field(min_length=1, max_length=64, description="Doctor-assigned patient number")
    email: str | None = Field(default=None, max_length=255)
    date_of_birth: str | None = Field(default=None, pattern=_DATE_PATTERN, description="YYYY-MM-DD")
    address: str | None = None
    phone_number: str | None = Field(default=None, max_length=64)
    patient_specific_prompts: str | None = Field(
        default=None,
        max_length=MAX_PROMPT_LENGTH,
        description="Extra guidance for the assistant when chatting with this patient",
    )


class PatientRecordCreate(PatientRecordBase):
    """Schema for creating a patient record."""


class PatientRecordUpdate(BaseModel):
    """Schema for partially updating a patient record."""

    first_name: str | None = Field(default=None, min_length=1, max_length=255)
    last_name: str | None = Field(default=None, min_length=1, max_length=255)
    id_number: str | None = Field(default=None, min_length=1, max_length=64)
    email: str | None = Field(default=None, max_length=255)
    date_of_birth: str | None = Field(default=None, pattern=_DATE_PATTERN)
    address: str | None = None
    phone_number: str | None = Field(default=None, max_length=64)
    patient_specific_prompts: str | None = Field(default=None, max_length=MAX_PROMPT_LENGTH)


class PatientLinkRequest(BaseModel):
    """Link a patient record to an identity-provider uid."""

    auth_uid: str = Field(min_length=1, max_length=255)


class PatientRecordResponse(PatientRecordBase):
    """Schema for patient records in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    doctor_id: str
    linked_auth_uid: str | None
    created_at: datetime


class PatientRecordListResponse(BaseModel):
    """Paginated list of patient records."""

    items: list[PatientRecordResponse]
    total: int
    skip: int
    limit: int
