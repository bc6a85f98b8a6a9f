"""Pydantic schemas for diagnoses, appointments, and pill reminders."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


# === Diagnoses ===


class DiagnosisCreate(BaseModel):
    """Schema for recording a diagnosis."""

    diagnosis_text: str = Field(min_length=1, max_length=10000)
    diagnosis_date: str = Field(pattern=_DATE_PATTERN, description="YYYY-MM-DD")


class DiagnosisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    patient_record_id: str
    diagnosis_text: str
    diagnosed_by: str
    doctor_name: str | None
    diagnosis_date: str
    created_at: datetime


# === Appointments ===


class AppointmentCreate(BaseModel):
    """Schema for a patient booking an appointment."""

    doctor_id: str = Field(min_length=1, max_length=255)
    appointment_date: datetime
    reason: str | None = Field(default=None, max_length=2000)
    notes: str | None = Field(default=None, max_length=10000)


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    patient_auth_uid: str
    patient_record_id: str | None
    doctor_id: str
    appointment_date: datetime
    reason: str | None
    notes: str | None
    patient_name: str | None
    created_at: datetime


# === Pill reminders ===


def _validate_times(times: list[str] | None) -> list[str] | None:
    if times is None:
        return None
    for value in times:
        if not _TIME_RE.match(value):
            raise ValueError(f"invalid reminder time {value!r}, expected HH:MM (24h)")
    return sorted(set(times))


class PillReminderCreate(BaseModel):
    """Schema for creating a pill reminder."""

    medication_name: str = Field(min_length=1, max_length=255)
    dosage: str = Field(min_length=1, max_length=255)
    frequency: str = Field(min_length=1, max_length=255, description="e.g. 'Twice a day'")
    times: list[str] = Field(min_length=1, max_length=24, description="Reminder times as HH:MM")
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("times")
    @classmethod
    def times_are_clock_times(cls, value: list[str]) -> list[str]:
        return _validate_times(value)


class PillReminderUpdate(BaseModel):
    """Schema for partially updating a pill reminder."""

    medication_name: str | None = Field(default=None, min_length=1, max_length=255)
    dosage: str | None = Field(default=None, min_length=1, max_length=255)
    frequency: str | None = Field(default=None, min_length=1, max_length=255)
    times: list[str] | None = Field(default=None, min_length=1, max_length=24)
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("times")
    @classmethod
    def times_are_clock_times(cls, value: list[str] | None) -> list[str] | None:
        return _validate_times(value)


class PillReminderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    patient_auth_uid: str
    medication_name: str
    dosage: str
    frequency: str
    times: list[str]
    notes: str | None
    created_at: datetime
