"""Clinical records around a patient: diagnoses, appointments, pill reminders."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from medimind.database import Base, new_id, utcnow


class Diagnosis(Base):
    """A diagnosis recorded by a doctor against a patient record."""

    __tablename__ = "diagnoses"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    patient_record_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("patient_records.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    diagnosis_text: Mapped[str] = mapped_column(Text, nullable=False)
    diagnosed_by: Mapped[str] = mapped_column(Text, nullable=False)
    doctor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    diagnosis_date: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<Diagnosis(id={self.id}, patient_record_id={self.patient_record_id})>"


class Appointment(Base):
    """An appointment booked by a patient with a doctor."""

    __tablename__ = "appointments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    patient_auth_uid: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    patient_record_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("patient_records.id", ondelete="SET NULL"),
        nullable=True,
    )
    doctor_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    appointment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    patient_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<Appointment(id={self.id}, doctor_id={self.doctor_id}, at={self.appointment_date})>"


class PillReminder(Base):
    """A patient's medication reminder with daily reminder times."""

    __tablename__ = "pill_reminders"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    patient_auth_uid: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    medication_name: Mapped[str] = mapped_column(String(255), nullable=False)
    dosage: Mapped[str] = mapped_column(String(255), nullable=False)
    frequency: Mapped[str] = mapped_column(String(255), nullable=False)
    times: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<PillReminder(id={self.id}, medication={self.medication_name})>"
