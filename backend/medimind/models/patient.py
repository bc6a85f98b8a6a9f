"""Doctor-managed patient records.

A patient record is created by a doctor before the patient ever signs in. Once
the patient authenticates with the identity provider, the record is linked to
their auth uid via ``linked_auth_uid``. Patients who sign in with the
doctor-issued record id instead use the record key itself as their login id.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from medimind.database import Base, new_id, utcnow


class PatientRecord(Base):
    """Patient record owned by a doctor."""

    __tablename__ = "patient_records"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)

    # === Ownership and linking ===
    doctor_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    linked_auth_uid: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        index=True,
        comment="Identity-provider uid of the patient once linked",
    )

    # === Assistant guidance ===
    patient_specific_prompts: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Doctor-authored guidance for the assistant, scoped to this patient",
    )

    # === Demographics ===
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    id_number: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Doctor-assigned patient number, e.g. P001",
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date_of_birth: Mapped[str | None] = mapped_column(String(10), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_patient_records_doctor_created", "doctor_id", "created_at"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<PatientRecord(id={self.id}, doctor_id={self.doctor_id}, id_number={self.id_number})>"
