"""Doctor-authored AI assistant instructions (one row per doctor)."""

from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from medimind.database import Base, utcnow


class AiInstruction(Base):
    """A doctor's customization of the patient chat assistant.

    ``instruction_text`` replaces the default persona for every patient of the
    doctor. ``prompt_text`` carries supplementary guidelines or Q&A examples.
    """

    __tablename__ = "ai_instructions"

    doctor_id: Mapped[str] = mapped_column(Text, primary_key=True)
    instruction_text: Mapped[str] = mapped_column(Text, nullable=False)
    prompt_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<AiInstruction(doctor_id={self.doctor_id})>"
