"""Append-only patient chat log."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from medimind.database import Base, new_sortable_id, utcnow


class SenderRole(str, enum.Enum):
    """Who authored a chat message."""

    PATIENT = "patient"
    ASSISTANT = "assistant"


class ChatMessage(Base):
    """A single turn in a patient's conversation with the assistant."""

    __tablename__ = "chat_messages"

    # Time-ordered so history ties on sent_at keep insertion order
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_sortable_id)
    patient_auth_uid: Mapped[str] = mapped_column(Text, nullable=False)
    sender_role: Mapped[SenderRole] = mapped_column(
        Enum(SenderRole, name="sender_role", create_constraint=True),
        nullable=False,
    )
    sender_name: Mapped[str] = mapped_column(String(255), nullable=False)
    message_text: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    __table_args__ = (
        Index("idx_chat_messages_patient_sent", "patient_auth_uid", "sent_at"),
    )

    @property
    def is_user(self) -> bool:
        return self.sender_role == SenderRole.PATIENT

    def __repr__(self) -> str:
        return f"<ChatMessage(id={self.id}, patient={self.patient_auth_uid}, role={self.sender_role})>"
