"""Chat message repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.models.chat import ChatMessage, SenderRole


class ChatMessageRepository:
    """Append-only access to the patient chat log."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def append(
        self,
        patient_auth_uid: str,
        sender_role: SenderRole,
        sender_name: str,
        message_text: str,
    ) -> ChatMessage:
        message = ChatMessage(
            patient_auth_uid=patient_auth_uid,
            sender_role=sender_role,
            sender_name=sender_name,
            message_text=message_text,
        )
        self.db.add(message)
        await self.db.flush()
        await self.db.refresh(message)
        return message

    async def history(self, patient_auth_uid: str, limit: int | None = None) -> list[ChatMessage]:
        """Return a patient's messages oldest first, ties broken by the time-ordered id."""
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.patient_auth_uid == patient_auth_uid)
            .order_by(ChatMessage.sent_at.asc(), ChatMessage.id.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
