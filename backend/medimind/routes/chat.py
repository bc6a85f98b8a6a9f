"""Patient chat API routes."""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.auth import require_patient
from medimind.config import settings
from medimind.database import get_db
from medimind.models.chat import SenderRole
from medimind.models.user import UserProfile
from medimind.repositories import ChatMessageRepository, DatabaseContextStore
from medimind.schemas.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatReply,
    ChatRequest,
)
from medimind.services.chat_context import ChatContextResolver
from medimind.services.llm import ReplyGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


async def get_reply_generator() -> AsyncGenerator[ReplyGenerator, None]:
    """Provide a reply generator for the request and close it afterwards."""
    generator = ReplyGenerator()
    try:
        yield generator
    finally:
        await generator.close()


@router.post("", response_model=ChatReply)
async def chat(
    request: ChatRequest,
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(require_patient),
    generator: ReplyGenerator = Depends(get_reply_generator),
) -> ChatReply:
    """Send a message to the assistant and get its reply.

    This endpoint:
    1. Appends the patient's message to their chat log
    2. Resolves the doctor/patient context and generates a reply
    3. Appends the assistant's reply to the chat log

    Generation problems never fail the request; the reply is then a fixed
    apology.

    Args:
        request: Chat request with the patient's message.
        db: Database session (injected).
        profile: Authenticated patient profile (injected).
        generator: Reply generator (injected).

    Returns:
        ChatReply serialized as ``{"aiResponse": ...}``.
    """
    patient_uid = profile.user_id
    messages = ChatMessageRepository(db)

    await messages.append(
        patient_auth_uid=patient_uid,
        sender_role=SenderRole.PATIENT,
        sender_name=profile.display_name,
        message_text=request.message,
    )

    resolver = ChatContextResolver(
        store=DatabaseContextStore(db),
        generate_reply=generator.generate_reply,
    )
    reply = await resolver.resolve_chat_reply(patient_uid, request.message)

    await messages.append(
        patient_auth_uid=patient_uid,
        sender_role=SenderRole.ASSISTANT,
        sender_name=settings.assistant_name,
        message_text=reply.ai_response,
    )
    return reply


@router.get("/history", response_model=ChatHistoryResponse)
async def chat_history(
    db: AsyncSession = Depends(get_db),
    profile: UserProfile = Depends(require_patient),
) -> ChatHistoryResponse:
    """Return the authenticated patient's chat log, oldest first."""
    history = await ChatMessageRepository(db).history(profile.user_id)
    return ChatHistoryResponse(
        items=[ChatMessageResponse.model_validate(m) for m in history],
    )
