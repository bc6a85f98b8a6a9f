"""Chat context resolution for the patient-facing assistant.

Turns ``(patient_auth_uid, user_message)`` into a reply:

1. Identify the patient's record. The auth-provider link
   (``linked_auth_uid``) is tried first; the record key itself is tried second,
   for patients who log in with the doctor-issued record id.
2. Assemble the system instructions, lowest to highest precedence:
   default persona -> doctor's instruction text (replaces the default) ->
   doctor's supplementary prompt text (appended) -> patient-specific prompt
   (appended last).
3. Generate the reply, substituting a fixed apology when generation fails.

Every lookup collapses "not found" and "lookup failed" into ``None``, and the
generation step never raises, so the resolver always returns a ``ChatReply``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from medimind.config import settings
from medimind.models.instruction import AiInstruction
from medimind.models.patient import PatientRecord
from medimind.schemas.chat import ChatReply

logger = logging.getLogger(__name__)

T = TypeVar("T")

DOCTOR_GUIDELINES_INTRO = (
    "Additionally, consider these specific guidelines or Q&A examples from the doctor:"
)
PATIENT_GUIDANCE_INTRO = "For this specific patient, please also consider:"

ReplyFunction = Callable[[str, str], Awaitable[str]]


class ChatContextStore(Protocol):
    """Read-only record lookups the resolver depends on."""

    async def find_patient_record_by_linked_auth_uid(self, auth_uid: str) -> PatientRecord | None: ...

    async def get_patient_record(self, record_id: str) -> PatientRecord | None: ...

    async def get_ai_instruction(self, doctor_id: str) -> AiInstruction | None: ...


# === Patient identity ===


@dataclass(frozen=True)
class ByAuthProvider:
    """Patient identified by an identity-provider uid linked to their record."""

    auth_uid: str


@dataclass(frozen=True)
class ByRecordKey:
    """Patient identified by the patient record key used directly as a login id."""

    record_id: str


PatientIdentity = ByAuthProvider | ByRecordKey


@dataclass(frozen=True)
class ResolvedPatient:
    """A patient record located through one of the identity paths."""

    identity: PatientIdentity
    record_id: str
    doctor_id: str | None
    patient_specific_prompts: str


@dataclass(frozen=True)
class ChatContext:
    """Everything the generation call needs, plus how it was derived."""

    system_instructions: str
    patient: ResolvedPatient | None = None
    used_doctor_instruction: bool = False


def build_system_instructions(
    default_persona: str,
    instruction: AiInstruction | None = None,
    patient_specific_prompts: str | None = None,
) -> str:
    """Merge the instruction layers into a single system prompt.

    The doctor's ``instruction_text`` replaces the default persona outright.
    Supplementary ``prompt_text`` and the patient-specific prompt are appended
    as delimited sections, patient-specific last.
    """
    system_instructions = default_persona

    if instruction is not None and instruction.instruction_text:
        system_instructions = instruction.instruction_text
        if instruction.prompt_text:
            system_instructions += f"\n\n{DOCTOR_GUIDELINES_INTRO}\n{instruction.prompt_text}"

    if patient_specific_prompts:
        system_instructions += f"\n\n{PATIENT_GUIDANCE_INTRO} {patient_specific_prompts}"

    return system_instructions


class ChatContextResolver:
    """Resolves chat context for a patient and produces the assistant reply.

    Args:
        store: Record lookups (see ``ChatContextStore``).
        generate_reply: ``async (system_instructions, user_message) -> str``.
            May raise; failures become the fallback reply.
        default_persona: Base system prompt when no doctor instruction applies.
            Defaults to ``settings.default_persona``.
        fallback_reply: Reply returned when generation fails. Defaults to
            ``settings.fallback_reply``.
    """

    def __init__(
        self,
        store: ChatContextStore,
        generate_reply: ReplyFunction,
        default_persona: str | None = None,
        fallback_reply: str | None = None,
    ):
        self._store = store
        self._generate_reply = generate_reply
        self.default_persona = default_persona if default_persona is not None else settings.default_persona
        self.fallback_reply = fallback_reply if fallback_reply is not None else settings.fallback_reply

    async def _lookup(self, description: str, lookup: Callable[[str], Awaitable[T | None]], key: str) -> T | None:
        """Run a store lookup, treating any failure as absence."""
        try:
            return await lookup(key)
        except Exception:
            logger.warning("Lookup of %s %s failed; continuing without it", description, key, exc_info=True)
            return None

    async def identify_patient(self, patient_auth_uid: str) -> ResolvedPatient | None:
        """Normalize a login id into a resolved patient record.

        Tries the identity-provider link first and the record key second.
        Returns None when neither path finds a record.
        """
        identity: PatientIdentity = ByAuthProvider(patient_auth_uid)
        record = await self._lookup(
            "patient record by linked auth uid",
            self._store.find_patient_record_by_linked_auth_uid,
            patient_auth_uid,
        )
        if record is None:
            identity = ByRecordKey(patient_auth_uid)
            record = await self._lookup(
                "patient record by key",
                self._store.get_patient_record,
                patient_auth_uid,
            )
        if record is None:
            logger.info("No patient record found for %s", patient_auth_uid)
            return None

        logger.info(
            "Found patient record %s via %s, doctor_id=%s",
            record.id, type(identity).__name__, record.doctor_id,
        )
        return ResolvedPatient(
            identity=identity,
            record_id=record.id,
            doctor_id=record.doctor_id or None,
            patient_specific_prompts=record.patient_specific_prompts or "",
        )

    async def assemble_context(self, patient_auth_uid: str) -> ChatContext:
        """Build the merged system instructions for a patient."""
        patient = await self.identify_patient(patient_auth_uid)
        if patient is None:
            return ChatContext(system_instructions=self.default_persona)

        instruction = None
        if patient.doctor_id:
            instruction = await self._lookup(
                "AI instruction for doctor",
                self._store.get_ai_instruction,
                patient.doctor_id,
            )
            if instruction is None:
                logger.info("No AI instruction for doctor %s, using default persona", patient.doctor_id)

        system_instructions = build_system_instructions(
            self.default_persona,
            instruction=instruction,
            patient_specific_prompts=patient.patient_specific_prompts,
        )
        return ChatContext(
            system_instructions=system_instructions,
            patient=patient,
            used_doctor_instruction=bool(instruction is not None and instruction.instruction_text),
        )

    async def resolve_chat_reply(self, patient_auth_uid: str, user_message: str) -> ChatReply:
        """Produce the assistant's reply to a patient message. Never raises."""
        try:
            context = await self.assemble_context(patient_auth_uid)
        except Exception:
            logger.exception("Chat context assembly failed for %s; using default persona", patient_auth_uid)
            context = ChatContext(system_instructions=self.default_persona)

        logger.debug(
            "System instructions for %s: %d chars, doctor instruction=%s",
            patient_auth_uid, len(context.system_instructions), context.used_doctor_instruction,
        )

        try:
            reply = await self._generate_reply(context.system_instructions, user_message)
        except Exception:
            logger.exception("Reply generation failed for %s", patient_auth_uid)
            return ChatReply(ai_response=self.fallback_reply)

        if not isinstance(reply, str) or not reply.strip():
            logger.error("Reply generation returned no output for %s", patient_auth_uid)
            return ChatReply(ai_response=self.fallback_reply)

        return ChatReply(ai_response=reply)
