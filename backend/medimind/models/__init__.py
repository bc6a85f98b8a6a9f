"""SQLAlchemy models."""

from medimind.models.auth import BetterAuthSession, BetterAuthUser
from medimind.models.chat import ChatMessage, SenderRole
from medimind.models.clinical import Appointment, Diagnosis, PillReminder
from medimind.models.instruction import AiInstruction
from medimind.models.patient import PatientRecord
from medimind.models.user import UserProfile, UserType

__all__ = [
    "AiInstruction",
    "Appointment",
    "BetterAuthSession",
    "BetterAuthUser",
    "ChatMessage",
    "Diagnosis",
    "PatientRecord",
    "PillReminder",
    "SenderRole",
    "UserProfile",
    "UserType",
]
