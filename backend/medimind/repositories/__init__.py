"""Repository layer for data access.

Repositories encapsulate database operations and provide a clean interface
for CRUD operations on domain objects.
"""

from medimind.repositories.chat import ChatMessageRepository
from medimind.repositories.context import DatabaseContextStore
from medimind.repositories.instruction import AiInstructionRepository
from medimind.repositories.patient import (
    AuthUidAlreadyLinkedError,
    PatientRecordNotFoundError,
    PatientRecordRepository,
)

__all__ = [
    "AiInstructionRepository",
    "AuthUidAlreadyLinkedError",
    "ChatMessageRepository",
    "DatabaseContextStore",
    "PatientRecordNotFoundError",
    "PatientRecordRepository",
]
