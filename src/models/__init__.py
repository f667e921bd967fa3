"""
Models package exports for domain and wire schemas.
"""

from src.models.domain import (
    BotEntry,
    ConversationState,
    DisclosureState,
    DispatchState,
    FailureKind,
    MedicineRecord,
    TranscriptEntry,
    UserEntry,
)
from src.models.schemas import AnswerRequest, AnswerResponse

__all__ = [
    "BotEntry",
    "ConversationState",
    "DisclosureState",
    "DispatchState",
    "FailureKind",
    "MedicineRecord",
    "TranscriptEntry",
    "UserEntry",
    "AnswerRequest",
    "AnswerResponse",
]
