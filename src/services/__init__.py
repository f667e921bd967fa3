"""
Services package exports for the conversation core.
"""

from src.services.answer_client import (
    AnswerServiceClient,
    AnswerServiceError,
    AnswerTransportError,
    AnswerProtocolError,
    AnswerShapeError,
)
from src.services.normalizer import normalize_answer, normalize_medicine
from src.services.transcript import TranscriptStore, reduce
from src.services.disclosure import DisclosureController, toggle_disclosure
from src.services.dispatcher import QueryDispatcher, DispatchPhase, SubmitOutcome

__all__ = [
    "AnswerServiceClient",
    "AnswerServiceError",
    "AnswerTransportError",
    "AnswerProtocolError",
    "AnswerShapeError",
    "normalize_answer",
    "normalize_medicine",
    "TranscriptStore",
    "reduce",
    "DisclosureController",
    "toggle_disclosure",
    "QueryDispatcher",
    "DispatchPhase",
    "SubmitOutcome",
]
