"""
Query dispatcher orchestrating one submission against the answer service.
Implements the idle -> validating -> pending -> success|failure -> idle cycle.
"""

from enum import Enum
from src.models.domain import FailureKind
from src.services.transcript import TranscriptStore
from src.utils.logger import get_logger

logger = get_logger(__name__)


class DispatchPhase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class SubmitOutcome(str, Enum):
    """Result of one call to QueryDispatcher.submit."""

    ANSWERED = "answered"
    FAILED = "failed"
    IGNORED_PENDING = "ignored_pending"
    REJECTED_EMPTY = "rejected_empty"


class QueryDispatcher:
    """
    Single-flight dispatcher: at most one submission is pending at a time.
    """

    def __init__(self, store: TranscriptStore, graph, limit: int = 10):
        """
        Initialize query dispatcher.

        Args:
            store: Transcript store receiving user and bot entries
            graph: Compiled dispatch graph (see build_dispatch_graph)
            limit: Result-count ceiling sent with every question
        """
        self.store = store
        self.graph = graph
        self.limit = limit
        self.phase = DispatchPhase.IDLE
        self.last_failure: FailureKind | None = None

    async def submit(self, text: str) -> SubmitOutcome:
        """
        Handles a user submission end to end (async).

        Args:
            text: Raw input field content

        Returns:
            SubmitOutcome describing what happened
        """
        if self.store.state.pending:
            logger.info("submission_ignored", reason="request_pending")
            return SubmitOutcome.IGNORED_PENDING

        self.phase = DispatchPhase.VALIDATING
        query = text.strip()
        if not query:
            self.phase = DispatchPhase.IDLE
            logger.info("submission_ignored", reason="empty_input")
            return SubmitOutcome.REJECTED_EMPTY

        # No await between the guard and set_pending: nothing can interleave.
        self.store.append_user(query)
        self.store.set_pending(True)
        self.phase = DispatchPhase.PENDING
        self.last_failure = None
        logger.info("submission_accepted", query_length=len(query), limit=self.limit)

        try:
            result = await self.graph.ainvoke({"query": query, "limit": self.limit})

            failure = result.get("failure")
            if failure:
                self.phase = DispatchPhase.FAILURE
                self.last_failure = failure
                self.store.append_bot_error(failure)
                return SubmitOutcome.FAILED

            self.phase = DispatchPhase.SUCCESS
            self.store.append_bot(result["answer_text"], result.get("medicines", ()))
            return SubmitOutcome.ANSWERED
        finally:
            self.store.set_pending(False)
            logger.info("submission_completed", phase=self.phase.value)
            self.phase = DispatchPhase.IDLE
