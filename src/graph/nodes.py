"""
Graph nodes implementing one answer request/response cycle.
Each node is thin and delegates to the answer client or the normalizer.
"""

import asyncio
from src.models.domain import DispatchState, FailureKind
from src.services.answer_client import AnswerServiceClient, AnswerServiceError
from src.services.normalizer import normalize_answer
from src.services.transcript import ERROR_MESSAGE
from src.utils.logger import get_logger

logger = get_logger(__name__)


class DispatchNodes:
    """
    Container for the dispatch graph node functions.
    """

    def __init__(self, answer_service: AnswerServiceClient):
        """
        Initialize graph nodes with the answer service client.

        Args:
            answer_service: Client performing the HTTP call
        """
        self.answer_service = answer_service

    async def fetch_answer_node(self, state: DispatchState) -> dict:
        """
        Calls the answer service once (async).
        Catch boundary for the failure taxonomy: errors become `failure`.
        """
        logger.info("node_started", node="fetch_answer", limit=state["limit"])
        try:
            response = await asyncio.to_thread(
                self.answer_service.fetch_answer, state["query"], state["limit"]
            )
        except AnswerServiceError as e:
            logger.warning("answer_unavailable", kind=e.kind.value, error=str(e))
            return {"response": None, "failure": e.kind}

        return {"response": response, "failure": None}

    def normalize_answer_node(self, state: DispatchState) -> dict:
        """Turns the validated response into bot entry content."""
        logger.info("node_started", node="normalize_answer")
        answer_text, medicines = normalize_answer(state["response"])
        return {"answer_text": answer_text, "medicines": medicines}

    def record_failure_node(self, state: DispatchState) -> dict:
        """Produces the apology entry content for any failure cause."""
        failure = state.get("failure") or FailureKind.SHAPE
        logger.info("node_started", node="record_failure", kind=failure.value)
        return {"answer_text": ERROR_MESSAGE, "medicines": (), "failure": failure}
