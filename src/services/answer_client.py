"""
Answer service client.
Performs a single POST per question and classifies every failure into the
transport / protocol / shape taxonomy.
"""

import time
import requests
from pydantic import ValidationError

from src.models.domain import FailureKind
from src.models.schemas import AnswerRequest, AnswerResponse
from src.utils.logger import get_logger

logger = get_logger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class AnswerServiceError(Exception):
    """Base exception for answer service failures."""

    kind: FailureKind


class AnswerTransportError(AnswerServiceError):
    """Raised when the request never completes (DNS, connection, timeout)."""

    kind = FailureKind.TRANSPORT


class AnswerProtocolError(AnswerServiceError):
    """Raised when the service answers with a non-success status code."""

    kind = FailureKind.PROTOCOL

    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(message or f"Answer service returned HTTP {status_code}")
        self.status_code = status_code


class AnswerShapeError(AnswerServiceError):
    """Raised when the body is not JSON or lacks gemini_answer/data."""

    kind = FailureKind.SHAPE


class AnswerServiceClient:
    """
    Thin synchronous client for the answer service.
    No retries: one call is one HTTP request.
    """

    def __init__(
        self,
        url: str,
        timeout: int = 60,
        session: requests.Session | None = None,
    ):
        """
        Initialize answer service client.

        Args:
            url: Full endpoint URL of the answer service
            timeout: Transport timeout in seconds
            session: Optional requests session (injected in tests)
        """
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_answer(self, query: str, limit: int) -> AnswerResponse:
        """
        Sends a question and returns the validated response body.

        Args:
            query: Trimmed user question
            limit: Maximum number of medicine records

        Returns:
            Parsed AnswerResponse

        Raises:
            AnswerTransportError: If the HTTP call raises
            AnswerProtocolError: If the status code is not 2xx
            AnswerShapeError: If the body is not the expected JSON object
        """
        payload = AnswerRequest(text=query, limit=limit).model_dump()
        start_time = time.time()
        logger.info("answer_request_started", url=self.url, limit=limit)

        try:
            response = self.session.post(
                self.url, json=payload, headers=JSON_HEADERS, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(
                "answer_request_failed",
                exc_info=True,
                kind=FailureKind.TRANSPORT.value,
                elapsed=time.time() - start_time,
            )
            raise AnswerTransportError(f"Answer service unreachable: {e}") from e

        elapsed = time.time() - start_time

        if not response.ok:
            logger.error(
                "answer_request_failed",
                kind=FailureKind.PROTOCOL.value,
                status_code=response.status_code,
                elapsed=elapsed,
            )
            raise AnswerProtocolError(response.status_code)

        try:
            body = response.json()
            answer = AnswerResponse.model_validate(body)
        except (ValueError, ValidationError) as e:
            logger.error(
                "answer_request_failed",
                exc_info=True,
                kind=FailureKind.SHAPE.value,
                elapsed=elapsed,
            )
            raise AnswerShapeError(f"Unexpected answer payload: {e}") from e

        logger.info(
            "answer_request_completed",
            status_code=response.status_code,
            medicines=len(answer.data),
            elapsed=elapsed,
        )
        return answer
