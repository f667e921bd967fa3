"""
Chat session wiring.
Builds the store, disclosure controller and dispatcher for one UI session.
"""

import uuid
from dataclasses import dataclass, field

from src import config
from src.graph.builder import build_dispatch_graph
from src.models.domain import ConversationState
from src.services.answer_client import AnswerServiceClient
from src.services.disclosure import DisclosureController
from src.services.dispatcher import QueryDispatcher
from src.services.transcript import TranscriptStore
from src.ui.projection import TranscriptView, project
from src.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ChatSession:
    """All mutable state of one chat page, plus its dispatcher."""

    store: TranscriptStore
    disclosure: DisclosureController
    dispatcher: QueryDispatcher
    currency_symbol: str = "₹"
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def state(self) -> ConversationState:
        return self.store.state

    def view(self) -> TranscriptView:
        """Current view tree (render projection of store + disclosure)."""
        return project(self.store.state, self.disclosure.state, self.currency_symbol)


def create_chat_session(
    settings: config.Settings | None = None,
    answer_service: AnswerServiceClient | None = None,
) -> ChatSession:
    """
    Creates a chat session from settings.

    Args:
        settings: Application settings (defaults to get_settings())
        answer_service: Optional client override (used by tests)

    Returns:
        Ready-to-use ChatSession
    """
    settings = settings or config.get_settings()
    answer_service = answer_service or AnswerServiceClient(
        url=settings.answer_service_url,
        timeout=settings.answer_timeout_seconds,
    )

    store = TranscriptStore()
    dispatcher = QueryDispatcher(
        store=store,
        graph=build_dispatch_graph(answer_service),
        limit=settings.answer_result_limit,
    )
    session = ChatSession(
        store=store,
        disclosure=DisclosureController(store),
        dispatcher=dispatcher,
        currency_symbol=settings.currency_symbol,
    )
    logger.info(
        "chat_session_created",
        chat_session=session.session_id,
        answer_service_url=answer_service.url,
    )
    return session
