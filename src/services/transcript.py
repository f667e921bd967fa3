"""
Transcript store: reducer-style state transitions for the conversation.
`reduce` is pure; TranscriptStore holds the current state and notifies
subscribers after every effective mutation.
"""

from typing import Callable, Literal, Union
from pydantic import BaseModel, ConfigDict

from src.models.domain import (
    BotEntry,
    ConversationState,
    FailureKind,
    MedicineRecord,
    UserEntry,
)
from src.utils.ui_text import load_ui_text
from src.utils.logger import get_logger

logger = get_logger(__name__)

UI_TEXT = load_ui_text()
ERROR_MESSAGE = UI_TEXT["messages"]["error"]

Listener = Callable[[ConversationState], None]


class AppendUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["append_user"] = "append_user"
    text: str


class AppendBot(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["append_bot"] = "append_bot"
    text: str
    medicines: tuple[MedicineRecord, ...] = ()


class AppendBotError(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["append_bot_error"] = "append_bot_error"
    cause: FailureKind


class SetPending(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["set_pending"] = "set_pending"
    pending: bool


Action = Union[AppendUser, AppendBot, AppendBotError, SetPending]


def reduce(state: ConversationState, action: Action) -> ConversationState:
    """
    Computes the next conversation state.

    Args:
        state: Current state (never mutated)
        action: Transition to apply

    Returns:
        Next state; the same object when the action is a no-op
    """
    if isinstance(action, AppendUser):
        text = action.text.strip()
        if not text:
            return state
        return state.model_copy(
            update={"entries": state.entries + (UserEntry(text=text),)}
        )

    if isinstance(action, AppendBot):
        entry = BotEntry(text=action.text, medicines=action.medicines)
        return state.model_copy(update={"entries": state.entries + (entry,)})

    if isinstance(action, AppendBotError):
        entry = BotEntry(text=ERROR_MESSAGE, failure=action.cause)
        return state.model_copy(update={"entries": state.entries + (entry,)})

    if isinstance(action, SetPending):
        if state.pending == action.pending:
            return state
        return state.model_copy(update={"pending": action.pending})

    raise TypeError(f"Unknown transcript action: {type(action).__name__}")


class TranscriptStore:
    """
    Owner of the ConversationState for one chat session.
    Every mutation goes through `dispatch`, which re-renders subscribers.
    """

    def __init__(self, state: ConversationState | None = None):
        self._state = state or ConversationState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ConversationState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Registers a callback invoked with the new state after each mutation.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> ConversationState:
        next_state = reduce(self._state, action)
        if next_state is self._state:
            return next_state

        self._state = next_state
        logger.debug(
            "transcript_updated",
            action=action.type,
            entries=len(next_state.entries),
            pending=next_state.pending,
        )
        for listener in list(self._listeners):
            listener(next_state)
        return next_state

    def append_user(self, text: str) -> ConversationState:
        return self.dispatch(AppendUser(text=text))

    def append_bot(
        self, text: str, medicines: tuple[MedicineRecord, ...] = ()
    ) -> ConversationState:
        return self.dispatch(AppendBot(text=text, medicines=tuple(medicines)))

    def append_bot_error(self, cause: FailureKind) -> ConversationState:
        return self.dispatch(AppendBotError(cause=cause))

    def set_pending(self, pending: bool) -> ConversationState:
        return self.dispatch(SetPending(pending=pending))
