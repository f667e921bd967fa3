"""
Integration tests for complete submission cycles.
Runs the real dispatch graph against a mocked answer service.
"""

import asyncio
import threading
import pytest
from unittest.mock import Mock

from src.models.domain import BotEntry, FailureKind, UserEntry
from src.models.schemas import AnswerResponse
from src.services.answer_client import (
    AnswerProtocolError,
    AnswerShapeError,
    AnswerTransportError,
)
from src.services.dispatcher import DispatchPhase, SubmitOutcome
from src.services.transcript import ERROR_MESSAGE


def count_entries(state) -> tuple[int, int]:
    users = sum(isinstance(entry, UserEntry) for entry in state.entries)
    bots = sum(isinstance(entry, BotEntry) for entry in state.entries)
    return users, bots


@pytest.mark.integration
class TestSuccessfulSubmission:
    """Happy path through validation, request and normalization."""

    @pytest.mark.asyncio
    async def test_markup_answer_with_one_record(self, chat_session, mock_answer_service):
        """Should store the cleaned answer and one medicine record."""
        # Act
        outcome = await chat_session.dispatcher.submit("What is paracetamol used for?")

        # Assert
        assert outcome == SubmitOutcome.ANSWERED
        user, bot = chat_session.state.entries
        assert user.text == "What is paracetamol used for?"
        assert bot.text == "It treats pain."
        assert len(bot.medicines) == 1
        assert bot.medicines[0].name == "Crocin 650 Tablet"
        assert bot.failure is None
        assert chat_session.state.pending is False
        mock_answer_service.fetch_answer.assert_called_once_with(
            "What is paracetamol used for?", 10
        )

    @pytest.mark.asyncio
    async def test_sends_trimmed_text(self, chat_session, mock_answer_service):
        """Should send and store the trimmed question."""
        await chat_session.dispatcher.submit("   ibuprofen dose?  \n")

        mock_answer_service.fetch_answer.assert_called_once_with("ibuprofen dose?", 10)
        assert chat_session.state.entries[0].text == "ibuprofen dose?"

    @pytest.mark.asyncio
    async def test_pending_is_true_during_request(self, chat_session, mock_answer_service, answer_payload):
        """Should keep pending set for the whole network round-trip."""
        # Arrange
        seen = {}

        def fetch(query, limit):
            seen["pending"] = chat_session.state.pending
            seen["entries"] = len(chat_session.state.entries)
            return AnswerResponse.model_validate(answer_payload)

        mock_answer_service.fetch_answer.side_effect = fetch
        pending_history = []
        chat_session.store.subscribe(lambda state: pending_history.append(state.pending))

        # Act
        await chat_session.dispatcher.submit("paracetamol")

        # Assert
        assert seen == {"pending": True, "entries": 1}
        assert pending_history == [False, True, True, False]
        assert chat_session.dispatcher.phase == DispatchPhase.IDLE


@pytest.mark.integration
class TestFailedSubmission:
    """Failure paths all collapse to the apology entry."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error, kind",
        [
            (AnswerProtocolError(500), FailureKind.PROTOCOL),
            (AnswerTransportError("connection reset"), FailureKind.TRANSPORT),
            (AnswerShapeError("missing data"), FailureKind.SHAPE),
        ],
    )
    async def test_failure_appends_apology(self, chat_session, mock_answer_service, error, kind):
        """Should append the fixed apology, no medicines, and clear pending."""
        # Arrange
        mock_answer_service.fetch_answer.side_effect = error

        # Act
        outcome = await chat_session.dispatcher.submit("What is paracetamol used for?")

        # Assert
        assert outcome == SubmitOutcome.FAILED
        bot = chat_session.state.entries[-1]
        assert bot.text == ERROR_MESSAGE
        assert bot.medicines == ()
        assert bot.failure == kind
        assert chat_session.dispatcher.last_failure == kind
        assert chat_session.state.pending is False
        assert chat_session.dispatcher.phase == DispatchPhase.IDLE

    @pytest.mark.asyncio
    async def test_no_retry_after_failure(self, chat_session, mock_answer_service):
        """Should call the service exactly once per submission."""
        mock_answer_service.fetch_answer.side_effect = AnswerProtocolError(503)

        await chat_session.dispatcher.submit("paracetamol")

        assert mock_answer_service.fetch_answer.call_count == 1

    @pytest.mark.asyncio
    async def test_can_resubmit_after_failure(self, chat_session, mock_answer_service, answer_payload):
        """Should accept a manual resubmission once the failure is recorded."""
        # Arrange
        mock_answer_service.fetch_answer.side_effect = [
            AnswerTransportError("offline"),
            AnswerResponse.model_validate(answer_payload),
        ]

        # Act
        first = await chat_session.dispatcher.submit("paracetamol")
        second = await chat_session.dispatcher.submit("paracetamol")

        # Assert
        assert (first, second) == (SubmitOutcome.FAILED, SubmitOutcome.ANSWERED)
        assert count_entries(chat_session.state) == (2, 2)
        assert chat_session.dispatcher.last_failure is None


@pytest.mark.integration
class TestSubmissionGuards:
    """Validation gate and single-flight guard."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    async def test_blank_input_is_rejected(self, chat_session, mock_answer_service, text):
        """Should not append entries nor call the service."""
        outcome = await chat_session.dispatcher.submit(text)

        assert outcome == SubmitOutcome.REJECTED_EMPTY
        assert chat_session.state.entries == ()
        mock_answer_service.fetch_answer.assert_not_called()

    @pytest.mark.asyncio
    async def test_second_submission_while_pending_is_discarded(
        self, chat_session, mock_answer_service, answer_payload
    ):
        """Should keep one user/bot pair and drop the second text."""
        # Arrange
        release = threading.Event()

        def slow_fetch(query, limit):
            release.wait(timeout=5)
            return AnswerResponse.model_validate(answer_payload)

        mock_answer_service.fetch_answer.side_effect = slow_fetch

        # Act
        first = asyncio.create_task(chat_session.dispatcher.submit("first question"))
        while not chat_session.state.pending:
            await asyncio.sleep(0)
        second = await chat_session.dispatcher.submit("second question")
        release.set()
        first_outcome = await first

        # Assert
        assert second == SubmitOutcome.IGNORED_PENDING
        assert first_outcome == SubmitOutcome.ANSWERED
        texts = [entry.text for entry in chat_session.state.entries]
        assert texts == ["first question", "It treats pain."]
        assert mock_answer_service.fetch_answer.call_count == 1

    @pytest.mark.asyncio
    async def test_user_and_bot_counts_match_after_each_cycle(
        self, chat_session, mock_answer_service, answer_payload
    ):
        """Should never leave an orphaned user turn."""
        # Arrange
        ok = AnswerResponse.model_validate(answer_payload)
        mock_answer_service.fetch_answer.side_effect = [
            ok,
            AnswerProtocolError(500),
            ok,
            AnswerShapeError("bad"),
        ]

        # Act / Assert
        for text in ["one", "  ", "two", "three", "", "four"]:
            await chat_session.dispatcher.submit(text)
            users, bots = count_entries(chat_session.state)
            assert users == bots

        assert count_entries(chat_session.state) == (4, 4)


@pytest.mark.integration
class TestDisclosureAcrossSubmissions:
    """Card disclosure survives later submissions."""

    @pytest.mark.asyncio
    async def test_expanded_card_survives_new_submission(
        self, chat_session, mock_answer_service, raw_medicine, second_raw_medicine
    ):
        """Should keep each card's flag independent after re-rendering."""
        # Arrange
        mock_answer_service.fetch_answer.side_effect = [
            AnswerResponse(
                gemini_answer="Both treat fever.",
                data=[raw_medicine, second_raw_medicine],
            ),
            AnswerResponse(gemini_answer="Take after meals.", data=[]),
        ]
        await chat_session.dispatcher.submit("fever tablets?")
        first_card, second_card = chat_session.view().cards()

        # Act
        chat_session.disclosure.toggle(second_card.record_id)
        await chat_session.dispatcher.submit("when to take them?")
        cards = chat_session.view().cards()

        # Assert
        assert [card.expanded for card in cards] == [False, True]
        assert cards[1].detail is not None
        assert cards[0].detail is None

        # Act
        chat_session.disclosure.toggle(first_card.record_id)
        chat_session.disclosure.toggle(second_card.record_id)

        # Assert
        assert [card.expanded for card in chat_session.view().cards()] == [True, False]
        assert len(chat_session.state.entries) == 4
