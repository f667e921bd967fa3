"""
Shared test fixtures and configuration.
"""

import pytest
from unittest.mock import Mock

from src.config import Settings
from src.models.domain import BotEntry, ConversationState, MedicineRecord, UserEntry
from src.models.schemas import AnswerResponse
from src.services.answer_client import AnswerServiceClient
from src.services.transcript import TranscriptStore
from src.session import create_chat_session


@pytest.fixture
def raw_medicine() -> dict:
    """Raw medicine object with every field populated, as sent on the wire."""
    return {
        "medicine_name": "Crocin 650 Tablet",
        "composition": "Paracetamol (650mg)",
        "uses": "Pain relief, Treatment of Fever",
        "sideeffects": "Nausea, Allergic reaction",
        "image_url": "https://onemg.gumlet.io/images/crocin_650.jpg",
        "manufacturer": "GlaxoSmithKline Pharmaceuticals Ltd",
        "excellent_review_percentage": "48",
        "average_review_percentage": "37",
        "poor_review_percentage": "15",
        "price": "33.6",
        "packsizelabel": "strip of 15 tablets",
        "type": "Tablet",
    }


@pytest.fixture
def second_raw_medicine() -> dict:
    """Second raw medicine, without image."""
    return {
        "medicine_name": "Dolo 650 Tablet",
        "composition": "Paracetamol (650mg)",
        "uses": "Treatment of Fever, Pain relief",
        "sideeffects": "Stomach pain",
        "manufacturer": "Micro Labs Ltd",
        "excellent_review_percentage": "71",
        "average_review_percentage": "20",
        "poor_review_percentage": "9",
        "price": "30.91",
        "packsizelabel": "strip of 15 tablets",
        "type": "Tablet",
    }


@pytest.fixture
def answer_payload(raw_medicine) -> dict:
    """Successful answer service body with one medicine."""
    return {"gemini_answer": "*It* treats pain.", "data": [raw_medicine]}


@pytest.fixture
def mock_answer_service(answer_payload):
    """Mock answer service client for testing without HTTP calls."""
    service = Mock(spec=AnswerServiceClient)
    service.url = "http://answer.test/answer"
    service.fetch_answer = Mock(
        return_value=AnswerResponse.model_validate(answer_payload)
    )
    return service


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults (no env overrides needed)."""
    return Settings()


@pytest.fixture
def chat_session(settings, mock_answer_service):
    """Chat session wired to the mocked answer service."""
    return create_chat_session(settings=settings, answer_service=mock_answer_service)


@pytest.fixture
def paracetamol() -> MedicineRecord:
    return MedicineRecord(
        name="Crocin 650 Tablet",
        composition="Paracetamol (650mg)",
        uses="Pain relief",
        side_effects="Nausea",
        manufacturer="GSK",
        price="33.6",
        pack_size="strip of 15 tablets",
        category="Tablet",
        excellent_review=48,
        average_review=37,
        poor_review=15,
        image_url="https://onemg.gumlet.io/images/crocin_650.jpg",
    )


@pytest.fixture
def two_medicine_state(paracetamol) -> ConversationState:
    """Conversation with one answered question carrying two medicines."""
    twin = paracetamol.model_copy(update={"record_id": "twin-record"})
    return ConversationState(
        entries=(
            UserEntry(text="What is paracetamol used for?"),
            BotEntry(text="It treats pain.", medicines=(paracetamol, twin)),
        )
    )


@pytest.fixture
def two_medicine_store(two_medicine_state) -> TranscriptStore:
    return TranscriptStore(two_medicine_state)
