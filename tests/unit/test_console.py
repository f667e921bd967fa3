"""
Unit tests for the console renderer and the /toggle command.
"""

import pytest
from unittest.mock import Mock

import chat
from chat import handle_toggle
from src.models.domain import DisclosureState
from src.services.normalizer import normalize_medicine
from src.ui.console import render_review_bar, render_text
from src.ui.projection import project


class TestRenderText:
    """Tests for plain-text rendering."""

    def test_numbers_cards_in_display_order(self, two_medicine_state):
        """Should number every card so it can be toggled by position."""
        # Act
        text = render_text(project(two_medicine_state, DisclosureState()))

        # Assert
        assert "Medicine AI Assistant" in text
        assert "You: What is paracetamol used for?" in text
        assert "Bot: It treats pain." in text
        assert "[1] Crocin 650 Tablet" in text
        assert "[2] Crocin 650 Tablet" in text
        assert "Composition" not in text

    def test_expanded_card_lists_details(self, two_medicine_state):
        """Should print details and review bars for expanded cards."""
        # Arrange
        record = two_medicine_state.entries[1].medicines[0]
        disclosure = DisclosureState(expanded=frozenset({record.record_id}))

        # Act
        text = render_text(project(two_medicine_state, disclosure))

        # Assert
        assert "Composition: Paracetamol (650mg)" in text
        assert "Manufacturer: GSK" in text
        assert "Excellent" in text
        assert text.count("Composition:") == 1

    def test_review_bar(self):
        """Should fill the bar proportionally to the percentage."""
        assert render_review_bar("Poor", 50, 50) == f"{'Poor':<10} [{'#' * 10}{'.' * 10}] 50%"
        assert render_review_bar("Poor", None, 0).endswith("] -")


class TestToggleCommand:
    """Tests for the console /toggle command."""

    def test_toggles_card_by_number(self, chat_session):
        """Should expand the addressed card."""
        # Arrange
        medicine = normalize_medicine({"medicine_name": "Dolo 650"})
        chat_session.store.append_user("Fever tablets?")
        chat_session.store.append_bot("Here you go.", (medicine,))

        # Act
        error = handle_toggle(chat_session, "1")

        # Assert
        assert error is None
        assert chat_session.disclosure.is_expanded(medicine.record_id)

    def test_rejects_bad_numbers(self, chat_session):
        """Should explain invalid card numbers."""
        assert handle_toggle(chat_session, "abc").startswith("Usage:")
        assert handle_toggle(chat_session, "3") == "No medicine card #3."


class TestConsoleBanner:
    """Tests for the console chat loop start-up."""

    @pytest.mark.asyncio
    async def test_banner_shows_header_description(self, chat_session, monkeypatch, capsys):
        """Should greet with the title and description, then exit on EOF."""
        # Arrange
        monkeypatch.setattr(chat, "configure_logging", lambda **kwargs: None)
        monkeypatch.setattr("builtins.input", Mock(side_effect=EOFError))

        # Act
        await chat.run_console_chat(chat_session)

        # Assert
        out = capsys.readouterr().out
        assert "Medicine AI Assistant - Type 'exit' or 'quit' to stop" in out
        assert "A Generative AI for Medicine Information" in out
        assert out.rstrip().endswith("Goodbye! Take care.")
