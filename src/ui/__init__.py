"""
UI package: render projection and the text renderer for the console chat.
"""

from src.ui.projection import (
    MedicineCard,
    MedicineDetail,
    MessageBlock,
    ReviewBar,
    TranscriptView,
    TypingIndicator,
    project,
)
from src.ui.console import render_text

__all__ = [
    "MedicineCard",
    "MedicineDetail",
    "MessageBlock",
    "ReviewBar",
    "TranscriptView",
    "TypingIndicator",
    "project",
    "render_text",
]
