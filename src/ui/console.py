"""
Plain-text rendering of the transcript view for the console chat.
"""

import textwrap
from src.ui.projection import MedicineCard, TranscriptView, TypingIndicator
from src.utils.ui_text import load_ui_text

UI_TEXT = load_ui_text()
WIDTH = 72
BAR_WIDTH = 20


def render_review_bar(label: str, value: int | None, width_percent: int) -> str:
    filled = round(BAR_WIDTH * width_percent / 100)
    bar = "#" * filled + "." * (BAR_WIDTH - filled)
    shown = "-" if value is None else f"{value}%"
    return f"{label:<10} [{bar}] {shown}"


def render_card(number: int, card: MedicineCard) -> list[str]:
    labels = UI_TEXT["medicines"]
    marker = "v" if card.expanded else ">"
    lines = [f"  {marker} [{number}] {card.name}"]
    if card.uses:
        lines.extend(textwrap.wrap(card.uses, WIDTH, initial_indent="      ", subsequent_indent="      "))
    lines.append(f"      {card.category} | {card.price_label}")

    detail = card.detail
    if detail is None:
        return lines

    if detail.image_url:
        lines.append(f"      Image: {detail.image_url}")
    for label, value in (
        (labels["composition"], detail.composition),
        (labels["side_effects"], detail.side_effects),
        (labels["manufacturer"], detail.manufacturer),
        (labels["pack_size"], detail.pack_size),
        (labels["category"], detail.category),
        (labels["price"], detail.price_label),
    ):
        lines.append(f"      {label}: {value}")
    lines.append(f"      {labels['reviews']}:")
    for review in detail.reviews:
        lines.append("        " + render_review_bar(review.label, review.value, review.width_percent))
    return lines


def render_text(view: TranscriptView) -> str:
    """
    Renders the whole view. Cards are numbered in display order so the
    console can address them with `/toggle N`.
    """
    lines = [view.header.title, view.header.subtitle, "=" * WIDTH]
    card_number = 0

    for block in view.blocks:
        if isinstance(block, TypingIndicator):
            lines.append(f"Bot: {block.text}")
            continue

        if block.role == "user":
            lines.append(f"{'You: ' + block.text:>{WIDTH}}")
            continue

        lines.append(f"Bot: {block.text}")
        if block.medicines:
            lines.append(f"  {block.medicines_heading}")
        for card in block.medicines:
            card_number += 1
            lines.extend(render_card(card_number, card))

    return "\n".join(lines)
