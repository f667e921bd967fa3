"""
Render projection: pure derivation of the view tree from conversation and
disclosure state. Recomputed on every state change; holds no state.
"""

from typing import Literal, Union
from pydantic import BaseModel, ConfigDict

from src.models.domain import (
    BotEntry,
    ConversationState,
    DisclosureState,
    MedicineRecord,
    UserEntry,
)
from src.utils.ui_text import load_ui_text

UI_TEXT = load_ui_text()


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


class ReviewBar(_View):
    label: str
    value: int | None
    width_percent: int
    color: str


class MedicineDetail(_View):
    image_url: str | None
    composition: str
    side_effects: str
    manufacturer: str
    pack_size: str
    category: str
    price_label: str
    reviews: tuple[ReviewBar, ...]


class MedicineCard(_View):
    record_id: str
    name: str
    uses: str
    category: str
    price_label: str
    expanded: bool
    detail: MedicineDetail | None = None


class MessageBlock(_View):
    kind: Literal["message"] = "message"
    role: Literal["user", "bot"]
    align: Literal["left", "right"]
    text: str
    medicines_heading: str | None = None
    medicines: tuple[MedicineCard, ...] = ()


class TypingIndicator(_View):
    kind: Literal["typing"] = "typing"
    align: Literal["left"] = "left"
    text: str


Block = Union[MessageBlock, TypingIndicator]


class Header(_View):
    title: str
    subtitle: str
    description: str


class TranscriptView(_View):
    header: Header
    blocks: tuple[Block, ...]
    input_placeholder: str
    input_enabled: bool

    def cards(self) -> list[MedicineCard]:
        """All medicine cards in display order."""
        return [
            card
            for block in self.blocks
            if isinstance(block, MessageBlock)
            for card in block.medicines
        ]


def price_label(price: str, currency_symbol: str) -> str:
    return f"{currency_symbol}{price}" if price else ""


def project_reviews(record: MedicineRecord) -> tuple[ReviewBar, ...]:
    values = {
        "excellent": record.excellent_review,
        "average": record.average_review,
        "poor": record.poor_review,
    }
    return tuple(
        ReviewBar(
            label=review["label"],
            value=values[review["key"]],
            width_percent=values[review["key"]] or 0,
            color=review["color"],
        )
        for review in UI_TEXT["reviews"]
    )


def project_medicine(
    record: MedicineRecord, expanded: bool, currency_symbol: str
) -> MedicineCard:
    price = price_label(record.price, currency_symbol)
    detail = None
    if expanded:
        detail = MedicineDetail(
            image_url=record.image_url,
            composition=record.composition,
            side_effects=record.side_effects,
            manufacturer=record.manufacturer,
            pack_size=record.pack_size,
            category=record.category,
            price_label=price,
            reviews=project_reviews(record),
        )
    return MedicineCard(
        record_id=record.record_id,
        name=record.name,
        uses=record.uses,
        category=record.category,
        price_label=price,
        expanded=expanded,
        detail=detail,
    )


def project(
    state: ConversationState,
    disclosure: DisclosureState,
    currency_symbol: str = "₹",
) -> TranscriptView:
    """
    Builds the view tree for the current state.

    Args:
        state: Conversation state to display
        disclosure: Expanded card ids
        currency_symbol: Prefix for price labels

    Returns:
        TranscriptView with one block per entry, plus a trailing typing
        indicator while a request is pending
    """
    blocks: list[Block] = []
    for entry in state.entries:
        if isinstance(entry, UserEntry):
            blocks.append(MessageBlock(role="user", align="right", text=entry.text))
        elif isinstance(entry, BotEntry):
            cards = tuple(
                project_medicine(
                    record, record.record_id in disclosure.expanded, currency_symbol
                )
                for record in entry.medicines
            )
            blocks.append(
                MessageBlock(
                    role="bot",
                    align="left",
                    text=entry.text,
                    medicines_heading=UI_TEXT["medicines"]["heading"] if cards else None,
                    medicines=cards,
                )
            )

    if state.pending:
        blocks.append(TypingIndicator(text=UI_TEXT["messages"]["typing"]))

    return TranscriptView(
        header=Header(
            title=UI_TEXT["header"]["title"],
            subtitle=UI_TEXT["header"]["subtitle"],
            description=UI_TEXT["header"]["description"],
        ),
        blocks=tuple(blocks),
        input_placeholder=UI_TEXT["input"]["placeholder"],
        input_enabled=not state.pending,
    )
