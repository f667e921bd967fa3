"""
Domain models representing the conversation and its medicine records.
ConversationState is the central state object owned by the transcript store;
DispatchState is the per-submission state of the dispatch graph.
"""

import uuid
from enum import Enum
from typing import Annotated, Literal, Union
from typing_extensions import TypedDict
from pydantic import BaseModel, ConfigDict, Field

from src.models.schemas import AnswerResponse


class FailureKind(str, Enum):
    """Why a submission ended in the generic error entry."""

    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    SHAPE = "shape"


class MedicineRecord(BaseModel):
    """
    Immutable snapshot of one medicine returned by the answer service.

    Attributes:
        record_id: Synthetic identity assigned at normalization time.
            Disclosure state is keyed by it, never by position or content.
        name: Commercial medicine name.
        composition: Active ingredients.
        uses: What the medicine treats.
        side_effects: Known side effects.
        manufacturer: Producing company.
        price: Price as a decimal string, currency agnostic.
        pack_size: Pack size label (e.g. "strip of 15 tablets").
        category: Medicine type (e.g. "Tablet").
        excellent_review: Share of excellent reviews, 0-100.
        average_review: Share of average reviews, 0-100.
        poor_review: Share of poor reviews, 0-100.
        image_url: Product image, None when the source has none.
    """

    model_config = ConfigDict(frozen=True)

    record_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = ""
    composition: str = ""
    uses: str = ""
    side_effects: str = ""
    manufacturer: str = ""
    price: str = ""
    pack_size: str = ""
    category: str = ""
    excellent_review: int | None = Field(default=None, ge=0, le=100)
    average_review: int | None = Field(default=None, ge=0, le=100)
    poor_review: int | None = Field(default=None, ge=0, le=100)
    image_url: str | None = None


class UserEntry(BaseModel):
    """A question typed by the user."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    text: str


class BotEntry(BaseModel):
    """
    An answer turn. Error turns carry the apology text, no medicines and
    the internal failure cause.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["bot"] = "bot"
    text: str
    medicines: tuple[MedicineRecord, ...] = ()
    failure: FailureKind | None = None


TranscriptEntry = Annotated[Union[UserEntry, BotEntry], Field(discriminator="kind")]


class ConversationState(BaseModel):
    """
    Aggregate state of one chat session.

    Attributes:
        entries: Transcript in display order; append-only.
        pending: True while exactly one answer request is outstanding.
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[TranscriptEntry, ...] = ()
    pending: bool = False

    def medicine_ids(self) -> set[str]:
        """Record ids of every medicine currently in the transcript."""
        return {
            record.record_id
            for entry in self.entries
            if isinstance(entry, BotEntry)
            for record in entry.medicines
        }


class DisclosureState(BaseModel):
    """Ids of the medicine cards currently expanded; all others are collapsed."""

    model_config = ConfigDict(frozen=True)

    expanded: frozenset[str] = frozenset()


class DispatchState(TypedDict, total=False):
    """
    State flowing through the dispatch graph for one submission.

    Attributes:
        query: Trimmed user question.
        limit: Result-count ceiling sent to the answer service.
        response: Validated service body, set on success.
        failure: Failure cause, set when the call failed.
        answer_text: Text of the bot entry to append.
        medicines: Normalized records of the bot entry.
    """

    query: str
    limit: int
    response: AnswerResponse | None
    failure: FailureKind | None
    answer_text: str
    medicines: tuple[MedicineRecord, ...]
