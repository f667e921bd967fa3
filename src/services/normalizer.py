"""
Normalization of answer service payloads into transcript data.
Field-for-field mapping of raw medicine objects into MedicineRecord.
"""

import math
from typing import Any
from src.models.domain import MedicineRecord
from src.models.schemas import AnswerResponse
from src.utils.logger import get_logger

logger = get_logger(__name__)

# Wire key -> MedicineRecord text field
TEXT_FIELDS = {
    "medicine_name": "name",
    "composition": "composition",
    "uses": "uses",
    "sideeffects": "side_effects",
    "manufacturer": "manufacturer",
    "price": "price",
    "packsizelabel": "pack_size",
    "type": "category",
}

REVIEW_FIELDS = {
    "excellent_review_percentage": "excellent_review",
    "average_review_percentage": "average_review",
    "poor_review_percentage": "poor_review",
}


def clean_answer_text(text: str) -> str:
    """Removes '*' emphasis markup and surrounding whitespace."""
    return text.replace("*", "").strip()


def parse_percentage(value: Any) -> int | None:
    """
    Parses a review percentage sent as a string.

    Args:
        value: Raw value, usually a numeric string like "48"

    Returns:
        Integer clamped to 0-100, or None when absent or not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip().rstrip("%"))
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return max(0, min(100, round(number)))


def normalize_medicine(raw: dict[str, Any]) -> MedicineRecord:
    """
    Maps one raw medicine object into a MedicineRecord.
    Absent text fields become empty strings and an absent image stays None.

    Args:
        raw: Medicine object as sent by the answer service

    Returns:
        New MedicineRecord with a fresh record_id
    """
    fields: dict[str, Any] = {}
    for wire_key, field_name in TEXT_FIELDS.items():
        value = raw.get(wire_key)
        fields[field_name] = "" if value is None else str(value)

    for wire_key, field_name in REVIEW_FIELDS.items():
        fields[field_name] = parse_percentage(raw.get(wire_key))

    image_url = raw.get("image_url")
    fields["image_url"] = str(image_url) if image_url else None

    return MedicineRecord(**fields)


def normalize_medicines(items: list[Any]) -> tuple[MedicineRecord, ...]:
    """
    Normalizes the `data` array, keeping its order.
    Items that are not JSON objects are dropped individually.
    """
    records = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(
                "medicine_entry_dropped",
                position=position,
                item_type=type(item).__name__,
            )
            continue
        records.append(normalize_medicine(item))
    return tuple(records)


def normalize_answer(response: AnswerResponse) -> tuple[str, tuple[MedicineRecord, ...]]:
    """
    Converts a validated response into bot entry content.

    Args:
        response: Validated answer service body

    Returns:
        Tuple of (cleaned answer text, medicine records)
    """
    text = clean_answer_text(response.gemini_answer)
    medicines = normalize_medicines(response.data)
    logger.info(
        "answer_normalized",
        answer_length=len(text),
        medicines=len(medicines),
        dropped=len(response.data) - len(medicines),
    )
    return text, medicines
