"""
Disclosure controller for medicine detail cards.
Tracks which cards are expanded, keyed by MedicineRecord.record_id.
"""

from src.models.domain import DisclosureState
from src.services.transcript import TranscriptStore
from src.utils.logger import get_logger

logger = get_logger(__name__)


def toggle_disclosure(state: DisclosureState, record_id: str) -> DisclosureState:
    """Returns a new DisclosureState with the flag of `record_id` flipped."""
    return DisclosureState(expanded=state.expanded ^ {record_id})


class DisclosureController:
    """
    Expand/collapse state of every rendered medicine card.
    Never touches the transcript; only reads it to check a record exists.
    """

    def __init__(self, store: TranscriptStore):
        self.store = store
        self._state = DisclosureState()

    @property
    def state(self) -> DisclosureState:
        return self._state

    def is_expanded(self, record_id: str) -> bool:
        return record_id in self._state.expanded

    def toggle(self, record_id: str) -> bool:
        """
        Flips the expanded flag of one card.

        Args:
            record_id: Identity of the medicine record

        Returns:
            The new flag; False when the record is not in the transcript
        """
        if record_id not in self.store.state.medicine_ids():
            logger.warning("disclosure_unknown_record", record_id=record_id)
            return False

        self._state = toggle_disclosure(self._state, record_id)
        expanded = self.is_expanded(record_id)
        logger.info("disclosure_toggled", record_id=record_id, expanded=expanded)
        return expanded
