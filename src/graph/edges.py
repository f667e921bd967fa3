"""
Graph edge conditions for routing between nodes.
"""

from src.models.domain import DispatchState
from src.utils.logger import get_logger

logger = get_logger(__name__)


def route_after_fetch(state: DispatchState) -> str:
    """
    Routes on the outcome of the answer service call.
    Fails closed: a state without a response is treated as a failure.

    Args:
        state: Current dispatch state

    Returns:
        "success" if a response is available, "failure" otherwise
    """
    if state.get("failure"):
        return "failure"

    if state.get("response") is None:
        logger.error(
            "invalid_state_in_routing",
            error="State must contain a response or a failure",
            fallback="failure",
        )
        return "failure"

    return "success"
