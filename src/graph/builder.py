"""
Graph builder for the answer dispatch workflow.
Assembles nodes and edges into an executable graph.
"""

from langgraph.graph import StateGraph, END

from src.models.domain import DispatchState
from src.services.answer_client import AnswerServiceClient
from src.graph.nodes import DispatchNodes
from src.graph.edges import route_after_fetch
from src.utils.logger import get_logger

logger = get_logger(__name__)


def build_dispatch_graph(answer_service: AnswerServiceClient):
    """
    Builds and compiles the fetch -> normalize | failure workflow.

    Args:
        answer_service: Client used by the fetch node

    Returns:
        Compiled graph; `ainvoke({"query": ..., "limit": ...})` returns the
        final DispatchState
    """
    nodes = DispatchNodes(answer_service=answer_service)

    logger.info("graph_workflow_building")
    workflow = StateGraph(DispatchState)

    workflow.add_node("fetch_answer", nodes.fetch_answer_node)
    workflow.add_node("normalize_answer", nodes.normalize_answer_node)
    workflow.add_node("record_failure", nodes.record_failure_node)

    workflow.set_entry_point("fetch_answer")

    workflow.add_conditional_edges(
        "fetch_answer",
        route_after_fetch,
        {"success": "normalize_answer", "failure": "record_failure"},
    )

    workflow.add_edge("normalize_answer", END)
    workflow.add_edge("record_failure", END)

    logger.info("graph_compiling")
    return workflow.compile()
