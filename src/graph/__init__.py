"""
Graph package for the answer dispatch workflow.
"""

from src.graph.builder import build_dispatch_graph
from src.graph.nodes import DispatchNodes
from src.graph.edges import route_after_fetch

__all__ = [
    "build_dispatch_graph",
    "DispatchNodes",
    "route_after_fetch",
]
