from __future__ import annotations

from linkedby6.services.connections.fallback import synthesize_fallback
from linkedby6.services.connections.graph_view import (
    NO_CONNECTION_MESSAGE,
    SEARCH_UNAVAILABLE_MESSAGE,
    ConnectionGraph,
    build_connection_graph,
)
from linkedby6.services.connections.nodes import RenderNode, classify_node, identity_key, normalize_node
from linkedby6.services.connections.ordering import PathContext, dedupe_nodes, is_path_renderable, order_path
from linkedby6.services.connections.tracker import ConnectionPathState, ConnectionPathTracker, get_tracker

__all__ = [
    "NO_CONNECTION_MESSAGE",
    "SEARCH_UNAVAILABLE_MESSAGE",
    "ConnectionGraph",
    "ConnectionPathState",
    "ConnectionPathTracker",
    "PathContext",
    "RenderNode",
    "build_connection_graph",
    "classify_node",
    "dedupe_nodes",
    "get_tracker",
    "identity_key",
    "is_path_renderable",
    "normalize_node",
    "order_path",
    "synthesize_fallback",
]
