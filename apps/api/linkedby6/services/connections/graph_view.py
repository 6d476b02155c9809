from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from linkedby6.services.connections.fallback import DEFAULT_MAX_PLACEHOLDERS, synthesize_fallback
from linkedby6.services.connections.nodes import RenderNode
from linkedby6.services.connections.ordering import PathContext, dedupe_nodes, is_path_renderable, order_path

logger = logging.getLogger(__name__)

NO_CONNECTION_MESSAGE = "No connection within 6 degrees"
SEARCH_UNAVAILABLE_MESSAGE = "Connection search unavailable"

GraphStatus = Literal["connected", "no_connection"]


@dataclass
class ConnectionGraph:
    status: GraphStatus
    nodes: list[RenderNode] = field(default_factory=list)
    degrees: int | None = None
    degrees_label: str | None = None
    message: str | None = None
    used_fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "nodes": [node.to_dict() for node in self.nodes],
            "degrees": self.degrees,
            "degrees_label": self.degrees_label,
            "message": self.message,
            "used_fallback": self.used_fallback,
        }


def degrees_label(degrees: int) -> str:
    return f"{degrees} degree{'' if degrees == 1 else 's'} of connection"


def coerce_degrees(value: Any) -> int | None:
    """Read a hop count that may arrive as a plain int or a ``{low, high}`` pair."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict) and isinstance(value.get("low"), int):
        high = value.get("high") or 0
        return (int(high) << 32) + int(value["low"])
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def has_records(path_data: Any) -> bool:
    if not isinstance(path_data, dict):
        return False
    records = path_data.get("records")
    return isinstance(records, list) and len(records) > 0


def no_connection(message: str = NO_CONNECTION_MESSAGE) -> ConnectionGraph:
    return ConnectionGraph(status="no_connection", message=message)


def build_connection_graph(
    path_data: Any,
    *,
    business_name: str | None = None,
    current_user_full_name: str | None = None,
    current_user_phone_number: str | None = None,
    max_placeholders: int = DEFAULT_MAX_PLACEHOLDERS,
) -> ConnectionGraph:
    """Turn a graph service response into the ordered nodes the app renders."""
    if not has_records(path_data):
        return no_connection()

    record = path_data["records"][0]
    path = record.get("path") if isinstance(record, dict) else None
    degrees = coerce_degrees(record.get("degrees")) if isinstance(record, dict) else None
    if not isinstance(path, dict) or not degrees:
        logger.warning(
            "connection_path_invalid_record",
            extra={
                "has_path": isinstance(path, dict),
                "degrees": record.get("degrees") if isinstance(record, dict) else None,
            },
        )
        return no_connection()

    context = PathContext(
        business_name=business_name,
        current_user_full_name=current_user_full_name,
        current_user_phone_number=current_user_phone_number,
    )
    nodes = order_path(path, context, nodes_by_identity={})
    used_fallback = False
    if not is_path_renderable(nodes):
        logger.warning(
            "connection_path_incomplete_using_fallback",
            extra={"degrees": degrees, "derived_node_count": len(nodes)},
        )
        nodes = dedupe_nodes(synthesize_fallback(degrees, context, max_placeholders=max_placeholders))
        used_fallback = True

    return ConnectionGraph(
        status="connected",
        nodes=nodes,
        degrees=degrees,
        degrees_label=degrees_label(degrees),
        used_fallback=used_fallback,
    )
