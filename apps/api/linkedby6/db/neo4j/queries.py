from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from linkedby6.db.neo4j.driver import neo4j_session

logger = logging.getLogger(__name__)

DEFAULT_RELATIONSHIP_TYPES = ("FAMILY_MEMBER", "FRIEND", "OWNS", "EMPLOYEE_OF")
DEFAULT_MAX_DEGREES = 6


def _cypher_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _relationship_pattern(relationship_types: Sequence[str], max_degrees: int) -> str:
    types = "|".join(t for t in relationship_types if t)
    prefix = f":{types}" if types else ""
    return f"[{prefix}*..{int(max_degrees)}]"


def build_shortest_path_query(
    phone: str,
    business_id: str,
    *,
    max_degrees: int = DEFAULT_MAX_DEGREES,
    relationship_types: Sequence[str] = DEFAULT_RELATIONSHIP_TYPES,
) -> str:
    """Literal query text for the graph query service, which takes no parameters."""
    pattern = _relationship_pattern(relationship_types, max_degrees)
    return (
        f'MATCH (start:Person {{phone: "{_cypher_string(phone)}"}})\n'
        f'MATCH (target:Business {{business_id: "{_cypher_string(business_id)}"}})\n'
        f"MATCH path = shortestPath((start)-{pattern}-(target))\n"
        "RETURN path, length(path) AS degrees"
    )


def build_parameterized_shortest_path_query(
    *,
    max_degrees: int = DEFAULT_MAX_DEGREES,
    relationship_types: Sequence[str] = DEFAULT_RELATIONSHIP_TYPES,
) -> str:
    pattern = _relationship_pattern(relationship_types, max_degrees)
    return (
        "MATCH (start:Person {phone: $phone})\n"
        "MATCH (target:Business {business_id: $business_id})\n"
        f"MATCH path = shortestPath((start)-{pattern}-(target))\n"
        "RETURN path, length(path) AS degrees"
    )


def serialize_node(node: Any) -> dict[str, Any]:
    return {
        "identity": getattr(node, "element_id", None),
        "labels": sorted(str(label) for label in getattr(node, "labels", ())),
        "properties": dict(node.items()) if hasattr(node, "items") else {},
    }


def serialize_path(path: Any) -> dict[str, Any]:
    """Convert a driver Path into the JSON shape the graph query service returns."""
    nodes = list(path.nodes)
    relationships = list(path.relationships)
    segments: list[dict[str, Any]] = []
    for index, relationship in enumerate(relationships):
        if index + 1 >= len(nodes):
            break
        segments.append(
            {
                "start": serialize_node(nodes[index]),
                "relationship": {"type": getattr(relationship, "type", None)},
                "end": serialize_node(nodes[index + 1]),
            }
        )
    return {
        "start": serialize_node(path.start_node),
        "end": serialize_node(path.end_node),
        "segments": segments,
        "length": len(relationships),
    }


def shortest_path_via_bolt(
    phone: str,
    business_id: str,
    *,
    max_degrees: int = DEFAULT_MAX_DEGREES,
    relationship_types: Sequence[str] = DEFAULT_RELATIONSHIP_TYPES,
) -> dict[str, Any] | None:
    """Run the shortest-path query against Neo4j directly.

    Returns None when no Bolt connection is configured.
    """
    query = build_parameterized_shortest_path_query(
        max_degrees=max_degrees,
        relationship_types=relationship_types,
    )
    with neo4j_session() as session:
        if session is None:
            return None
        result = session.run(query, phone=phone, business_id=business_id)
        records = [
            {"path": serialize_path(record["path"]), "degrees": int(record["degrees"])}
            for record in result
        ]
    logger.info(
        "connection_path_bolt_query_completed",
        extra={"business_id": business_id, "record_count": len(records)},
    )
    return {"records": records}
