from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from linkedby6.services.connections.nodes import (
    BusinessKind,
    PersonKind,
    RenderNode,
    business_render_node,
    classify_node,
    identity_key,
    person_render_node,
)

logger = logging.getLogger(__name__)

# The current user is "You" when neither the caller nor the graph has a name.
CURRENT_USER_DEFAULT_NAME = "You"


@dataclass(frozen=True)
class PathContext:
    business_name: str | None = None
    current_user_full_name: str | None = None
    current_user_phone_number: str | None = None


def is_path_renderable(nodes: list[RenderNode]) -> bool:
    """A derived sequence is usable when it has two nodes and names the business."""
    return len(nodes) >= 2 and any(node.type == "Business" for node in nodes)


def dedupe_nodes(nodes: Iterable[RenderNode]) -> list[RenderNode]:
    seen: set[tuple[str, str | None]] = set()
    unique: list[RenderNode] = []
    for node in nodes:
        key = node.dedup_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(node)
    return unique


def _find_business_endpoint(path: dict[str, Any], context: PathContext) -> tuple[str | None, RenderNode | None]:
    # End first: the query starts at the person and targets the business.
    for candidate in (path.get("end"), path.get("start")):
        kind = classify_node(candidate)
        if isinstance(kind, BusinessKind):
            return identity_key(candidate), business_render_node(kind, name_override=context.business_name)
    return None, None


def _find_user_endpoint(path: dict[str, Any], context: PathContext) -> tuple[str | None, RenderNode | None]:
    for candidate in (path.get("start"), path.get("end")):
        kind = classify_node(candidate)
        if isinstance(kind, PersonKind):
            return identity_key(candidate), person_render_node(
                kind,
                name_override=context.current_user_full_name,
                phone_override=context.current_user_phone_number,
                default_name=CURRENT_USER_DEFAULT_NAME,
            )
    return None, None


def _segments(path: dict[str, Any]) -> list[dict[str, Any]]:
    segments = path.get("segments")
    if not isinstance(segments, list):
        return []
    return [segment for segment in segments if isinstance(segment, dict)]


def order_path(
    path: dict[str, Any],
    context: PathContext,
    nodes_by_identity: dict[str, RenderNode] | None = None,
) -> list[RenderNode]:
    """Linearize a graph path into ``[business, *intermediates, user]``.

    Segments are trusted in their declared order; no topological walk is done.
    ``nodes_by_identity`` is filled in place so callers can inspect what was
    seen. The result is deduplicated by ``(name, phone)`` but not validated;
    use ``is_path_renderable`` for that.
    """
    if nodes_by_identity is None:
        nodes_by_identity = {}

    business_key, business_node = _find_business_endpoint(path, context)
    user_key, user_node = _find_user_endpoint(path, context)

    if business_node is not None and business_key is not None:
        nodes_by_identity.setdefault(business_key, business_node)
    if user_node is not None and user_key is not None:
        nodes_by_identity.setdefault(user_key, user_node)

    intermediates: list[RenderNode] = []
    for segment in _segments(path):
        for raw in (segment.get("start"), segment.get("end")):
            key = identity_key(raw)
            if key is None or key in nodes_by_identity:
                continue
            kind = classify_node(raw)
            if isinstance(kind, PersonKind):
                node = person_render_node(kind)
                nodes_by_identity[key] = node
                intermediates.append(node)
            elif isinstance(kind, BusinessKind) and business_node is None:
                business_node = business_render_node(kind, name_override=context.business_name)
                nodes_by_identity[key] = business_node

    ordered: list[RenderNode] = []
    if business_node is not None:
        ordered.append(business_node)
    ordered.extend(intermediates)
    if user_node is not None:
        ordered.append(user_node)

    ordered = dedupe_nodes(ordered)
    logger.debug(
        "connection_path_ordered",
        extra={"node_count": len(ordered), "intermediate_count": len(intermediates)},
    )
    return ordered
