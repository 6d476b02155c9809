from __future__ import annotations

from linkedby6.services.connections.nodes import RenderNode
from linkedby6.services.connections.ordering import CURRENT_USER_DEFAULT_NAME, PathContext

PLACEHOLDER_NAMES = ("Contact", "Connection", "Mutual Contact")
DEFAULT_MAX_PLACEHOLDERS = 3


def placeholder_count(degrees: int, max_placeholders: int = DEFAULT_MAX_PLACEHOLDERS) -> int:
    return min(max(int(degrees) - 1, 0), max(max_placeholders, 0))


def synthesize_fallback(
    degrees: int,
    context: PathContext,
    *,
    max_placeholders: int = DEFAULT_MAX_PLACEHOLDERS,
) -> list[RenderNode]:
    """Placeholder path for when the real one cannot be ordered.

    Paths longer than ``max_placeholders + 1`` hops are shown truncated.
    """
    nodes = [
        RenderNode(
            id="business-node",
            type="Business",
            name=context.business_name or "Business",
            phone=None,
        )
    ]
    for index in range(placeholder_count(degrees, max_placeholders)):
        nodes.append(
            RenderNode(
                id=f"intermediate-{index}",
                type="Person",
                name=PLACEHOLDER_NAMES[index % len(PLACEHOLDER_NAMES)],
                phone=None,
            )
        )
    nodes.append(
        RenderNode(
            id="user-node",
            type="Person",
            name=context.current_user_full_name or CURRENT_USER_DEFAULT_NAME,
            phone=context.current_user_phone_number,
        )
    )
    return nodes
