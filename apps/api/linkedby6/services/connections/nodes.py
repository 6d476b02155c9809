from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal, Union

NodeType = Literal["Person", "Business"]

BUSINESS_LABEL = "Business"
PERSON_LABEL = "Person"


@dataclass(frozen=True)
class RenderNode:
    id: str
    type: NodeType
    name: str
    phone: str | None = None

    def dedup_key(self) -> tuple[str, str | None]:
        return (self.name, self.phone)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BusinessKind:
    business_id: str | None
    name: str | None


@dataclass(frozen=True)
class PersonKind:
    phone: str | None
    full_name: str | None


@dataclass(frozen=True)
class UnknownKind:
    pass


NodeKind = Union[BusinessKind, PersonKind, UnknownKind]


def _labels(node: Any) -> list[str]:
    if not isinstance(node, dict):
        return []
    labels = node.get("labels")
    if not isinstance(labels, (list, tuple, set, frozenset)):
        return []
    return [str(label) for label in labels]


def _properties(node: Any) -> dict[str, Any]:
    if not isinstance(node, dict):
        return {}
    props = node.get("properties")
    return props if isinstance(props, dict) else {}


def _text_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def classify_node(node: Any) -> NodeKind:
    """Tag a raw graph node by its label set. Business wins over Person."""
    labels = _labels(node)
    props = _properties(node)
    if BUSINESS_LABEL in labels:
        return BusinessKind(
            business_id=_text_or_none(props.get("business_id")),
            name=_text_or_none(props.get("name")),
        )
    if PERSON_LABEL in labels:
        return PersonKind(
            phone=_text_or_none(props.get("phone")),
            full_name=_text_or_none(props.get("full_name")),
        )
    return UnknownKind()


def identity_key(node: Any) -> str | None:
    """Stable lookup key for a node's identity.

    Integer identities from the JS driver arrive as ``{"low": n, "high": m}``;
    anything else (element ids, plain ints) is treated as opaque.
    """
    if not isinstance(node, dict):
        return None
    identity = node.get("identity")
    if identity is None:
        return None
    if isinstance(identity, dict):
        if identity.get("low") is None:
            return None
        return f"{identity['low']}-{identity.get('high') or 0}"
    return str(identity)


def business_render_node(kind: BusinessKind, *, name_override: str | None = None) -> RenderNode:
    return RenderNode(
        id=f"business-{kind.business_id or 'unknown'}",
        type="Business",
        name=name_override or kind.name or "Business",
        phone=None,
    )


def person_render_node(
    kind: PersonKind,
    *,
    name_override: str | None = None,
    phone_override: str | None = None,
    default_name: str = "Unknown Person",
) -> RenderNode:
    return RenderNode(
        id=f"person-{kind.phone or 'unknown'}",
        type="Person",
        name=name_override or kind.full_name or default_name,
        phone=phone_override or kind.phone,
    )


def normalize_node(
    node: Any,
    *,
    business_name: str | None = None,
    person_name: str | None = None,
    person_phone: str | None = None,
    default_person_name: str = "Unknown Person",
) -> RenderNode | None:
    """Convert a raw graph node into a RenderNode, or None when it cannot be placed."""
    if identity_key(node) is None:
        return None
    kind = classify_node(node)
    if isinstance(kind, BusinessKind):
        return business_render_node(kind, name_override=business_name)
    if isinstance(kind, PersonKind):
        return person_render_node(
            kind,
            name_override=person_name,
            phone_override=person_phone,
            default_name=default_person_name,
        )
    return None
