"""JSON encoding of content trees in the shape the Telegraph API expects."""

from __future__ import annotations

import json
from typing import Any, List, Sequence

from pydantic import ValidationError

from .exceptions import InvalidContentError
from .types_content import ContentNode, NodeElement


def _node_from_wire(item: Any) -> ContentNode:
    if isinstance(item, str):
        return item
    if isinstance(item, NodeElement):
        return item
    if not isinstance(item, dict):
        raise InvalidContentError(f"Invalid content node: {type(item).__name__}")
    try:
        return NodeElement.model_validate(item)
    except ValidationError as exc:
        raise InvalidContentError(f"Invalid content node: {exc}") from exc


def content_from_wire(items: Any) -> List[ContentNode]:
    """Build content nodes from already-decoded JSON values.

    Tags and attributes are kept exactly as given; no policy is applied.
    """
    if not isinstance(items, list):
        raise InvalidContentError(f"Content must be a JSON array, got {type(items).__name__}")
    return [_node_from_wire(item) for item in items]


def content_to_wire(nodes: Sequence[ContentNode]) -> List[Any]:
    wire: List[Any] = []
    for node in nodes:
        if isinstance(node, NodeElement):
            wire.append(node.to_wire())
        elif isinstance(node, str):
            wire.append(node)
        else:
            raise InvalidContentError(f"Invalid content source: {type(node).__name__}")
    return wire


def decode_content_tree(json_text: str) -> List[ContentNode]:
    """Decode Telegraph content from a JSON string.

    Raises:
        InvalidContentError: If the text is not JSON, the top level is not an
            array, or an item is not a string or ``{"tag": ...}`` object.
    """
    try:
        decoded = json.loads(json_text)
    except (TypeError, ValueError) as exc:
        raise InvalidContentError(f"Invalid content: {exc}") from exc
    return content_from_wire(decoded)


def encode_content_tree(nodes: Sequence[ContentNode]) -> str:
    """Encode content nodes as compact JSON with non-ASCII text kept literal."""
    return json.dumps(content_to_wire(nodes), ensure_ascii=False, separators=(",", ":"))


__all__ = [
    "content_from_wire",
    "content_to_wire",
    "decode_content_tree",
    "encode_content_tree",
]
