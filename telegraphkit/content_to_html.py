"""Render Telegraph content trees back into HTML fragments."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .dom_model import DomContent, DomNode, dom_to_html
from .exceptions import InvalidContentError
from .policy import ContentPolicy
from .types_content import ContentNode, NodeElement

logger = logging.getLogger(__name__)


def _convert_element(element: NodeElement, policy: ContentPolicy) -> Optional[DomNode]:
    name = policy.resolve_tag(element.tag)
    if name is None:
        logger.debug("Dropping <%s> and its contents", element.tag)
        return None
    try:
        node = DomNode(tag=name)
    except ValueError as exc:
        raise InvalidContentError(f"Invalid tag: {exc}") from exc

    for child in element.children or []:
        converted = _convert_node(child, policy)
        if converted is not None:
            node.append(converted)

    for key, value in (element.attrs or {}).items():
        if not policy.is_attribute_allowed(key):
            continue
        try:
            node.set_attribute(key, str(value))
        except ValueError as exc:
            raise InvalidContentError(f"Invalid attribute: {exc}") from exc
    return node


def _convert_node(source: object, policy: ContentPolicy) -> Optional[DomContent]:
    if isinstance(source, str):
        return source
    if isinstance(source, NodeElement):
        return _convert_element(source, policy)
    raise InvalidContentError(f"Invalid content source: {type(source).__name__}")


def _build_dom(content: Sequence[ContentNode], policy: ContentPolicy | None = None) -> List[DomContent]:
    if isinstance(content, (str, bytes)) or not isinstance(content, Sequence):
        raise InvalidContentError(f"Content must be a list of nodes, got {type(content).__name__}")
    if policy is None:
        policy = ContentPolicy()
    dom: List[DomContent] = []
    for source in content:
        converted = _convert_node(source, policy)
        if converted is not None:
            dom.append(converted)
    return dom


def content_tree_to_html(content: Sequence[ContentNode], policy: ContentPolicy | None = None) -> str:
    """Serialize content nodes into an HTML fragment (no html/body wrapper).

    Raises:
        InvalidContentError: If a node is neither a string nor a NodeElement,
            or an element or attribute name cannot be used in markup.
    """
    return dom_to_html(_build_dom(content, policy))


__all__ = ["content_tree_to_html"]
