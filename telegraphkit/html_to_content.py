"""Convert HTML fragments into Telegraph content trees.

The fragment is wrapped in a small document shell and parsed with
BeautifulSoup's ``lxml`` builder, which closes elements whose end tag may
be omitted (``<p>a<p>b`` gives two paragraphs). Children of ``<body>`` are
then converted one by one, applying the tag and attribute rules of a
:class:`~telegraphkit.policy.ContentPolicy`.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from .exceptions import InvalidHtmlError
from .policy import ContentPolicy
from .types_content import ContentNode, NodeElement

logger = logging.getLogger(__name__)

DOCUMENT_SHELL = (
    "<html lang=\"en\">"
    "<head>"
    "<title>Document</title>"
    "<meta http-equiv=\"Content-Type\" content=\"text/html; charset=utf-8\"/>"
    "</head>"
    "<body>{fragment}</body>"
    "</html>"
)


def _parse_fragment(html: str) -> Tag:
    if not isinstance(html, str):
        raise InvalidHtmlError(f"HTML must be a string, got {type(html).__name__}")
    try:
        soup = BeautifulSoup(
            DOCUMENT_SHELL.format(fragment=html),
            "lxml",
            multi_valued_attributes=None,
        )
    except ParserRejectedMarkup as exc:
        raise InvalidHtmlError(f"Invalid HTML: {exc}") from exc
    body = soup.find("body")
    if not isinstance(body, Tag):
        raise InvalidHtmlError("Invalid HTML: document body not found")
    return body


def _convert_tag(tag: Tag, policy: ContentPolicy) -> Optional[NodeElement]:
    name = policy.resolve_tag(tag.name)
    if name is None:
        logger.debug("Dropping <%s> and its contents", tag.name)
        return None

    attrs = {key: value for key, value in tag.attrs.items() if policy.is_attribute_allowed(key)}
    children: List[ContentNode] = []
    for child in tag.contents:
        converted = _convert_node(child, policy)
        if converted is not None:
            children.append(converted)
    return NodeElement(tag=name, attrs=attrs, children=children)


def _convert_node(node: PageElement, policy: ContentPolicy) -> Optional[ContentNode]:
    if isinstance(node, Tag):
        return _convert_tag(node, policy)
    # Comments, doctypes, CDATA and processing instructions are skipped.
    if isinstance(node, PreformattedString):
        return None
    if isinstance(node, NavigableString):
        return str(node)
    return None


def html_to_content_tree(html: str, policy: ContentPolicy | None = None) -> List[ContentNode]:
    """Parse an HTML fragment into a list of content nodes.

    Raises:
        InvalidHtmlError: If ``html`` is not a string or cannot be parsed.
    """
    if policy is None:
        policy = ContentPolicy()
    body = _parse_fragment(html)
    nodes: List[ContentNode] = []
    for child in body.contents:
        converted = _convert_node(child, policy)
        if converted is not None:
            nodes.append(converted)
    return nodes


__all__ = ["DOCUMENT_SHELL", "html_to_content_tree"]
