"""Parser for Telegraph content.

Usage example::

    parser = ContentParser()
    parser.add_tag_rules({
        "h1": "h3",
        "h2": "h4",
        "div": "p",
        "iframe": DELETE,
    })
    content = parser.html_to_content_tree(wysiwyg_html)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Mapping, Optional, Sequence

from .content_json import decode_content_tree, encode_content_tree
from .content_to_html import content_tree_to_html
from .html_to_content import html_to_content_tree
from .policy import ContentPolicy, TagRule
from .types_content import ContentNode

if TYPE_CHECKING:
    from .config import ParserConfig


class ContentParser:
    """Converts between HTML, content trees and their JSON form.

    One :class:`ContentPolicy` is shared by both conversion directions. A
    parser may be reused for sequential conversions; give each thread its
    own instance if rules are changed while conversions run.
    """

    def __init__(self, policy: Optional[ContentPolicy] = None) -> None:
        self.policy = policy if policy is not None else ContentPolicy()

    @classmethod
    def from_config(cls, config: "ParserConfig") -> "ContentParser":
        return cls(ContentPolicy.from_config(config))

    def add_tag_rule(self, tag: str, replacement: TagRule) -> "ContentParser":
        self.policy.set_tag_rule(tag, replacement)
        return self

    def add_tag_rules(self, rules: Mapping[str, TagRule]) -> "ContentParser":
        self.policy.set_tag_rules(rules)
        return self

    def has_tag_rule(self, tag: str) -> bool:
        return self.policy.has_rule(tag)

    def get_tag_rule(self, tag: str) -> Optional[TagRule]:
        return self.policy.get_rule(tag)

    def set_allowed_attributes(self, names: Optional[Iterable[str]]) -> "ContentParser":
        self.policy.set_allowed_attributes(names)
        return self

    def set_disallowed_attributes(self, names: Optional[Iterable[str]]) -> "ContentParser":
        self.policy.set_disallowed_attributes(names)
        return self

    def html_to_content_tree(self, html: str) -> List[ContentNode]:
        return html_to_content_tree(html, self.policy)

    def content_tree_to_html(self, content: Sequence[ContentNode]) -> str:
        return content_tree_to_html(content, self.policy)

    def decode_content_tree(self, json_text: str) -> List[ContentNode]:
        return decode_content_tree(json_text)

    def encode_content_tree(self, content: Sequence[ContentNode]) -> str:
        return encode_content_tree(content)


__all__ = ["ContentParser"]
