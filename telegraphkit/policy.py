"""Tag replacement and attribute filtering rules shared by both converters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, Mapping, Optional, Set, Union

from .exceptions import InvalidRuleError

if TYPE_CHECKING:
    from .config import ParserConfig

# Rule value meaning "drop the element together with its contents".
DELETE = False

TagRule = Union[str, bool]


def _normalize_attribute_names(names: Optional[Iterable[str]]) -> Set[str]:
    if names is None:
        return set()
    if isinstance(names, str):
        names = [names]
    normalized = (str(name).strip().lower() for name in names)
    return {name for name in normalized if name}


@dataclass
class ContentPolicy:
    """Mutable rule set applied while converting HTML and content trees.

    Tag names are matched case-sensitively, as they come out of the parser.
    Attribute names are lower-cased before every comparison, and the deny
    list always wins over the allow list.
    """

    tag_rules: Dict[str, TagRule] = field(default_factory=dict)
    allowed_attributes: Optional[Set[str]] = None
    disallowed_attributes: Set[str] = field(default_factory=set)

    @classmethod
    def from_config(cls, config: "ParserConfig") -> "ContentPolicy":
        policy = cls()
        policy.set_tag_rules(config.tag_rules)
        policy.set_allowed_attributes(config.allowed_attributes)
        policy.set_disallowed_attributes(config.disallowed_attributes)
        return policy

    def set_tag_rule(self, tag: str, replacement: TagRule) -> None:
        """Rename ``tag`` to ``replacement``, or delete it when ``replacement`` is DELETE."""
        if not isinstance(tag, str) or not tag:
            raise InvalidRuleError("Tag must be a non-empty string")
        if not isinstance(replacement, str) and replacement is not DELETE:
            raise InvalidRuleError("Replacement must be a string or DELETE")
        self.tag_rules[tag] = replacement

    def set_tag_rules(self, rules: Mapping[str, TagRule]) -> None:
        """Apply :meth:`set_tag_rule` for every entry, in iteration order.

        Entries applied before a failing one are kept.
        """
        for tag, replacement in rules.items():
            self.set_tag_rule(tag, replacement)

    def has_rule(self, tag: str) -> bool:
        return tag in self.tag_rules

    def get_rule(self, tag: str) -> Optional[TagRule]:
        """Return the replacement tag, DELETE, or None when there is no rule."""
        return self.tag_rules.get(tag)

    def resolve_tag(self, tag: str) -> Optional[str]:
        """Return the tag to emit, or None if the element must be dropped."""
        if tag not in self.tag_rules:
            return tag
        replacement = self.tag_rules[tag]
        return replacement or None

    def set_allowed_attributes(self, names: Optional[Iterable[str]]) -> None:
        """Restrict attributes to ``names``; None lifts the restriction."""
        self.allowed_attributes = None if names is None else _normalize_attribute_names(names)

    def set_disallowed_attributes(self, names: Optional[Iterable[str]]) -> None:
        self.disallowed_attributes = _normalize_attribute_names(names)

    def is_attribute_allowed(self, name: str) -> bool:
        name = str(name).lower()
        if self.allowed_attributes is not None and name not in self.allowed_attributes:
            return False
        return name not in self.disallowed_attributes


__all__ = ["DELETE", "ContentPolicy", "TagRule"]
