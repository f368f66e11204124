"""Simple DOM model for HTML serialization."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

# Element and attribute names accepted when building nodes.
NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.:-]*$")

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


@dataclass
class DomNode:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["DomContent"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not NAME_RE.match(self.tag):
            raise ValueError(f"Invalid element name: {self.tag!r}")

    def set_attribute(self, name: str, value: str) -> None:
        if not NAME_RE.match(name):
            raise ValueError(f"Invalid attribute name: {name!r}")
        self.attrs[name] = value

    def append(self, child: "DomContent") -> None:
        self.children.append(child)


DomContent = DomNode | str


def escape_text(text: str) -> str:
    """Escape only what a text node requires; other characters stay literal."""
    return html.escape(text, quote=False)


def escape_attribute(value: str) -> str:
    return html.escape(value, quote=True)


def _render_attrs(attrs: Dict[str, str]) -> str:
    if not attrs:
        return ""
    parts = [f'{name}="{escape_attribute(value)}"' for name, value in attrs.items()]
    return " " + " ".join(parts)


def dom_to_html(dom: Sequence[DomContent]) -> str:
    parts: List[str] = []
    for node in dom:
        if not isinstance(node, DomNode):
            parts.append(escape_text(str(node)))
            continue
        attrs = _render_attrs(node.attrs)
        parts.append(f"<{node.tag}{attrs}>")
        if node.tag.lower() in VOID_ELEMENTS and not node.children:
            continue
        parts.append(dom_to_html(node.children))
        parts.append(f"</{node.tag}>")
    return "".join(parts)
