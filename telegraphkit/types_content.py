"""Content node types accepted by the Telegraph API.

A content tree is a list of nodes. A node is either a plain ``str`` (a DOM
text node) or a :class:`NodeElement`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class NodeElement(BaseModel):
    """DOM element node.

    Telegraph renders these tags: a, aside, b, blockquote, br, code, em,
    figcaption, figure, h3, h4, hr, i, iframe, img, li, ol, p, pre, s,
    strong, u, ul, video. Only ``href`` and ``src`` attributes survive on the
    server side.
    """

    tag: str = Field(..., description="Name of the DOM element.")
    attrs: Optional[Dict[str, str]] = Field(
        None, description="Attributes of the element, in source order."
    )
    children: Optional[List[Union[str, "NodeElement"]]] = Field(
        None, description="Child nodes of the element, in source order."
    )

    @field_validator("attrs", "children")
    @classmethod
    def _collapse_empty(cls, value: Any) -> Any:
        # An empty mapping or list is stored as absent.
        return value or None

    def to_wire(self) -> Dict[str, Any]:
        """Return the API representation (``tag``, ``attrs``, ``children``)."""
        return self.model_dump(exclude_none=True)


ContentNode = Union[str, NodeElement]


__all__ = ["ContentNode", "NodeElement"]
