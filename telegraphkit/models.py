"""Pydantic models for Telegraph API objects.

See https://telegra.ph/api for the upstream field reference.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .content_json import content_from_wire, decode_content_tree
from .exceptions import InvalidContentError
from .types_content import ContentNode


class TelegraphModel(BaseModel):
    def to_request(self) -> Dict[str, Any]:
        """Fields to send to the API, without unset values."""
        return self.model_dump(exclude_none=True)


class Account(TelegraphModel):
    """A Telegraph account."""

    short_name: Optional[str] = Field(
        None,
        description=(
            "Account name, shown to the user above the Edit/Publish button; "
            "other users don't see it."
        ),
    )
    author_name: Optional[str] = Field(
        None, description="Default author name used when creating new articles."
    )
    author_url: Optional[str] = Field(
        None, description="Profile link opened when users click the author's name."
    )
    access_token: Optional[str] = Field(
        None,
        description="Only returned by createAccount and revokeAccessToken.",
    )
    auth_url: Optional[str] = Field(
        None,
        description="One-time URL (valid 5 minutes) to authorize a browser on telegra.ph.",
    )
    page_count: Optional[int] = Field(
        None, description="Number of pages belonging to the account."
    )


class Page(TelegraphModel):
    """A page on Telegraph."""

    path: Optional[str] = Field(None, description="Path to the page.")
    url: Optional[str] = Field(None, description="URL of the page.")
    title: Optional[str] = Field(None, description="Title of the page.")
    description: Optional[str] = Field(None, description="Description of the page.")
    author_name: Optional[str] = Field(None, description="Name of the author.")
    author_url: Optional[str] = Field(None, description="Profile link of the author.")
    image_url: Optional[str] = Field(None, description="Image URL of the page.")
    content: Optional[List[ContentNode]] = Field(
        None, description="Content of the page as a list of nodes."
    )
    views: int = Field(0, description="Number of page views.")
    can_edit: Optional[bool] = Field(
        None,
        description="True if the account can edit the page; only sent with an access token.",
    )

    @field_validator("content", mode="before")
    @classmethod
    def _decode_content(cls, value: Any) -> Any:
        # The API may send content as an encoded JSON string.
        try:
            if isinstance(value, str):
                return decode_content_tree(value)
            if isinstance(value, list):
                return content_from_wire(value)
        except InvalidContentError as exc:
            raise ValueError(str(exc)) from exc
        return value


class PageList(TelegraphModel):
    """Pages of an account, most recently created first."""

    total_count: int = Field(0, description="Total number of pages of the account.")
    pages: List[Page] = Field(default_factory=list, description="Requested pages.")


class PageViews(TelegraphModel):
    """Number of views for a Telegraph article."""

    views: int = Field(0, description="Number of page views for the target page.")


class GetViewsParams(TelegraphModel):
    """Optional date filter for getViews; omit everything for the total."""

    year: Optional[int] = Field(
        None, ge=2000, le=2100, description="Required if month is passed."
    )
    month: Optional[int] = Field(None, ge=1, le=12, description="Required if day is passed.")
    day: Optional[int] = Field(None, ge=1, le=31, description="Required if hour is passed.")
    hour: Optional[int] = Field(None, ge=0, le=24)


__all__ = [
    "Account",
    "GetViewsParams",
    "Page",
    "PageList",
    "PageViews",
]
