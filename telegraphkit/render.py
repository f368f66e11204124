"""Standalone HTML previews of Telegraph pages."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from .models import Page
from .parser import ContentParser

TEMPLATES_DIR = Path(__file__).parent / "templates"
PAGE_TEMPLATE = "page.html.jinja"


def jinja_env(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    """Create a Jinja environment for page templates."""

    return Environment(
        loader=FileSystemLoader([templates_dir]),
        autoescape=select_autoescape(["html", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def render_page_document(
    page: Page,
    parser: Optional[ContentParser] = None,
    *,
    lang: str = "en",
    env: Optional[Environment] = None,
) -> str:
    """Render ``page`` as a complete HTML document.

    The content tree goes through ``parser`` (its tag and attribute rules
    apply); metadata is autoescaped by the template.
    """
    parser = parser or ContentParser()
    env = env or jinja_env()
    content_html = parser.content_tree_to_html(page.content or [])
    template = env.get_template(PAGE_TEMPLATE)
    return template.render(
        lang=lang,
        title=page.title or page.path or "",
        description=page.description or "",
        author_name=page.author_name or "",
        author_url=page.author_url or "",
        content_html=Markup(content_html),
    )


__all__ = ["jinja_env", "render_page_document"]
