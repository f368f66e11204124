"""Command-line interface for telegraphkit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .client import TelegraphClient
from .config import TelegraphConfig, load_config
from .content_json import content_to_wire
from .exceptions import TelegraphError
from .io_utils import STDIO, pretty_json_dumps, read_text, write_text
from .parser import ContentParser
from .render import render_page_document

logger = logging.getLogger(__name__)


def _load(args: argparse.Namespace) -> tuple[TelegraphConfig, ContentParser]:
    config = load_config(Path(args.config) if args.config else None)
    return config, ContentParser.from_config(config.parser)


def _handle_html_to_json(args: argparse.Namespace) -> None:
    _, parser = _load(args)
    content = parser.html_to_content_tree(read_text(args.input))
    if args.pretty:
        output = pretty_json_dumps(content_to_wire(content))
    else:
        output = parser.encode_content_tree(content) + "\n"
    write_text(args.output, output)


def _handle_json_to_html(args: argparse.Namespace) -> None:
    _, parser = _load(args)
    content = parser.decode_content_tree(read_text(args.input))
    write_text(args.output, parser.content_tree_to_html(content) + "\n")


def _handle_get_page(args: argparse.Namespace) -> None:
    config, parser = _load(args)
    with TelegraphClient.from_config(config.client, parser=parser) as client:
        page = client.get_page(args.path)

    if args.format == "json":
        output = pretty_json_dumps(page.model_dump(mode="json", exclude_none=True))
    elif args.format == "html":
        output = parser.content_tree_to_html(page.content or []) + "\n"
    else:
        output = render_page_document(page, parser)
    write_text(args.output, output)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to a YAML config file (client and parser sections).")
    parser.add_argument("--output", default=STDIO, help="Output file, '-' for stdout.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="telegraphkit",
        description="Convert between HTML and Telegraph content, and read pages.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command")

    to_json = subparsers.add_parser(
        "html-to-json",
        help="Convert an HTML fragment to Telegraph content JSON.",
    )
    to_json.add_argument("--input", default=STDIO, help="HTML file, '-' for stdin.")
    to_json.add_argument("--pretty", action="store_true", help="Indent the JSON output.")
    _add_common_arguments(to_json)
    to_json.set_defaults(func=_handle_html_to_json)

    to_html = subparsers.add_parser(
        "json-to-html",
        help="Convert Telegraph content JSON to an HTML fragment.",
    )
    to_html.add_argument("--input", default=STDIO, help="JSON file, '-' for stdin.")
    _add_common_arguments(to_html)
    to_html.set_defaults(func=_handle_json_to_html)

    get_page = subparsers.add_parser(
        "get-page",
        help="Fetch a page from Telegraph.",
        description="Fetch a page and print it as JSON, an HTML fragment or a full document.",
    )
    get_page.add_argument("path", help="Page path, e.g. Sample-Page-12-15.")
    get_page.add_argument(
        "--format",
        choices=("json", "html", "document"),
        default="json",
        help="Output format.",
    )
    _add_common_arguments(get_page)
    get_page.set_defaults(func=_handle_get_page)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if not hasattr(args, "func"):
        parser.print_help()
        return
    try:
        args.func(args)
    except (TelegraphError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        sys.stderr.write(f"error: {exc}\n")
        raise SystemExit(1) from exc


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main(sys.argv[1:])
