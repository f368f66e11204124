"""Utility helpers for text/JSON IO used by the command line."""

from __future__ import annotations

import json
import sys
from pathlib import Path

STDIO = "-"


def pretty_json_dumps(obj: object) -> str:
    """Serialize JSON for humans: indented, non-ASCII kept, key order kept, trailing newline."""
    return json.dumps(obj, ensure_ascii=False, indent=2) + "\n"


def read_text(path: str | Path) -> str:
    """Read a UTF-8 file, or stdin when ``path`` is ``-``."""
    if str(path) == STDIO:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def write_text(path: str | Path, content: str) -> None:
    """Write a UTF-8 file (creating parent directories), or stdout when ``path`` is ``-``."""
    if str(path) == STDIO:
        sys.stdout.write(content)
        return
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
