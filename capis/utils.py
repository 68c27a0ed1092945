"""Small text helpers."""

from __future__ import annotations

import re

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split text on CR, LF or CRLF, dropping empty lines."""
    return [line for line in _LINE_BREAK.split(text) if line]