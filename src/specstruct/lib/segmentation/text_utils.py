"""Line and whitespace helpers shared by the segmentation stages."""

import re
from collections.abc import Sequence

_LINE_BREAK = re.compile(r"\r?\n")
_WHITESPACE = re.compile(r"\s+")
_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")
_LEADING_PUNCTUATION = re.compile(r"^[\s\-–—:.)\]]+")


def split_lines(text: str) -> list[str]:
    """Split text on LF or CRLF only.

    ``str.splitlines`` also breaks on form feeds and other separators that
    PDF text extraction leaves inside lines, which would shift line numbers.
    """
    return _LINE_BREAK.split(text)


def normalize_ws(text: str) -> str:
    """Collapse whitespace runs to single spaces and strip."""
    return _WHITESPACE.sub(" ", text).strip()


def collapse_blank_lines(text: str) -> str:
    """Collapse three or more newlines to two and strip."""
    return _EXCESS_BLANK_LINES.sub("\n\n", text).strip()


def clean_title(text: str) -> str:
    """Strip leading separator punctuation and normalize whitespace."""
    return normalize_ws(_LEADING_PUNCTUATION.sub("", text))


def trim_blank_lines(
    lines: Sequence[str], pages: Sequence[int]
) -> tuple[list[str], list[int]]:
    """Drop blank lines at both ends, keeping ``pages`` aligned with ``lines``."""
    start = 0
    stop = len(lines)
    while start < stop and not lines[start].strip():
        start += 1
    while stop > start and not lines[stop - 1].strip():
        stop -= 1
    return list(lines[start:stop]), list(pages[start:stop])
