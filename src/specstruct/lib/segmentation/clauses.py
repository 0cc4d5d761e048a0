"""Clause-span slicing over Part 1 text.

A clause span runs from the heading line of a start code (``1.3``) to the
earliest of: the end-code heading (``1.4``), a ``PART 2`` marker, or an
``END OF SECTION`` marker found after the start. The enricher and the three
miners all read their input through these helpers.
"""

import re
from functools import lru_cache

from specstruct.lib.segmentation.policy import FallbackPolicy, Strategy

PART_TWO_PATTERN = re.compile(r"^[ \t]*PART\s+2\b", re.IGNORECASE | re.MULTILINE)
END_OF_SECTION_PATTERN = re.compile(
    r"^[ \t]*END\s+OF\s+SECTION\b", re.IGNORECASE | re.MULTILINE
)


@lru_cache(maxsize=64)
def clause_heading_pattern(code: str) -> re.Pattern[str]:
    """Build the pattern of a clause heading line.

    ``1.2`` matches ``1.2 RELATED SECTIONS`` and ``1 . 2`` but neither
    ``1.20`` nor ``1.2.1``.
    """
    segments = [re.escape(segment) for segment in code.split(".")]
    body = r"\s*\.\s*".join(segments)
    return re.compile(
        rf"^[ \t]*{body}(?!\d)(?!\s*\.\s*\d)",
        re.MULTILINE,
    )


def find_clause(text: str, code: str, pos: int = 0) -> re.Match[str] | None:
    """Locate the first heading line of ``code`` at or after ``pos``."""
    return clause_heading_pattern(code).search(text, pos)


def text_before_clause(text: str, code: str) -> str | None:
    """Text preceding the first ``code`` heading, or None if it is absent."""
    m = find_clause(text, code)
    if m is None:
        return None
    return text[: m.start()].strip()


def _end_offset(text: str, end_code: str, pos: int) -> int | None:
    candidates: list[int] = []
    for m in (
        find_clause(text, end_code, pos),
        PART_TWO_PATTERN.search(text, pos),
        END_OF_SECTION_PATTERN.search(text, pos),
    ):
        if m is not None:
            candidates.append(m.start())
    return min(candidates) if candidates else None


def slice_clause(text: str, start_code: str, end_code: str) -> str | None:
    """Slice a clause span whose end boundary can be located.

    Returns:
        Span text starting at the start-code heading line, or None when the
        start heading or every end candidate is missing.
    """
    start = find_clause(text, start_code)
    if start is None:
        return None
    end = _end_offset(text, end_code, start.end())
    if end is None:
        return None
    return text[start.start() : end].strip()


def slice_clause_to_end(text: str, start_code: str, end_code: str) -> str | None:
    """Slice from the start-code heading to the end of text.

    ``end_code`` is unused; the signature matches ``slice_clause`` so both
    can sit in the same policy.
    """
    start = find_clause(text, start_code)
    if start is None:
        return None
    return text[start.start() :].strip()


CLAUSE_SPAN_POLICY: FallbackPolicy[str] = FallbackPolicy(
    name="clause-span",
    strategies=[
        Strategy(name="bounded-slice", resolve=slice_clause),
        Strategy(name="open-slice", resolve=slice_clause_to_end),
    ],
)


def clause_span(text: str, start_code: str, end_code: str) -> str | None:
    """Resolve a clause span, falling back to end of text.

    Returns:
        Span text, or None when the start heading is absent.
    """
    _, span = CLAUSE_SPAN_POLICY.resolve(text, start_code, end_code)
    return span
