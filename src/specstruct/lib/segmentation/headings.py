"""Heading detection over page text.

Two recognizers run independently on every line:

- **section style**: ``Section 26 24 13`` with an optional inline title. When
  the title is absent, the next non-blank line of the page is used.
- **numbered**: a leading path of one to four dot-separated integers followed
  by a 2-80 character title (``1.`` ``1.2`` ``1.2.3`` ``1.2.3.4``).

``select_section_headings`` then decides which set carves the document into
sections: section-style headings when the document has any, otherwise the
shallowest numbered headings. Deeper numbered headings are body structure,
handled later by the subsection builder.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.policy import FallbackPolicy, Strategy
from specstruct.lib.segmentation.records import Heading, HeadingKind
from specstruct.lib.segmentation.text_utils import clean_title, split_lines

logger = get_logger(__name__)


@dataclass(frozen=True)
class HeadingPattern:
    """A heading recognizer.

    Attributes:
        kind: Kind tag given to matches
        pattern: Regex applied to a single line
    """

    kind: HeadingKind
    pattern: re.Pattern[str]


SECTION_HEADING = HeadingPattern(
    kind=HeadingKind.SECTION,
    pattern=re.compile(
        r"^\s*Section\s+(\d+)\s+(\d+)(?:\s+(\d+))?(?:\s+(.*?))?\s*$",
        re.IGNORECASE,
    ),
)

NUMBERED_HEADING = HeadingPattern(
    kind=HeadingKind.NUMBERED,
    pattern=re.compile(r"^\s*(\d+(?:\.\d+){0,3})[.)]?\s+(.{2,80})$"),
)

HEADING_PATTERNS: list[HeadingPattern] = [SECTION_HEADING, NUMBERED_HEADING]


def _next_non_blank(lines: Sequence[str], start: int) -> str:
    for candidate in lines[start:]:
        if candidate.strip():
            return candidate.strip()
    return ""


def _match_section_style(
    lines: Sequence[str], index: int, page_no: int
) -> Heading | None:
    m = SECTION_HEADING.pattern.match(lines[index])
    if not m:
        return None
    code = " ".join(g for g in m.group(1, 2, 3) if g)
    title = clean_title(m.group(4) or "")
    if not title:
        title = _next_non_blank(lines, index + 1)
    return Heading(
        kind=HeadingKind.SECTION,
        page=page_no,
        line=index + 1,
        code=code,
        title=title,
    )


def _match_numbered(line: str, line_no: int, page_no: int) -> Heading | None:
    m = NUMBERED_HEADING.pattern.match(line)
    if not m:
        return None
    return Heading(
        kind=HeadingKind.NUMBERED,
        page=page_no,
        line=line_no,
        code=m.group(1),
        title=m.group(2).strip(),
    )


def detect_headings(pages: Sequence[str]) -> list[Heading]:
    """Find every heading in the document.

    Args:
        pages: Page texts in document order (page 1 first).

    Returns:
        All matches of both recognizers in document order. Empty when the
        document has no recognizable headings.
    """
    headings: list[Heading] = []
    for page_index, page_text in enumerate(pages):
        page_no = page_index + 1
        lines = split_lines(page_text)
        for index, line in enumerate(lines):
            section_heading = _match_section_style(lines, index, page_no)
            if section_heading is not None:
                headings.append(section_heading)
            numbered = _match_numbered(line, index + 1, page_no)
            if numbered is not None:
                headings.append(numbered)

    logger.debug(f"Detected {len(headings)} heading candidates in {len(pages)} pages")
    return headings


def _section_style(headings: Sequence[Heading]) -> list[Heading]:
    return [h for h in headings if h.kind is HeadingKind.SECTION]


def _numbered_top_level(headings: Sequence[Heading]) -> list[Heading]:
    numbered = [h for h in headings if h.kind is HeadingKind.NUMBERED]
    if not numbered:
        return []
    shallowest = min(h.depth for h in numbered)
    return [h for h in numbered if h.depth == shallowest]


HEADING_SELECTION_POLICY: FallbackPolicy[list[Heading]] = FallbackPolicy(
    name="heading-selection",
    strategies=[
        Strategy(name="section-style", resolve=_section_style),
        Strategy(name="numbered-top-level", resolve=_numbered_top_level),
    ],
)


def select_section_headings(headings: Sequence[Heading]) -> list[Heading]:
    """Choose the headings that delimit sections.

    Args:
        headings: Output of ``detect_headings``.

    Returns:
        Selected headings in document order (page, then line), or an empty
        list when neither strategy applies.
    """
    _, selected = HEADING_SELECTION_POLICY.resolve(headings)
    if not selected:
        return []
    return sorted(selected, key=lambda h: (h.page, h.line))
