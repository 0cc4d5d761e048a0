"""Section building from heading markers.

Headings are ordered by document position (page, then line), never by their
numeric code: specification books are not guaranteed to be authored in
ascending section order, and code order would interleave unrelated page
ranges. Each section runs line by line from its heading up to the next
heading, so a section starting mid-page does not absorb the tail of the
previous one.
"""

import re
from collections.abc import Sequence

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.headings import (
    detect_headings,
    select_section_headings,
)
from specstruct.lib.segmentation.records import (
    DOCUMENT_SECTION_ID,
    PREAMBLE_SECTION_ID,
    Heading,
    Section,
)
from specstruct.lib.segmentation.text_utils import split_lines, trim_blank_lines

logger = get_logger(__name__)

END_OF_SECTION_PATTERN = re.compile(r"^\s*END\s+OF\s+SECTION\b", re.IGNORECASE)

Position = tuple[int, int]  # (1-indexed page, 1-indexed line)


def _collect_lines(
    page_lines: Sequence[Sequence[str]],
    start: Position,
    end: Position | None,
) -> tuple[list[str], list[int]]:
    """Gather lines from ``start`` (inclusive) up to ``end`` (exclusive).

    Returns:
        Tuple of (lines, page number of each line).
    """
    lines: list[str] = []
    pages: list[int] = []
    last_page = end[0] if end is not None else len(page_lines)
    for page_no in range(start[0], last_page + 1):
        current = page_lines[page_no - 1]
        first = start[1] - 1 if page_no == start[0] else 0
        stop = end[1] - 1 if end is not None and page_no == end[0] else len(current)
        for line in current[first:stop]:
            lines.append(line)
            pages.append(page_no)
    return lines, pages


def trim_end_of_section(lines: Sequence[str]) -> list[str]:
    """Drop the END OF SECTION marker line and everything after it."""
    for index, line in enumerate(lines):
        if END_OF_SECTION_PATTERN.match(line):
            return list(lines[:index])
    return list(lines)


def _make_section(
    section_id: str,
    code: str,
    title: str,
    start_page: int,
    end_page: int,
    lines: Sequence[str],
    pages: Sequence[int],
) -> Section:
    kept = trim_end_of_section(lines)
    kept, kept_pages = trim_blank_lines(kept, pages[: len(kept)])
    return Section(
        id=section_id,
        code=code,
        title=title,
        start_page=start_page,
        end_page=end_page,
        text="\n".join(line.rstrip() for line in kept),
        line_pages=tuple(kept_pages),
    )


def _document_section(page_lines: Sequence[Sequence[str]]) -> Section:
    page_count = len(page_lines)
    if page_count == 0:
        return Section(
            id=DOCUMENT_SECTION_ID,
            code="0",
            title="Document",
            start_page=1,
            end_page=1,
            text="",
        )
    lines, pages = _collect_lines(page_lines, (1, 1), None)
    return _make_section(
        DOCUMENT_SECTION_ID, "0", "Document", 1, page_count, lines, pages
    )


def _unique_id(code: str, seen: dict[str, int]) -> str:
    count = seen.get(code, 0) + 1
    seen[code] = count
    if count == 1:
        return code
    logger.warning(f"Section code '{code}' repeats; using id '{code}#{count}'")
    return f"{code}#{count}"


def build_sections(
    pages: Sequence[str],
    headings: Sequence[Heading] | None = None,
) -> list[Section]:
    """Carve page texts into top-level sections.

    Args:
        pages: Page texts in document order.
        headings: Section-delimiting headings. Defaults to
            ``select_section_headings(detect_headings(pages))``.

    Returns:
        Sections in document order. A document without headings yields one
        ``sec:document`` section spanning every page; an empty input yields
        one empty-bodied ``sec:document`` section.
    """
    page_lines = [split_lines(page) for page in pages]
    if headings is None:
        headings = select_section_headings(detect_headings(pages))
    else:
        headings = sorted(headings, key=lambda h: (h.page, h.line))

    if not headings:
        logger.debug("No section headings found; using whole-document section")
        return [_document_section(page_lines)]

    sections: list[Section] = []
    first = headings[0]
    first_start_page = first.page
    if (first.page, first.line) != (1, 1):
        lines, line_pages = _collect_lines(page_lines, (1, 1), (first.page, first.line))
        if any(line.strip() for line in lines):
            sections.append(
                _make_section(
                    PREAMBLE_SECTION_ID,
                    "",
                    "Preamble",
                    1,
                    line_pages[-1],
                    lines,
                    line_pages,
                )
            )
        else:
            # Blank leading pages (covers, separators) belong to the first section.
            first_start_page = 1

    seen: dict[str, int] = {}
    for index, heading in enumerate(headings):
        following = headings[index + 1] if index + 1 < len(headings) else None
        end = (following.page, following.line) if following is not None else None
        lines, line_pages = _collect_lines(page_lines, (heading.page, heading.line), end)
        start_page = first_start_page if index == 0 else heading.page
        end_page = line_pages[-1] if line_pages else heading.page
        sections.append(
            _make_section(
                _unique_id(heading.code, seen),
                heading.code,
                heading.title,
                start_page,
                end_page,
                lines,
                line_pages,
            )
        )

    logger.debug(f"Built {len(sections)} sections from {len(headings)} headings")
    return sections
