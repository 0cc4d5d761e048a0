"""Split sections into PART 1 (General), PART 2 (Product), PART 3 (Execution)."""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.records import PART_TITLES, Part, Section
from specstruct.lib.segmentation.text_utils import split_lines, trim_blank_lines

logger = get_logger(__name__)

PART_MARKER_PATTERN = re.compile(
    r"^\s*PART\s+([123])\b\s*[-–—:.]?\s*(GENERAL|PRODUCTS?|EXECUTION)?\s*[-–—:.]?\s*$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PartMarker:
    """A ``PART n - LABEL`` line.

    Attributes:
        index: 0-based line index within the section text
        part_no: 1, 2 or 3
        title: Upper-cased label, defaulted from the part number
    """

    index: int
    part_no: int
    title: str


def find_part_markers(lines: Sequence[str]) -> list[PartMarker]:
    """Return every PART marker line in order."""
    markers: list[PartMarker] = []
    for index, line in enumerate(lines):
        m = PART_MARKER_PATTERN.match(line)
        if not m:
            continue
        part_no = int(m.group(1))
        label = (m.group(2) or PART_TITLES[part_no]).upper()
        markers.append(PartMarker(index=index, part_no=part_no, title=label))
    return markers


def _line_pages(section: Section, line_count: int) -> list[int]:
    if len(section.line_pages) == line_count:
        return list(section.line_pages)
    # Sections built by hand carry no page map; attribute lines to the start page.
    return [section.start_page] * line_count


def split_parts(section: Section) -> list[Part]:
    """Split one section into its parts.

    A section without PART markers becomes a single Part 1 holding the whole
    section text. A part number seen twice continues the first Part, so a
    section never has two Parts with the same number.
    """
    lines = split_lines(section.text)
    markers = find_part_markers(lines)
    if not markers:
        return [
            Part(
                section_id=section.id,
                part_no=1,
                title=PART_TITLES[1],
                start_page=section.start_page,
                end_page=section.end_page,
                text=section.text,
                explicit=False,
                line_pages=section.line_pages,
            )
        ]

    pages = _line_pages(section, len(lines))
    parts: dict[int, tuple[PartMarker, list[str], list[int]]] = {}
    for position, marker in enumerate(markers):
        first = marker.index + 1
        stop = markers[position + 1].index if position + 1 < len(markers) else len(lines)
        body, body_pages = trim_blank_lines(lines[first:stop], pages[first:stop])

        if marker.part_no in parts:
            logger.debug(
                f"Section '{section.id}' repeats PART {marker.part_no}; continuing it"
            )
            _, kept, kept_pages = parts[marker.part_no]
            kept.extend(body)
            kept_pages.extend(body_pages)
        else:
            parts[marker.part_no] = (marker, body, body_pages)

    result: list[Part] = []
    for marker, body, body_pages in parts.values():
        result.append(
            Part(
                section_id=section.id,
                part_no=marker.part_no,
                title=marker.title,
                start_page=body_pages[0] if body_pages else section.start_page,
                end_page=body_pages[-1] if body_pages else section.start_page,
                text="\n".join(body),
                line_pages=tuple(body_pages),
            )
        )
    return result


def build_parts(sections: Sequence[Section]) -> list[Part]:
    """Split every section into parts, preserving section order."""
    parts: list[Part] = []
    for section in sections:
        parts.extend(split_parts(section))
    return parts
