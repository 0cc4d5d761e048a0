"""Subsection building from numbered clause marks.

Parts are cut at level-3 marks (``2.1.3``). Level-4 marks (``2.1.3.1``) and
their bodies stay inside the owning level-3 subsection; they are only used
later by the chunker to choose split points. Shallow documents without any
level-3 mark are cut at every mark instead.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.policy import FallbackPolicy, Strategy
from specstruct.lib.segmentation.records import Part, Section, Subsection
from specstruct.lib.segmentation.text_utils import (
    clean_title,
    split_lines,
    trim_blank_lines,
)

logger = get_logger(__name__)

SUBSECTION_MARK_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+){0,3})[.)]?(?:\s+(.*))?$")

SUBSECTION_LEVEL = 3


@dataclass(frozen=True)
class SubsectionMark:
    """A numbered clause line inside a part.

    Attributes:
        index: 0-based line index within the part text
        code: Dot-joined path, e.g. "2.1.3"
        title: Text after the code, leading punctuation removed
    """

    index: int
    code: str
    title: str

    @property
    def depth(self) -> int:
        return self.code.count(".") + 1


def truncate_code(code: str, depth: int) -> str:
    """Keep the first ``depth`` segments of a dot-joined code."""
    return ".".join(code.split(".")[:depth])


def find_marks(lines: Sequence[str]) -> list[SubsectionMark]:
    """Return every numbered clause mark in order."""
    marks: list[SubsectionMark] = []
    for index, line in enumerate(lines):
        m = SUBSECTION_MARK_PATTERN.match(line)
        if m:
            marks.append(
                SubsectionMark(
                    index=index, code=m.group(1), title=clean_title(m.group(2) or "")
                )
            )
    return marks


def _level3_marks(marks: Sequence[SubsectionMark]) -> list[SubsectionMark]:
    return [m for m in marks if m.depth == SUBSECTION_LEVEL]


def _all_marks(marks: Sequence[SubsectionMark]) -> list[SubsectionMark]:
    return list(marks)


BOUNDARY_POLICY: FallbackPolicy[list[SubsectionMark]] = FallbackPolicy(
    name="subsection-boundaries",
    strategies=[
        Strategy(name="level-3", resolve=_level3_marks),
        Strategy(name="all-marks", resolve=_all_marks),
    ],
)


def _part_pages(part: Part, line_count: int) -> list[int]:
    if len(part.line_pages) == line_count:
        return list(part.line_pages)
    return [part.start_page] * line_count


def split_subsections(part: Part, section_title: str = "") -> list[Subsection]:
    """Split one part into subsections.

    Args:
        part: Part to split.
        section_title: Title of the owning section, copied to every subsection.

    Returns:
        Subsections in order, at most one per level-3 code. A part without any
        numbered mark yields a single pass-through subsection with ``None``
        codes; an empty part yields nothing.
    """
    lines = split_lines(part.text)
    pages = _part_pages(part, len(lines))
    marks = find_marks(lines)

    if not marks:
        if not part.text.strip():
            return []
        return [
            Subsection(
                section_id=part.section_id,
                part_no=part.part_no,
                level2_code=None,
                level3_code=None,
                level2_title=None,
                level3_title=None,
                title=section_title,
                text=part.text.strip(),
                start_page=part.start_page,
                end_page=part.end_page,
            )
        ]

    _, boundaries = BOUNDARY_POLICY.resolve(marks)
    titles_by_code: dict[str, str] = {}
    for mark in marks:
        titles_by_code.setdefault(mark.code, mark.title)

    by_code: dict[str, Subsection] = {}
    for position, mark in enumerate(boundaries or []):
        first = mark.index + 1
        stop = (
            boundaries[position + 1].index
            if position + 1 < len(boundaries)
            else len(lines)
        )
        body, body_pages = trim_blank_lines(lines[first:stop], pages[first:stop])
        text = "\n".join(body)
        start_page = pages[mark.index]
        end_page = body_pages[-1] if body_pages else start_page

        level3_code = truncate_code(mark.code, SUBSECTION_LEVEL)
        existing = by_code.get(level3_code)
        if existing is not None:
            existing.text = f"{existing.text}\n{text}" if existing.text else text
            existing.end_page = max(existing.end_page, end_page)
            continue

        level2_code = truncate_code(mark.code, 2)
        by_code[level3_code] = Subsection(
            section_id=part.section_id,
            part_no=part.part_no,
            level2_code=level2_code,
            level3_code=level3_code,
            level2_title=titles_by_code.get(level2_code) or None,
            level3_title=mark.title or None,
            title=section_title,
            text=text,
            start_page=start_page,
            end_page=end_page,
        )

    return list(by_code.values())


def build_subsections(
    sections: Sequence[Section],
    parts: Sequence[Part],
    exclude_boilerplate_part: bool = True,
) -> list[Subsection]:
    """Build subsections for every part of the document.

    Args:
        sections: Sections of the document, used for subsection titles.
        parts: Parts of the document, in order.
        exclude_boilerplate_part: When the document carries explicit PART
            markers, skip Part 1 (general boilerplate). Documents without
            PART markers always keep their single Part 1.

    Returns:
        Subsections in part order.
    """
    titles = {section.id: section.title for section in sections}
    has_explicit_parts = any(part.explicit for part in parts)
    skip_part_one = exclude_boilerplate_part and has_explicit_parts

    subsections: list[Subsection] = []
    for part in parts:
        if skip_part_one and part.part_no == 1:
            continue
        subsections.extend(split_subsections(part, titles.get(part.section_id, "")))

    logger.debug(
        f"Built {len(subsections)} subsections from {len(parts)} parts "
        f"(part 1 {'excluded' if skip_part_one else 'included'})"
    )
    return subsections
