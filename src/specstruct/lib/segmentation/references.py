"""Standard-reference mining from clause 1.3 of Part 1.

A reference line carries an uppercase prefix (``IEC``, ``BS EN``, ``IEC/EN``),
a code containing a digit (``60947-2``), an optional trailing colon, and an
optional inline title. Reference lists often share one title across several
codes::

    IEC 60947-2 /
    BS EN 60898-2   Low Voltage Switchgear

A line ending in ``/`` continues onto the next one: the slash is dropped and
the next line's title is attributed to both codes.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.clauses import clause_span
from specstruct.lib.segmentation.records import ReferenceRegistry
from specstruct.lib.segmentation.text_utils import (
    clean_title,
    normalize_ws,
    split_lines,
)

logger = get_logger(__name__)

REFERENCE_START_CODE = "1.3"
REFERENCE_END_CODE = "1.4"

REFERENCE_LINE_PATTERN = re.compile(
    r"^\s*(?:[A-Za-z0-9]{1,2}[.)]\s+)?"
    r"(?P<prefix>[A-Z]{2,}(?:\s*/\s*[A-Z]{2,})*(?:\s+[A-Z]{2,}(?:\s*/\s*[A-Z]{2,})*)*)"
    r"\s+(?P<code>[A-Z]*\d[A-Za-z0-9]*(?:\s*[-/.]\s*[A-Za-z]?\d[A-Za-z0-9]*)*)"
    r"\s*:?"
    r"(?:\s+(?P<title>.*?))?"
    r"\s*(?P<continuation>/)?\s*[.;,]?\s*$"
)

# ` / ` between two codes on one line, e.g. "IEC 61439-1 / IEC 61439-2 Title".
SAME_LINE_LIST_SEPARATOR = re.compile(
    r"\s+/\s+(?=[A-Z]{2,}(?:\s*/\s*[A-Z]{2,})*(?:\s+[A-Z]{2,})*\s+[A-Z]*\d)"
)

STANDARD_ID_PATTERN = re.compile(
    r"\b(?P<prefix>[A-Z]{2,}(?:/[A-Z]{2,})?)[- ]?(?P<number>\d{2,}(?:-\d+)*[A-Z]?)\b"
)
# Uppercase words that precede numbers without naming a standard.
NON_STANDARD_PREFIXES = frozenset({"SECTION", "PART", "PAGE", "PAGES", "NO", "OF"})


class ReferenceLineKind(str, Enum):
    """Shape of a matched reference line.

    Attributes:
        CODE: Self-contained code line, with or without a title
        CONTINUATION: Code line ending in ``/`` that shares the next title
    """

    CODE = "code"
    CONTINUATION = "continuation"


@dataclass(frozen=True)
class ReferenceLineMatch:
    """A reference code recognized on one line.

    Attributes:
        kind: Line shape
        line_index: 0-based index of the line within the mined span
        ref_id: Normalized reference id
        title: Inline title, if any
    """

    kind: ReferenceLineKind
    line_index: int
    ref_id: str
    title: str | None


@dataclass(frozen=True)
class StandardIdMatch:
    """A standard identifier found in free text.

    Attributes:
        match: Normalized identifier, e.g. "ABC-001"
        index: Offset in the hyphen-normalized text
    """

    match: str
    index: int


def normalize_reference_id(prefix: str, code: str) -> str:
    """Join prefix and code with one space and canonicalize separators."""
    prefix = re.sub(r"\s*/\s*", "/", normalize_ws(prefix))
    code = re.sub(r"\s*-\s*", "-", normalize_ws(code))
    code = re.sub(r"\s*/\s*", "/", code)
    return f"{prefix} {code}"


def match_reference_line(line: str, line_index: int = 0) -> ReferenceLineMatch | None:
    """Recognize a single reference line."""
    m = REFERENCE_LINE_PATTERN.match(line)
    if not m:
        return None
    title = clean_title(m.group("title") or "") or None
    kind = (
        ReferenceLineKind.CONTINUATION
        if m.group("continuation")
        else ReferenceLineKind.CODE
    )
    return ReferenceLineMatch(
        kind=kind,
        line_index=line_index,
        ref_id=normalize_reference_id(m.group("prefix"), m.group("code")),
        title=title,
    )


def match_reference_lines(lines: Sequence[str]) -> list[ReferenceLineMatch]:
    """Recognize every reference line; other lines are skipped."""
    matches: list[ReferenceLineMatch] = []
    for index, line in enumerate(lines):
        match = match_reference_line(line, index)
        if match is not None:
            matches.append(match)
    return matches


def split_reference_lists(lines: Sequence[str]) -> list[str]:
    """Break same-line code lists into one continuation line per code.

    ``IEC 61439-1 / IEC 61439-2 Title`` becomes ``IEC 61439-1 /`` followed by
    ``IEC 61439-2 Title``, so both codes share the title. A split is only made
    where the left piece is itself a reference line.
    """
    expanded: list[str] = []
    for line in lines:
        start = 0
        for m in SAME_LINE_LIST_SEPARATOR.finditer(line):
            head = line[start : m.start()] + " /"
            if match_reference_line(head) is None:
                continue
            expanded.append(head)
            start = m.end()
        expanded.append(line[start:])
    return expanded


def resolve_shared_titles(
    lines: Sequence[str], matches: Sequence[ReferenceLineMatch]
) -> list[tuple[str, str | None]]:
    """Attribute titles, applying the shared-title idiom.

    A continuation line takes the resolved title of the next non-blank line
    when that line is a title-bearing reference line; otherwise it keeps its
    own. Resolving from the bottom up lets chains of continuations share a
    single title.

    Returns:
        (ref_id, title) pairs in line order.
    """
    by_line = {match.line_index: match for match in matches}
    resolved: dict[int, str | None] = {}

    for match in reversed(matches):
        title = match.title
        if match.kind is ReferenceLineKind.CONTINUATION:
            following = next(
                (
                    index
                    for index in range(match.line_index + 1, len(lines))
                    if lines[index].strip()
                ),
                None,
            )
            if following is not None and following in by_line:
                shared = resolved.get(following)
                if shared:
                    title = shared
        resolved[match.line_index] = title

    return [(match.ref_id, resolved[match.line_index]) for match in matches]


def mine_references(
    section_id: str,
    part_one_text: str,
    registry: ReferenceRegistry | None = None,
) -> ReferenceRegistry:
    """Mine clause 1.3 of a section's Part 1 into ``registry``.

    Args:
        section_id: Owning section id for the relation table.
        part_one_text: Part 1 text of the section.
        registry: Accumulator shared across the document. A new one is
            created when omitted.

    Returns:
        The registry, updated in place.
    """
    if registry is None:
        registry = ReferenceRegistry()

    span = clause_span(part_one_text, REFERENCE_START_CODE, REFERENCE_END_CODE)
    if not span:
        return registry

    lines = split_reference_lists(split_lines(span))
    matches = match_reference_lines(lines)
    for ref_id, title in resolve_shared_titles(lines, matches):
        registry.add(section_id, ref_id, title)

    logger.debug(f"Section '{section_id}': {len(matches)} reference lines")
    return registry


def find_standard_ids(text: str) -> list[StandardIdMatch]:
    """Find standard identifiers anywhere in free text.

    Hyphen spacing is normalized first, so ``ABC - 001`` is reported as
    ``ABC-001``. Offsets refer to the normalized text.
    """
    normalized = re.sub(r"\s*-\s*", "-", text)
    found: list[StandardIdMatch] = []
    for m in STANDARD_ID_PATTERN.finditer(normalized):
        if m.group("prefix") in NON_STANDARD_PREFIXES:
            continue
        found.append(StandardIdMatch(match=m.group(0), index=m.start()))
    return found
