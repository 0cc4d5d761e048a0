"""Abbreviation and definition mining from clause 1.6 of Part 1.

Definition tables arrive as whitespace-aligned columns::

    AC                  Alternating Current
    Medium Voltage   (MV)   Voltage between 1 kV and 36 kV
    O - C - O           Open - Close - Open operating sequence

Column 1 always starts the abbreviation. On lines with three or more
columns, column 2 continues the abbreviation only when it is
abbreviation-shaped (parenthesized uppercase, or fully uppercase);
otherwise it starts the definition. Lines without column spacing are tried
against ``ABBR - definition``, where the abbreviation may itself contain
``" - "`` (``O - C - O``).
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.clauses import clause_span
from specstruct.lib.segmentation.records import DefinitionRegistry
from specstruct.lib.segmentation.text_utils import normalize_ws, split_lines

logger = get_logger(__name__)

DEFINITION_START_CODE = "1.6"
DEFINITION_END_CODE = "1.7"

COLUMN_SEPARATOR = re.compile(r"[ \t]*\t[ \t]*|\s{3,}")
CLAUSE_LINE_PATTERN = re.compile(r"^\s*\d+(?:\.\d+)+\b")
LIST_MARKER_PATTERN = re.compile(r"^[A-Za-z0-9]{1,2}[.)]$")

PARENTHESIZED_ABBREVIATION = re.compile(r"^\([A-Z0-9][A-Z0-9&/.\- ]*\)$")
UPPERCASE_ABBREVIATION = re.compile(r"^[A-Z0-9&/.\-() ]*[A-Z][A-Z0-9&/.\-() ]*$")

_ABBR_TOKEN = r"[A-Z0-9][A-Z0-9&/.]*"
EXTENDED_DEFINITION_PATTERN = re.compile(
    rf"^\s*(?P<abbreviation>{_ABBR_TOKEN}(?:\s+-\s+{_ABBR_TOKEN})*)"
    r"(?:\s*:\s+|\s+[-–—]\s+|\s{2,})"
    r"(?P<definition>\S.*)$"
)


@dataclass(frozen=True)
class DefinitionLineMatch:
    """An abbreviation/definition pair recognized on one line."""

    line_index: int
    abbreviation: str
    definition: str


def is_abbreviation_shaped(text: str) -> bool:
    """Whether a column looks like part of an abbreviation.

    Matches parenthesized uppercase (``(MV)``) and fully uppercase tokens of
    any length (``KEMA``, ``AC``). A short proper noun written in capitals
    is indistinguishable from an abbreviation here.
    """
    text = text.strip()
    return bool(
        PARENTHESIZED_ABBREVIATION.match(text) or UPPERCASE_ABBREVIATION.match(text)
    )


def split_columns(line: str) -> list[str]:
    """Split a line on tabs or runs of three or more spaces."""
    return [column for column in COLUMN_SEPARATOR.split(line.strip()) if column]


def match_definition_line(
    line: str, line_index: int = 0
) -> DefinitionLineMatch | None:
    """Recognize one definition line."""
    if not line.strip() or CLAUSE_LINE_PATTERN.match(line):
        return None

    columns = split_columns(line)
    if columns and LIST_MARKER_PATTERN.match(columns[0]):
        columns = columns[1:]

    if len(columns) >= 3 and is_abbreviation_shaped(columns[1]):
        abbreviation = f"{columns[0]} {columns[1]}"
        definition = " ".join(columns[2:])
    elif len(columns) >= 2:
        abbreviation = columns[0]
        definition = " ".join(columns[1:])
    else:
        m = EXTENDED_DEFINITION_PATTERN.match(line)
        if not m:
            return None
        abbreviation = m.group("abbreviation")
        definition = m.group("definition")

    abbreviation = normalize_ws(abbreviation)
    definition = normalize_ws(definition)
    if not abbreviation or not definition:
        return None
    return DefinitionLineMatch(
        line_index=line_index, abbreviation=abbreviation, definition=definition
    )


def match_definition_lines(lines: Sequence[str]) -> list[DefinitionLineMatch]:
    """Recognize every definition line; other lines are skipped."""
    matches: list[DefinitionLineMatch] = []
    for index, line in enumerate(lines):
        match = match_definition_line(line, index)
        if match is not None:
            matches.append(match)
    return matches


def mine_definitions(
    section_id: str,
    part_one_text: str,
    registry: DefinitionRegistry | None = None,
) -> DefinitionRegistry:
    """Mine clause 1.6 of a section's Part 1 into ``registry``.

    Args:
        section_id: Owning section id for the relation table.
        part_one_text: Part 1 text of the section.
        registry: Accumulator shared across the document. A new one is
            created when omitted.

    Returns:
        The registry, updated in place.
    """
    if registry is None:
        registry = DefinitionRegistry()

    span = clause_span(part_one_text, DEFINITION_START_CODE, DEFINITION_END_CODE)
    if not span:
        return registry

    matches = match_definition_lines(split_lines(span))
    for match in matches:
        registry.add(section_id, match.abbreviation, match.definition)

    logger.debug(f"Section '{section_id}': {len(matches)} definition lines")
    return registry
