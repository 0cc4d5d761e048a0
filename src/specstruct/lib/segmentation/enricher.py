"""Section enrichment from Part 1.

Fills ``overview`` (Part 1 text before clause 1.2) and the auxiliary clause
fields ``p14``, ``p15``, ``p17`` and ``p18`` (clauses 1.4, 1.5, 1.7 and 1.8,
each up to the following clause). Each auxiliary field is resolved by an
ordered policy:

1. ``bounded-slice`` - slice the clause directly, ending at the earliest of
   the next clause heading, ``PART 2`` or ``END OF SECTION``.
2. ``subsections`` - rebuild the clause from Part 1 subsection marks whose
   level-2 code equals the clause code.
3. ``open-slice`` - slice from the clause heading to the end of Part 1.
"""

from collections.abc import Sequence
from dataclasses import replace

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.clauses import (
    slice_clause,
    slice_clause_to_end,
    text_before_clause,
)
from specstruct.lib.segmentation.policy import FallbackPolicy, Strategy
from specstruct.lib.segmentation.records import Part, Section, Subsection
from specstruct.lib.segmentation.subsections import split_subsections

logger = get_logger(__name__)

OVERVIEW_END_CODE = "1.2"

# field name -> (start code, end code)
AUXILIARY_CLAUSES: dict[str, tuple[str, str]] = {
    "p14": ("1.4", "1.5"),
    "p15": ("1.5", "1.6"),
    "p17": ("1.7", "1.8"),
    "p18": ("1.8", "1.9"),
}


def _from_subsections(
    text: str,
    start_code: str,
    end_code: str,
    subsections: Sequence[Subsection] = (),
) -> str | None:
    blocks: list[str] = []
    for subsection in subsections:
        if subsection.level2_code != start_code:
            continue
        code = subsection.level3_code or start_code
        heading = f"{code} {subsection.level3_title or ''}".rstrip()
        blocks.append(f"{heading}\n{subsection.text}".strip())
    return "\n".join(blocks) if blocks else None


def _bounded(
    text: str, start_code: str, end_code: str, subsections: Sequence[Subsection] = ()
) -> str | None:
    return slice_clause(text, start_code, end_code)


def _open(
    text: str, start_code: str, end_code: str, subsections: Sequence[Subsection] = ()
) -> str | None:
    return slice_clause_to_end(text, start_code, end_code)


AUXILIARY_FIELD_POLICY: FallbackPolicy[str] = FallbackPolicy(
    name="auxiliary-field",
    strategies=[
        Strategy(name="bounded-slice", resolve=_bounded),
        Strategy(name="subsections", resolve=_from_subsections),
        Strategy(name="open-slice", resolve=_open),
    ],
)


def part_one(parts: Sequence[Part], section_id: str) -> Part | None:
    """Return the Part 1 of a section, if any."""
    for part in parts:
        if part.section_id == section_id and part.part_no == 1:
            return part
    return None


def enrich_section(section: Section, parts: Sequence[Part]) -> Section:
    """Return a copy of ``section`` with overview and auxiliary fields set.

    Sections without a Part 1 keep their whole body as overview and get no
    auxiliary fields.
    """
    first = part_one(parts, section.id)
    if first is None:
        return replace(section, overview=section.text)

    text = first.text
    overview = text_before_clause(text, OVERVIEW_END_CODE)
    if overview is None:
        overview = text.strip()

    part_one_subsections = split_subsections(first, section.title)
    values: dict[str, str | None] = {}
    for field_name, (start_code, end_code) in AUXILIARY_CLAUSES.items():
        strategy, value = AUXILIARY_FIELD_POLICY.resolve(
            text, start_code, end_code, subsections=part_one_subsections
        )
        if strategy is not None and strategy != "bounded-slice":
            logger.debug(
                f"Section '{section.id}' {field_name}: resolved by '{strategy}'"
            )
        values[field_name] = value

    return replace(section, overview=overview, **values)


def enrich_sections(
    sections: Sequence[Section], parts: Sequence[Part]
) -> list[Section]:
    """Enrich every section; input records are left untouched."""
    return [enrich_section(section, parts) for section in sections]
