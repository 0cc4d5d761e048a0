"""Cross-section relation mining from clause 1.2 (Related Sections) of Part 1."""

import re

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.clauses import clause_span
from specstruct.lib.segmentation.records import SectionRelationRegistry

logger = get_logger(__name__)

RELATION_START_CODE = "1.2"
RELATION_END_CODE = "1.3"

SECTION_MENTION_PATTERN = re.compile(
    r"\bSection\s+(\d+)\s+(\d+)\s+(\d+)\b", re.IGNORECASE
)


def find_section_mentions(text: str) -> list[str]:
    """Return the ids of every ``Section n n n`` mention, in order."""
    return [" ".join(m.groups()) for m in SECTION_MENTION_PATTERN.finditer(text)]


def mine_relations(
    section_id: str,
    part_one_text: str,
    registry: SectionRelationRegistry | None = None,
) -> SectionRelationRegistry:
    """Record the sections mentioned in clause 1.2 of a section's Part 1.

    Self references and repeated pairs are dropped by the registry.
    """
    if registry is None:
        registry = SectionRelationRegistry()

    span = clause_span(part_one_text, RELATION_START_CODE, RELATION_END_CODE)
    if not span:
        return registry

    added = sum(
        registry.add(section_id, target) for target in find_section_mentions(span)
    )
    logger.debug(f"Section '{section_id}': {added} new related sections")
    return registry
