"""Whole-document segmentation run.

Chains the engine components in dependency order and collects every record
list into a single ``DocumentAnalysis``::

    headings -> sections -> parts -> subsections
                                 \\-> enrichment, references, definitions, relations
    subsections (or bare sections) -> chunks
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.chunker import SectionChunker
from specstruct.lib.segmentation.definitions import mine_definitions
from specstruct.lib.segmentation.enricher import enrich_sections, part_one
from specstruct.lib.segmentation.headings import (
    detect_headings,
    select_section_headings,
)
from specstruct.lib.segmentation.parts import build_parts
from specstruct.lib.segmentation.records import (
    Chunk,
    Definition,
    DefinitionRegistry,
    Heading,
    Part,
    ReferenceRegistry,
    Section,
    SectionDefinitionRelation,
    SectionRelation,
    SectionRelationRegistry,
    SectionStdRefRelation,
    StdRef,
    Subsection,
)
from specstruct.lib.segmentation.references import mine_references
from specstruct.lib.segmentation.relations import mine_relations
from specstruct.lib.segmentation.sections import build_sections
from specstruct.lib.segmentation.subsections import build_subsections
from specstruct.models.config import SegmentationConfig

logger = get_logger(__name__)


@dataclass
class DocumentAnalysis:
    """Every record produced for one document.

    Attributes:
        source_id: Identifier of the ingested document
        page_count: Number of input pages
        headings: Section-delimiting headings in document order
        sections: Enriched sections in document order
        parts: Parts of every section
        subsections: Chunking units
        chunks: Size-bounded chunks
        references: Standard references, one per normalized id
        reference_relations: Unique (section, reference) pairs
        definitions: Abbreviations, one per token
        definition_relations: Unique (section, abbreviation) pairs
        section_relations: Unique cross-section pairs
    """

    source_id: str
    page_count: int
    headings: list[Heading] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
    parts: list[Part] = field(default_factory=list)
    subsections: list[Subsection] = field(default_factory=list)
    chunks: list[Chunk] = field(default_factory=list)
    references: list[StdRef] = field(default_factory=list)
    reference_relations: list[SectionStdRefRelation] = field(default_factory=list)
    definitions: list[Definition] = field(default_factory=list)
    definition_relations: list[SectionDefinitionRelation] = field(
        default_factory=list
    )
    section_relations: list[SectionRelation] = field(default_factory=list)

    def to_record_dict(self) -> dict[str, Any]:
        """Serialize every record list for the storage collaborator."""
        return {
            "sourceId": self.source_id,
            "pageCount": self.page_count,
            "sections": [s.to_record_dict() for s in self.sections],
            "parts": [p.to_record_dict() for p in self.parts],
            "subsections": [s.to_record_dict() for s in self.subsections],
            "chunks": [c.to_record_dict() for c in self.chunks],
            "references": [r.to_record_dict() for r in self.references],
            "sectionReferences": [r.to_record_dict() for r in self.reference_relations],
            "definitions": [d.to_record_dict() for d in self.definitions],
            "sectionDefinitions": [
                r.to_record_dict() for r in self.definition_relations
            ],
            "sectionRelations": [r.to_record_dict() for r in self.section_relations],
        }


def analyze_document(
    pages: Sequence[str],
    source_id: str | None = None,
    config: SegmentationConfig | None = None,
) -> DocumentAnalysis:
    """Segment and chunk one document.

    Args:
        pages: Page texts in document order, headers and footers removed.
        source_id: Document identifier; overrides ``config.chunking.source_id``.
        config: Engine configuration, defaults to ``SegmentationConfig()``.

    Returns:
        DocumentAnalysis with every record list populated.

    Raises:
        ValueError: If the chunking configuration is unusable.
    """
    if config is None:
        config = SegmentationConfig()
    chunking = config.chunking
    if source_id is not None:
        chunking = chunking.model_copy(update={"source_id": source_id})

    headings = select_section_headings(detect_headings(pages))
    sections = build_sections(pages, headings)
    parts = build_parts(sections)
    subsections = build_subsections(
        sections, parts, exclude_boilerplate_part=config.exclude_boilerplate_part
    )
    sections = enrich_sections(sections, parts)

    references = ReferenceRegistry()
    definitions = DefinitionRegistry()
    relations = SectionRelationRegistry()
    for section in sections:
        first = part_one(parts, section.id)
        if first is None:
            continue
        mine_references(section.id, first.text, references)
        mine_definitions(section.id, first.text, definitions)
        mine_relations(section.id, first.text, relations)

    chunker = SectionChunker.from_config(chunking)
    chunks = chunker.chunk_document(sections, subsections)

    logger.info(
        f"Analyzed '{chunking.source_id}': {len(pages)} pages, "
        f"{len(sections)} sections, {len(subsections)} subsections, "
        f"{len(chunks)} chunks"
    )

    return DocumentAnalysis(
        source_id=chunking.source_id,
        page_count=len(pages),
        headings=list(headings),
        sections=sections,
        parts=parts,
        subsections=subsections,
        chunks=chunks,
        references=list(references.references.values()),
        reference_relations=list(references.relations),
        definitions=list(definitions.definitions.values()),
        definition_relations=list(definitions.relations),
        section_relations=list(relations.relations),
    )
