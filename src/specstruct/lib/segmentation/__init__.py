"""Document structure segmentation and chunking engine."""

from specstruct.lib.segmentation.chunker import SectionChunker, chunk_id, chunk_units
from specstruct.lib.segmentation.definitions import mine_definitions
from specstruct.lib.segmentation.enricher import enrich_section, enrich_sections
from specstruct.lib.segmentation.headings import (
    detect_headings,
    select_section_headings,
)
from specstruct.lib.segmentation.parts import build_parts, split_parts
from specstruct.lib.segmentation.pipeline import DocumentAnalysis, analyze_document
from specstruct.lib.segmentation.records import (
    Chunk,
    Definition,
    DefinitionRegistry,
    Heading,
    HeadingKind,
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
from specstruct.lib.segmentation.references import find_standard_ids, mine_references
from specstruct.lib.segmentation.relations import mine_relations
from specstruct.lib.segmentation.sections import build_sections
from specstruct.lib.segmentation.subsections import (
    build_subsections,
    split_subsections,
)

__all__ = [
    "analyze_document",
    "build_parts",
    "build_sections",
    "build_subsections",
    "chunk_id",
    "chunk_units",
    "detect_headings",
    "enrich_section",
    "enrich_sections",
    "find_standard_ids",
    "mine_definitions",
    "mine_references",
    "mine_relations",
    "select_section_headings",
    "split_parts",
    "split_subsections",
    "SectionChunker",
    "DocumentAnalysis",
    "Chunk",
    "Definition",
    "DefinitionRegistry",
    "Heading",
    "HeadingKind",
    "Part",
    "ReferenceRegistry",
    "Section",
    "SectionDefinitionRelation",
    "SectionRelation",
    "SectionRelationRegistry",
    "SectionStdRefRelation",
    "StdRef",
    "Subsection",
]
