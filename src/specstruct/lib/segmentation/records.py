"""Record types produced by the segmentation engine.

Records are plain dataclasses. Each exposes ``to_record_dict()`` returning a
flat dict keyed by the camelCase column names used by storage collaborators.
Registries are explicit accumulators threaded through the miners so a
document run never touches module-level state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DOCUMENT_SECTION_ID = "sec:document"
PREAMBLE_SECTION_ID = "sec:preamble"

PART_TITLES: dict[int, str] = {1: "GENERAL", 2: "PRODUCT", 3: "EXECUTION"}


class HeadingKind(str, Enum):
    """Which recognizer produced a heading.

    Attributes:
        SECTION: ``Section 26 24 13`` style heading
        NUMBERED: ``1.2.3 Title`` style heading
    """

    SECTION = "section"
    NUMBERED = "numbered"


@dataclass(frozen=True)
class Heading:
    """A heading marker found in page text.

    Attributes:
        kind: Recognizer that matched the line
        page: 1-indexed page number
        line: 1-indexed line number within the page
        code: Space-joined (section style) or dot-joined (numbered) path
        title: Heading title, possibly taken from the following line
    """

    kind: HeadingKind
    page: int
    line: int
    code: str
    title: str

    @property
    def depth(self) -> int:
        """Number of path segments in the code."""
        return len(self.code.replace(".", " ").split())

    def to_record_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "page": self.page,
            "line": self.line,
            "code": self.code,
            "title": self.title,
        }


@dataclass(frozen=True)
class Section:
    """A top-level document section.

    Attributes:
        id: Unique section id within the document (e.g. "26 24 13")
        code: Heading path the section was built from
        title: Section title
        start_page: First page (1-indexed) holding section text
        end_page: Last page holding section text
        text: Section body, END OF SECTION trailer removed
        overview: Part-1 text before clause 1.2 (set by the enricher)
        p14: Clause 1.4 of Part 1 (set by the enricher)
        p15: Clause 1.5 of Part 1 (set by the enricher)
        p17: Clause 1.7 of Part 1 (set by the enricher)
        p18: Clause 1.8 of Part 1 (set by the enricher)
        line_pages: Page number of every line in ``text``
    """

    id: str
    code: str
    title: str
    start_page: int
    end_page: int
    text: str
    overview: str | None = None
    p14: str | None = None
    p15: str | None = None
    p17: str | None = None
    p18: str | None = None
    line_pages: tuple[int, ...] = field(default=(), repr=False, compare=False)

    def to_record_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "title": self.title,
            "startPage": self.start_page,
            "endPage": self.end_page,
            "text": self.text,
            "overview": self.overview,
            "p14": self.p14,
            "p15": self.p15,
            "p17": self.p17,
            "p18": self.p18,
        }


@dataclass
class Part:
    """A PART 1/2/3 division of a section.

    ``explicit`` is False for the synthetic Part 1 of a section without
    PART markers.
    """

    section_id: str
    part_no: int
    title: str
    start_page: int
    end_page: int
    text: str
    explicit: bool = True
    line_pages: tuple[int, ...] = field(default=(), repr=False, compare=False)

    def to_record_dict(self) -> dict[str, Any]:
        return {
            "sectionId": self.section_id,
            "partNo": self.part_no,
            "title": self.title,
            "startPage": self.start_page,
            "endPage": self.end_page,
            "text": self.text,
        }


@dataclass
class Subsection:
    """A level-3 unit of a part, the chunking boundary.

    Level-4 headings and their bodies stay inside their level-3 owner.
    Pass-through subsections (parts without numbered marks) have ``None``
    codes.
    """

    section_id: str
    part_no: int
    level2_code: str | None
    level3_code: str | None
    level2_title: str | None
    level3_title: str | None
    title: str
    text: str
    start_page: int = 0
    end_page: int = 0

    def to_record_dict(self) -> dict[str, Any]:
        return {
            "sectionId": self.section_id,
            "partNo": self.part_no,
            "level2Code": self.level2_code,
            "level3Code": self.level3_code,
            "level2Title": self.level2_title,
            "level3Title": self.level3_title,
            "title": self.title,
            "startPage": self.start_page,
            "endPage": self.end_page,
            "text": self.text,
        }


@dataclass
class Chunk:
    """A size-bounded unit of text with a content-addressed id."""

    id: str
    source_id: str
    section_id: str
    part_no: int | None
    level2_code: str | None
    level3_code: str | None
    level2_title: str | None
    level3_title: str | None
    title: str
    start_page: int
    end_page: int
    text: str
    reference_ids: list[str] = field(default_factory=list)

    def to_record_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sourceId": self.source_id,
            "sectionId": self.section_id,
            "partNo": self.part_no,
            "level2Code": self.level2_code,
            "level3Code": self.level3_code,
            "level2Title": self.level2_title,
            "level3Title": self.level3_title,
            "title": self.title,
            "startPage": self.start_page,
            "endPage": self.end_page,
            "text": self.text,
            "referenceIds": list(self.reference_ids),
        }


@dataclass
class StdRef:
    """A standard reference, e.g. ``IEC 60947-2``."""

    id: str
    title: str | None = None

    def to_record_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title}


@dataclass(frozen=True)
class SectionStdRefRelation:
    section_id: str
    reference_id: str

    def to_record_dict(self) -> dict[str, Any]:
        return {"sectionId": self.section_id, "referenceId": self.reference_id}


@dataclass
class Definition:
    """An abbreviation and its expansion."""

    id: str
    definition: str

    def to_record_dict(self) -> dict[str, Any]:
        return {"id": self.id, "definition": self.definition}


@dataclass(frozen=True)
class SectionDefinitionRelation:
    section_id: str
    definition_id: str

    def to_record_dict(self) -> dict[str, Any]:
        return {"sectionId": self.section_id, "definitionId": self.definition_id}


@dataclass(frozen=True)
class SectionRelation:
    section_id: str
    related_section_id: str

    def to_record_dict(self) -> dict[str, Any]:
        return {
            "sectionId": self.section_id,
            "relatedSectionId": self.related_section_id,
        }


@dataclass
class ReferenceRegistry:
    """Accumulator for standard references and their section relations.

    Attributes:
        references: StdRef per normalized id, in first-seen order
        relations: Unique (section, reference) pairs, in first-seen order
    """

    references: dict[str, StdRef] = field(default_factory=dict)
    relations: list[SectionStdRefRelation] = field(default_factory=list)
    _seen: set[SectionStdRefRelation] = field(
        default_factory=set, repr=False, compare=False
    )

    def add(self, section_id: str, ref_id: str, title: str | None) -> None:
        """Record a reference seen in a section.

        A later occurrence carrying a title fills in a missing one; an
        existing title is never overwritten.
        """
        existing = self.references.get(ref_id)
        if existing is None:
            self.references[ref_id] = StdRef(id=ref_id, title=title)
        elif existing.title is None and title:
            existing.title = title

        relation = SectionStdRefRelation(section_id=section_id, reference_id=ref_id)
        if relation not in self._seen:
            self._seen.add(relation)
            self.relations.append(relation)


@dataclass
class DefinitionRegistry:
    """Accumulator for abbreviations and their section relations."""

    definitions: dict[str, Definition] = field(default_factory=dict)
    relations: list[SectionDefinitionRelation] = field(default_factory=list)
    _seen: set[SectionDefinitionRelation] = field(
        default_factory=set, repr=False, compare=False
    )

    def add(self, section_id: str, abbreviation: str, definition: str) -> None:
        """Record a definition; the first definition of an abbreviation wins."""
        if abbreviation not in self.definitions:
            self.definitions[abbreviation] = Definition(
                id=abbreviation, definition=definition
            )

        relation = SectionDefinitionRelation(
            section_id=section_id, definition_id=abbreviation
        )
        if relation not in self._seen:
            self._seen.add(relation)
            self.relations.append(relation)


@dataclass
class SectionRelationRegistry:
    """Accumulator for section-to-section cross references."""

    relations: list[SectionRelation] = field(default_factory=list)
    _seen: set[SectionRelation] = field(default_factory=set, repr=False, compare=False)

    def add(self, section_id: str, related_section_id: str) -> bool:
        """Record a relation. Self references and repeats are ignored.

        Returns:
            True if the relation was new.
        """
        if section_id == related_section_id:
            return False
        relation = SectionRelation(
            section_id=section_id, related_section_id=related_section_id
        )
        if relation in self._seen:
            return False
        self._seen.add(relation)
        self.relations.append(relation)
        return True
