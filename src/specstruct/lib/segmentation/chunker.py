"""Boundary-respecting chunk construction.

Subsections (or whole sections that have none) are turned into chunks no
longer than ``max_chars``:

- A unit that fits is emitted as one chunk.
- An oversized unit containing level-4 headings (``2.1.3.1 Title``) is
  packed greedily, one level-4 block at a time. A block is never split, so
  a single block longer than ``max_chars`` becomes its own chunk.
- An oversized unit without level-4 headings is sliced at ``max_chars``
  offsets. A final slice shorter than ``min_chars`` is appended to the
  previous chunk instead of being emitted on its own.

Chunk ids are content addresses over the source id, section id, part number,
level codes and a discriminator (text prefix for whole units, pack index or
slice offset for split units), so re-ingesting a document reproduces the
same ids.
"""

import hashlib
import re
from collections.abc import Sequence
from dataclasses import dataclass

from specstruct.lib.logging_config import get_logger
from specstruct.lib.segmentation.records import Chunk, Section, Subsection
from specstruct.lib.segmentation.references import find_standard_ids
from specstruct.lib.segmentation.text_utils import collapse_blank_lines
from specstruct.models.config import ChunkingConfig

logger = get_logger(__name__)

LEVEL4_HEADING_PATTERN = re.compile(r"^\s*\d+\.\d+\.\d+\.\d+[.)]?\s+\S")


def chunk_id(
    source_id: str,
    section_id: str,
    part_no: int | None,
    level2_code: str | None,
    level3_code: str | None,
    discriminator: str,
) -> str:
    """Build a deterministic chunk id."""
    key = (
        f"{source_id}:{section_id}:{part_no or ''}:"
        f"{level2_code or ''}:{level3_code or ''}:{discriminator}"
    )
    return "ch:" + hashlib.sha1(key.encode("utf-8")).hexdigest()[:10]  # nosec B324


@dataclass(frozen=True)
class ChunkUnit:
    """A subsection or section about to be chunked."""

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

    @classmethod
    def from_subsection(cls, subsection: Subsection) -> "ChunkUnit":
        return cls(
            section_id=subsection.section_id,
            part_no=subsection.part_no,
            level2_code=subsection.level2_code,
            level3_code=subsection.level3_code,
            level2_title=subsection.level2_title,
            level3_title=subsection.level3_title,
            title=subsection.title,
            start_page=subsection.start_page,
            end_page=subsection.end_page,
            text=subsection.text,
        )

    @classmethod
    def from_section(cls, section: Section) -> "ChunkUnit":
        return cls(
            section_id=section.id,
            part_no=None,
            level2_code=None,
            level3_code=None,
            level2_title=None,
            level3_title=None,
            title=section.title,
            start_page=section.start_page,
            end_page=section.end_page,
            text=section.text,
        )


def level4_blocks(text: str) -> list[str]:
    """Split text at level-4 headings.

    Returns:
        Blocks in order. Text before the first heading, when not blank, is a
        block of its own. Empty when the text has no level-4 heading.
    """
    lines = text.split("\n")
    starts = [i for i, line in enumerate(lines) if LEVEL4_HEADING_PATTERN.match(line)]
    if not starts:
        return []

    blocks: list[str] = []
    lead = "\n".join(lines[: starts[0]]).strip("\n")
    if lead.strip():
        blocks.append(lead)
    for position, start in enumerate(starts):
        stop = starts[position + 1] if position + 1 < len(starts) else len(lines)
        blocks.append("\n".join(lines[start:stop]).strip("\n"))
    return blocks


class SectionChunker:
    """Size-bounded chunker over subsections and sections.

    Attributes:
        max_chars: Maximum characters per chunk (default 4000).
        min_chars: Minimum length of a trailing fixed-size slice (default 1500).
            Capped at max_chars.
        overlap: Characters repeated between fixed-size slices (default 0).
        source_id: Document identifier stamped on every chunk.

    Example:
        >>> chunker = SectionChunker(max_chars=2000, source_id="spec.pdf")
        >>> chunks = chunker.chunk_subsections(subsections)
    """

    DEFAULT_MAX_CHARS = 4000
    DEFAULT_MIN_CHARS = 1500
    ID_PREFIX_CHARS = 64

    def __init__(
        self,
        max_chars: int = DEFAULT_MAX_CHARS,
        min_chars: int = DEFAULT_MIN_CHARS,
        overlap: int = 0,
        source_id: str = "unknown",
    ) -> None:
        """Initialize the chunker.

        Raises:
            ValueError: If max_chars is not positive, min_chars or overlap is
                negative, or overlap is not smaller than max_chars.
        """
        if max_chars <= 0:
            raise ValueError("max_chars must be positive")
        if min_chars < 0:
            raise ValueError("min_chars must not be negative")
        if overlap < 0:
            raise ValueError("overlap must not be negative")
        if overlap >= max_chars:
            raise ValueError("overlap must be smaller than max_chars")

        if min_chars > max_chars:
            logger.warning(
                f"min_chars={min_chars} exceeds max_chars={max_chars}; "
                f"using {max_chars}"
            )
            min_chars = max_chars

        self._max_chars = max_chars
        self._min_chars = min_chars
        self._overlap = overlap
        self._source_id = source_id

    @classmethod
    def from_config(cls, config: ChunkingConfig) -> "SectionChunker":
        return cls(
            max_chars=config.max_chars,
            min_chars=config.min_chars,
            overlap=config.overlap,
            source_id=config.source_id,
        )

    @property
    def max_chars(self) -> int:
        return self._max_chars

    @property
    def min_chars(self) -> int:
        return self._min_chars

    @property
    def source_id(self) -> str:
        return self._source_id

    def _make_chunk(self, unit: ChunkUnit, text: str, discriminator: str) -> Chunk:
        return Chunk(
            id=chunk_id(
                self._source_id,
                unit.section_id,
                unit.part_no,
                unit.level2_code,
                unit.level3_code,
                discriminator,
            ),
            source_id=self._source_id,
            section_id=unit.section_id,
            part_no=unit.part_no,
            level2_code=unit.level2_code,
            level3_code=unit.level3_code,
            level2_title=unit.level2_title,
            level3_title=unit.level3_title,
            title=unit.title,
            start_page=unit.start_page,
            end_page=unit.end_page,
            text=text,
        )

    def _pack_blocks(self, unit: ChunkUnit, blocks: Sequence[str]) -> list[Chunk]:
        chunks: list[Chunk] = []
        current = ""
        for block in blocks:
            candidate = f"{current}\n{block}" if current else block
            if current and len(candidate) > self._max_chars:
                chunks.append(self._make_chunk(unit, current, f"pack:{len(chunks)}"))
                current = block
            else:
                current = candidate
        if current:
            chunks.append(self._make_chunk(unit, current, f"pack:{len(chunks)}"))
        return chunks

    def _slice_fixed(self, unit: ChunkUnit, text: str) -> list[Chunk]:
        chunks: list[Chunk] = []
        start = 0
        previous_end = 0
        while start < len(text):
            end = min(start + self._max_chars, len(text))
            piece = text[start:end]

            if end == len(text) and len(piece) < self._min_chars and chunks:
                chunks[-1].text += text[previous_end:end]
                break

            chunks.append(self._make_chunk(unit, piece, f"offset:{start}"))
            previous_end = end
            if end == len(text):
                break
            start = end - self._overlap
        return chunks

    def chunk_unit(self, unit: ChunkUnit) -> list[Chunk]:
        """Chunk a single unit. Blank units produce no chunks."""
        text = collapse_blank_lines(unit.text)
        if not text:
            return []

        if len(text) <= self._max_chars:
            chunks = [self._make_chunk(unit, text, text[: self.ID_PREFIX_CHARS])]
        else:
            blocks = level4_blocks(text)
            if blocks:
                chunks = self._pack_blocks(unit, blocks)
            else:
                chunks = self._slice_fixed(unit, text)

        for chunk in chunks:
            chunk.reference_ids = list(
                dict.fromkeys(m.match for m in find_standard_ids(chunk.text))
            )
        return chunks

    def chunk_subsections(self, subsections: Sequence[Subsection]) -> list[Chunk]:
        """Chunk subsections in order."""
        chunks: list[Chunk] = []
        for subsection in subsections:
            chunks.extend(self.chunk_unit(ChunkUnit.from_subsection(subsection)))
        return chunks

    def chunk_sections(self, sections: Sequence[Section]) -> list[Chunk]:
        """Chunk whole sections, ignoring any substructure."""
        chunks: list[Chunk] = []
        for section in sections:
            chunks.extend(self.chunk_unit(ChunkUnit.from_section(section)))
        return chunks

    def chunk_document(
        self,
        sections: Sequence[Section],
        subsections: Sequence[Subsection],
    ) -> list[Chunk]:
        """Chunk a document, section by section.

        Sections with subsections are chunked through them; sections without
        any subsection are chunked whole.
        """
        by_section: dict[str, list[Subsection]] = {}
        for subsection in subsections:
            by_section.setdefault(subsection.section_id, []).append(subsection)

        chunks: list[Chunk] = []
        for section in sections:
            owned = by_section.get(section.id)
            if owned:
                chunks.extend(self.chunk_subsections(owned))
            else:
                chunks.extend(self.chunk_unit(ChunkUnit.from_section(section)))

        logger.debug(
            f"Built {len(chunks)} chunks for source '{self._source_id}' "
            f"(max_chars={self._max_chars})"
        )
        return chunks


def chunk_units(
    units: Sequence[Subsection | Section],
    max_chars: int = SectionChunker.DEFAULT_MAX_CHARS,
    min_chars: int = SectionChunker.DEFAULT_MIN_CHARS,
    overlap: int = 0,
    source_id: str = "unknown",
) -> list[Chunk]:
    """Chunk a mixed list of subsections and sections with one call."""
    chunker = SectionChunker(
        max_chars=max_chars, min_chars=min_chars, overlap=overlap, source_id=source_id
    )
    chunks: list[Chunk] = []
    for unit in units:
        if isinstance(unit, Subsection):
            chunks.extend(chunker.chunk_unit(ChunkUnit.from_subsection(unit)))
        else:
            chunks.extend(chunker.chunk_unit(ChunkUnit.from_section(unit)))
    return chunks
