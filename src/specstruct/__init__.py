"""specstruct - structure recovery and chunking for construction specifications.

Turns the page texts of "Section"-style specification documents into
sections, parts, subsections, standard references, definitions, section
cross references and size-bounded chunks.

Main features:
- Section, PART and numbered-clause boundary recovery from noisy page text
- Reference, abbreviation and related-section mining from Part 1 clauses
- Deterministic, structure-respecting chunk ids for idempotent re-ingestion
"""

from specstruct.config.loader import load_config
from specstruct.lib.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    SpecStructError,
    ValidationError,
)
from specstruct.lib.segmentation.pipeline import DocumentAnalysis, analyze_document
from specstruct.models.config import ChunkingConfig, SegmentationConfig

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "analyze_document",
    "ChunkingConfig",
    "ConfigError",
    "ConfigFileNotFoundError",
    "DocumentAnalysis",
    "load_config",
    "SegmentationConfig",
    "SpecStructError",
    "ValidationError",
]
