"""Configuration models for the segmentation engine.

All values have defaults, so ``SegmentationConfig()`` is a valid
configuration for a plain run.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from specstruct.config.defaults import (
    DEFAULT_CHUNKING_CONFIG,
    DEFAULT_SEGMENTATION_CONFIG,
)


class ChunkingConfig(BaseModel):
    """Size bounds and identity for chunk construction."""

    model_config = ConfigDict(extra="forbid")

    max_chars: int = Field(
        default=int(DEFAULT_CHUNKING_CONFIG["max_chars"]),
        gt=0,
        description="Upper bound on chunk text length.",
    )
    min_chars: int = Field(
        default=int(DEFAULT_CHUNKING_CONFIG["min_chars"]),
        ge=0,
        description="Trailing fixed-size slices shorter than this are merged back.",
    )
    overlap: int = Field(
        default=int(DEFAULT_CHUNKING_CONFIG["overlap"]),
        ge=0,
        description="Characters repeated between consecutive fixed-size slices.",
    )
    source_id: str = Field(
        default=str(DEFAULT_CHUNKING_CONFIG["source_id"]),
        min_length=1,
        description="Identifier of the ingested document, part of every chunk id.",
    )

    @model_validator(mode="after")
    def validate_overlap(self) -> "ChunkingConfig":
        """Ensure fixed-size slicing always advances."""
        if self.overlap >= self.max_chars:
            raise ValueError(
                f"overlap ({self.overlap}) must be smaller than "
                f"max_chars ({self.max_chars})"
            )
        return self


class SegmentationConfig(BaseModel):
    """Top-level engine configuration."""

    model_config = ConfigDict(extra="forbid")

    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    exclude_boilerplate_part: bool = Field(
        default=DEFAULT_SEGMENTATION_CONFIG["exclude_boilerplate_part"],
        description=(
            "Skip PART 1 when building subsections of documents that carry "
            "explicit PART markers."
        ),
    )
