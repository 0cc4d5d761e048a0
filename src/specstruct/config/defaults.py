"""Default configuration values for specstruct."""

import logging

logger = logging.getLogger(__name__)


# Chunking defaults
DEFAULT_CHUNKING_CONFIG: dict[str, int | str] = {
    "max_chars": 4000,
    "min_chars": 1500,
    "overlap": 0,
    "source_id": "unknown",
}

# Segmentation switches
DEFAULT_SEGMENTATION_CONFIG: dict[str, bool] = {
    "exclude_boilerplate_part": True,
}

# Environment variable to chunking field mapping
ENV_VAR_MAP: dict[str, str] = {
    "max_chars": "SPECSTRUCT_MAX_CHARS",
    "min_chars": "SPECSTRUCT_MIN_CHARS",
    "overlap": "SPECSTRUCT_OVERLAP",
    "source_id": "SPECSTRUCT_SOURCE_ID",
}
