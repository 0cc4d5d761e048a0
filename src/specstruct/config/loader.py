"""Configuration loader for specstruct.

Loads a ``SegmentationConfig`` from an optional YAML file, applies
environment variable overrides for chunking settings, and validates the
result with pydantic.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from specstruct.config.defaults import ENV_VAR_MAP
from specstruct.config.validator import flatten_pydantic_errors
from specstruct.lib.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ValidationError,
)
from specstruct.models.config import SegmentationConfig

logger = logging.getLogger(__name__)

_INT_FIELDS = ("max_chars", "min_chars", "overlap")


def _parse_env_value(field_name: str, value: str) -> Any:
    """Parse environment variable value to appropriate type.

    Args:
        field_name: Name of the chunking field (used to determine type)
        value: String value from environment variable

    Returns:
        Parsed value in correct type (int or str)

    Raises:
        ValueError: If value cannot be parsed
    """
    if field_name in _INT_FIELDS:
        return int(value)
    return value


def _env_overrides(env_vars: Mapping[str, str]) -> dict[str, Any]:
    """Collect chunking overrides from environment variables.

    Unparseable values raise instead of being skipped.

    Args:
        env_vars: Environment variables mapping

    Returns:
        Mapping of chunking field name to parsed value.

    Raises:
        ValidationError: If an integer override cannot be parsed.
    """
    overrides: dict[str, Any] = {}
    for field_name, env_var_name in ENV_VAR_MAP.items():
        if env_var_name not in env_vars:
            continue
        try:
            overrides[field_name] = _parse_env_value(
                field_name, env_vars[env_var_name]
            )
        except ValueError as e:
            raise ValidationError(
                field=env_var_name,
                message="Chunking override is not an integer",
                expected="integer",
                actual=env_vars[env_var_name],
            ) from e
    return overrides


def parse_yaml(file_path: str | Path) -> dict[str, Any]:
    """Parse a YAML file and return its contents as a dictionary.

    Args:
        file_path: Path to the YAML file to parse

    Returns:
        Dictionary containing parsed YAML content (empty for an empty file)

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        ConfigError: If YAML parsing fails or the document is not a mapping
    """
    path = Path(file_path)

    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigFileNotFoundError(
            str(file_path), "Pass an existing YAML file or omit it to use defaults."
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            "yaml_parse",
            f"Failed to parse YAML file {file_path}: {str(e)}",
        ) from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(
            "yaml_parse",
            f"Expected a mapping at the top of {file_path}, "
            f"got {type(content).__name__}",
        )
    return content


def load_config(
    file_path: str | Path | None = None,
    env_vars: Mapping[str, str] | None = None,
) -> SegmentationConfig:
    """Load and validate the engine configuration.

    Configuration precedence (highest to lowest):
    1. Environment variables (``SPECSTRUCT_*``, chunking settings only)
    2. YAML file values
    3. Model defaults

    Args:
        file_path: Optional path to a YAML configuration file
        env_vars: Environment mapping, defaults to ``os.environ``

    Returns:
        Validated SegmentationConfig

    Raises:
        ConfigFileNotFoundError: If ``file_path`` does not exist
        ConfigError: If the YAML is invalid or validation fails
        ValidationError: If an integer environment override is malformed
    """
    data: dict[str, Any] = parse_yaml(file_path) if file_path is not None else {}

    overrides = _env_overrides(os.environ if env_vars is None else env_vars)
    if overrides:
        chunking = data.get("chunking") or {}
        if not isinstance(chunking, dict):
            raise ConfigError("chunking", "Expected a mapping of chunking settings")
        data["chunking"] = {**chunking, **overrides}
        logger.debug(f"Applied environment overrides: {sorted(overrides)}")

    try:
        return SegmentationConfig(**data)
    except PydanticValidationError as e:
        messages = flatten_pydantic_errors(e)
        raise ConfigError("segmentation", "; ".join(messages)) from e
