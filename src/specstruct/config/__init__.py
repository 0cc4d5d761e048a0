"""Configuration loading and validation for specstruct.

Main components:
- specstruct.config.loader.load_config: Load a SegmentationConfig from YAML
  and environment variables
- specstruct.config.validator.flatten_pydantic_errors: Human-readable
  validation messages
- specstruct.config.defaults: Default configuration values

Submodules are imported explicitly; this package does not re-export them
because ``specstruct.models.config`` reads its defaults from here.
"""
