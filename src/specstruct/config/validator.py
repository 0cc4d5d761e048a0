"""Pydantic error formatting for configuration loading."""

from pydantic import ValidationError as PydanticValidationError


def flatten_pydantic_errors(exc: PydanticValidationError) -> list[str]:
    """Turn a pydantic ValidationError into one message per failing field.

    Field locations are dot-joined (``chunking.max_chars``). Model-level
    validator failures, which have no field location, are reported against
    ``<root>``. The offending input is echoed for ``value_error`` failures
    raised by custom validators.

    Args:
        exc: Pydantic ValidationError exception

    Returns:
        Messages in pydantic's error order; never empty.

    Example:
        >>> try:
        ...     ChunkingConfig(max_chars=0)
        ... except ValidationError as e:
        ...     flatten_pydantic_errors(e)
        ['max_chars: Input should be greater than 0']
    """
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        text = error.get("msg", "invalid value")
        if error.get("type") == "value_error":
            text = f"{text} (received: {error.get('input')!r})"
        messages.append(f"{location}: {text}")

    return messages or ["configuration is invalid"]
