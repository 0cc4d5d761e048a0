"""Errors raised while loading specstruct settings.

Segmentation itself never raises on malformed documents; every failure
surfaced to callers comes from reading a settings file or the
``SPECSTRUCT_*`` environment.
"""


class SpecStructError(Exception):
    """Root of the specstruct error tree."""


class ConfigError(SpecStructError):
    """A settings file or its values could not be turned into a config.

    Attributes:
        field: Settings key the problem was found under, e.g. ``chunking``
        message: What was wrong with it
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"Invalid specstruct setting '{field}': {message}")


class ValidationError(SpecStructError):
    """An environment override could not be parsed.

    Attributes:
        field: Environment variable name, e.g. ``SPECSTRUCT_MAX_CHARS``
        message: What was wrong with the value
        expected: Kind of value the variable takes
        actual: Raw value read from the environment
    """

    def __init__(self, field: str, message: str, expected: str, actual: str) -> None:
        self.field = field
        self.message = message
        self.expected = expected
        self.actual = actual
        super().__init__(f"{field}={actual!r}: {message} (expected {expected})")


class ConfigFileNotFoundError(SpecStructError):
    """The settings file passed to ``load_config`` does not exist.

    Attributes:
        path: Path that was looked up
        message: Hint on how to proceed
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"Settings file {path} does not exist. {message}")
