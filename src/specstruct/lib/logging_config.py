"""Logging setup for specstruct.

Engine modules obtain their logger with ``get_logger(__name__)``. Hosting
applications call ``setup_logging`` once to attach a stream handler to the
package logger; without it, records propagate to whatever the host configured.
"""

import logging
import sys

PACKAGE_LOGGER_NAME = "specstruct"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_HANDLER_ATTR = "_specstruct_handler"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a specstruct module.

    Args:
        name: Module name, normally ``__name__``.

    Returns:
        Logger instance. Names outside the package are nested under it so
        that ``setup_logging`` still governs them.
    """
    if name != PACKAGE_LOGGER_NAME and not name.startswith(f"{PACKAGE_LOGGER_NAME}."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the package logger.

    Safe to call repeatedly: the stream handler is installed once and only the
    level is updated on later calls.

    Args:
        verbose: Log at DEBUG level.
        quiet: Log at WARNING level. Ignored when ``verbose`` is set.

    Returns:
        The configured package logger.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)

    handler = next(
        (h for h in package_logger.handlers if getattr(h, _HANDLER_ATTR, False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        package_logger.addHandler(handler)
    handler.setLevel(level)

    return package_logger
