"""Ordered fallback policies.

Several stages resolve a value by trying strategies in a fixed order (use
section-style headings, else numbered ones; slice a clause directly, else
rebuild it from subsections, ...). A ``FallbackPolicy`` names that order so
it can be inspected and tested on its own.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from specstruct.lib.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Strategy(Generic[T]):
    """A named way of producing a value.

    Attributes:
        name: Identifier used in logs and tests
        resolve: Callable returning the value, or None when not applicable
    """

    name: str
    resolve: Callable[..., T | None]


@dataclass(frozen=True)
class FallbackPolicy(Generic[T]):
    """Strategies evaluated in order; the first usable result wins.

    Attributes:
        name: Policy identifier used in logs
        strategies: Strategies in priority order
        accept: Predicate deciding whether a result is usable. Defaults to
            "not None and not empty".
    """

    name: str
    strategies: Sequence[Strategy[T]]
    accept: Callable[[T], bool] | None = None

    @property
    def order(self) -> list[str]:
        """Strategy names in evaluation order."""
        return [s.name for s in self.strategies]

    def _usable(self, value: T | None) -> bool:
        if value is None:
            return False
        if self.accept is not None:
            return self.accept(value)
        try:
            return len(value) > 0  # type: ignore[arg-type]
        except TypeError:
            return True

    def resolve(self, *args: object, **kwargs: object) -> tuple[str | None, T | None]:
        """Run the strategies until one yields a usable value.

        Returns:
            Tuple of (winning strategy name, value), or (None, None) when no
            strategy applies.
        """
        for strategy in self.strategies:
            value = strategy.resolve(*args, **kwargs)
            if self._usable(value):
                logger.debug(f"{self.name}: resolved by '{strategy.name}'")
                return strategy.name, value
        logger.debug(f"{self.name}: no strategy applied")
        return None, None
