"""Filters that decide which normalized values to keep."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Sequence, TypeVar

T = TypeVar("T")


class ExchangeFilter(ABC, Generic[T]):
    """A predicate over exchange values."""

    @abstractmethod
    def matches(self, val: T) -> bool:
        """Return True if ``val`` passes the filter."""

    def filter_matches(self, vals: list[T]) -> None:
        """Drop, in place, every value of ``vals`` that does not match."""
        vals[:] = [val for val in vals if self.matches(val)]


class EmptyFilter(ExchangeFilter[Any]):
    """A filter that keeps everything."""

    def matches(self, val: Any) -> bool:
        return True

    def __repr__(self) -> str:
        return "EmptyFilter()"


@dataclass(frozen=True)
class AnyOfFilters(ExchangeFilter[T]):
    """Keeps values that match any of the wrapped filters."""

    filters: Sequence[ExchangeFilter[T]] = field(default_factory=tuple)

    def matches(self, val: T) -> bool:
        return any(f.matches(val) for f in self.filters)