"""
Version ids: concrete identifiers decomposed against a pattern.

A Version is immutable. Versions of the same pattern are totally ordered by
their integer values, compared left to right. next() advances only the last
integer part; there is no carrying into higher parts.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import functools as _functools
import typing as _typing

import yamlmigrate.errors as errors

if _typing.TYPE_CHECKING:
    import yamlmigrate.dvs.pattern as pattern_module


@_functools.total_ordering
@_dataclasses.dataclass(frozen=True, slots=True, eq=True, repr=False)
class Version:
    """A version id matched against a pattern."""

    pattern: pattern_module.Pattern
    values: tuple[int, ...]

    def as_id(self) -> str:
        """Render the version id string."""
        return self.pattern.render(self.values)

    def next(self) -> Version:
        """
        Return the version whose last integer part is one higher.

        Raises:
            RangeExceededError: If the last integer part is at its maximum.
        """
        last = self.pattern.integer_parts[-1]
        if self.values[-1] >= last.max:
            raise errors.RangeExceededError(self.as_id(), last.max)
        return Version(self.pattern, self.values[:-1] + (self.values[-1] + 1,))

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version is older, equal or newer."""
        self._check_comparable(other)
        if self.values < other.values:
            return -1
        if self.values > other.values:
            return 1
        return 0

    def _check_comparable(self, other: Version) -> None:
        if self.pattern != other.pattern:
            raise TypeError(
                f"Cannot compare versions of different patterns: {self.pattern} and {other.pattern}"
            )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __str__(self) -> str:
        return self.as_id()

    def __repr__(self) -> str:
        return f"Version({self.as_id()!r})"


def compare(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 as `a` is older, equal to or newer than `b`."""
    return a.compare(b)
