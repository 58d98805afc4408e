"""
Version patterns: the lexical shape of version identifiers.

A pattern is an ordered sequence of parts. An integer part accepts any number
in an inclusive range, written without leading zeros; a literal part accepts
exactly its text. A version id is valid when it is the concatenation of one
match per part, in order.

Example:
    >>> pattern = Pattern((1, 100), ".", (0, 10))
    >>> pattern.get_version("1.4").values
    (1, 4)
    >>> pattern.get_version("1.11") is None
    True
    >>> pattern.oldest().as_id()
    '1.0'
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import yamlmigrate.dvs.version as version_module
import yamlmigrate.errors as errors

_DIGITS = "0123456789"


@_dataclasses.dataclass(frozen=True, slots=True)
class IntegerPart:
    """Integer component with inclusive bounds."""

    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min < 0:
            raise errors.InvalidPatternError(
                f"Integer part minimum must not be negative, got {self.min}"
            )
        if self.min > self.max:
            raise errors.InvalidPatternError(
                f"Integer part minimum {self.min} is greater than maximum {self.max}"
            )

    def match(self, string: str, index: int) -> tuple[int, int] | None:
        """
        Greedily match the longest valid number starting at `index`.

        Returns:
            (value, next_index), or None when nothing in range matches.
        """
        end = index
        while end < len(string) and string[end] in _DIGITS:
            end += 1
        run = string[index:end]

        for length in range(len(run), 0, -1):
            candidate = run[:length]
            # No leading zeros: "07" is not a rendering of 7
            if len(candidate) > 1 and candidate[0] == "0":
                continue
            value = int(candidate)
            if self.min <= value <= self.max:
                return value, index + length
        return None

    def __str__(self) -> str:
        return f"[{self.min}-{self.max}]"


@_dataclasses.dataclass(frozen=True, slots=True)
class LiteralPart:
    """Fixed text, typically a separator such as "."."""

    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise errors.InvalidPatternError("Literal part must not be empty")

    def match(self, string: str, index: int) -> int | None:
        """Return the index after the literal, or None when it does not match."""
        if string.startswith(self.text, index):
            return index + len(self.text)
        return None

    def __str__(self) -> str:
        return self.text


Part: _typing.TypeAlias = IntegerPart | LiteralPart
PartSpec: _typing.TypeAlias = "Part | tuple[int, int] | str"


def _coerce_part(spec: _typing.Any) -> Part:
    if isinstance(spec, (IntegerPart, LiteralPart)):
        return spec
    if isinstance(spec, str):
        return LiteralPart(spec)
    if isinstance(spec, tuple) and len(spec) == 2:
        low, high = spec
        if isinstance(low, int) and isinstance(high, int):
            return IntegerPart(low, high)
    raise errors.InvalidPatternError(f"Unsupported pattern part: {spec!r}")


@_dataclasses.dataclass(frozen=True, slots=True, init=False)
class Pattern:
    """Ordered sequence of integer and literal parts."""

    parts: tuple[Part, ...]

    def __init__(self, *parts: PartSpec) -> None:
        """
        Create a pattern.

        Args:
            *parts: IntegerPart/LiteralPart objects, `(min, max)` tuples for
                integer parts, or strings for literal parts.

        Raises:
            InvalidPatternError: If a part is malformed or there is no
                integer part at all.
        """
        resolved = tuple(_coerce_part(part) for part in parts)
        if not any(isinstance(part, IntegerPart) for part in resolved):
            raise errors.InvalidPatternError("Pattern needs at least one integer part")
        object.__setattr__(self, "parts", resolved)

    @classmethod
    def parse(cls, parts: _typing.Iterable[PartSpec]) -> Pattern:
        """Build a pattern from an iterable of part specifications."""
        return cls(*parts)

    @property
    def integer_parts(self) -> tuple[IntegerPart, ...]:
        return tuple(part for part in self.parts if isinstance(part, IntegerPart))

    def get_version(self, string: str | None) -> version_module.Version | None:
        """
        Match a version id string against the pattern.

        Each literal must appear verbatim; each integer part takes the longest
        in-range number at its position (no backtracking).

        Returns:
            The version, or None when the string is absent or does not match.
        """
        if string is None:
            return None

        values: list[int] = []
        index = 0
        for part in self.parts:
            if isinstance(part, LiteralPart):
                next_index = part.match(string, index)
                if next_index is None:
                    return None
                index = next_index
            else:
                matched = part.match(string, index)
                if matched is None:
                    return None
                value, index = matched
                values.append(value)

        if index != len(string):
            return None
        return version_module.Version(self, tuple(values))

    def oldest(self) -> version_module.Version:
        """The version with every integer part at its minimum."""
        return version_module.Version(self, tuple(part.min for part in self.integer_parts))

    def render(self, values: _typing.Sequence[int]) -> str:
        """Render integer values into an id string."""
        rendered: list[str] = []
        remaining = iter(values)
        for part in self.parts:
            if isinstance(part, LiteralPart):
                rendered.append(part.text)
            else:
                rendered.append(str(next(remaining)))
        return "".join(rendered)

    def __str__(self) -> str:
        return "".join(str(part) for part in self.parts)


def version_of(pattern: Pattern, string: str | None) -> version_module.Version | None:
    """Functional spelling of `pattern.get_version(string)`."""
    return pattern.get_version(string)
