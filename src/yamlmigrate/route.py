"""
Routes: addresses of blocks inside a document tree.

A Route is an immutable, hashable sequence of keys. It is a value, not a
reference into a tree: it is resolved by key lookup from the document root
each time it is used, so moving blocks around never leaves a route dangling.

String routes are split on a separator character. A key may contain the
separator (or the escape character itself) by prefixing it with the escape
character:

    >>> Route.from_string("a.b\\\\.c")
    Route('a', 'b.c')
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import yamlmigrate.constants as constants
import yamlmigrate.errors as errors


def _check_delimiters(string: str, separator: str, escape: str) -> None:
    if len(separator) != 1 or len(escape) != 1:
        raise errors.InvalidRouteError(
            string, "separator and escape must be single characters"
        )
    if separator == escape:
        raise errors.InvalidRouteError(
            string, "separator and escape must be different characters"
        )


@_dataclasses.dataclass(frozen=True, slots=True, repr=False)
class Route:
    """
    Ordered, immutable sequence of keys naming a location in a document.

    The empty route denotes the document root. Equality and hashing are
    structural, so routes work as dictionary keys and set members.
    """

    keys: tuple[_typing.Hashable, ...] = ()

    @classmethod
    def of(cls, *keys: _typing.Hashable) -> Route:
        """Build a route from keys directly, without any splitting."""
        return cls(tuple(keys))

    @classmethod
    def from_string(
        cls,
        string: str,
        separator: str = constants.DEFAULT_SEPARATOR,
        escape: str = constants.DEFAULT_ESCAPE,
    ) -> Route:
        """
        Parse a route from a separator-delimited string.

        Empty segments are kept as empty-string keys ("a..b" has three keys).

        Args:
            string: The route string.
            separator: Character separating keys.
            escape: Character making the next separator or escape literal.

        Returns:
            The parsed route.

        Raises:
            InvalidRouteError: On a dangling escape character, an escape
                before any other character, or invalid delimiters.
        """
        _check_delimiters(string, separator, escape)

        keys: list[str] = []
        current: list[str] = []
        index = 0
        while index < len(string):
            char = string[index]
            if char == escape:
                if index + 1 >= len(string):
                    raise errors.InvalidRouteError(string, "dangling escape character at end")
                escaped = string[index + 1]
                if escaped not in (separator, escape):
                    raise errors.InvalidRouteError(
                        string, f"cannot escape {escaped!r} at position {index + 1}"
                    )
                current.append(escaped)
                index += 2
                continue
            if char == separator:
                keys.append("".join(current))
                current = []
            else:
                current.append(char)
            index += 1
        keys.append("".join(current))

        return cls(tuple(keys))

    def add(self, key: _typing.Hashable) -> Route:
        """Return a new route with one more trailing key."""
        return Route(self.keys + (key,))

    def parent(self) -> Route:
        """Return the route of the enclosing section."""
        if not self.keys:
            raise ValueError("The root route has no parent")
        return Route(self.keys[:-1])

    @property
    def last_key(self) -> _typing.Hashable:
        """The final key of the route."""
        if not self.keys:
            raise ValueError("The root route has no keys")
        return self.keys[-1]

    @property
    def is_root(self) -> bool:
        return not self.keys

    def starts_with(self, other: Route) -> bool:
        """Check whether `other` is this route or one of its ancestors."""
        return self.keys[: len(other.keys)] == other.keys

    def to_string(
        self,
        separator: str = constants.DEFAULT_SEPARATOR,
        escape: str = constants.DEFAULT_ESCAPE,
    ) -> str:
        """Render the route so that from_string() parses it back."""
        parts = []
        for key in self.keys:
            text = str(key).replace(escape, escape * 2).replace(separator, escape + separator)
            parts.append(text)
        return separator.join(parts)

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self) -> _typing.Iterator[_typing.Hashable]:
        return iter(self.keys)

    @_typing.overload
    def __getitem__(self, index: int) -> _typing.Hashable: ...

    @_typing.overload
    def __getitem__(self, index: slice) -> Route: ...

    def __getitem__(self, index: int | slice) -> _typing.Any:
        if isinstance(index, slice):
            return Route(self.keys[index])
        return self.keys[index]

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Route({', '.join(repr(key) for key in self.keys)})"


@_dataclasses.dataclass(frozen=True, slots=True)
class RouteFactory:
    """Parses string routes with a fixed separator and escape character."""

    separator: str = constants.DEFAULT_SEPARATOR
    escape: str = constants.DEFAULT_ESCAPE

    def __post_init__(self) -> None:
        _check_delimiters("", self.separator, self.escape)

    def create(self, string: str) -> Route:
        return Route.from_string(string, self.separator, self.escape)


def as_route(route: Route | str) -> Route:
    """Accept either a Route or a default-separator string route."""
    if isinstance(route, Route):
        return route
    return Route.from_string(route)
