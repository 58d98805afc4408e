"""
Versioning strategies: where the version ids of both documents come from.

There are exactly two strategies:

- ManualVersioning: the caller passes both id strings directly.
- AutomaticVersioning: both ids are read from the documents at a route.

In both, a missing or unparsable user id means "the oldest version of the
pattern" (every recorded step is replayed), while the defaults id must always
be valid; a bad defaults id is a configuration error.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import yamlmigrate.constants as constants
import yamlmigrate.document.block as block_module
import yamlmigrate.dvs.pattern as pattern_module
import yamlmigrate.dvs.version as version_module
import yamlmigrate.errors as errors
import yamlmigrate.route as route_module

if _typing.TYPE_CHECKING:
    import yamlmigrate.document.document as document_module

_logger = _logging.getLogger(__name__)


def _user_version_or_oldest(
    pattern: pattern_module.Pattern,
    version_id: str | None,
) -> version_module.Version:
    version = pattern.get_version(version_id)
    if version is not None:
        return version
    if version_id is not None:
        _logger.warning(
            "Document version id %r does not match pattern %s; treating it as the oldest version",
            version_id,
            pattern,
        )
    return pattern.oldest()


def _require_defaults_version(
    pattern: pattern_module.Pattern,
    version_id: str | None,
) -> version_module.Version:
    version = pattern.get_version(version_id)
    if version is None:
        raise errors.MissingVersionError(
            f"Defaults version id {version_id!r} is missing or does not match pattern {pattern}",
            version_id,
        )
    return version


class ManualVersioning:
    """Version ids supplied by the caller."""

    def __init__(
        self,
        pattern: pattern_module.Pattern,
        user_version_id: str | None,
        defaults_version_id: str,
    ) -> None:
        """
        Args:
            pattern: Pattern both ids follow.
            user_version_id: Id of the user document; None when unknown.
            defaults_version_id: Id of the defaults document.
        """
        self.pattern = pattern
        self.user_version_id = user_version_id
        self.defaults_version_id = defaults_version_id

    def user_version(
        self,
        document: document_module.Document | None = None,  # noqa: ARG002 - shared strategy interface
        separator: str = constants.DEFAULT_SEPARATOR,  # noqa: ARG002 - shared strategy interface
    ) -> version_module.Version:
        return _user_version_or_oldest(self.pattern, self.user_version_id)

    def defaults_version(
        self,
        defaults: document_module.Document | None = None,  # noqa: ARG002 - shared strategy interface
        separator: str = constants.DEFAULT_SEPARATOR,  # noqa: ARG002 - shared strategy interface
    ) -> version_module.Version:
        return _require_defaults_version(self.pattern, self.defaults_version_id)

    def oldest(self) -> version_module.Version:
        return self.pattern.oldest()

    def stamp_user_version(
        self,
        document: document_module.Document,  # noqa: ARG002 - shared strategy interface
        defaults_version: version_module.Version,  # noqa: ARG002 - shared strategy interface
        separator: str = constants.DEFAULT_SEPARATOR,  # noqa: ARG002 - shared strategy interface
    ) -> None:
        """No-op: manual ids are not stored in the document."""

    def __repr__(self) -> str:
        return (
            f"ManualVersioning({self.pattern}, user={self.user_version_id!r}, "
            f"defaults={self.defaults_version_id!r})"
        )


class AutomaticVersioning:
    """Version ids read from both documents at a route."""

    def __init__(
        self,
        pattern: pattern_module.Pattern,
        route: route_module.Route | str,
    ) -> None:
        """
        Args:
            pattern: Pattern both ids follow.
            route: Where the id is stored. A string is kept as given and
                parsed with the separator of each lookup.
        """
        self.pattern = pattern
        self.route = route

    def resolve_route(self, separator: str = constants.DEFAULT_SEPARATOR) -> route_module.Route:
        """The id route, parsing a string route with `separator`."""
        if isinstance(self.route, route_module.Route):
            return self.route
        return route_module.Route.from_string(self.route, separator)

    def _read_id(self, document: document_module.Document, separator: str) -> str | None:
        block = document.get_block(self.resolve_route(separator))
        if not isinstance(block, block_module.Entry) or block.value is None:
            return None
        # "v: 2" loads as an int; ids are matched as text
        return str(block.value)

    def user_version(
        self,
        document: document_module.Document,
        separator: str = constants.DEFAULT_SEPARATOR,
    ) -> version_module.Version:
        return _user_version_or_oldest(self.pattern, self._read_id(document, separator))

    def defaults_version(
        self,
        defaults: document_module.Document,
        separator: str = constants.DEFAULT_SEPARATOR,
    ) -> version_module.Version:
        return _require_defaults_version(self.pattern, self._read_id(defaults, separator))

    def oldest(self) -> version_module.Version:
        return self.pattern.oldest()

    def stamp_user_version(
        self,
        document: document_module.Document,
        defaults_version: version_module.Version,
        separator: str = constants.DEFAULT_SEPARATOR,
    ) -> None:
        """
        Write the defaults id to the route, keeping the existing comments.

        An integer id stays an integer when the document stored it as one.
        """
        route = self.resolve_route(separator)
        version_id = defaults_version.as_id()
        current = document.get(route)
        if isinstance(current, int) and not isinstance(current, bool) and version_id.isdecimal():
            document.set(route, int(version_id))
        else:
            document.set(route, version_id)

    def __repr__(self) -> str:
        return f"AutomaticVersioning({self.pattern}, {self.route!r})"


Versioning: _typing.TypeAlias = ManualVersioning | AutomaticVersioning
"""The closed set of versioning strategies."""


def basic_pattern() -> pattern_module.Pattern:
    """Single integer part from BASIC_VERSION_MIN to BASIC_VERSION_MAX."""
    return pattern_module.Pattern((constants.BASIC_VERSION_MIN, constants.BASIC_VERSION_MAX))


def basic_versioning(route: route_module.Route | str) -> AutomaticVersioning:
    """Automatic versioning with plain integer ids ("1", "2", ...)."""
    return AutomaticVersioning(basic_pattern(), route)
