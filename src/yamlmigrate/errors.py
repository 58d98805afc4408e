"""
Exception hierarchy for yamlmigrate.

Every error raised deliberately by the package derives from YamlMigrateError,
so callers can catch the whole family with one clause.

Structural errors (patterns, routes, missing defaults version, downgrade
policy, version enumeration, conflicting relocations) are raised before the
user document is mutated. Errors raised by user-supplied value mappers are
not wrapped and propagate unchanged.
"""

from __future__ import annotations

import pathlib as _pathlib
import typing as _typing


class YamlMigrateError(Exception):
    """Base class for all yamlmigrate errors."""


class InvalidPatternError(YamlMigrateError):
    """A version pattern definition is malformed (e.g. min > max)."""


class InvalidRouteError(YamlMigrateError):
    """A route string could not be parsed."""

    def __init__(self, route_string: str, message: str) -> None:
        self.route_string = route_string
        super().__init__(f"Invalid route {route_string!r}: {message}")


class MissingVersionError(YamlMigrateError):
    """The defaults document does not carry a valid version id."""

    def __init__(self, message: str, version_id: _typing.Any = None) -> None:
        self.version_id = version_id
        super().__init__(message)


class UnsupportedDowngradeError(YamlMigrateError):
    """The user document is newer than defaults and downgrading is disabled."""

    def __init__(self, user_version: str, defaults_version: str) -> None:
        self.user_version = user_version
        self.defaults_version = defaults_version
        super().__init__(
            f"Downgrading is disabled: document version {user_version} "
            f"is newer than defaults version {defaults_version}"
        )


class RangeExceededError(YamlMigrateError):
    """Advancing a version id would pass the maximum of its last part."""

    def __init__(self, version_id: str, maximum: int) -> None:
        self.version_id = version_id
        self.maximum = maximum
        super().__init__(
            f"Cannot advance version {version_id}: last part is already at its maximum ({maximum})"
        )


class RelocationConflictError(YamlMigrateError):
    """Two relocations at one version id chain into each other."""

    def __init__(self, version_id: str, route: _typing.Any) -> None:
        self.version_id = version_id
        self.route = route
        super().__init__(
            f"Relocations at version {version_id} chain through {route}: "
            "a destination is also the source of another relocation"
        )


class DocumentError(YamlMigrateError):
    """A YAML document could not be read or does not have a mapping root."""

    def __init__(self, message: str, path: _pathlib.Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"Error in document {path}: {message}"
        super().__init__(message)


class ManifestError(YamlMigrateError):
    """A migration manifest could not be loaded or validated."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in manifest {path}: {message}")
