"""
Migration manifests: updater settings described in a YAML file.

A manifest carries everything UpdaterSettings can hold except value mappers
(which are code). String routes in the manifest are parsed with the
manifest's own separator, so the result does not depend on the separator
later given to the updater.

Example manifest:

    versioning:
      route: config-version
      pattern: [{min: 1, max: 100}, ".", {min: 0, max: 10}]
    separator: "."
    keep_all: false
    merge_rules:
      MAPPING_AT_SECTION: true
    relocations:
      "1.1": {server.host: network.host}
    ignored:
      "1.1": [plugins]

Without a pattern the basic pattern (plain integer ids) is used.
"""

from __future__ import annotations

import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

import yamlmigrate.constants as constants
import yamlmigrate.dvs as dvs
import yamlmigrate.errors as errors
import yamlmigrate.route as route_module
import yamlmigrate.settings.updater as updater_settings


class ManifestBase(_pydantic.BaseModel):
    """Base for manifest sections; unknown keys are rejected to catch typos."""

    model_config = _pydantic.ConfigDict(extra="forbid")


class IntegerPartManifest(ManifestBase):
    """Integer pattern part: `{min: 0, max: 10}`."""

    min: int = _pydantic.Field(ge=0)
    max: int = _pydantic.Field(ge=0)

    @_pydantic.model_validator(mode="after")
    def _check_bounds(self) -> IntegerPartManifest:
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class VersioningManifest(ManifestBase):
    """
    Versioning section.

    Give `route` for automatic versioning (ids read from the documents), or
    `defaults` (and optionally `user`) for manual versioning.
    """

    pattern: list[IntegerPartManifest | str] | None = None
    route: str | None = None
    user: str | None = None
    defaults: str | None = None

    @_pydantic.field_validator("user", "defaults", mode="before")
    @classmethod
    def _stringify_ids(cls, value: _typing.Any) -> _typing.Any:
        # "defaults: 3" loads as an int
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @_pydantic.model_validator(mode="after")
    def _check_strategy(self) -> VersioningManifest:
        if (self.route is None) == (self.defaults is None):
            raise ValueError("give either 'route' (automatic) or 'defaults' (manual) versioning")
        if self.route is not None and self.user is not None:
            raise ValueError("'user' only applies to manual versioning")
        return self

    def build_pattern(self) -> dvs.Pattern:
        if self.pattern is None:
            return dvs.basic_pattern()
        parts: list[_typing.Any] = [
            part if isinstance(part, str) else (part.min, part.max) for part in self.pattern
        ]
        return dvs.Pattern.parse(parts)

    def build(self, factory: route_module.RouteFactory) -> dvs.Versioning:
        pattern = self.build_pattern()
        if self.route is not None:
            return dvs.AutomaticVersioning(pattern, factory.create(self.route))
        return dvs.ManualVersioning(pattern, self.user, _typing.cast(str, self.defaults))


def _stringify_keys(value: _typing.Any) -> _typing.Any:
    if isinstance(value, dict):
        return {str(key): item for key, item in value.items()}
    return value


class Manifest(ManifestBase):
    """Root of a migration manifest."""

    separator: str = constants.DEFAULT_SEPARATOR
    escape: str = constants.DEFAULT_ESCAPE
    auto_save: bool = constants.DEFAULT_AUTO_SAVE
    enable_downgrading: bool = constants.DEFAULT_ENABLE_DOWNGRADING
    keep_all: bool = constants.DEFAULT_KEEP_ALL
    merge_rules: dict[updater_settings.MergeRule, bool] = _pydantic.Field(default_factory=dict)
    versioning: VersioningManifest | None = None
    relocations: dict[str, dict[str, str]] = _pydantic.Field(default_factory=dict)
    ignored: dict[str, list[str]] = _pydantic.Field(default_factory=dict)

    @_pydantic.field_validator("separator", "escape")
    @classmethod
    def _check_single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("must be a single character")
        return value

    @_pydantic.field_validator("relocations", "ignored", mode="before")
    @classmethod
    def _stringify_version_ids(cls, value: _typing.Any) -> _typing.Any:
        # Version ids such as 2 or 1.5 load as numbers
        return _stringify_keys(value)

    def route_factory(self) -> route_module.RouteFactory:
        return route_module.RouteFactory(self.separator, self.escape)

    def to_builder(self) -> updater_settings.UpdaterSettingsBuilder:
        """
        Convert the manifest into a settings builder.

        Value mappers can be added to the returned builder before build().

        Raises:
            InvalidRouteError: If a route string is malformed.
            InvalidPatternError: If the versioning pattern is malformed.
        """
        factory = self.route_factory()
        builder = (
            updater_settings.UpdaterSettings.builder()
            .set_auto_save(self.auto_save)
            .set_enable_downgrading(self.enable_downgrading)
            .set_keep_all(self.keep_all)
            .set_merge_rules(self.merge_rules)
        )
        if self.versioning is not None:
            builder.set_versioning(self.versioning.build(factory))
        for version_id, relocations in self.relocations.items():
            builder.set_relocations(
                version_id,
                {
                    factory.create(source): factory.create(destination)
                    for source, destination in relocations.items()
                },
            )
        for version_id, routes in self.ignored.items():
            builder.set_ignored_routes(version_id, [factory.create(route) for route in routes])
        return builder


def parse_manifest(
    data: _typing.Mapping[str, _typing.Any],
    path: _pathlib.Path | None = None,
) -> Manifest:
    """
    Validate manifest data.

    Raises:
        ManifestError: If validation fails.
    """
    source = path if path is not None else _pathlib.Path("<manifest>")
    try:
        return Manifest.model_validate(data)
    except _pydantic.ValidationError as e:
        raise errors.ManifestError(source, str(e)) from e


def load_manifest(path: _pathlib.Path | str) -> updater_settings.UpdaterSettingsBuilder:
    """
    Read a manifest file and return a settings builder.

    Raises:
        ManifestError: If the file cannot be read, is not valid YAML, is not
            a mapping, fails validation, or contains a malformed route or
            pattern.
    """
    path = _pathlib.Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise errors.ManifestError(path, f"cannot read file: {e}") from e

    try:
        data = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise errors.ManifestError(path, f"invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise errors.ManifestError(
            path, f"manifest must be a YAML mapping, got {type(data).__name__}"
        )

    manifest = parse_manifest(data, path)
    try:
        return manifest.to_builder()
    except (errors.InvalidRouteError, errors.InvalidPatternError) as e:
        raise errors.ManifestError(path, str(e)) from e
