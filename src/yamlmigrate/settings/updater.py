"""
Updater settings: every option that controls a document update.

UpdaterSettings is immutable; build it with UpdaterSettings.builder():

    >>> settings = (
    ...     UpdaterSettings.builder()
    ...     .set_versioning(dvs.basic_versioning("config-version"))
    ...     .set_relocations("2", {Route.of("old"): Route.of("new")})
    ...     .set_keep_all(True)
    ...     .build()
    ... )

Per-version tables (ignored routes, relocations, value mappers) are keyed by
version id string. Each table has a Route-keyed variant and a string-keyed
variant; string routes are parsed with the separator given to the updater at
update time, and Route-keyed entries win when both name the same route.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import types as _types
import typing as _typing

import yamlmigrate.constants as constants
import yamlmigrate.dvs as dvs
import yamlmigrate.route as route_module

ValueMapper: _typing.TypeAlias = _typing.Callable[[_typing.Any], _typing.Any]
"""Transforms the old value at a route into its new value."""

VersionKey: _typing.TypeAlias = "str | int"


class MergeRule(_enum.Enum):
    """Type-conflict shapes met while merging a route present on both sides."""

    MAPPINGS = "MAPPINGS"
    """Both sides hold an entry (a leaf value)."""

    MAPPING_AT_SECTION = "MAPPING_AT_SECTION"
    """The document holds an entry where the defaults hold a section."""

    SECTION_AT_MAPPING = "SECTION_AT_MAPPING"
    """The document holds a section where the defaults hold an entry."""


DEFAULT_MERGE_RULES: _typing.Mapping[MergeRule, bool] = _types.MappingProxyType(
    {
        MergeRule.MAPPINGS: True,
        MergeRule.MAPPING_AT_SECTION: False,
        MergeRule.SECTION_AT_MAPPING: False,
    }
)
"""Whether to keep the document's content for each rule by default."""


def _freeze_table(
    table: dict[str, dict[_typing.Any, _typing.Any]],
) -> _typing.Mapping[str, _typing.Mapping[_typing.Any, _typing.Any]]:
    return _types.MappingProxyType(
        {version_id: _types.MappingProxyType(dict(entries)) for version_id, entries in table.items()}
    )


@_dataclasses.dataclass(frozen=True, slots=True)
class UpdaterSettings:
    """Immutable updater configuration. Create instances with builder()."""

    auto_save: bool = constants.DEFAULT_AUTO_SAVE
    """Save the document after updating (only when it has a file path)."""

    enable_downgrading: bool = constants.DEFAULT_ENABLE_DOWNGRADING
    """Allow documents newer than the defaults; otherwise raise."""

    keep_all: bool = constants.DEFAULT_KEEP_ALL
    """Keep document content that has no counterpart in the defaults."""

    merge_rules: _typing.Mapping[MergeRule, bool] = _dataclasses.field(
        default_factory=lambda: DEFAULT_MERGE_RULES
    )
    ignored: _typing.Mapping[str, frozenset[route_module.Route]] = _dataclasses.field(
        default_factory=lambda: _types.MappingProxyType({})
    )
    string_ignored: _typing.Mapping[str, frozenset[str]] = _dataclasses.field(
        default_factory=lambda: _types.MappingProxyType({})
    )
    relocations: _typing.Mapping[str, _typing.Mapping[route_module.Route, route_module.Route]] = (
        _dataclasses.field(default_factory=lambda: _types.MappingProxyType({}))
    )
    string_relocations: _typing.Mapping[str, _typing.Mapping[str, str]] = _dataclasses.field(
        default_factory=lambda: _types.MappingProxyType({})
    )
    mappers: _typing.Mapping[str, _typing.Mapping[route_module.Route, ValueMapper]] = (
        _dataclasses.field(default_factory=lambda: _types.MappingProxyType({}))
    )
    string_mappers: _typing.Mapping[str, _typing.Mapping[str, ValueMapper]] = _dataclasses.field(
        default_factory=lambda: _types.MappingProxyType({})
    )
    versioning: dvs.Versioning | None = None
    """Versioning strategy; None disables relocations and mappers."""

    DEFAULT: _typing.ClassVar[UpdaterSettings]

    @staticmethod
    def builder(settings: UpdaterSettings | None = None) -> UpdaterSettingsBuilder:
        """Return a builder, pre-filled from `settings` when given."""
        builder = UpdaterSettingsBuilder()
        if settings is not None:
            builder.copy_from(settings)
        return builder

    def preserves(self, rule: MergeRule) -> bool:
        """Whether the document's content is kept for `rule`."""
        return self.merge_rules.get(rule, DEFAULT_MERGE_RULES[rule])

    def get_ignored(
        self,
        version_id: str,
        separator: str = constants.DEFAULT_SEPARATOR,
    ) -> set[route_module.Route]:
        """Ignored routes registered at `version_id`, string routes included."""
        ignored = set(self.ignored.get(version_id, ()))
        strings = self.string_ignored.get(version_id)
        if strings:
            factory = route_module.RouteFactory(separator)
            ignored.update(factory.create(route) for route in strings)
        return ignored

    def get_relocations(
        self,
        version_id: str,
        separator: str = constants.DEFAULT_SEPARATOR,
    ) -> dict[route_module.Route, route_module.Route]:
        """Relocations (source -> destination) registered at `version_id`."""
        relocations = dict(self.relocations.get(version_id, {}))
        strings = self.string_relocations.get(version_id)
        if strings:
            factory = route_module.RouteFactory(separator)
            for source, destination in strings.items():
                relocations.setdefault(factory.create(source), factory.create(destination))
        return relocations

    def get_mappers(
        self,
        version_id: str,
        separator: str = constants.DEFAULT_SEPARATOR,
    ) -> dict[route_module.Route, ValueMapper]:
        """Value mappers registered at `version_id`."""
        mappers = dict(self.mappers.get(version_id, {}))
        strings = self.string_mappers.get(version_id)
        if strings:
            factory = route_module.RouteFactory(separator)
            for route, mapper in strings.items():
                mappers.setdefault(factory.create(route), mapper)
        return mappers


class UpdaterSettingsBuilder:
    """
    Fluent builder for UpdaterSettings.

    Version ids may be passed as ints for convenience; they are stored as
    strings. Setting a table for a version id replaces any earlier table for
    the same id.
    """

    def __init__(self) -> None:
        self._auto_save = constants.DEFAULT_AUTO_SAVE
        self._enable_downgrading = constants.DEFAULT_ENABLE_DOWNGRADING
        self._keep_all = constants.DEFAULT_KEEP_ALL
        self._merge_rules: dict[MergeRule, bool] = dict(DEFAULT_MERGE_RULES)
        self._ignored: dict[str, frozenset[route_module.Route]] = {}
        self._string_ignored: dict[str, frozenset[str]] = {}
        self._relocations: dict[str, dict[route_module.Route, route_module.Route]] = {}
        self._string_relocations: dict[str, dict[str, str]] = {}
        self._mappers: dict[str, dict[route_module.Route, ValueMapper]] = {}
        self._string_mappers: dict[str, dict[str, ValueMapper]] = {}
        self._versioning: dvs.Versioning | None = None

    def copy_from(self, settings: UpdaterSettings) -> UpdaterSettingsBuilder:
        """Load every option of an existing settings instance."""
        self._auto_save = settings.auto_save
        self._enable_downgrading = settings.enable_downgrading
        self._keep_all = settings.keep_all
        self._merge_rules = dict(settings.merge_rules)
        self._ignored = dict(settings.ignored)
        self._string_ignored = dict(settings.string_ignored)
        self._relocations = {key: dict(value) for key, value in settings.relocations.items()}
        self._string_relocations = {
            key: dict(value) for key, value in settings.string_relocations.items()
        }
        self._mappers = {key: dict(value) for key, value in settings.mappers.items()}
        self._string_mappers = {key: dict(value) for key, value in settings.string_mappers.items()}
        self._versioning = settings.versioning
        return self

    def set_auto_save(self, auto_save: bool) -> UpdaterSettingsBuilder:
        self._auto_save = auto_save
        return self

    def set_enable_downgrading(self, enable_downgrading: bool) -> UpdaterSettingsBuilder:
        self._enable_downgrading = enable_downgrading
        return self

    def set_keep_all(self, keep_all: bool) -> UpdaterSettingsBuilder:
        self._keep_all = keep_all
        return self

    def set_merge_rule(self, rule: MergeRule, preserve_document: bool) -> UpdaterSettingsBuilder:
        """Keep the document's content (True) or take the defaults' (False) for `rule`."""
        self._merge_rules[rule] = preserve_document
        return self

    def set_merge_rules(self, rules: _typing.Mapping[MergeRule, bool]) -> UpdaterSettingsBuilder:
        self._merge_rules.update(rules)
        return self

    def set_ignored_routes(
        self,
        version_id: VersionKey,
        routes: _typing.Iterable[route_module.Route],
    ) -> UpdaterSettingsBuilder:
        """Protect `routes` from merging when `version_id` is replayed."""
        self._ignored[str(version_id)] = frozenset(routes)
        return self

    def set_all_ignored_routes(
        self,
        routes: _typing.Mapping[VersionKey, _typing.Iterable[route_module.Route]],
    ) -> UpdaterSettingsBuilder:
        for version_id, version_routes in routes.items():
            self.set_ignored_routes(version_id, version_routes)
        return self

    def set_string_ignored_routes(
        self,
        version_id: VersionKey,
        routes: _typing.Iterable[str],
    ) -> UpdaterSettingsBuilder:
        self._string_ignored[str(version_id)] = frozenset(routes)
        return self

    def set_all_string_ignored_routes(
        self,
        routes: _typing.Mapping[VersionKey, _typing.Iterable[str]],
    ) -> UpdaterSettingsBuilder:
        for version_id, version_routes in routes.items():
            self.set_string_ignored_routes(version_id, version_routes)
        return self

    def set_relocations(
        self,
        version_id: VersionKey,
        relocations: _typing.Mapping[route_module.Route, route_module.Route],
    ) -> UpdaterSettingsBuilder:
        """Move blocks (source -> destination) when `version_id` is replayed."""
        self._relocations[str(version_id)] = dict(relocations)
        return self

    def set_all_relocations(
        self,
        relocations: _typing.Mapping[
            VersionKey, _typing.Mapping[route_module.Route, route_module.Route]
        ],
    ) -> UpdaterSettingsBuilder:
        for version_id, version_relocations in relocations.items():
            self.set_relocations(version_id, version_relocations)
        return self

    def set_string_relocations(
        self,
        version_id: VersionKey,
        relocations: _typing.Mapping[str, str],
    ) -> UpdaterSettingsBuilder:
        self._string_relocations[str(version_id)] = dict(relocations)
        return self

    def set_all_string_relocations(
        self,
        relocations: _typing.Mapping[VersionKey, _typing.Mapping[str, str]],
    ) -> UpdaterSettingsBuilder:
        for version_id, version_relocations in relocations.items():
            self.set_string_relocations(version_id, version_relocations)
        return self

    def set_mappers(
        self,
        version_id: VersionKey,
        mappers: _typing.Mapping[route_module.Route, ValueMapper],
    ) -> UpdaterSettingsBuilder:
        """Transform values (after relocations) when `version_id` is replayed."""
        self._mappers[str(version_id)] = dict(mappers)
        return self

    def set_all_mappers(
        self,
        mappers: _typing.Mapping[VersionKey, _typing.Mapping[route_module.Route, ValueMapper]],
    ) -> UpdaterSettingsBuilder:
        for version_id, version_mappers in mappers.items():
            self.set_mappers(version_id, version_mappers)
        return self

    def set_string_mappers(
        self,
        version_id: VersionKey,
        mappers: _typing.Mapping[str, ValueMapper],
    ) -> UpdaterSettingsBuilder:
        self._string_mappers[str(version_id)] = dict(mappers)
        return self

    def set_versioning(self, versioning: dvs.Versioning | None) -> UpdaterSettingsBuilder:
        self._versioning = versioning
        return self

    def set_manual_versioning(
        self,
        pattern: dvs.Pattern,
        user_version_id: str | None,
        defaults_version_id: str,
    ) -> UpdaterSettingsBuilder:
        return self.set_versioning(
            dvs.ManualVersioning(pattern, user_version_id, defaults_version_id)
        )

    def set_automatic_versioning(
        self,
        pattern: dvs.Pattern,
        route: route_module.Route | str,
    ) -> UpdaterSettingsBuilder:
        return self.set_versioning(dvs.AutomaticVersioning(pattern, route))

    def build(self) -> UpdaterSettings:
        return UpdaterSettings(
            auto_save=self._auto_save,
            enable_downgrading=self._enable_downgrading,
            keep_all=self._keep_all,
            merge_rules=_types.MappingProxyType(dict(self._merge_rules)),
            ignored=_types.MappingProxyType(dict(self._ignored)),
            string_ignored=_types.MappingProxyType(dict(self._string_ignored)),
            relocations=_freeze_table(self._relocations),
            string_relocations=_freeze_table(self._string_relocations),
            mappers=_freeze_table(self._mappers),
            string_mappers=_freeze_table(self._string_mappers),
            versioning=self._versioning,
        )


UpdaterSettings.DEFAULT = UpdaterSettings()
