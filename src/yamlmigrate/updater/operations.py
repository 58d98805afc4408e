"""
Versioned operations: replaying schema evolution onto a user document.

Given the user's version and the defaults' version, every version id strictly
newer than the user's and not newer than the defaults' is visited in
ascending order (enumerated with Version.next(), never by sorting strings).
At each id the relocations registered there are applied first, then the
value mappers. The ignored routes of all visited ids are collected for the
merge that follows.

The whole plan is built before the document is touched, so configuration
problems (bad route strings, enumeration overruns, chained relocations)
leave the document unmodified.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import logging as _logging

import yamlmigrate.document as document
import yamlmigrate.dvs as dvs
import yamlmigrate.errors as errors
import yamlmigrate.route as route_module
import yamlmigrate.settings as settings
import yamlmigrate.updater.relocator as relocator

_logger = _logging.getLogger(__name__)


class UpdateOutcome(_enum.Enum):
    """What the versioned operations did (and what update() reports)."""

    NO_VERSIONING = "no_versioning"
    """No versioning configured; nothing replayed, merge still runs."""

    UP_TO_DATE = "up_to_date"
    """Document already at the defaults' version; nothing to do."""

    DOWNGRADED = "downgraded"
    """Document newer than defaults (downgrading enabled); nothing replayed."""

    UPDATED = "updated"
    """Relocations and mappers replayed; merge runs."""


@_dataclasses.dataclass(frozen=True, slots=True)
class VersionStep:
    """Operations registered at one version id."""

    version_id: str
    relocations: dict[route_module.Route, route_module.Route]
    mappers: dict[route_module.Route, settings.ValueMapper]


@_dataclasses.dataclass(frozen=True, slots=True)
class OperationsResult:
    """Outcome of the versioned operations and what the merge needs."""

    outcome: UpdateOutcome
    ignored: frozenset[route_module.Route] = frozenset()
    user_version: dvs.Version | None = None
    defaults_version: dvs.Version | None = None
    steps: tuple[VersionStep, ...] = ()


def _check_relocation_chain(
    version_id: str,
    relocations: dict[route_module.Route, route_module.Route],
) -> None:
    for source, destination in relocations.items():
        if source.is_root or destination.is_root:
            raise errors.InvalidRouteError(
                str(source if source.is_root else destination),
                f"relocation at version {version_id} names the document root",
            )
        if destination != source and destination in relocations:
            raise errors.RelocationConflictError(version_id, destination)


def plan(
    updater_settings: settings.UpdaterSettings,
    user_version: dvs.Version,
    defaults_version: dvs.Version,
    separator: str,
) -> tuple[tuple[VersionStep, ...], frozenset[route_module.Route]]:
    """
    Collect the steps and ignored routes between two versions.

    Returns:
        (steps in ascending version order, union of ignored routes).

    Raises:
        RangeExceededError: If the versions cannot be enumerated with next().
        InvalidRouteError: If a string route in the settings is malformed.
        RelocationConflictError: If relocations at one id chain.
    """
    steps: list[VersionStep] = []
    ignored: set[route_module.Route] = set()

    current = user_version
    while current < defaults_version:
        current = current.next()
        version_id = current.as_id()
        relocations = updater_settings.get_relocations(version_id, separator)
        _check_relocation_chain(version_id, relocations)
        steps.append(
            VersionStep(
                version_id=version_id,
                relocations=relocations,
                mappers=updater_settings.get_mappers(version_id, separator),
            )
        )
        ignored.update(updater_settings.get_ignored(version_id, separator))

    return tuple(steps), frozenset(ignored)


def run(
    doc: document.Document,
    defaults: document.Document,
    updater_settings: settings.UpdaterSettings,
    separator: str,
) -> OperationsResult:
    """
    Replay relocations and mappers onto `doc`.

    Args:
        doc: The user document, mutated in place.
        defaults: The defaults document (read only).
        updater_settings: Settings with the versioning strategy and tables.
        separator: Separator for string routes in the settings.

    Raises:
        MissingVersionError: If the defaults lack a valid version id.
        UnsupportedDowngradeError: If the document is newer than the defaults
            and downgrading is disabled.
        RangeExceededError, InvalidRouteError, RelocationConflictError: See
            plan(); raised before any mutation.
    """
    versioning = updater_settings.versioning
    if versioning is None:
        return OperationsResult(UpdateOutcome.NO_VERSIONING)

    defaults_version = versioning.defaults_version(defaults, separator)
    user_version = versioning.user_version(doc, separator)
    compared = user_version.compare(defaults_version)

    if compared > 0:
        if not updater_settings.enable_downgrading:
            raise errors.UnsupportedDowngradeError(user_version.as_id(), defaults_version.as_id())
        _logger.info(
            "Document version %s is newer than defaults %s; skipping versioned operations",
            user_version,
            defaults_version,
        )
        return OperationsResult(
            UpdateOutcome.DOWNGRADED,
            user_version=user_version,
            defaults_version=defaults_version,
        )

    if compared == 0:
        return OperationsResult(
            UpdateOutcome.UP_TO_DATE,
            user_version=user_version,
            defaults_version=defaults_version,
        )

    steps, ignored = plan(updater_settings, user_version, defaults_version, separator)
    for step in steps:
        _logger.debug(
            "Applying version %s: %d relocation(s), %d mapper(s)",
            step.version_id,
            len(step.relocations),
            len(step.mappers),
        )
        relocator.apply_relocations(doc, step.relocations)
        relocator.apply_mappers(doc, step.mappers)

    return OperationsResult(
        UpdateOutcome.UPDATED,
        ignored=ignored,
        user_version=user_version,
        defaults_version=defaults_version,
        steps=steps,
    )
