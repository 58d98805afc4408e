"""
The updater entry point.

update() brings a user document up to its defaults:

1. Run the versioned operations (relocations and value mappers of every
   version newer than the document's).
2. Unless the document was already up to date, merge the defaults in, stamp
   the defaults' version id into the document and, when auto-save is on and
   the document knows its file, write it back.
"""

from __future__ import annotations

import logging as _logging

import yamlmigrate.constants as constants
import yamlmigrate.document as document
import yamlmigrate.settings as settings
import yamlmigrate.updater.merger as merger
import yamlmigrate.updater.operations as operations

_logger = _logging.getLogger(__name__)


def update(
    doc: document.Document,
    defaults: document.Document,
    updater_settings: settings.UpdaterSettings = settings.UpdaterSettings.DEFAULT,
    route_separator: str = constants.DEFAULT_SEPARATOR,
) -> operations.UpdateOutcome:
    """
    Update `doc` in place against `defaults`.

    Args:
        doc: The user document.
        defaults: The defaults document; never modified.
        updater_settings: Versioning, per-version tables and merge options.
        route_separator: Separator for string routes in `updater_settings`.

    Returns:
        What happened to the document.

    Raises:
        YamlMigrateError: On configuration problems (missing defaults version,
            disabled downgrade, enumeration overrun, bad routes, chained
            relocations), all raised before the document changes; and
            DocumentError when auto-save fails.
    """
    result = operations.run(doc, defaults, updater_settings, route_separator)

    if result.outcome is operations.UpdateOutcome.UP_TO_DATE:
        _logger.info("Document is up to date (version %s)", result.user_version)
        return result.outcome

    merger.merge(doc, defaults, updater_settings, result.ignored)

    versioning = updater_settings.versioning
    if versioning is not None and result.defaults_version is not None:
        versioning.stamp_user_version(doc, result.defaults_version, route_separator)

    if updater_settings.auto_save and doc.path is not None:
        document.save(doc)
        _logger.info("Saved updated document to %s", doc.path)

    _logger.info(
        "Update finished: %s (%s -> %s)",
        result.outcome.name,
        result.user_version,
        result.defaults_version,
    )
    return result.outcome
