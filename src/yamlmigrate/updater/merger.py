"""
Merging a user document against its defaults.

The walk is driven by the defaults tree, section by section:

- A defaults key the document lacks is copied in (a deep clone, comments
  included), placed right after the preceding defaults key, or at the front
  of the section for the first defaults key.
- A key present on both sides as sections is merged recursively.
- Any other pairing is a conflict decided by a MergeRule: keep the document's
  block when the rule preserves the document, otherwise replace it with a
  clone of the defaults' block.
- A key only the document has is removed, unless keep_all is set or the key
  is (or leads to) an ignored route.

An ignored route the document holds is never descended into nor replaced.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import yamlmigrate.document as document
import yamlmigrate.route as route_module
import yamlmigrate.settings as settings

_logger = _logging.getLogger(__name__)


def _conflict_rule(
    user_block: document.Block,
    defaults_block: document.Block,
) -> settings.MergeRule:
    if isinstance(user_block, document.Section):
        return settings.MergeRule.SECTION_AT_MAPPING
    if isinstance(defaults_block, document.Section):
        return settings.MergeRule.MAPPING_AT_SECTION
    return settings.MergeRule.MAPPINGS


class Merger:
    """Merges defaults into a document following the updater settings."""

    def __init__(
        self,
        updater_settings: settings.UpdaterSettings,
        ignored: _typing.Collection[route_module.Route] = (),
    ) -> None:
        """
        Args:
            updater_settings: Provides merge rules and keep_all.
            ignored: Routes collected from the replayed versions.
        """
        self._settings = updater_settings
        self._ignored = frozenset(ignored)
        self._leads_to_ignored = frozenset(
            route[:length] for route in self._ignored for length in range(1, len(route))
        )

    def merge(self, doc: document.Document, defaults: document.Document) -> None:
        """Merge `defaults` into `doc` in place; `defaults` is not modified."""
        if route_module.Route() in self._ignored:
            _logger.debug("Whole document is ignored, skipping merge")
            return
        self._merge_section(doc.root, defaults.root, route_module.Route())

    def _merge_section(
        self,
        user: document.Section,
        defaults: document.Section,
        route: route_module.Route,
    ) -> None:
        previous_key: _typing.Hashable | None = None
        has_previous = False

        for key, defaults_block in defaults.children.items():
            child_route = route.add(key)
            user_block = user.get_block(key)

            if user_block is None:
                if has_previous:
                    user.put(key, defaults_block.clone(), after=previous_key)
                else:
                    user.put(key, defaults_block.clone(), first=True)
                _logger.debug("Added %s from defaults", child_route)
            elif child_route in self._ignored:
                _logger.debug("Keeping ignored route %s", child_route)
            elif isinstance(user_block, document.Section) and isinstance(
                defaults_block, document.Section
            ):
                self._merge_section(user_block, defaults_block, child_route)
            else:
                rule = _conflict_rule(user_block, defaults_block)
                if not self._settings.preserves(rule):
                    user.put(key, defaults_block.clone())
                    _logger.debug("Replaced %s with defaults (%s)", child_route, rule.name)

            previous_key = key
            has_previous = True

        if self._settings.keep_all:
            return

        for key in user.keys():
            if key in defaults:
                continue
            child_route = route.add(key)
            if child_route in self._ignored or child_route in self._leads_to_ignored:
                continue
            user.remove(key)
            _logger.debug("Removed %s (not in defaults)", child_route)


def merge(
    doc: document.Document,
    defaults: document.Document,
    updater_settings: settings.UpdaterSettings,
    ignored: _typing.Collection[route_module.Route] = (),
) -> None:
    Merger(updater_settings, ignored).merge(doc, defaults)
