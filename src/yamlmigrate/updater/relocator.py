"""
Relocations and value mappers applied to a document.

A relocation moves a whole block (value and comments) from one route to
another, overwriting the destination. Sections left empty by the move are
removed. A value mapper replaces the value at a route with a function of the
old value, keeping the block's comments. A missing source or mapper route is
skipped.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import yamlmigrate.document as document
import yamlmigrate.route as route_module
import yamlmigrate.settings as settings

_logger = _logging.getLogger(__name__)


def relocate(
    doc: document.Document,
    source: route_module.Route,
    destination: route_module.Route,
) -> bool:
    """
    Move the block at `source` to `destination`.

    Returns:
        True if a block was moved, False if `source` does not resolve.
    """
    if source == destination:
        return doc.contains(source)

    block = doc.remove(source)
    if block is None:
        _logger.debug("Relocation source %s not present, skipping", source)
        return False

    doc.set_block(destination, block)
    parent = source.parent()
    # Sections on the destination's path hold the moved block
    if not parent.is_root and not destination.starts_with(parent):
        doc.prune_empty_sections(parent)
    _logger.debug("Relocated %s -> %s", source, destination)
    return True


def apply_relocations(
    doc: document.Document,
    relocations: _typing.Mapping[route_module.Route, route_module.Route],
) -> None:
    for source, destination in relocations.items():
        relocate(doc, source, destination)


def apply_mappers(
    doc: document.Document,
    mappers: _typing.Mapping[route_module.Route, settings.ValueMapper],
) -> None:
    """
    Replace the value at each route with `mapper(old_value)`.

    Sections are passed to the mapper as plain dicts; a mapping returned by a
    mapper becomes a section. Exceptions raised by a mapper propagate.
    """
    for route, mapper in mappers.items():
        block = doc.get_block(route)
        if block is None:
            _logger.debug("Mapper route %s not present, skipping", route)
            continue
        doc.set(route, mapper(block.to_value()))
        _logger.debug("Mapped value at %s", route)
