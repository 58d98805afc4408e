"""
In-memory document tree addressed by routes.

Document wraps a root Section and resolves Routes by key lookup from the root.
It is the read/write surface the updater works against: block access by
route, cloning without aliasing, ordered key enumeration and presence tests.
"""

from __future__ import annotations

import pathlib as _pathlib
import typing as _typing

import yamlmigrate.document.block as block_module
import yamlmigrate.route as route_module


class Document:
    """
    A parsed configuration document.

    Routes passed to any method may be Route objects or strings (parsed with
    the default separator).
    """

    def __init__(
        self,
        root: block_module.Section | None = None,
        *,
        path: _pathlib.Path | None = None,
    ) -> None:
        """
        Create a document.

        Args:
            root: The root section. A new empty section is used when omitted.
            path: File the document was loaded from (used by auto-save).
        """
        self.root = root if root is not None else block_module.Section()
        self.path = path
        # Comments after the last key of the file
        self.trailing: list[str] = []

    @classmethod
    def from_dict(
        cls,
        data: _typing.Mapping[_typing.Hashable, _typing.Any],
        *,
        path: _pathlib.Path | None = None,
    ) -> Document:
        """Build a comment-less document from a plain mapping."""
        root = _typing.cast(block_module.Section, block_module.block_from_value(dict(data)))
        return cls(root, path=path)

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def get_block(self, route: route_module.Route | str) -> block_module.Block | None:
        """Return the block at `route`, or None when the route does not resolve."""
        route = route_module.as_route(route)
        current: block_module.Block = self.root
        for key in route:
            if not isinstance(current, block_module.Section):
                return None
            child = current.get_block(key)
            if child is None:
                return None
            current = child
        return current

    def contains(self, route: route_module.Route | str) -> bool:
        return self.get_block(route) is not None

    def __contains__(self, route: object) -> bool:
        if not isinstance(route, (route_module.Route, str)):
            return False
        return self.contains(route)

    def get(self, route: route_module.Route | str, default: _typing.Any = None) -> _typing.Any:
        """Plain value at `route` (a dict for sections), or `default`."""
        block = self.get_block(route)
        if block is None:
            return default
        return block.to_value()

    def get_section(self, route: route_module.Route | str) -> block_module.Section | None:
        block = self.get_block(route)
        return block if isinstance(block, block_module.Section) else None

    def keys(self) -> list[_typing.Hashable]:
        """Top-level keys in document order."""
        return self.root.keys()

    def to_dict(self) -> dict[_typing.Hashable, _typing.Any]:
        return self.root.to_value()

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def set_block(self, route: route_module.Route | str, block: block_module.Block) -> None:
        """
        Store `block` at `route`, overwriting whatever lived there.

        Missing intermediate sections are created; intermediate entries are
        replaced by sections.
        """
        route = route_module.as_route(route)
        if route.is_root:
            if not isinstance(block, block_module.Section):
                raise TypeError("The document root must be a section")
            self.root = block
            return
        parent = self._ensure_section(route.parent())
        parent.put(route.last_key, block)

    def set(self, route: route_module.Route | str, value: _typing.Any) -> None:
        """
        Store a plain value at `route`.

        The comments of a block already at the route are kept.
        """
        route = route_module.as_route(route)
        new_block = block_module.block_from_value(value)
        existing = self.get_block(route)
        if existing is not None and existing is not new_block:
            new_block.copy_comments_from(existing)
        self.set_block(route, new_block)

    def remove(self, route: route_module.Route | str) -> block_module.Block | None:
        """Detach and return the block at `route`, or None when absent."""
        route = route_module.as_route(route)
        if route.is_root:
            raise ValueError("Cannot remove the document root")
        parent = self.get_block(route.parent())
        if not isinstance(parent, block_module.Section):
            return None
        return parent.remove(route.last_key)

    def prune_empty_sections(self, route: route_module.Route | str) -> None:
        """
        Remove the section at `route` and its ancestors while they are empty.

        The root is never removed.
        """
        route = route_module.as_route(route)
        while not route.is_root:
            block = self.get_block(route)
            if not isinstance(block, block_module.Section) or len(block):
                return
            self.remove(route)
            route = route.parent()

    def _ensure_section(self, route: route_module.Route) -> block_module.Section:
        current = self.root
        for key in route:
            child = current.get_block(key)
            if not isinstance(child, block_module.Section):
                section = block_module.Section()
                if child is not None:
                    section.copy_comments_from(child)
                current.put(key, section)
                child = section
            current = child
        return current

    def __repr__(self) -> str:
        return f"Document({self.to_dict()!r})"
