"""
Blocks: the nodes of a document tree.

A block owns its comments ("before" lines above the key, "inline" text on the
key's line) and either a value (Entry) or an ordered mapping of child blocks
(Section). Blocks have no parent pointers; a block is owned by exactly one
section and is located by Route from the document root.

Comments are stored without the leading "#" and without trailing newlines.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import dataclasses as _dataclasses
import typing as _typing


@_dataclasses.dataclass(eq=False)
class Block:
    """Common part of entries and sections: the attached comments."""

    before: list[str] = _dataclasses.field(default_factory=list)
    """Full-line comments directly above the key."""

    inline: list[str] = _dataclasses.field(default_factory=list)
    """Comments trailing the key's line."""

    def clone(self) -> Block:
        """Deep copy of the block; value and comments are never shared."""
        raise NotImplementedError

    def to_value(self) -> _typing.Any:
        """Plain Python value of the block (dicts for sections)."""
        raise NotImplementedError

    def copy_comments_from(self, other: Block) -> None:
        self.before = list(other.before)
        self.inline = list(other.inline)


@_dataclasses.dataclass(eq=False)
class Entry(Block):
    """Leaf block holding a scalar or sequence value."""

    value: _typing.Any = None

    def clone(self) -> Entry:
        return Entry(
            before=list(self.before),
            inline=list(self.inline),
            value=_copy.deepcopy(self.value),
        )

    def to_value(self) -> _typing.Any:
        return _copy.deepcopy(self.value)

    def __repr__(self) -> str:
        return f"Entry({self.value!r})"


@_dataclasses.dataclass(eq=False)
class Section(Block):
    """Internal block holding an insertion-ordered mapping of child blocks."""

    children: dict[_typing.Hashable, Block] = _dataclasses.field(default_factory=dict)

    def keys(self) -> list[_typing.Hashable]:
        """Child keys in insertion order."""
        return list(self.children)

    def get_block(self, key: _typing.Hashable) -> Block | None:
        return self.children.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.children

    def __len__(self) -> int:
        return len(self.children)

    def put(
        self,
        key: _typing.Hashable,
        block: Block,
        *,
        after: _typing.Hashable | None = None,
        first: bool = False,
    ) -> None:
        """
        Store a child block.

        An existing key keeps its position. A new key is appended, or placed
        right after `after` (when that key exists), or at the front when
        `first` is set.
        """
        if key in self.children or (after is None and not first):
            self.children[key] = block
            return
        if after is not None and after not in self.children:
            self.children[key] = block
            return

        reordered: dict[_typing.Hashable, Block] = {}
        if first:
            reordered[key] = block
        for existing_key, existing in self.children.items():
            reordered[existing_key] = existing
            if not first and existing_key == after:
                reordered[key] = block
        self.children = reordered

    def remove(self, key: _typing.Hashable) -> Block | None:
        return self.children.pop(key, None)

    def clone(self) -> Section:
        return Section(
            before=list(self.before),
            inline=list(self.inline),
            children={key: child.clone() for key, child in self.children.items()},
        )

    def to_value(self) -> dict[_typing.Hashable, _typing.Any]:
        return {key: child.to_value() for key, child in self.children.items()}

    def __repr__(self) -> str:
        return f"Section({self.keys()!r})"


def block_from_value(value: _typing.Any) -> Block:
    """
    Build a block tree from a plain Python value.

    Mappings become sections (recursively); everything else becomes an
    entry holding a deep copy of the value.
    """
    if isinstance(value, Block):
        return value
    if isinstance(value, _abc.Mapping):
        return Section(children={key: block_from_value(child) for key, child in value.items()})
    return Entry(value=_copy.deepcopy(value))
