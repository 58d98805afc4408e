"""
YAML reading and writing for documents, keeping comments on their blocks.

Both directions go through ruamel.yaml in round-trip mode. A loaded
CommentedMap becomes a section, and the comment tokens ruamel keeps in its
`.ca` data are turned into the plain `before` and `inline` text of the
blocks. Any other value becomes an entry holding the round-trip object
itself, so comments inside sequences travel with the value.

Writing rebuilds a CommentedMap tree from the blocks, attaches their comments
as ruamel comment tokens and lets ruamel render the text.
"""

from __future__ import annotations

import copy as _copy
import io as _io
import pathlib as _pathlib
import typing as _typing

import ruamel.yaml as _ruamel_yaml
import ruamel.yaml.comments as _yaml_comments
import ruamel.yaml.error as _yaml_error
import ruamel.yaml.tokens as _yaml_tokens

import yamlmigrate.document.block as block_module
import yamlmigrate.document.document as document_module
import yamlmigrate.errors as errors

_INDENT = 2
_WIDTH = 4096


def _round_trip_yaml() -> _ruamel_yaml.YAML:
    yaml = _ruamel_yaml.YAML(typ="rt")
    yaml.preserve_quotes = True
    yaml.indent(mapping=_INDENT, sequence=_INDENT * 2, offset=_INDENT)
    yaml.width = _WIDTH
    return yaml


def _comment(text: str) -> str:
    return f"# {text}" if text else "#"


def _comment_texts(raw: str) -> list[str]:
    """Comment lines of a raw token value, without '#' and surrounding blanks."""
    texts: list[str] = []
    for line in raw.split("\n"):
        stripped = line.strip()
        if stripped.startswith("#"):
            texts.append(stripped[1:].strip())
    return texts


def _flatten(*slots: _typing.Any) -> list[_yaml_tokens.CommentToken]:
    """Comment tokens found in ruamel comment slots (tokens, lists or None)."""
    found: list[_yaml_tokens.CommentToken] = []
    for slot in slots:
        if slot is None:
            continue
        if isinstance(slot, list):
            found.extend(_flatten(*slot))
        else:
            found.append(slot)
    return found


def _starts_on(token: _yaml_tokens.CommentToken, lines: set[int]) -> bool:
    """Whether the token's first line is a trailing comment on one of `lines`."""
    if not token.value.lstrip(" ").startswith("#"):
        return False
    line = getattr(token.start_mark, "line", None)
    return line is None or line in lines


def _own_comment(value: _typing.Any) -> _typing.Any:
    if isinstance(value, (_yaml_comments.CommentedMap, _yaml_comments.CommentedSeq)):
        return value.ca.comment
    return None


def _header_lines(
    cmap: _yaml_comments.CommentedMap,
    key: _typing.Hashable,
    value: _typing.Any,
) -> set[int]:
    """Lines on which a trailing comment belongs to `key` itself."""
    position = (cmap.lc.data or {}).get(key)
    if not position:
        return set()
    if isinstance(value, (_yaml_comments.CommentedMap, _yaml_comments.CommentedSeq)):
        return {position[0]}
    # "key:\n  value  # comment" trails the value's line
    return {position[0], position[2]}


class _SectionBuilder:
    """
    Turns a loaded CommentedMap tree into sections.

    ruamel stores a comment on whichever token precedes it, so the lines
    above a key usually sit in the previous key's slot, and a nested
    mapping shares its header comments with the parent's slot. Tokens are
    therefore read in document order, each only once, and full-line
    comments are carried forward to the next key.
    """

    def __init__(self) -> None:
        self._seen: set[int] = set()
        self._values: set[int] = set()

    def _take(self, *slots: _typing.Any) -> list[_yaml_tokens.CommentToken]:
        taken: list[_yaml_tokens.CommentToken] = []
        for token in _flatten(*slots):
            if id(token) not in self._seen:
                self._seen.add(id(token))
                taken.append(token)
        return taken

    def _texts(self, *slots: _typing.Any) -> list[str]:
        return [text for token in self._take(*slots) for text in _comment_texts(token.value)]

    def _unshared(self, value: _typing.Any) -> _typing.Any:
        # Merge keys ('<<') hand the same object to several mappings
        if id(value) in self._values:
            return _copy.deepcopy(value)
        self._values.add(id(value))
        return value

    def section(
        self,
        cmap: _yaml_comments.CommentedMap,
        lead: list[str],
    ) -> tuple[block_module.Section, list[str]]:
        """
        Build the section for `cmap`.

        Args:
            cmap: A loaded mapping.
            lead: Full-line comments written above its first key.

        Returns:
            The section, and the full-line comments after its last key (they
            belong above the next key of the document).
        """
        section = block_module.Section()
        pending = list(lead)
        pending.extend(self._texts(cmap.ca.comment))

        for key, value in cmap.items():
            slot = cmap.ca.items.get(key) or [None, None, None, None]
            pending.extend(self._texts(slot[0], slot[1]))
            before, pending = pending, []

            header = self._take(slot[2], _own_comment(value), slot[3])
            lines = _header_lines(cmap, key, value)
            inline: list[str] = []
            after: list[str] = []
            for token in header:
                texts = _comment_texts(token.value)
                if texts and not inline and _starts_on(token, lines):
                    inline.append(texts.pop(0))
                after.extend(texts)

            block: block_module.Block
            if isinstance(value, _yaml_comments.CommentedMap):
                block, pending = self.section(value, after)
            elif isinstance(value, _yaml_comments.CommentedSeq):
                block = block_module.Entry(value=self._sequence(value, after))
            else:
                block = block_module.Entry(value=value)
                pending = after

            block.before = before
            block.inline = inline
            section.children[key] = block

        pending.extend(self._texts(cmap.ca.end))
        return section, pending

    def _sequence(
        self,
        seq: _yaml_comments.CommentedSeq,
        lead: list[str],
    ) -> _yaml_comments.CommentedSeq:
        """Keep only the comments above the first item as the sequence's own comment."""
        seq = self._unshared(seq)
        seq.ca.comment = [None, [_comment_token(text, 0) for text in lead]] if lead else None
        return seq


def loads(text: str, *, path: _pathlib.Path | None = None) -> document_module.Document:
    """
    Parse YAML text into a document with comments attached to blocks.

    Args:
        text: YAML content. Empty content gives an empty document.
        path: File the text came from (kept on the document, used in errors).

    Returns:
        The parsed document.

    Raises:
        DocumentError: If the YAML is malformed or its root is not a mapping.
    """
    try:
        data = _round_trip_yaml().load(text)
    except _yaml_error.YAMLError as e:
        raise errors.DocumentError(f"invalid YAML: {e}", path) from e

    if data is None:
        return document_module.Document(path=path)
    if not isinstance(data, _yaml_comments.CommentedMap):
        raise errors.DocumentError(
            f"document root must be a YAML mapping, got {type(data).__name__}", path
        )

    root, trailing = _SectionBuilder().section(data, [])
    doc = document_module.Document(root, path=path)
    doc.trailing = trailing
    return doc


def load(path: _pathlib.Path | str) -> document_module.Document:
    """
    Read a YAML file into a document.

    Raises:
        DocumentError: If the file cannot be read or parsed.
    """
    path = _pathlib.Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise errors.DocumentError(f"permission denied: {e}", path) from e
    except OSError as e:
        raise errors.DocumentError(f"cannot read file: {e}", path) from e
    return loads(content, path=path)


# =============================================================================
# Writing
# =============================================================================


def _comment_token(text: str, column: int) -> _yaml_tokens.CommentToken:
    return _yaml_tokens.CommentToken(f"{_comment(text)}\n", _yaml_error.CommentMark(column))


def _sequence_lead(value: _typing.Any) -> list[str]:
    if not isinstance(value, _yaml_comments.CommentedSeq):
        return []
    return [text for token in _flatten(value.ca.comment) for text in _comment_texts(token.value)]


def _commented_map(section: block_module.Section, indent: int) -> _yaml_comments.CommentedMap:
    cmap = _yaml_comments.CommentedMap()
    for key, block in section.children.items():
        # ruamel slot layout: key eol, key pre, value eol, value pre
        slot: list[_typing.Any] = [None, None, None, None]
        if isinstance(block, block_module.Section):
            cmap[key] = _commented_map(block, indent + _INDENT)
        else:
            value = _typing.cast(block_module.Entry, block).value
            cmap[key] = value
            lead = _sequence_lead(value)
            if lead:
                slot[3] = [_comment_token(text, indent + _INDENT) for text in lead]

        if block.before:
            slot[1] = [_comment_token(text, indent) for text in block.before]
        if block.inline:
            slot[2] = _comment_token(" # ".join(block.inline), 0)
        if any(part is not None for part in slot):
            cmap.ca.items[key] = slot
    return cmap


def _comment_lines(texts: list[str]) -> str:
    return "".join(f"{_comment(text)}\n" for text in texts)


def dumps(document: document_module.Document) -> str:
    """Render a document as YAML text, writing comments back in place."""
    trailing = _comment_lines(document.trailing)
    if not document.root.children:
        # ruamel would render the empty root as "{}"
        return _comment_lines(document.root.before) + trailing

    root = _commented_map(document.root, 0)
    if document.root.before:
        root.ca.comment = [None, [_comment_token(text, 0) for text in document.root.before]]

    stream = _io.StringIO()
    _round_trip_yaml().dump(root, stream)
    return stream.getvalue() + trailing


def save(
    document: document_module.Document,
    path: _pathlib.Path | str | None = None,
) -> _pathlib.Path:
    """
    Write a document to `path`, or to the file it was loaded from.

    Returns:
        The path written to.

    Raises:
        DocumentError: If no path is known or the file cannot be written.
    """
    target = _pathlib.Path(path) if path is not None else document.path
    if target is None:
        raise errors.DocumentError("document has no file path to save to")
    try:
        target.write_text(dumps(document), encoding="utf-8")
    except OSError as e:
        raise errors.DocumentError(f"cannot write file: {e}", target) from e
    return target
