"""Tests for YAML loading and dumping with comments."""

import pathlib as _pathlib
import textwrap as _textwrap

import pytest as _pytest
import ruamel.yaml.error as _yaml_error
import yaml as _yaml

import yamlmigrate.document as document
import yamlmigrate.errors as errors


def _yaml_text(text: str) -> str:
    return _textwrap.dedent(text).lstrip("\n")


class TestLoads:
    """Parsing YAML text into documents."""

    def test_values_match_safe_load(self) -> None:
        """Loaded values compare equal to what yaml.safe_load returns."""
        text = _yaml_text(
            """
            a: 1
            b: 'x'
            c: true
            d: null
            e: [1, 2]
            """
        )
        assert document.loads(text).to_dict() == _yaml.safe_load(text)

    def test_mappings_become_sections(self) -> None:
        """Nested mappings are sections, sequences stay entries."""
        doc = document.loads("a:\n  b: 1\nc:\n  - x: 1\n")
        assert isinstance(doc.get_block("a"), document.Section)
        assert isinstance(doc.get_block("c"), document.Entry)
        assert doc.get("c") == [{"x": 1}]

    def test_empty_text_gives_empty_document(self) -> None:
        """Empty input is an empty mapping."""
        doc = document.loads("")
        assert doc.to_dict() == {}

    def test_non_mapping_root_rejected(self) -> None:
        """Documents must be mappings."""
        with _pytest.raises(errors.DocumentError):
            document.loads("- a\n- b\n")

    def test_malformed_yaml_rejected(self) -> None:
        """Parse errors are wrapped and chained."""
        with _pytest.raises(errors.DocumentError) as exc_info:
            document.loads("a: [1, 2\n")
        assert isinstance(exc_info.value.__cause__, _yaml_error.YAMLError)

    def test_merge_keys_are_flattened(self) -> None:
        """'<<' merge keys are resolved like safe_load does."""
        text = _yaml_text(
            """
            base: &base
              x: 1
            child:
              <<: *base
              y: 2
            """
        )
        assert document.loads(text).get("child") == {"x": 1, "y": 2}

    def test_path_is_kept(self) -> None:
        """The source path is stored on the document."""
        path = _pathlib.Path("config.yml")
        assert document.loads("a: 1\n", path=path).path == path


class TestComments:
    """Comment attachment and re-emission."""

    TEXT = _yaml_text(
        """
        # header
        name: app  # the name
        server:  # server block
          # host comment
          host: localhost
          port: 8080

        # list
        items:
          - 1
          - 2
        """
    )

    def test_before_comments(self) -> None:
        """Full-line comments attach to the key below them."""
        doc = document.loads(self.TEXT)
        assert doc.get_block("name").before == ["header"]
        assert doc.get_block("server.host").before == ["host comment"]
        assert doc.get_block("items").before == ["list"]
        assert doc.get_block("server.port").before == []

    def test_inline_comments(self) -> None:
        """Trailing comments attach to entries and section headers."""
        doc = document.loads(self.TEXT)
        assert doc.get_block("name").inline == ["the name"]
        assert doc.get_block("server").inline == ["server block"]
        assert doc.get_block("server.host").inline == []

    def test_dump_writes_comments_in_place(self) -> None:
        """Dumping re-emits comments next to their keys."""
        expected = _yaml_text(
            """
            # header
            name: app # the name
            server: # server block
              # host comment
              host: localhost
              port: 8080
            # list
            items:
              - 1
              - 2
            """
        )
        assert document.dumps(document.loads(self.TEXT)) == expected

    def test_hash_inside_string_is_not_a_comment(self) -> None:
        """A quoted '#' is part of the value."""
        doc = document.loads("color: '#fff'\n")
        assert doc.get("color") == "#fff"
        assert doc.get_block("color").inline == []

    def test_sequence_comments_survive_round_trip(self) -> None:
        """Comments between and beside list items are written back."""
        text = "list:\n  # first item\n  - a  # inline a\n  - b\nx: 1\n"
        dumped = document.dumps(document.loads(text))
        lines = dumped.splitlines()
        assert "# first item" in dumped
        assert "# inline a" in dumped
        first = next(i for i, line in enumerate(lines) if "# first item" in line)
        item = next(i for i, line in enumerate(lines) if "- a" in line)
        assert first < item
        assert "# inline a" in lines[item]
        assert document.loads(dumped).to_dict() == {"list": ["a", "b"], "x": 1}

    def test_sequence_header_inline_comment(self) -> None:
        """A comment on the key line of a list belongs to the key."""
        doc = document.loads("ports:  # open ports\n  - 80\n")
        assert doc.get_block("ports").inline == ["open ports"]
        dumped = document.dumps(doc)
        assert dumped.splitlines()[0].startswith("ports:")
        assert document.loads(dumped).get_block("ports").inline == ["open ports"]

    def test_trailing_comments_kept(self) -> None:
        """Comments after the last key stay at the end of the file."""
        doc = document.loads("a: 1\n# the end\n")
        assert doc.trailing == ["the end"]
        assert doc.get_block("a").inline == []
        assert document.dumps(doc) == "a: 1\n# the end\n"

    def test_merge_key_values_not_shared(self) -> None:
        """Lists pulled in through '<<' are separate values in each mapping."""
        text = _yaml_text(
            """
            base: &base
              hosts: [a]
            child:
              <<: *base
            """
        )
        doc = document.loads(text)
        doc.get_block("child.hosts").value.append("b")
        assert doc.get("base.hosts") == ["a"]


class TestDumps:
    """Rendering documents."""

    def test_round_trip_values(self) -> None:
        """Dumped text loads back to the same data."""
        data = {
            "name": "app",
            "enabled": True,
            "ratio": 0.5,
            "nothing": None,
            "ports": [80, 443],
            "servers": [{"name": "a", "port": 1}],
            "nested": {"deep": {"key": "value"}},
            1: "integer key",
        }
        text = document.dumps(document.Document.from_dict(data))
        assert _yaml.safe_load(text) == data

    def test_empty_section(self) -> None:
        """Empty sections are written as flow mappings."""
        assert document.dumps(document.Document.from_dict({"a": {}})) == "a: {}\n"

    def test_empty_list(self) -> None:
        """Empty sequences are written inline."""
        assert document.dumps(document.Document.from_dict({"a": []})) == "a: []\n"

    def test_block_sequences_are_indented(self) -> None:
        """Non-empty sequences go below their key."""
        doc = document.Document.from_dict({"servers": [{"name": "a", "port": 1}]})
        assert document.dumps(doc) == "servers:\n  - name: a\n    port: 1\n"

    def test_key_order_preserved(self) -> None:
        """Keys are written in document order, not sorted."""
        doc = document.Document.from_dict({"z": 1, "a": 2})
        assert document.dumps(doc) == "z: 1\na: 2\n"

    def test_empty_document(self) -> None:
        """An empty document dumps to an empty string."""
        assert document.dumps(document.Document()) == ""


class TestFiles:
    """Loading and saving files."""

    def test_save_and_load(self, tmp_path: _pathlib.Path) -> None:
        """A saved document loads back with its path."""
        path = tmp_path / "config.yml"
        document.save(document.Document.from_dict({"a": {"b": 1}}), path)
        loaded = document.load(path)
        assert loaded.to_dict() == {"a": {"b": 1}}
        assert loaded.path == path

    def test_save_defaults_to_document_path(self, tmp_path: _pathlib.Path) -> None:
        """Without an explicit path the document's own path is used."""
        path = tmp_path / "config.yml"
        path.write_text("a: 1\n", encoding="utf-8")
        doc = document.load(path)
        doc.set("a", 2)
        assert document.save(doc) == path
        assert path.read_text(encoding="utf-8") == "a: 2\n"

    def test_save_without_path_rejected(self) -> None:
        """A document with no path cannot be saved implicitly."""
        with _pytest.raises(errors.DocumentError):
            document.save(document.Document())

    def test_load_missing_file(self, tmp_path: _pathlib.Path) -> None:
        """Unreadable files raise DocumentError with the path."""
        path = tmp_path / "missing.yml"
        with _pytest.raises(errors.DocumentError) as exc_info:
            document.load(path)
        assert exc_info.value.path == path
