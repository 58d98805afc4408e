"""
Shared pytest fixtures for yamlmigrate tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import textwrap as _textwrap
import typing as _typing

import pytest as _pytest

import yamlmigrate.document as document
import yamlmigrate.dvs as dvs
import yamlmigrate.settings as settings

# Environment keys that should be cleared for isolated tests
ENV_PREFIX = "YAMLMIGRATE_"


@_pytest.fixture
def isolated_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """
    Remove YAMLMIGRATE_* variables from the process environment.

    Usage:
        def test_something(isolated_env):
            ...
    """
    for key in list(_os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)


@_pytest.fixture
def write_yaml(tmp_path: _pathlib.Path) -> _typing.Callable[[str, str], _pathlib.Path]:
    """Write dedented YAML text to a file under tmp_path and return its path."""

    def _write(name: str, text: str) -> _pathlib.Path:
        path = tmp_path / name
        path.write_text(_textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@_pytest.fixture
def yaml_doc() -> _typing.Callable[[str], document.Document]:
    """Parse dedented YAML text into a document."""

    def _parse(text: str) -> document.Document:
        return document.loads(_textwrap.dedent(text).lstrip("\n"))

    return _parse


@_pytest.fixture
def versioned_settings() -> settings.UpdaterSettingsBuilder:
    """Builder with basic versioning at route "v" and auto-save disabled."""
    return (
        settings.UpdaterSettings.builder()
        .set_versioning(dvs.basic_versioning("v"))
        .set_auto_save(False)
    )
