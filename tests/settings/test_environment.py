"""Tests for environment-provided command defaults."""

import pathlib as _pathlib

import pydantic as _pydantic
import pytest as _pytest

import yamlmigrate.settings as settings


class TestEnvironmentSettings:
    """YAMLMIGRATE_* variables."""

    def test_defaults(self, isolated_env: None) -> None:
        """Without variables the built-in defaults apply."""
        environment = settings.EnvironmentSettings()
        assert environment.separator == "."
        assert environment.verbose is False
        assert environment.manifest is None

    def test_reads_prefixed_variables(
        self,
        isolated_env: None,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        """Each field is read from its prefixed variable."""
        monkeypatch.setenv("YAMLMIGRATE_SEPARATOR", "/")
        monkeypatch.setenv("YAMLMIGRATE_VERBOSE", "true")
        monkeypatch.setenv("YAMLMIGRATE_MANIFEST", "/etc/app/manifest.yml")
        environment = settings.EnvironmentSettings()
        assert environment.separator == "/"
        assert environment.verbose is True
        assert environment.manifest == _pathlib.Path("/etc/app/manifest.yml")

    def test_invalid_separator(
        self,
        isolated_env: None,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        """The separator must be a single character."""
        monkeypatch.setenv("YAMLMIGRATE_SEPARATOR", "::")
        with _pytest.raises(_pydantic.ValidationError):
            settings.EnvironmentSettings()

    def test_unrelated_variables_ignored(
        self,
        isolated_env: None,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        """Unknown prefixed variables do not break loading."""
        monkeypatch.setenv("YAMLMIGRATE_SOMETHING_ELSE", "x")
        assert settings.EnvironmentSettings().separator == "."
