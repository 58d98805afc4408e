"""
Command-line interface for yamlmigrate, built with Click.

    yamlmigrate update USER DEFAULTS [--manifest FILE] [--separator C]
                                     [--dry-run] [--verbose]

Defaults for --separator, --verbose and --manifest come from YAMLMIGRATE_*
environment variables (see EnvironmentSettings).
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click
import pydantic as _pydantic

import yamlmigrate
import yamlmigrate.document as document
import yamlmigrate.errors as errors
import yamlmigrate.settings as settings
import yamlmigrate.updater as updater

CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    _logging.basicConfig(
        level=_logging.DEBUG if verbose else _logging.WARNING,
        format=_LOG_FORMAT,
    )


def _validate_separator(
    ctx: _click.Context,  # noqa: ARG001 - click callback signature
    param: _click.Parameter,  # noqa: ARG001 - click callback signature
    value: str | None,
) -> str | None:
    if value is not None and len(value) != 1:
        raise _click.BadParameter("must be a single character")
    return value


def _build_settings(manifest: _pathlib.Path | None, dry_run: bool) -> settings.UpdaterSettings:
    builder = (
        settings.load_manifest(manifest)
        if manifest is not None
        else settings.UpdaterSettings.builder()
    )
    if dry_run:
        builder.set_auto_save(False)
    return builder.build()


def _describe(outcome: updater.UpdateOutcome) -> str:
    return outcome.name.lower().replace("_", " ")


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(yamlmigrate.__version__, "-V", "--version", prog_name="yamlmigrate")
@_click.pass_context
def cli(ctx: _click.Context) -> None:
    """Migrate YAML configuration files to the layout of their defaults."""
    ctx.ensure_object(dict)
    try:
        ctx.obj["environment"] = settings.EnvironmentSettings()
    except _pydantic.ValidationError as e:
        _click.echo(f"Error: invalid YAMLMIGRATE_* environment: {e}", err=True)
        raise SystemExit(1) from None


@cli.command("update")
@_click.argument("user", type=_click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path))
@_click.argument(
    "defaults", type=_click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path)
)
@_click.option(
    "-m",
    "--manifest",
    type=_click.Path(dir_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Migration manifest (versioning, relocations, ignored routes)",
)
@_click.option(
    "-s",
    "--separator",
    type=str,
    default=None,
    callback=_validate_separator,
    help="Separator for string routes (default: '.')",
)
@_click.option("--dry-run", is_flag=True, help="Print the updated document instead of saving it")
@_click.option("--verbose", is_flag=True, help="Enable debug logging")
@_click.pass_context
def update_command(
    ctx: _click.Context,
    user: _pathlib.Path,
    defaults: _pathlib.Path,
    manifest: _pathlib.Path | None,
    separator: str | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Update the USER document against the DEFAULTS document."""
    environment: settings.EnvironmentSettings = ctx.obj["environment"]
    _configure_logging(verbose or environment.verbose)

    if manifest is None:
        manifest = environment.manifest
    if separator is None:
        separator = environment.separator

    try:
        updater_settings = _build_settings(manifest, dry_run)
        user_document = document.load(user)
        defaults_document = document.load(defaults)
        outcome = updater.update(user_document, defaults_document, updater_settings, separator)
    except errors.YamlMigrateError as e:
        _click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    if dry_run:
        _click.echo(f"{user}: {_describe(outcome)} (dry run)", err=True)
        _click.echo(document.dumps(user_document), nl=False)
    else:
        _click.echo(f"{user}: {_describe(outcome)}")


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="yamlmigrate")


if __name__ == "__main__":
    main()
