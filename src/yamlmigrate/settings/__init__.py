"""
Settings for yamlmigrate.

UpdaterSettings (immutable, built with a builder) configures updates;
manifests describe the same settings in YAML; EnvironmentSettings provides
command-line defaults from YAMLMIGRATE_* variables.
"""

from yamlmigrate.settings.environment import EnvironmentSettings
from yamlmigrate.settings.manifest import Manifest, load_manifest, parse_manifest
from yamlmigrate.settings.updater import (
    DEFAULT_MERGE_RULES,
    MergeRule,
    UpdaterSettings,
    UpdaterSettingsBuilder,
    ValueMapper,
)

__all__ = [
    "DEFAULT_MERGE_RULES",
    "EnvironmentSettings",
    "Manifest",
    "MergeRule",
    "UpdaterSettings",
    "UpdaterSettingsBuilder",
    "ValueMapper",
    "load_manifest",
    "parse_manifest",
]
