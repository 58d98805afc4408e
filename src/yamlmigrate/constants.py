"""
Shared constants for yamlmigrate.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Route parsing
DEFAULT_SEPARATOR = "."
"""Default separator between keys in a string route."""

DEFAULT_ESCAPE = "\\"
"""Default escape character for separators inside string-route keys."""

# Updater defaults
DEFAULT_AUTO_SAVE = True
"""Save the document automatically after updating (when it has a path)."""

DEFAULT_ENABLE_DOWNGRADING = True
"""Allow documents newer than the defaults (no replay happens)."""

DEFAULT_KEEP_ALL = False
"""Keep user content that has no counterpart in the defaults."""

# Basic versioning
BASIC_VERSION_MIN = 1
"""Lowest id of the basic (single integer) version pattern."""

BASIC_VERSION_MAX = 2**31 - 1
"""Highest id of the basic (single integer) version pattern."""

# Environment
ENV_PREFIX = "YAMLMIGRATE_"
"""Prefix for environment variables read by the command line."""
