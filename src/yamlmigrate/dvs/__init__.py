"""
Document versioning system: patterns, version ids and versioning strategies.
"""

from yamlmigrate.dvs.pattern import IntegerPart, LiteralPart, Part, Pattern, version_of
from yamlmigrate.dvs.version import Version, compare
from yamlmigrate.dvs.versioning import (
    AutomaticVersioning,
    ManualVersioning,
    Versioning,
    basic_pattern,
    basic_versioning,
)

__all__ = [
    "AutomaticVersioning",
    "IntegerPart",
    "LiteralPart",
    "ManualVersioning",
    "Part",
    "Pattern",
    "Version",
    "Versioning",
    "basic_pattern",
    "basic_versioning",
    "compare",
    "version_of",
]
