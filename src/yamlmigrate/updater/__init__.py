"""
Document updater: versioned operations followed by a merge with defaults.
"""

from yamlmigrate.updater.merger import Merger, merge
from yamlmigrate.updater.operations import (
    OperationsResult,
    UpdateOutcome,
    VersionStep,
    plan,
    run,
)
from yamlmigrate.updater.relocator import apply_mappers, apply_relocations, relocate
from yamlmigrate.updater.updater import update

__all__ = [
    "Merger",
    "OperationsResult",
    "UpdateOutcome",
    "VersionStep",
    "apply_mappers",
    "apply_relocations",
    "merge",
    "plan",
    "relocate",
    "run",
    "update",
]
