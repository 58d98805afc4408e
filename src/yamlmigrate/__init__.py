"""
yamlmigrate - versioned updates for YAML configuration files

Brings a user's configuration document up to date with the defaults shipped
by an application: replays the relocations and value transforms recorded for
every version the document missed, then merges in the defaults while keeping
the user's values and comments.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml
_raw_version = _metadata.version("yamlmigrate")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from yamlmigrate.document import Document  # noqa: E402
from yamlmigrate.errors import YamlMigrateError  # noqa: E402
from yamlmigrate.route import Route  # noqa: E402
from yamlmigrate.settings import UpdaterSettings  # noqa: E402
from yamlmigrate.updater import UpdateOutcome, update  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "Document",
    "Route",
    "UpdateOutcome",
    "UpdaterSettings",
    "YamlMigrateError",
    "update",
]
