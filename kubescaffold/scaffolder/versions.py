"""Project version selection.

The scaffolding version recorded in the project file picks one of two fixed
pipelines.  The choice is made once per run; there is no migration between
versions here.
"""

from __future__ import annotations

from enum import Enum

from kubescaffold.errors import UnsupportedVersionError
from kubescaffold.project import VERSION_1, VERSION_2, ProjectConfig


class ProjectVersion(str, Enum):
    """Supported project layouts."""

    V1 = VERSION_1
    V2 = VERSION_2


def resolve_version(config: ProjectConfig) -> ProjectVersion:
    """Return the pipeline for *config*, rejecting unknown version tags."""
    try:
        return ProjectVersion(config.version)
    except ValueError:
        raise UnsupportedVersionError(config.version) from None
