"""Exception hierarchy for kubescaffold.

Every failure raised by the engine derives from :class:`ScaffoldError` so the
command line (and any embedding tool) can report it with a single handler.
Skipping an already-existing file is *not* an error and never raises.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kubescaffold.scaffolder.scaffold import FileTask


class ScaffoldError(Exception):
    """Base class for every error raised while scaffolding."""


class ValidationError(ScaffoldError):
    """Raised when a resource identity is malformed."""


class ResourceExistsError(ScaffoldError):
    """Raised when a resource is already registered and Force is not set."""

    def __init__(self, group: str, version: str, kind: str) -> None:
        self.group = group
        self.version = version
        self.kind = kind
        super().__init__(
            f"API resource already exists: group '{group}', version '{version}' "
            f"and kind '{kind}'. Use --force to scaffold it again."
        )


class ProjectExistsError(ScaffoldError):
    """Raised when initialising a directory that already holds a project file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Project file already exists: {path}")


class GroupConflictError(ScaffoldError):
    """Raised when a second API group is added to a single-group project."""

    def __init__(self, group: str, existing: list[str]) -> None:
        self.group = group
        self.existing = existing
        super().__init__(
            f"group '{group}' is not same as existing group "
            f"({', '.join(existing)}). Multiple groups are not enabled in this "
            "project. To enable, use the 'edit --multigroup' command."
        )


class UnsupportedVersionError(ScaffoldError):
    """Raised when the project file carries an unknown version tag."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"unknown project version {version!r}")


class RenderError(ScaffoldError):
    """Raised when a template or a post-processing plugin fails for a task."""

    def __init__(self, task: FileTask, message: str) -> None:
        self.task = task
        super().__init__(f"failed to render {task.path} ({task.template}): {message}")


class WriteError(ScaffoldError):
    """Raised when a generated or updated file cannot be read or written."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"failed to write {path}: {message}")


class MarkerNotFoundError(ScaffoldError):
    """Raised when an in-place update target lacks an expected marker comment."""

    def __init__(self, path: Path | str, marker: str) -> None:
        self.path = Path(path)
        self.marker = marker
        super().__init__(
            f"marker {marker!r} not found in {path}; the file may have been "
            "edited beyond recognition"
        )


class ConfigLoadError(ScaffoldError):
    """Raised when the project file is missing or malformed."""


class ConfigPersistError(ScaffoldError):
    """Raised when the project file cannot be saved after registration."""
