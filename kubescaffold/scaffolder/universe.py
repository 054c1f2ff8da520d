"""Resolved generation context shared by every task of a scaffold run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from kubescaffold.errors import ConfigLoadError, WriteError
from kubescaffold.project import ProjectConfig
from kubescaffold.resource import CORE_GROUPS, Resource


@dataclass(frozen=True)
class Universe:
    """Read-only bundle of project configuration, resource and boilerplate.

    The configuration and resource are snapshots taken when the universe is
    built, so a later registration (or a sibling task) never changes what a
    template sees mid-run.  Build a fresh universe for every phase.
    """

    config: ProjectConfig
    resource: Resource | None
    boilerplate: str = ""

    @property
    def repo(self) -> str:
        return self.config.repo

    @property
    def domain(self) -> str:
        return self.config.domain

    @property
    def multigroup(self) -> bool:
        return self.config.multigroup

    @property
    def is_builtin(self) -> bool:
        """Whether the resource is a Kubernetes type rather than a project type."""
        if self.resource is None:
            return False
        return self.resource.group in CORE_GROUPS and not self.config.has_resource(self.resource)

    @property
    def qualified_group(self) -> str:
        """The fully qualified API group, e.g. ``apps.my.domain``.

        Built-in groups use their Kubernetes domain; the legacy core group is
        the empty string.
        """
        if self.resource is None:
            return ""
        group = self.resource.group
        if self.is_builtin:
            if group == "core":
                return ""
            domain = CORE_GROUPS[group]
        else:
            domain = self.config.domain
        return f"{group}.{domain}" if domain else group

    def api_import_path(self, api_dir: str) -> str:
        """Go import path of the resource's API package.

        *api_dir* is the package directory inside the project; it is ignored
        for built-in types.
        """
        if self.resource is None:
            return ""
        if self.is_builtin:
            return f"k8s.io/api/{self.resource.group.split('.')[0]}/{self.resource.version}"
        return f"{self.config.repo}/{api_dir}" if self.config.repo else api_dir


def build_universe(
    config: ProjectConfig | None,
    resource: Resource | None = None,
    boilerplate: str = "",
) -> Universe:
    """Snapshot *config* and *resource* into a new :class:`Universe`.

    Raises:
        ConfigLoadError: If no project configuration has been resolved.
    """
    if config is None:
        raise ConfigLoadError("project configuration has not been loaded")
    return Universe(
        config=config.model_copy(deep=True),
        resource=resource.model_copy(deep=True) if resource is not None else None,
        boilerplate=boilerplate,
    )


def load_boilerplate(path: str | Path) -> str:
    """Return the boilerplate header at *path*, or ``""`` if there is none."""
    file_path = Path(path)
    if not file_path.is_file():
        return ""
    try:
        return file_path.read_text(encoding="utf-8").rstrip("\n")
    except (OSError, UnicodeDecodeError) as exc:
        raise WriteError(file_path, f"unable to read boilerplate: {exc}") from exc
