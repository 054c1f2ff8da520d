"""Project configuration and its persistent store.

The project configuration is the ``PROJECT`` file at the root of a generated
controller project.  It records the scaffolding version, the domain and Go
module path, whether the multi-group layout is enabled, and (for version 2
projects) every API resource that has been scaffolded so far.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from kubescaffold.errors import ConfigLoadError, ConfigPersistError, GroupConflictError
from kubescaffold.resource import GroupVersionKind, Resource

VERSION_1 = "1"
VERSION_2 = "2"


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """In-memory view of the ``PROJECT`` file."""

    version: str = Field(default=VERSION_2, description="Scaffolding version tag")
    domain: str = Field(default="", description="Domain appended to every API group")
    repo: str = Field(default="", description="Go module path of the project")
    multigroup: bool = Field(default=False, description="Whether the multi-group layout is enabled")
    resources: list[GroupVersionKind] = Field(default_factory=list)

    def is_v1(self) -> bool:
        return self.version == VERSION_1

    def is_v2(self) -> bool:
        return self.version == VERSION_2

    def has_resource(self, resource: Resource) -> bool:
        """Return ``True`` if *resource*'s group/version/kind is registered."""
        return resource.gvk in self.resources

    def resource_groups(self) -> set[str]:
        """Return the distinct groups of every registered resource."""
        return {gvk.group for gvk in self.resources}

    def is_group_allowed(self, group: str) -> bool:
        """Return ``True`` if *group* may be added under the current layout.

        A single-group project holds at most one group, so a new group is
        allowed only when the registry is empty or already uses that group.
        """
        if self.multigroup:
            return True
        return all(existing.lower() == group.lower() for existing in self.resource_groups())

    def add_resource(self, resource: Resource) -> bool:
        """Register *resource* unless it is already present.

        Returns:
            ``True`` if the registry changed, ``False`` if the resource was
            already registered.

        Raises:
            GroupConflictError: If the project is single-group and *resource*
                belongs to a different group than the one already registered.
        """
        if self.has_resource(resource):
            return False
        if not self.is_group_allowed(resource.group):
            raise GroupConflictError(resource.group, sorted(self.resource_groups()))
        self.resources.append(resource.gvk)
        return True

    def set_multigroup(self, enabled: bool) -> None:
        """Toggle the multi-group layout.

        Disabling it is refused while more than one group is registered.
        """
        groups = sorted(self.resource_groups())
        if not enabled and len(groups) > 1:
            raise GroupConflictError(groups[-1], groups[:-1])
        self.multigroup = enabled

    def to_document(self) -> dict[str, Any]:
        """Return the mapping written to the ``PROJECT`` file."""
        document: dict[str, Any] = {
            "version": self.version,
            "domain": self.domain,
            "repo": self.repo,
        }
        if self.multigroup:
            document["multigroup"] = True
        if self.is_v2() and self.resources:
            document["resources"] = [
                {"group": gvk.group, "version": gvk.version, "kind": gvk.kind}
                for gvk in self.resources
            ]
        return document


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class ConfigStore(Protocol):
    """Loads and saves a :class:`ProjectConfig`."""

    def exists(self) -> bool: ...

    def load(self) -> ProjectConfig: ...

    def save(self, config: ProjectConfig) -> None: ...


class YamlConfigStore:
    """Persists the project configuration as the YAML ``PROJECT`` file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> ProjectConfig:
        """Read and validate the project file.

        Raises:
            ConfigLoadError: If the file is missing, is not valid YAML, or
                does not describe a project.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigLoadError(
                f"project file not found: {self.path}. Run 'init' first."
            ) from None
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigLoadError(f"unable to read {self.path}: {exc}") from exc

        try:
            data = yaml.safe_load(raw) or {}
        except yaml.YAMLError as exc:
            raise ConfigLoadError(f"unable to parse {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigLoadError(f"{self.path} does not contain a mapping")

        # Hand-edited files sometimes carry an unquoted version number.
        if "version" in data and data["version"] is not None:
            data["version"] = str(data["version"])

        try:
            return ProjectConfig.model_validate(data)
        except PydanticValidationError as exc:
            raise ConfigLoadError(f"invalid project file {self.path}: {exc}") from exc

    def save(self, config: ProjectConfig) -> None:
        """Write *config* to the project file.

        Raises:
            ConfigPersistError: If the file cannot be written.
        """
        content = yaml.safe_dump(config.to_document(), sort_keys=False, default_flow_style=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ConfigPersistError(f"error updating project file {self.path}: {exc}") from exc
