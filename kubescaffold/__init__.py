"""kubescaffold -- scaffolding for Kubernetes controller projects.

Generates API types, controllers and their wiring for projects laid out the
kubebuilder way, and keeps the project's ``PROJECT`` file in step with what
has been generated.

Quick usage::

    from kubescaffold import ApiScaffold, Resource, YamlConfigStore

    scaffolder = ApiScaffold(
        Resource(group="batch", version="v1", kind="CronJob"),
        YamlConfigStore("PROJECT"),
    )
    scaffolder.validate()
    scaffolder.scaffold()
"""

from kubescaffold.api import ApiScaffold
from kubescaffold.config import Settings
from kubescaffold.errors import (
    ConfigLoadError,
    ConfigPersistError,
    GroupConflictError,
    MarkerNotFoundError,
    ProjectExistsError,
    RenderError,
    ResourceExistsError,
    ScaffoldError,
    UnsupportedVersionError,
    ValidationError,
    WriteError,
)
from kubescaffold.initializer import ProjectInitializer
from kubescaffold.project import ConfigStore, ProjectConfig, YamlConfigStore
from kubescaffold.resource import GroupVersionKind, Resource, validate_resource

__version__ = "0.1.0"

__all__ = [
    "ApiScaffold",
    "ConfigLoadError",
    "ConfigPersistError",
    "ConfigStore",
    "GroupConflictError",
    "GroupVersionKind",
    "MarkerNotFoundError",
    "ProjectConfig",
    "ProjectExistsError",
    "ProjectInitializer",
    "RenderError",
    "Resource",
    "ResourceExistsError",
    "ScaffoldError",
    "Settings",
    "UnsupportedVersionError",
    "ValidationError",
    "WriteError",
    "YamlConfigStore",
    "validate_resource",
]
