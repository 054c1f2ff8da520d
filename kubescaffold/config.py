"""kubescaffold runtime settings.

Where the engine finds the project it operates on.  Settings use a Pydantic
v2 model so they validate at construction time and can be overridden from
environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Locations of the project tree and its well-known files.

    Instances are typically created once by the CLI entry point and then
    passed to the scaffolders.
    """

    project_dir: Path = Field(default=Path("."))
    project_file: str = Field(default="PROJECT", min_length=1)
    boilerplate_file: str = Field(default="hack/boilerplate.go.txt", min_length=1)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def project_path(self) -> Path:
        """Path to the ``PROJECT`` configuration file."""
        return self.project_dir / self.project_file

    @property
    def boilerplate_path(self) -> Path:
        """Path to the license header prepended to generated Go files."""
        return self.project_dir / self.boilerplate_file

    @classmethod
    def from_env(cls, **overrides: Any) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            KUBESCAFFOLD_PROJECT_DIR, KUBESCAFFOLD_PROJECT_FILE,
            KUBESCAFFOLD_BOILERPLATE_FILE.

        Keyword *overrides* that are not ``None`` win over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("KUBESCAFFOLD_PROJECT_DIR"):
            kwargs["project_dir"] = Path(os.environ["KUBESCAFFOLD_PROJECT_DIR"])
        if os.environ.get("KUBESCAFFOLD_PROJECT_FILE"):
            kwargs["project_file"] = os.environ["KUBESCAFFOLD_PROJECT_FILE"]
        if os.environ.get("KUBESCAFFOLD_BOILERPLATE_FILE"):
            kwargs["boilerplate_file"] = os.environ["KUBESCAFFOLD_BOILERPLATE_FILE"]
        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**kwargs)
