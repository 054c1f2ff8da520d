"""Project initialisation.

Lays down the skeleton every ``create api`` run builds on: the ``PROJECT``
file, the license header, ``go.mod`` and a ``main.go`` carrying the
``imports``, ``scheme`` and ``builder`` markers that later runs update in
place.
"""

from __future__ import annotations

import datetime
from pathlib import Path

from rich.console import Console

from kubescaffold.errors import ProjectExistsError, ValidationError
from kubescaffold.project import VERSION_2, ConfigStore, ProjectConfig
from kubescaffold.scaffolder import layout
from kubescaffold.scaffolder.scaffold import FileResult, FileTask, Scaffold, ScaffoldOptions
from kubescaffold.scaffolder.templates import TemplateRenderer
from kubescaffold.scaffolder.universe import build_universe, load_boilerplate
from kubescaffold.utils import console as default_console
from kubescaffold.utils import print_path

LICENSES = ("apache2", "none")
DEFAULT_BOILERPLATE_FILE = "hack/boilerplate.go.txt"


class ProjectInitializer:
    """Creates a new version 2 project in *root*."""

    def __init__(
        self,
        root: str | Path,
        store: ConfigStore,
        domain: str,
        repo: str,
        *,
        multigroup: bool = False,
        license: str = "apache2",
        owner: str = "",
        year: int | None = None,
        boilerplate_file: str = DEFAULT_BOILERPLATE_FILE,
        renderer: TemplateRenderer | None = None,
        console: Console | None = None,
    ) -> None:
        self.root = Path(root)
        self.store = store
        self.domain = domain
        self.repo = repo
        self.multigroup = multigroup
        self.license = license
        self.owner = owner
        self.year = year or datetime.date.today().year
        self.boilerplate_file = boilerplate_file
        self.renderer = renderer or TemplateRenderer()
        self.console = console or default_console

    def validate(self) -> None:
        """Raise if the project cannot be initialised here.

        Raises:
            ProjectExistsError: If a project file is already present.
            ValidationError: If the domain, repo or license is unusable.
        """
        if self.store.exists():
            raise ProjectExistsError(getattr(self.store, "path", self.root))
        if not self.domain:
            raise ValidationError("domain cannot be empty")
        if not self.repo:
            raise ValidationError("repo cannot be empty")
        if self.license not in LICENSES:
            raise ValidationError(
                f"unknown license {self.license!r} (expected one of: {', '.join(LICENSES)})"
            )

    def init(self) -> list[FileResult]:
        """Persist the project file and write the skeleton files."""
        self.validate()

        config = ProjectConfig(
            version=VERSION_2,
            domain=self.domain,
            repo=self.repo,
            multigroup=self.multigroup,
        )
        self.store.save(config)
        print_path(Path(getattr(self.store, "path", "PROJECT")).name, "created", out=self.console)

        scaffold = Scaffold(self.root, renderer=self.renderer, console=self.console)
        options = ScaffoldOptions()

        results = scaffold.execute(
            build_universe(config),
            options,
            FileTask(
                self.boilerplate_file,
                "project/boilerplate.go.txt.j2",
                {"license": self.license, "owner": self.owner, "year": self.year},
            ),
        )

        # The header written above (or one the user already had) prefixes
        # the Go files generated next.
        boilerplate = load_boilerplate(self.root / self.boilerplate_file)
        universe = build_universe(config, boilerplate=boilerplate)
        results += scaffold.execute(
            universe,
            options,
            FileTask("go.mod", "project/go.mod.j2"),
            FileTask(layout.MAIN_FILE, "project/main.go.j2"),
        )
        return results
