"""API scaffolding use case.

Adds an API type and/or its controller to an existing project:

1. Validate the resource against the project configuration.
2. Register the resource and persist the project file (version 2).
3. Render the resource, kustomize and controller files.
4. Wire the new type and controller into the kustomization, suite test and
   ``main.go``.

Usage::

    from kubescaffold.api import ApiScaffold
    from kubescaffold.project import YamlConfigStore
    from kubescaffold.resource import Resource

    scaffolder = ApiScaffold(
        resource=Resource(group="apps", version="v1", kind="Foo"),
        store=YamlConfigStore("PROJECT"),
        root=".",
    )
    scaffolder.validate()
    scaffolder.scaffold()
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from kubescaffold.errors import ConfigPersistError, GroupConflictError, ResourceExistsError
from kubescaffold.project import ConfigStore, ProjectConfig
from kubescaffold.resource import Resource, validate_resource
from kubescaffold.scaffolder import layout, v1, v2
from kubescaffold.scaffolder.plugins import Plugin
from kubescaffold.scaffolder.scaffold import FileAction, FileResult, Scaffold, ScaffoldOptions
from kubescaffold.scaffolder.templates import TemplateRenderer
from kubescaffold.scaffolder.universe import Universe, build_universe, load_boilerplate
from kubescaffold.scaffolder.updater import Insertion, update_file
from kubescaffold.scaffolder.versions import ProjectVersion, resolve_version
from kubescaffold.utils import console as default_console
from kubescaffold.utils import print_path

DEFAULT_BOILERPLATE_FILE = "hack/boilerplate.go.txt"


class ApiScaffold:
    """Scaffolds an API resource and its controller into a project.

    Attributes:
        resource: The resource being added.  Its
            ``create_example_reconcile_body`` flag is cleared when only a
            controller is scaffolded.
        config: Project configuration; loaded from *store* on first use.
        plugins: Post-processing chain for resource and controller files.
        do_resource: Whether to scaffold the API type.
        do_controller: Whether to scaffold the controller.
        force: Overwrite existing files and accept an already-registered
            resource.
    """

    def __init__(
        self,
        resource: Resource,
        store: ConfigStore,
        root: str | Path = ".",
        *,
        config: ProjectConfig | None = None,
        plugins: Sequence[Plugin] = (),
        do_resource: bool = True,
        do_controller: bool = True,
        force: bool = False,
        boilerplate: str | None = None,
        boilerplate_file: str = DEFAULT_BOILERPLATE_FILE,
        renderer: TemplateRenderer | None = None,
        console: Console | None = None,
    ) -> None:
        self.resource = resource
        self.store = store
        self.root = Path(root)
        self.config = config
        self.plugins = list(plugins)
        self.do_resource = do_resource
        self.do_controller = do_controller
        self.force = force
        self.boilerplate = boilerplate
        self.boilerplate_file = boilerplate_file
        self.renderer = renderer or TemplateRenderer()
        self.console = console or default_console

    # -- Public API --------------------------------------------------------

    def validate(self) -> None:
        """Check the resource can be scaffolded into this project.

        Raises:
            ConfigLoadError: If the project file cannot be loaded.
            ValidationError: If the resource identity is malformed.
            ResourceExistsError: If the resource is registered and Force is
                not set.
        """
        config = self._ensure_config()
        validate_resource(self.resource)
        if config.has_resource(self.resource) and not self.force:
            raise ResourceExistsError(self.resource.group, self.resource.version, self.resource.kind)

    def scaffold(self) -> list[FileResult]:
        """Generate and wire every requested file.

        Returns:
            One result per generated or updated file, in the order touched.

        Raises:
            UnsupportedVersionError: If the project version is unknown.
            ScaffoldError: Any other failure; files written before it stay
                on disk.
        """
        config = self._ensure_config()
        version = resolve_version(config)
        if version is ProjectVersion.V1:
            return self._scaffold_v1()
        return self._scaffold_v2()

    # -- Version 1 ---------------------------------------------------------

    def _scaffold_v1(self) -> list[FileResult]:
        r = self.resource
        options = ScaffoldOptions(force=self.force)
        results: list[FileResult] = []

        if self.do_resource:
            # Version 1 project files carry no registry; record the type for
            # this run only so it is not mistaken for a built-in one.
            self._ensure_config().add_resource(r)
            universe = self._build_universe(r)
            results += self._scaffold().execute(universe, options, *v1.resource_tasks(universe))
        else:
            self._disable_example_reconcile_body()

        if self.do_controller:
            universe = self._build_universe(r)
            results += self._scaffold().execute(universe, options, *v1.controller_tasks(universe))

        return results

    # -- Version 2 ---------------------------------------------------------

    def _scaffold_v2(self) -> list[FileResult]:
        r = self.resource
        config = self._ensure_config()
        options = ScaffoldOptions(force=self.force)
        results: list[FileResult] = []

        if self.do_resource:
            self._validate_resource_group()

            # Persist before any file is written; a failed run then leaves a
            # registered resource that a forced re-run completes.  The
            # registration only reaches self.config once the save succeeded.
            if not config.has_resource(r):
                pending = config.model_copy(deep=True)
                pending.add_resource(r)
                self._persist(pending)
                self.config = config = pending

            universe = self._build_universe(r)
            results += self._scaffold().execute(universe, options, *v2.resource_tasks(universe))

            universe = self._build_universe(r)
            results += Scaffold(self.root, renderer=self.renderer, console=self.console).execute(
                universe, options, *v2.kustomize_tasks(universe)
            )
            results.append(
                self._update(layout.CRD_KUSTOMIZATION, v2.kustomization_insertions(universe))
            )
        else:
            self._disable_example_reconcile_body()

        if self.do_controller:
            universe = self._build_universe(r)
            results += self._scaffold().execute(universe, options, *v2.controller_tasks(universe))
            suite_test = layout.v2_suite_test(r, universe.multigroup)
            results.append(self._update(suite_test, v2.suite_test_insertions(universe)))

        universe = self._build_universe(r)
        results.append(
            self._update(
                layout.MAIN_FILE,
                v2.main_insertions(
                    universe,
                    wire_resource=self.do_resource,
                    wire_controller=self.do_controller,
                ),
            )
        )
        return results

    def _validate_resource_group(self) -> None:
        config = self._ensure_config()
        r = self.resource
        if config.has_resource(r) and not self.force:
            raise ResourceExistsError(r.group, r.version, r.kind)
        if not config.is_group_allowed(r.group):
            raise GroupConflictError(r.group, sorted(config.resource_groups()))

    # -- Helpers -----------------------------------------------------------

    def _disable_example_reconcile_body(self) -> None:
        # An example reconcile body for a built-in type (say a Deployment)
        # would in turn scaffold the types it owns (ReplicaSet, Pod, ...),
        # recursively.  Only scaffold it for types generated here.
        self.resource.create_example_reconcile_body = False

    def _persist(self, config: ProjectConfig) -> None:
        try:
            self.store.save(config)
        except ConfigPersistError:
            raise
        except OSError as exc:
            raise ConfigPersistError(
                f"error updating project file with resource information: {exc}"
            ) from exc

    def _ensure_config(self) -> ProjectConfig:
        if self.config is None:
            self.config = self.store.load()
        return self.config

    def _build_universe(self, resource: Resource) -> Universe:
        if self.boilerplate is None:
            self.boilerplate = load_boilerplate(self.root / self.boilerplate_file)
        return build_universe(self._ensure_config(), resource, self.boilerplate)

    def _scaffold(self) -> Scaffold:
        return Scaffold(self.root, plugins=self.plugins, renderer=self.renderer, console=self.console)

    def _update(self, path: str, insertions: list[Insertion]) -> FileResult:
        changed = update_file(self.root / path, insertions) if insertions else False
        action = FileAction.UPDATED if changed else FileAction.UNCHANGED
        print_path(path, action.value, out=self.console)
        return FileResult(path, action)
