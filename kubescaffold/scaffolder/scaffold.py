"""Scaffold orchestrator.

Executes an ordered list of :class:`FileTask` objects against a
:class:`~kubescaffold.scaffolder.universe.Universe`: each task is rendered
from its template, piped through the plugin chain and written below the
project root, honouring the overwrite policy.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import TemplateError
from rich.console import Console

from kubescaffold.errors import RenderError, WriteError
from kubescaffold.scaffolder.plugins import Plugin
from kubescaffold.scaffolder.templates import TemplateRenderer
from kubescaffold.scaffolder.universe import Universe
from kubescaffold.utils import console as default_console
from kubescaffold.utils import print_path, print_warning


# ---------------------------------------------------------------------------
# Tasks and results
# ---------------------------------------------------------------------------


class IfExists(str, Enum):
    """What to do when a task's target file is already on disk."""

    OVERWRITE_ON_FORCE = "overwrite_on_force"
    SKIP = "skip"


class FileAction(str, Enum):
    """Outcome recorded for each file touched by a run."""

    CREATED = "created"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class FileTask:
    """One file to generate: where it goes and which template renders it."""

    path: str
    template: str
    options: Mapping[str, Any] = field(default_factory=dict)
    if_exists: IfExists = IfExists.OVERWRITE_ON_FORCE


@dataclass(frozen=True)
class FileResult:
    path: str
    action: FileAction


@dataclass(frozen=True)
class ScaffoldOptions:
    """Options shared by every task of a run."""

    force: bool = False


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class Scaffold:
    """Renders and writes file generation tasks in order.

    Attributes:
        root: Project directory that task paths are relative to.
        plugins: Post-processing chain applied to every rendered file.
        renderer: Template registry used for rendering.
    """

    def __init__(
        self,
        root: str | Path,
        plugins: Sequence[Plugin] = (),
        renderer: TemplateRenderer | None = None,
        console: Console | None = None,
    ) -> None:
        self.root = Path(root)
        self.plugins = list(plugins)
        self.renderer = renderer or TemplateRenderer()
        self.console = console or default_console

    def execute(
        self,
        universe: Universe,
        options: ScaffoldOptions,
        *tasks: FileTask,
    ) -> list[FileResult]:
        """Generate every task in the given order.

        A file that already exists is skipped with a warning unless
        ``options.force`` is set and the task allows overwriting.

        Raises:
            RenderError: If a template or plugin fails.
            WriteError: If the file cannot be written.
        """
        results: list[FileResult] = []
        for task in tasks:
            target = self.root / task.path
            existed = target.exists()

            if existed and (task.if_exists is IfExists.SKIP or not options.force):
                print_warning(f"{task.path} already exists, skipping", out=self.console)
                results.append(FileResult(task.path, FileAction.SKIPPED))
                continue

            content = self._render(universe, options, task)
            _write_file(target, content)

            action = FileAction.OVERWRITTEN if existed else FileAction.CREATED
            print_path(task.path, action.value, out=self.console)
            results.append(FileResult(task.path, action))
        return results

    # -- Internal ----------------------------------------------------------

    def _render(self, universe: Universe, options: ScaffoldOptions, task: FileTask) -> str:
        context: dict[str, Any] = {
            "universe": universe,
            "config": universe.config,
            "resource": universe.resource,
            "boilerplate": universe.boilerplate,
            "options": options,
            **task.options,
        }
        try:
            content = self.renderer.render(task.template, context)
        except TemplateError as exc:
            raise RenderError(task, str(exc)) from exc

        for plugin in self.plugins:
            try:
                content = plugin(task.path, content)
            except Exception as exc:
                name = getattr(plugin, "__name__", type(plugin).__name__)
                raise RenderError(task, f"plugin {name} failed: {exc}") from exc
        return content


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write content."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteError(path, str(exc)) from exc
