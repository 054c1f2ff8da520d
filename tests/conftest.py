"""Shared pytest fixtures for the kubescaffold test suite.

Provides reusable fixtures for:
- Temporary project directories and their PROJECT store
- A recording Rich console
- Initialised version 1 and version 2 projects
- An ApiScaffold factory bound to the temporary project
"""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from kubescaffold.api import ApiScaffold
from kubescaffold.initializer import ProjectInitializer
from kubescaffold.project import ProjectConfig, YamlConfigStore
from kubescaffold.resource import Resource


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Temporary directory for a generated project (auto-cleanup)."""
    path = tmp_path / "guestbook"
    path.mkdir()
    return path


@pytest.fixture
def store(project_dir: Path) -> YamlConfigStore:
    """PROJECT file store inside ``project_dir``."""
    return YamlConfigStore(project_dir / "PROJECT")


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture
def console() -> Console:
    """A Rich console that records output into a string buffer.

    Read what was printed with ``console.file.getvalue()``.
    """
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@pytest.fixture
def v2_project(project_dir: Path, store: YamlConfigStore, console: Console) -> Path:
    """An initialised single-group version 2 project."""
    ProjectInitializer(
        project_dir,
        store,
        domain="my.domain",
        repo="example.com/guestbook",
        owner="The Guestbook Authors",
        year=2026,
        console=console,
    ).init()
    return project_dir


@pytest.fixture
def v1_project(project_dir: Path, store: YamlConfigStore) -> Path:
    """A version 1 project: only the PROJECT file, no registry."""
    store.save(ProjectConfig(version="1", domain="my.domain", repo="example.com/guestbook"))
    return project_dir


@pytest.fixture
def make_api(
    project_dir: Path, store: YamlConfigStore, console: Console
) -> Callable[..., ApiScaffold]:
    """Factory for ``ApiScaffold`` instances bound to the temporary project.

    Usage::

        def test_something(v2_project, make_api):
            make_api(kind="Foo").scaffold()
    """

    def _make(
        group: str = "apps",
        version: str = "v1",
        kind: str = "Foo",
        **kwargs: Any,
    ) -> ApiScaffold:
        resource_fields = {
            key: kwargs.pop(key)
            for key in ("namespaced", "create_example_reconcile_body", "plural")
            if key in kwargs
        }
        resource = Resource(group=group, version=version, kind=kind, **resource_fields)
        kwargs.setdefault("console", console)
        kwargs.setdefault("store", store)
        return ApiScaffold(resource, root=project_dir, **kwargs)

    return _make
