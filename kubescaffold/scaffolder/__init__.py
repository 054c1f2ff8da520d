"""kubescaffold scaffolder -- renders and wires generated files.

Takes a :class:`~kubescaffold.scaffolder.universe.Universe` and an ordered
list of :class:`~kubescaffold.scaffolder.scaffold.FileTask` objects, renders
each through the Jinja2 templates, runs the post-processing plugins and
writes the result; the updater then inserts wiring above marker comments in
files generated earlier.

Quick usage::

    from kubescaffold.scaffolder import FileTask, Scaffold, ScaffoldOptions, build_universe

    universe = build_universe(config, resource)
    Scaffold("/tmp/project").execute(
        universe,
        ScaffoldOptions(force=False),
        FileTask("api/v1/foo_types.go", "v2/types.go.j2"),
    )
"""

from kubescaffold.scaffolder.plugins import ImportPathRewriter, Plugin, normalize_whitespace
from kubescaffold.scaffolder.scaffold import (
    FileAction,
    FileResult,
    FileTask,
    IfExists,
    Scaffold,
    ScaffoldOptions,
)
from kubescaffold.scaffolder.templates import TemplateRenderer
from kubescaffold.scaffolder.universe import Universe, build_universe, load_boilerplate
from kubescaffold.scaffolder.updater import Insertion, insert_code, update_file
from kubescaffold.scaffolder.versions import ProjectVersion, resolve_version

__all__ = [
    "FileAction",
    "FileResult",
    "FileTask",
    "IfExists",
    "ImportPathRewriter",
    "Insertion",
    "Plugin",
    "ProjectVersion",
    "Scaffold",
    "ScaffoldOptions",
    "TemplateRenderer",
    "Universe",
    "build_universe",
    "insert_code",
    "load_boilerplate",
    "normalize_whitespace",
    "resolve_version",
    "update_file",
]
