"""Version 1 pipeline: ``pkg/apis`` and ``pkg/controller`` layout.

Version 1 projects keep no resource registry and have no kustomize or
entry-point wiring step; adding a type only writes new files.
"""

from __future__ import annotations

from kubescaffold.resource import Resource
from kubescaffold.scaffolder import layout
from kubescaffold.scaffolder.scaffold import FileTask
from kubescaffold.scaffolder.universe import Universe


def _resource(universe: Universe) -> Resource:
    if universe.resource is None:
        raise ValueError("version 1 tasks need a resource in the universe")
    return universe.resource


def _api_import_path(universe: Universe, r: Resource) -> str:
    return universe.api_import_path(layout.v1_api_dir(r))


def resource_tasks(universe: Universe) -> list[FileTask]:
    """Files for a new API type, in generation order."""
    r = _resource(universe)
    api_import = _api_import_path(universe, r)
    return [
        FileTask(layout.v1_register(r), "v1/register.go.j2"),
        FileTask(layout.v1_types(r), "v1/types.go.j2"),
        FileTask(layout.v1_version_suite_test(r), "v1/version_suite_test.go.j2"),
        FileTask(layout.v1_types_test(r), "v1/types_test.go.j2"),
        FileTask(layout.v1_doc(r), "v1/doc.go.j2"),
        FileTask(layout.v1_group(r), "v1/group.go.j2"),
        FileTask(layout.v1_add_to_scheme(r), "v1/addtoscheme.go.j2", {"api_import_path": api_import}),
        FileTask(layout.crd_sample(r), "v1/crd_sample.yaml.j2"),
    ]


def controller_tasks(universe: Universe) -> list[FileTask]:
    """Files for a controller of the resource, in generation order."""
    r = _resource(universe)
    options = {"api_import_path": _api_import_path(universe, r)}
    return [
        FileTask(layout.v1_controller(r), "v1/controller.go.j2", options),
        FileTask(layout.v1_add_controller(r), "v1/add_controller.go.j2"),
        FileTask(layout.v1_controller_test(r), "v1/controller_test.go.j2", options),
        FileTask(layout.v1_controller_suite_test(r), "v1/controller_suite_test.go.j2"),
    ]
