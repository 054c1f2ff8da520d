"""Version 2 pipeline: ``api``/``apis`` and ``controllers`` layout.

Besides the file tasks, this module builds the statements that wire a new
resource or controller into the files generated earlier: the CRD
kustomization, the controller suite test and ``main.go``.
"""

from __future__ import annotations

from posixpath import join

from kubescaffold.resource import Resource
from kubescaffold.scaffolder import layout
from kubescaffold.scaffolder.scaffold import FileTask, IfExists
from kubescaffold.scaffolder.universe import Universe
from kubescaffold.scaffolder.updater import Insertion

IMPORTS_MARKER = "// +kubebuilder:scaffold:imports"
SCHEME_MARKER = "// +kubebuilder:scaffold:scheme"
BUILDER_MARKER = "// +kubebuilder:scaffold:builder"
CRD_RESOURCE_MARKER = "# +kubebuilder:scaffold:crdkustomizeresource"
CRD_WEBHOOK_PATCH_MARKER = "# +kubebuilder:scaffold:crdkustomizewebhookpatch"
CRD_CAINJECTION_PATCH_MARKER = "# +kubebuilder:scaffold:crdkustomizecainjectionpatch"

_RECONCILER_SETUP = """\
if err = (&{package}.{kind}Reconciler{{
	Client: mgr.GetClient(),
	Log:    ctrl.Log.WithName("controllers").WithName("{kind}"),
	Scheme: mgr.GetScheme(),
}}).SetupWithManager(mgr); err != nil {{
	setupLog.Error(err, "unable to create controller", "controller", "{kind}")
	os.Exit(1)
}}"""

_SUITE_ADD_TO_SCHEME = """\
err = {alias}.AddToScheme(scheme.Scheme)
Expect(err).NotTo(HaveOccurred())"""


def _resource(universe: Universe) -> Resource:
    if universe.resource is None:
        raise ValueError("version 2 tasks need a resource in the universe")
    return universe.resource


def api_import_path(universe: Universe, r: Resource) -> str:
    """Go import path of the resource's API package."""
    return universe.api_import_path(layout.v2_api_dir(r, universe.multigroup))


def controllers_package(universe: Universe, r: Resource) -> str:
    """Go package name of the controllers package for *r*."""
    return r.group_package_name if universe.multigroup else "controllers"


# ---------------------------------------------------------------------------
# File tasks
# ---------------------------------------------------------------------------

def resource_tasks(universe: Universe) -> list[FileTask]:
    """Files for a new API type, in generation order."""
    r = _resource(universe)
    multigroup = universe.multigroup
    return [
        FileTask(layout.v2_types(r, multigroup), "v2/types.go.j2"),
        FileTask(layout.v2_group_version_info(r, multigroup), "v2/groupversion_info.go.j2"),
        FileTask(layout.crd_sample(r), "v2/crd_sample.yaml.j2"),
        FileTask(layout.v2_editor_role(r), "v2/crd_editor_role.yaml.j2"),
        FileTask(layout.v2_viewer_role(r), "v2/crd_viewer_role.yaml.j2"),
        FileTask(layout.v2_webhook_patch(r), "v2/enable_webhook_patch.yaml.j2"),
        FileTask(layout.v2_cainjection_patch(r), "v2/enable_cainjection_patch.yaml.j2"),
    ]


def kustomize_tasks(universe: Universe) -> list[FileTask]:
    """Scaffold-once kustomize files; later runs only update them in place."""
    return [
        FileTask(layout.CRD_KUSTOMIZATION, "v2/crd_kustomization.yaml.j2", if_exists=IfExists.SKIP),
        FileTask(layout.CRD_KUSTOMIZE_CONFIG, "v2/crd_kustomizeconfig.yaml.j2", if_exists=IfExists.SKIP),
    ]


def controller_tasks(universe: Universe) -> list[FileTask]:
    """Suite bootstrap (scaffold-once) followed by the controller itself."""
    r = _resource(universe)
    multigroup = universe.multigroup
    options = {
        "package": controllers_package(universe, r),
        "api_import_path": api_import_path(universe, r),
        "crd_depth": 2 if multigroup else 1,
    }
    return [
        FileTask(layout.v2_suite_test(r, multigroup), "v2/suite_test.go.j2", options, IfExists.SKIP),
        FileTask(layout.v2_controller(r, multigroup), "v2/controller.go.j2", options),
    ]


# ---------------------------------------------------------------------------
# In-place wiring
# ---------------------------------------------------------------------------

def kustomization_insertions(universe: Universe) -> list[Insertion]:
    """CRD base, webhook patch and CA-injection patch entries for the resource."""
    r = _resource(universe)
    webhook = f"- patches/webhook_in_{r.resource_plural}.yaml"
    cainjection = f"- patches/cainjection_in_{r.resource_plural}.yaml"
    return [
        Insertion(CRD_RESOURCE_MARKER, f"- {layout.crd_base_file(r, universe.domain)}"),
        Insertion(CRD_WEBHOOK_PATCH_MARKER, f"#{webhook}", equivalents=(webhook,)),
        Insertion(CRD_CAINJECTION_PATCH_MARKER, f"#{cainjection}", equivalents=(cainjection,)),
    ]


def suite_test_insertions(universe: Universe) -> list[Insertion]:
    """Register the resource's scheme in the controller suite test.

    Nothing is wired when the resource is not part of the project, as happens
    when attaching a controller to a built-in type.
    """
    r = _resource(universe)
    if not universe.config.has_resource(r):
        return []
    return [
        Insertion(IMPORTS_MARKER, f'{r.import_alias} "{api_import_path(universe, r)}"'),
        Insertion(SCHEME_MARKER, _SUITE_ADD_TO_SCHEME.format(alias=r.import_alias)),
    ]


def main_insertions(
    universe: Universe,
    wire_resource: bool,
    wire_controller: bool,
) -> list[Insertion]:
    """Scheme registration and reconciler setup for ``main.go``."""
    r = _resource(universe)
    insertions: list[Insertion] = []

    if wire_resource:
        insertions.append(Insertion(IMPORTS_MARKER, f'{r.import_alias} "{api_import_path(universe, r)}"'))
        insertions.append(Insertion(SCHEME_MARKER, f"_ = {r.import_alias}.AddToScheme(scheme)"))

    if wire_controller:
        controllers_path = join(universe.repo, layout.v2_controllers_dir(r, universe.multigroup))
        if universe.multigroup:
            package = f"{r.group_package_name}controller"
            insertions.append(Insertion(IMPORTS_MARKER, f'{package} "{controllers_path}"'))
        else:
            package = "controllers"
            insertions.append(Insertion(IMPORTS_MARKER, f'"{controllers_path}"'))
        insertions.append(
            Insertion(BUILDER_MARKER, _RECONCILER_SETUP.format(package=package, kind=r.kind))
        )

    return insertions
