"""Target paths of generated files.

Every function here is a pure function of the resource identity and the
layout flag, so the same resource always maps to the same files; the
overwrite policy depends on that.  Paths are relative to the project root
and always use forward slashes.
"""

from __future__ import annotations

from posixpath import join

from kubescaffold.resource import Resource

MAIN_FILE = "main.go"
CRD_KUSTOMIZATION = "config/crd/kustomization.yaml"
CRD_KUSTOMIZE_CONFIG = "config/crd/kustomizeconfig.yaml"


# ---------------------------------------------------------------------------
# Version 1
# ---------------------------------------------------------------------------

def v1_api_dir(r: Resource) -> str:
    return join("pkg", "apis", r.group, r.version)


def v1_types(r: Resource) -> str:
    return join(v1_api_dir(r), f"{r.kind_lower}_types.go")


def v1_types_test(r: Resource) -> str:
    return join(v1_api_dir(r), f"{r.kind_lower}_types_test.go")


def v1_register(r: Resource) -> str:
    return join(v1_api_dir(r), "register.go")


def v1_doc(r: Resource) -> str:
    return join(v1_api_dir(r), "doc.go")


def v1_version_suite_test(r: Resource) -> str:
    return join(v1_api_dir(r), f"{r.version}_suite_test.go")


def v1_group(r: Resource) -> str:
    return join("pkg", "apis", r.group, "group.go")


def v1_add_to_scheme(r: Resource) -> str:
    return join("pkg", "apis", f"addtoscheme_{r.group_package_name}_{r.version}.go")


def v1_controller_dir(r: Resource) -> str:
    return join("pkg", "controller", r.kind_lower)


def v1_controller(r: Resource) -> str:
    return join(v1_controller_dir(r), f"{r.kind_lower}_controller.go")


def v1_controller_test(r: Resource) -> str:
    return join(v1_controller_dir(r), f"{r.kind_lower}_controller_test.go")


def v1_controller_suite_test(r: Resource) -> str:
    return join(v1_controller_dir(r), f"{r.kind_lower}_controller_suite_test.go")


def v1_add_controller(r: Resource) -> str:
    return join("pkg", "controller", f"add_{r.kind_lower}.go")


# ---------------------------------------------------------------------------
# Version 2
# ---------------------------------------------------------------------------

def v2_api_dir(r: Resource, multigroup: bool) -> str:
    if multigroup:
        return join("apis", r.group, r.version)
    return join("api", r.version)


def v2_types(r: Resource, multigroup: bool) -> str:
    return join(v2_api_dir(r, multigroup), f"{r.kind_lower}_types.go")


def v2_group_version_info(r: Resource, multigroup: bool) -> str:
    return join(v2_api_dir(r, multigroup), "groupversion_info.go")


def v2_controllers_dir(r: Resource, multigroup: bool) -> str:
    if multigroup:
        return join("controllers", r.group)
    return "controllers"


def v2_controller(r: Resource, multigroup: bool) -> str:
    return join(v2_controllers_dir(r, multigroup), f"{r.kind_lower}_controller.go")


def v2_suite_test(r: Resource, multigroup: bool) -> str:
    return join(v2_controllers_dir(r, multigroup), "suite_test.go")


def v2_editor_role(r: Resource) -> str:
    return join("config", "rbac", f"{r.kind_lower}_editor_role.yaml")


def v2_viewer_role(r: Resource) -> str:
    return join("config", "rbac", f"{r.kind_lower}_viewer_role.yaml")


def v2_webhook_patch(r: Resource) -> str:
    return join("config", "crd", "patches", f"webhook_in_{r.resource_plural}.yaml")


def v2_cainjection_patch(r: Resource) -> str:
    return join("config", "crd", "patches", f"cainjection_in_{r.resource_plural}.yaml")


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------

def crd_sample(r: Resource) -> str:
    return join("config", "samples", f"{r.group}_{r.version}_{r.kind_lower}.yaml")


def crd_base_file(r: Resource, domain: str) -> str:
    """File name controller-gen writes the CRD to, relative to ``config/crd``."""
    group = f"{r.group}.{domain}" if domain else r.group
    return join("bases", f"{group}_{r.resource_plural}.yaml")
