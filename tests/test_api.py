"""Tests for API scaffolding (kubescaffold.api).

Tests cover:
- validate(): malformed identities, already-registered resources
- Version 2 runs: registration, generated files, wiring, re-runs with force
- The single-group rule and multi-group layout
- Controller-only runs for built-in types
- Persisting the project file before any file is written
- Version 1 runs and unknown project versions
"""

from __future__ import annotations

from pathlib import Path

import pytest

from kubescaffold.errors import (
    ConfigLoadError,
    ConfigPersistError,
    GroupConflictError,
    MarkerNotFoundError,
    ResourceExistsError,
    UnsupportedVersionError,
    ValidationError,
    WriteError,
)
from kubescaffold.project import ProjectConfig, YamlConfigStore
from kubescaffold.resource import GroupVersionKind
from kubescaffold.scaffolder.plugins import normalize_whitespace
from kubescaffold.scaffolder.scaffold import FileAction


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FailingStore:
    """Config store whose save() fails like a full disk."""

    def __init__(self, inner: YamlConfigStore) -> None:
        self.inner = inner

    def exists(self) -> bool:
        return self.inner.exists()

    def load(self) -> ProjectConfig:
        return self.inner.load()

    def save(self, config: ProjectConfig) -> None:
        raise OSError("No space left on device")


class FlakyStore(FailingStore):
    """Config store whose first save() fails and later ones succeed."""

    def __init__(self, inner: YamlConfigStore) -> None:
        super().__init__(inner)
        self.saves = 0

    def save(self, config: ProjectConfig) -> None:
        self.saves += 1
        if self.saves == 1:
            super().save(config)
        self.inner.save(config)


def _actions(results) -> dict[str, FileAction]:
    return {result.path: result.action for result in results}


# ---------------------------------------------------------------------------
# validate()
# ---------------------------------------------------------------------------


class TestValidate:
    @pytest.mark.unit
    def test_valid_resource(self, v2_project, make_api):
        make_api().validate()

    @pytest.mark.unit
    def test_malformed_kind(self, v2_project, make_api):
        with pytest.raises(ValidationError):
            make_api(kind="foo").validate()

    @pytest.mark.unit
    def test_missing_project_file(self, project_dir, make_api):
        with pytest.raises(ConfigLoadError):
            make_api().validate()

    @pytest.mark.unit
    def test_registered_resource_rejected(self, v2_project, make_api):
        make_api().scaffold()
        with pytest.raises(ResourceExistsError) as exc_info:
            make_api().validate()
        assert exc_info.value.kind == "Foo"
        assert "--force" in str(exc_info.value)

    @pytest.mark.unit
    def test_registered_resource_accepted_with_force(self, v2_project, make_api):
        make_api().scaffold()
        make_api(force=True).validate()


# ---------------------------------------------------------------------------
# Version 2
# ---------------------------------------------------------------------------


class TestScaffoldV2:
    @pytest.mark.unit
    def test_generates_resource_and_controller(self, v2_project, make_api):
        results = make_api().scaffold()
        actions = _actions(results)

        for path in (
            "api/v1/foo_types.go",
            "api/v1/groupversion_info.go",
            "config/samples/apps_v1_foo.yaml",
            "config/rbac/foo_editor_role.yaml",
            "config/rbac/foo_viewer_role.yaml",
            "config/crd/patches/webhook_in_foos.yaml",
            "config/crd/patches/cainjection_in_foos.yaml",
            "config/crd/kustomizeconfig.yaml",
            "controllers/suite_test.go",
            "controllers/foo_controller.go",
        ):
            assert actions[path] is FileAction.CREATED, path
            assert (v2_project / path).is_file(), path

        assert actions["config/crd/kustomization.yaml"] is FileAction.UPDATED
        assert actions["controllers/suite_test.go"] is FileAction.CREATED
        assert actions["main.go"] is FileAction.UPDATED

    @pytest.mark.unit
    def test_main_go_is_last(self, v2_project, make_api):
        results = make_api().scaffold()
        assert results[-1].path == "main.go"

    @pytest.mark.unit
    def test_registers_resource(self, v2_project, make_api, store):
        make_api().scaffold()
        assert store.load().resources == [GroupVersionKind(group="apps", version="v1", kind="Foo")]

    @pytest.mark.unit
    def test_wires_main_go(self, v2_project, make_api):
        make_api().scaffold()
        main_go = (v2_project / "main.go").read_text()
        assert '\tappsv1 "example.com/guestbook/api/v1"\n' in main_go
        assert '\t"example.com/guestbook/controllers"\n' in main_go
        assert "\t_ = appsv1.AddToScheme(scheme)\n" in main_go
        assert "\tif err = (&controllers.FooReconciler{\n" in main_go
        assert main_go.index("FooReconciler") < main_go.index("// +kubebuilder:scaffold:builder")

    @pytest.mark.unit
    def test_wires_kustomization(self, v2_project, make_api):
        make_api().scaffold()
        kustomization = (v2_project / "config/crd/kustomization.yaml").read_text()
        assert "- bases/apps.my.domain_foos.yaml\n# +kubebuilder:scaffold:crdkustomizeresource" in kustomization
        assert "#- patches/webhook_in_foos.yaml\n" in kustomization
        assert "#- patches/cainjection_in_foos.yaml\n" in kustomization

    @pytest.mark.unit
    def test_wires_suite_test(self, v2_project, make_api):
        make_api().scaffold()
        suite = (v2_project / "controllers/suite_test.go").read_text()
        assert '\tappsv1 "example.com/guestbook/api/v1"\n' in suite
        assert "\terr = appsv1.AddToScheme(scheme.Scheme)\n" in suite

    @pytest.mark.unit
    def test_boilerplate_prefixes_go_files(self, v2_project, make_api):
        make_api().scaffold()
        types = (v2_project / "api/v1/foo_types.go").read_text()
        assert types.startswith("/*\nCopyright 2026 The Guestbook Authors.\n")

    @pytest.mark.unit
    def test_forced_rerun_registers_once(self, v2_project, make_api, store):
        make_api().scaffold()
        main_before = (v2_project / "main.go").read_text()

        for _ in range(2):
            results = make_api(force=True).scaffold()

        actions = _actions(results)
        assert actions["api/v1/foo_types.go"] is FileAction.OVERWRITTEN
        assert actions["config/crd/kustomization.yaml"] is FileAction.UNCHANGED
        assert actions["controllers/suite_test.go"] is FileAction.UNCHANGED
        assert actions["main.go"] is FileAction.UNCHANGED
        assert len(store.load().resources) == 1
        assert (v2_project / "main.go").read_text() == main_before

    @pytest.mark.unit
    def test_second_kind_in_same_group(self, v2_project, make_api, store):
        make_api().scaffold()
        make_api(kind="Bar").scaffold()

        assert len(store.load().resources) == 2
        main_go = (v2_project / "main.go").read_text()
        assert main_go.count("_ = appsv1.AddToScheme(scheme)") == 1
        assert main_go.count('appsv1 "example.com/guestbook/api/v1"') == 1
        assert main_go.count('"example.com/guestbook/controllers"') == 1
        assert "FooReconciler" in main_go
        assert "BarReconciler" in main_go

    @pytest.mark.unit
    def test_hand_edits_survive_without_force(self, v2_project, make_api):
        make_api().scaffold()
        info = v2_project / "api/v1/groupversion_info.go"
        info.write_text("// mine\n")

        make_api(kind="Bar").scaffold()
        assert info.read_text() == "// mine\n"

    @pytest.mark.unit
    def test_uncommented_patch_not_reinserted(self, v2_project, make_api):
        make_api().scaffold()
        path = v2_project / "config/crd/kustomization.yaml"
        path.write_text(path.read_text().replace("#- patches/webhook_in_foos.yaml", "- patches/webhook_in_foos.yaml"))

        make_api(force=True).scaffold()
        assert "#- patches/webhook_in_foos.yaml" not in path.read_text()

    @pytest.mark.unit
    def test_plugins_apply_to_generated_files(self, v2_project, make_api):
        def stamp(path: str, content: str) -> str:
            return content + "// stamped\n" if path.endswith(".go") else content

        make_api(plugins=[normalize_whitespace, stamp]).scaffold()
        assert (v2_project / "controllers/foo_controller.go").read_text().endswith("// stamped\n")
        assert (v2_project / "api/v1/foo_types.go").read_text().endswith("// stamped\n")


class TestSingleGroupRule:
    @pytest.mark.unit
    def test_second_group_rejected(self, v2_project, make_api, store):
        make_api().scaffold()

        with pytest.raises(GroupConflictError) as exc_info:
            make_api(group="batch", kind="Job").scaffold()

        assert exc_info.value.existing == ["apps"]
        assert len(store.load().resources) == 1
        assert not (v2_project / "api/v1/job_types.go").exists()

    @pytest.mark.unit
    def test_second_group_allowed_with_multigroup(self, v2_project, make_api, store):
        config = store.load()
        config.set_multigroup(True)
        store.save(config)

        make_api().scaffold()
        make_api(group="batch", kind="Job").scaffold()

        assert (v2_project / "apis/apps/v1/foo_types.go").is_file()
        assert (v2_project / "apis/batch/v1/job_types.go").is_file()
        assert (v2_project / "controllers/batch/job_controller.go").is_file()
        assert (v2_project / "controllers/batch/suite_test.go").is_file()
        assert store.load().resource_groups() == {"apps", "batch"}

        main_go = (v2_project / "main.go").read_text()
        assert 'batchcontroller "example.com/guestbook/controllers/batch"' in main_go
        assert "(&batchcontroller.JobReconciler{" in main_go


class TestControllerOnly:
    @pytest.mark.unit
    def test_clears_example_body(self, v2_project, make_api):
        api = make_api(kind="Deployment", do_resource=False)
        api.validate()
        api.scaffold()
        assert api.resource.create_example_reconcile_body is False

        controller = (v2_project / "controllers/deployment_controller.go").read_text()
        assert "unable to fetch" not in controller
        assert 'appsv1 "k8s.io/api/apps/v1"' in controller
        assert "rbac:groups=apps,resources=deployments," in controller

    @pytest.mark.unit
    def test_clears_example_body_even_when_requested(self, v2_project, make_api):
        api = make_api(kind="Deployment", do_resource=False, create_example_reconcile_body=True)
        api.scaffold()
        assert api.resource.create_example_reconcile_body is False

    @pytest.mark.unit
    def test_does_not_register(self, v2_project, make_api, store):
        make_api(kind="Deployment", do_resource=False).scaffold()
        assert store.load().resources == []

    @pytest.mark.unit
    def test_wiring(self, v2_project, make_api):
        results = make_api(kind="Deployment", do_resource=False).scaffold()
        actions = _actions(results)
        assert "api/v1/deployment_types.go" not in actions
        assert actions["controllers/suite_test.go"] is FileAction.UNCHANGED

        main_go = (v2_project / "main.go").read_text()
        assert "appsv1.AddToScheme" not in main_go
        assert "(&controllers.DeploymentReconciler{" in main_go

    @pytest.mark.unit
    def test_example_body_kept_for_resource_runs(self, v2_project, make_api):
        api = make_api()
        api.scaffold()
        assert api.resource.create_example_reconcile_body is True
        controller = (v2_project / "controllers/foo_controller.go").read_text()
        assert 'log.Error(err, "unable to fetch Foo")' in controller


class TestResourceOnly:
    @pytest.mark.unit
    def test_no_controller_files(self, v2_project, make_api):
        make_api(do_controller=False).scaffold()
        assert (v2_project / "api/v1/foo_types.go").is_file()
        assert not (v2_project / "controllers").exists()

        main_go = (v2_project / "main.go").read_text()
        assert "_ = appsv1.AddToScheme(scheme)" in main_go
        assert "Reconciler" not in main_go


class TestPersistOrdering:
    @pytest.mark.unit
    def test_persist_failure_writes_nothing(self, v2_project, make_api, store):
        with pytest.raises(ConfigPersistError, match="No space left"):
            make_api(store=FailingStore(store)).scaffold()

        assert not (v2_project / "api").exists()
        assert not (v2_project / "config").exists()
        assert store.load().resources == []

    @pytest.mark.unit
    def test_registered_before_files(self, v2_project, make_api, store):
        api = make_api()
        api.scaffold()
        # A later failure leaves the registration in place for a forced re-run.
        (v2_project / "main.go").write_text("package main\n")
        with pytest.raises(MarkerNotFoundError):
            make_api(kind="Bar").scaffold()
        assert len(store.load().resources) == 2

    @pytest.mark.unit
    def test_no_persist_when_already_registered(self, v2_project, make_api, store):
        make_api().scaffold()
        make_api(force=True, store=FailingStore(store)).scaffold()

    @pytest.mark.unit
    def test_retry_after_persist_failure_registers(self, v2_project, make_api, store):
        flaky = FlakyStore(store)
        api = make_api(force=True, store=flaky)
        with pytest.raises(ConfigPersistError):
            api.scaffold()
        assert not api.config.has_resource(api.resource)

        api.scaffold()

        assert flaky.saves == 2
        assert store.load().resources == [GroupVersionKind(group="apps", version="v1", kind="Foo")]
        assert (v2_project / "api/v1/foo_types.go").is_file()

    @pytest.mark.unit
    def test_retry_without_force_after_persist_failure(self, v2_project, make_api, store):
        api = make_api(store=FlakyStore(store))
        with pytest.raises(ConfigPersistError):
            api.scaffold()
        api.validate()
        api.scaffold()
        assert len(store.load().resources) == 1


class TestWiringFailures:
    @pytest.mark.unit
    def test_missing_main_go(self, v2_project, make_api):
        (v2_project / "main.go").unlink()
        with pytest.raises(WriteError):
            make_api().scaffold()

    @pytest.mark.unit
    def test_main_go_without_markers(self, v2_project, make_api):
        (v2_project / "main.go").write_text("package main\n")
        with pytest.raises(MarkerNotFoundError) as exc_info:
            make_api().scaffold()
        assert exc_info.value.marker == "// +kubebuilder:scaffold:imports"

    @pytest.mark.unit
    def test_main_go_not_utf8(self, v2_project, make_api):
        main_go = v2_project / "main.go"
        main_go.write_bytes(main_go.read_bytes().replace(b"package main", b"// caf\xe9\npackage main", 1))
        with pytest.raises(WriteError) as exc_info:
            make_api().scaffold()
        assert exc_info.value.path == main_go


# ---------------------------------------------------------------------------
# Version 1 and unknown versions
# ---------------------------------------------------------------------------


class TestScaffoldV1:
    @pytest.mark.unit
    def test_generates_files(self, v1_project, make_api):
        results = make_api().scaffold()
        paths = [result.path for result in results]
        assert paths[0] == "pkg/apis/apps/v1/register.go"
        assert "pkg/apis/addtoscheme_apps_v1.go" in paths
        assert "pkg/controller/foo/foo_controller.go" in paths
        assert "main.go" not in paths
        assert (v1_project / "pkg/apis/apps/v1/foo_types.go").is_file()

    @pytest.mark.unit
    def test_project_file_untouched(self, v1_project, make_api, store):
        before = (v1_project / "PROJECT").read_text()
        make_api().scaffold()
        assert (v1_project / "PROJECT").read_text() == before

    @pytest.mark.unit
    def test_resource_uses_project_api_path(self, v1_project, make_api):
        make_api().scaffold()
        controller = (v1_project / "pkg/controller/foo/foo_controller.go").read_text()
        assert '"example.com/guestbook/pkg/apis/apps/v1"' in controller

    @pytest.mark.unit
    def test_controller_only_clears_example_body(self, v1_project, make_api):
        api = make_api(kind="Deployment", do_resource=False)
        api.scaffold()
        assert api.resource.create_example_reconcile_body is False
        assert not (v1_project / "pkg/apis").exists()
        controller = (v1_project / "pkg/controller/deployment/deployment_controller.go").read_text()
        assert '"k8s.io/api/apps/v1"' in controller


class TestUnsupportedVersion:
    @pytest.mark.unit
    def test_unknown_version(self, project_dir: Path, store, make_api):
        store.save(ProjectConfig(version="3", domain="my.domain", repo="example.com/x"))
        with pytest.raises(UnsupportedVersionError):
            make_api().scaffold()
        assert list(project_dir.iterdir()) == [project_dir / "PROJECT"]
