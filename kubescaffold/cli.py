"""Command line interface.

Examples::

    kubescaffold init --domain my.domain --repo example.com/guestbook
    kubescaffold create api --group apps --version v1 --kind Foo
    kubescaffold create api --group apps --version v1 --kind Deployment --no-resource
    kubescaffold edit --multigroup
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from kubescaffold.api import ApiScaffold
from kubescaffold.config import Settings
from kubescaffold.errors import ScaffoldError
from kubescaffold.initializer import LICENSES, ProjectInitializer
from kubescaffold.project import YamlConfigStore
from kubescaffold.resource import Resource
from kubescaffold.utils import print_error, print_success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubescaffold",
        description="Scaffold Kubernetes controller projects, API types and controllers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  kubescaffold init --domain my.domain --repo example.com/guestbook\n"
            "  kubescaffold create api --group batch --version v1 --kind CronJob\n"
            "  kubescaffold edit --multigroup\n"
        ),
    )
    parser.add_argument(
        "--project-dir",
        default=None,
        help="Project directory (default: $KUBESCAFFOLD_PROJECT_DIR or the current directory)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Initialise a new project")
    init.add_argument("--domain", required=True, help="Domain for API groups")
    init.add_argument("--repo", required=True, help="Go module path of the project")
    init.add_argument(
        "--multigroup",
        action="store_true",
        help="Lay out APIs and controllers per group",
    )
    init.add_argument(
        "--license",
        default="apache2",
        choices=LICENSES,
        help="License header for generated Go files (default: apache2)",
    )
    init.add_argument("--owner", default="", help="Copyright owner for the license header")

    create = commands.add_parser("create", help="Scaffold a Kubernetes API")
    create_commands = create.add_subparsers(dest="target", required=True)
    api = create_commands.add_parser("api", help="Scaffold an API type and its controller")
    api.add_argument("--group", required=True, help="Resource group")
    api.add_argument("--version", required=True, help="Resource version")
    api.add_argument("--kind", required=True, help="Resource kind")
    api.add_argument(
        "--resource",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Generate the resource type",
    )
    api.add_argument(
        "--controller",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Generate the controller",
    )
    api.add_argument(
        "--namespaced",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Whether the resource is namespace-scoped",
    )
    api.add_argument(
        "--example",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Generate an example reconcile body",
    )
    api.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing files and re-register an existing resource",
    )

    edit = commands.add_parser("edit", help="Update the project configuration")
    edit.add_argument(
        "--multigroup",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable or disable the multi-group layout",
    )
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def run_init(args: argparse.Namespace, settings: Settings) -> None:
    initializer = ProjectInitializer(
        settings.project_dir,
        YamlConfigStore(settings.project_path),
        domain=args.domain,
        repo=args.repo,
        multigroup=args.multigroup,
        license=args.license,
        owner=args.owner,
        boilerplate_file=settings.boilerplate_file,
    )
    initializer.init()
    print_success("Project initialised.")


def run_create_api(args: argparse.Namespace, settings: Settings) -> None:
    resource = Resource(
        group=args.group,
        version=args.version,
        kind=args.kind,
        namespaced=args.namespaced,
        create_example_reconcile_body=args.example,
    )
    scaffolder = ApiScaffold(
        resource,
        YamlConfigStore(settings.project_path),
        settings.project_dir,
        do_resource=args.resource,
        do_controller=args.controller,
        force=args.force,
        boilerplate_file=settings.boilerplate_file,
    )
    scaffolder.validate()
    scaffolder.scaffold()
    print_success(f"Scaffolded {resource.gvk}.")


def run_edit(args: argparse.Namespace, settings: Settings) -> None:
    store = YamlConfigStore(settings.project_path)
    config = store.load()
    if args.multigroup is not None:
        config.set_multigroup(args.multigroup)
    store.save(config)
    print_success("Project configuration updated.")


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``python -m kubescaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env(project_dir=args.project_dir)

    try:
        if args.command == "init":
            run_init(args, settings)
        elif args.command == "create":
            run_create_api(args, settings)
        elif args.command == "edit":
            run_edit(args, settings)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
