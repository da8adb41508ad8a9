"""ezpresso command-line entry point.

Usage::

    ezpresso create my-api
    ezpresso generate user                 # router, model, service, controller
    ezpresso generate controller user
    ezpresso g m user --fields "email:String:true, age:Number"
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from ezpresso import __version__
from ezpresso.config import Config
from ezpresso.errors import ScaffoldError, UserInputError
from ezpresso.models import (
    GENERATABLE_KINDS,
    KIND_ALIASES,
    ArtifactKind,
    ArtifactResult,
    ConflictPolicy,
    FieldSpec,
    ManifestData,
)
from ezpresso.prompts import ask_manifest, ask_model_fields
from ezpresso.scaffolder import ArtifactGenerator, ProjectBootstrapper
from ezpresso.scaffolder.context import check_entity_name
from ezpresso.scaffolder.fields import parse_fields, parse_fields_with_diagnostics
from ezpresso.utils import (
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)

ALL_KINDS = "all"


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ezpresso",
        description="Scaffold Express + TypeScript projects and artifacts.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--template-root",
        type=Path,
        default=None,
        help="Directory containing the stack template subtrees",
    )
    parser.add_argument(
        "--stack",
        default=None,
        help="Template subtree to use (default: typescript/express)",
    )
    parser.add_argument(
        "--on-conflict",
        choices=[p.value for p in ConflictPolicy],
        default=None,
        help="What to do with existing project directories and files",
    )

    sub = parser.add_subparsers(dest="command")

    create = sub.add_parser("create", help="Create a new project")
    create.add_argument("project_name", nargs="?", help="Name of the project directory")
    create.add_argument(
        "--no-install",
        action="store_true",
        help="Skip running the package manager install step",
    )
    create.add_argument(
        "--defaults",
        action="store_true",
        help="Use default package.json values instead of prompting",
    )

    generate = sub.add_parser(
        "generate", aliases=["g"], help="Generate artifacts for an entity"
    )
    generate.add_argument(
        "targets",
        nargs="*",
        metavar="[kind] name",
        help="Optional kind (controller, service, model, router, all) and entity name",
    )
    generate.add_argument(
        "--fields",
        default=None,
        help="Model fields as name:Type:required entries; skips the prompt",
    )
    generate.add_argument(
        "--strict-fields",
        action="store_true",
        help="Reject field definitions that would fall back to defaults",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    config = Config.from_env()
    updates: dict[str, object] = {}
    if args.template_root is not None:
        updates["template_root"] = args.template_root
    if args.stack:
        updates["stack"] = args.stack
    if args.on_conflict:
        policy = ConflictPolicy(args.on_conflict)
        updates["bootstrap_conflict"] = policy
        updates["generate_policy"] = policy.write_policy
    if getattr(args, "no_install", False):
        updates["run_install"] = False
    return config.model_copy(update=updates) if updates else config


def resolve_targets(targets: list[str]) -> tuple[list[ArtifactKind], str]:
    """Split ``[kind] name`` positionals into the kinds to build and the entity.

    A first positional that is not a known kind is taken as the entity name
    and the kind defaults to ``all``.

    Raises:
        UserInputError: If no entity name was given.
    """
    if not targets:
        raise UserInputError("No entity name provided")

    first = targets[0]
    kind: Optional[ArtifactKind] = None
    if first == ALL_KINDS:
        name = targets[1] if len(targets) > 1 else ""
    elif first in KIND_ALIASES:
        kind = KIND_ALIASES[first]
        name = targets[1] if len(targets) > 1 else ""
    elif first in {k.value for k in GENERATABLE_KINDS}:
        kind = ArtifactKind(first)
        name = targets[1] if len(targets) > 1 else ""
    else:
        name = first

    check_entity_name(name)
    kinds = list(GENERATABLE_KINDS) if kind is None else [kind]
    return kinds, name


def check_project_gate(directory: Path, config: Config) -> None:
    """Require a manifest file and a ``src`` directory in *directory*.

    Raises:
        UserInputError: If either is missing.
    """
    if not (directory / config.manifest_filename).is_file() or not (directory / "src").is_dir():
        raise UserInputError(
            "You must be inside a valid project directory "
            f"(with {config.manifest_filename} and src folder) to run this command."
        )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _create(config: Config, project_root: Path, manifest: ManifestData) -> int:
    bootstrapper = ProjectBootstrapper(config)
    result = await bootstrapper.bootstrap(project_root, manifest)
    print_success(f"Project created at {result.project_root}")
    if result.install_task is not None:
        # The loop closing would kill the child, so stay alive until it exits.
        await result.install_task
    return 0


def cmd_create(args: argparse.Namespace, config: Config) -> int:
    if not args.project_name:
        raise UserInputError("No project name provided")
    project_root = Path.cwd() / args.project_name
    if args.defaults:
        manifest = ManifestData(name=args.project_name)
    else:
        manifest = ask_manifest(args.project_name)
    return asyncio.run(_create(config, project_root, manifest))


def _read_fields(args: argparse.Namespace) -> list[FieldSpec]:
    text = args.fields if args.fields is not None else ask_model_fields()
    if args.strict_fields:
        return parse_fields(text, strict=True)
    fields, diagnostics = parse_fields_with_diagnostics(text)
    for diag in diagnostics:
        print_warning(f"Field entry {diag.entry_index + 1} ({diag.entry!r}): {diag.message}")
    return fields


def cmd_generate(args: argparse.Namespace, config: Config) -> int:
    project_root = Path.cwd()
    check_project_gate(project_root, config)
    kinds, name = resolve_targets(args.targets)

    print_info(f"Processing: name={name}, kinds={', '.join(k.value for k in kinds)}")
    fields: list[FieldSpec] = []
    if ArtifactKind.MODEL in kinds:
        fields = _read_fields(args)

    generator = ArtifactGenerator(config)
    results = asyncio.run(generator.generate_many(project_root, name, kinds, fields))
    _print_results(results)
    return 0 if all(r.ok for r in results) else 1


def _print_results(results: list[ArtifactResult]) -> None:
    summary = {
        r.kind.value: (f"{r.status}: {r.path}" if r.path else f"{r.status}: {r.error}")
        for r in results
    }
    print_summary_table(summary, title="Generated artifacts")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        config = _config_from_args(args)
        if args.command == "create":
            code = cmd_create(args, config)
        else:
            code = cmd_generate(args, config)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except ValueError as exc:
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
