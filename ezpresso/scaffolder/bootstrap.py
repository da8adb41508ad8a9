"""New-project bootstrap.

Creates the project root, the fixed ``src/`` skeleton, the static config and
source stubs, and the rendered ``package.json``, then starts ``npm install``
in the background.  Steps run strictly in order and there is no rollback: a
failure leaves whatever earlier steps created in place.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ezpresso.config import Config
from ezpresso.errors import ProjectExistsError
from ezpresso.models import (
    ArtifactKind,
    BootstrapStage,
    ConflictPolicy,
    ManifestData,
    WriteOutcome,
)
from ezpresso.utils import (
    print_error,
    print_info,
    print_success,
    print_warning,
    run_command,
)

from .templates import TemplateRenderer, TemplateResolver
from .writer import copy_static, ensure_directory, write_artifact

SKELETON_DIRS: tuple[str, ...] = (
    "src",
    "src/controllers",
    "src/db",
    "src/logger",
    "src/middleware",
    "src/models",
    "src/services",
    "src/utils",
)

# Template-dir file -> project-relative destination, copied verbatim.
# ``{ext}`` is replaced with the configured source extension.
STATIC_FILES: tuple[tuple[str, str], ...] = (
    ("env.txt", ".env"),
    ("gitignore.txt", ".gitignore"),
    ("nodemon.json", "nodemon.json"),
    ("tsconfig.json", "tsconfig.json"),
    ("db.txt", "src/db/connect.{ext}"),
    ("logger.txt", "src/logger/index.{ext}"),
    ("app.txt", "src/app.{ext}"),
    ("routes.txt", "src/routes.{ext}"),
    ("utils.txt", "src/utils/index.{ext}"),
)


@dataclass
class BootstrapResult:
    """What a bootstrap run created and how far it got."""

    project_root: Path
    stage: BootstrapStage = BootstrapStage.START
    root_existed: bool = False
    directories: list[Path] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    install_task: Optional["asyncio.Task[int]"] = None

    def record(self, path: Path, outcome: WriteOutcome) -> None:
        if outcome is WriteOutcome.SKIPPED:
            self.skipped.append(path)
        else:
            self.written.append(path)


class ProjectBootstrapper:
    """Creates a new project skeleton from the configured stack templates."""

    def __init__(
        self,
        config: Config,
        *,
        resolver: Optional[TemplateResolver] = None,
        renderer: Optional[TemplateRenderer] = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or TemplateResolver(config.stack_dir)
        self.renderer = renderer or TemplateRenderer(config.stack_dir)

    # -- Public API --------------------------------------------------------

    async def bootstrap(
        self,
        project_root: str | Path,
        manifest: ManifestData,
        *,
        on_conflict: Optional[ConflictPolicy] = None,
        install: Optional[bool] = None,
        on_install_complete: Optional[Callable[[int], None]] = None,
    ) -> BootstrapResult:
        """Bootstrap a project at *project_root*.

        Args:
            project_root: Directory to create.
            manifest: Values rendered into ``package.json``.
            on_conflict: Policy when *project_root* already exists.  Defaults
                to ``config.bootstrap_conflict``.
            install: Whether to start the install step.  Defaults to
                ``config.run_install``.
            on_install_complete: Called with the install exit code once the
                background install finishes.

        Returns:
            A :class:`BootstrapResult`.  When the install step was started,
            ``install_task`` holds the running task; bootstrap itself is
            complete once the manifest is written.

        Raises:
            ProjectExistsError: If the root exists and the policy is ``abort``.
            ScaffoldError: Any template or filesystem failure after the root
                step, which aborts the remaining steps.
        """
        root = Path(project_root)
        policy = on_conflict or self.config.bootstrap_conflict
        write_policy = policy.write_policy
        result = BootstrapResult(project_root=root)

        # 1. Project root
        if root.exists():
            result.root_existed = True
            if policy is ConflictPolicy.ABORT:
                print_error(f"Project directory already exists: {root}")
                raise ProjectExistsError(root)
            print_warning(
                f"Project directory already exists: {root} "
                f"(continuing with '{policy.value}', existing files are "
                f"{'replaced' if policy is ConflictPolicy.OVERWRITE else 'kept'})"
            )
        await asyncio.to_thread(ensure_directory, root)
        result.stage = BootstrapStage.ROOT_ENSURED
        print_success(f"Project directory ready: {root}")

        # 2. Directory skeleton
        for rel in SKELETON_DIRS:
            path = await asyncio.to_thread(ensure_directory, root / rel)
            result.directories.append(path)
            print_success(f"Created directory: {rel}")
        result.stage = BootstrapStage.SKELETON_CREATED

        # 3. Static files
        for source, destination in self.static_files():
            dest = root / destination
            outcome = await asyncio.to_thread(
                copy_static, self.config.stack_dir / source, dest, write_policy
            )
            result.record(dest, outcome)
            self._report(destination, outcome)
        result.stage = BootstrapStage.STATIC_FILES_COPIED

        # 4. Manifest
        descriptor = self.resolver.resolve(ArtifactKind.MANIFEST)
        content = self.renderer.render_descriptor(descriptor, manifest.model_dump())
        manifest_path = root / self.config.manifest_filename
        outcome = await asyncio.to_thread(
            write_artifact, manifest_path, content, write_policy
        )
        result.record(manifest_path, outcome)
        self._report(self.config.manifest_filename, outcome)
        result.stage = BootstrapStage.MANIFEST_WRITTEN

        # 5. Install (detached)
        if self.config.run_install if install is None else install:
            result.install_task = self.trigger_install(root, on_complete=on_install_complete)
            result.stage = BootstrapStage.INSTALL_TRIGGERED

        return result

    def trigger_install(
        self,
        project_root: Path,
        *,
        on_complete: Optional[Callable[[int], None]] = None,
    ) -> "asyncio.Task[int]":
        """Start the install command in *project_root* as a background task.

        The child inherits stdin/stdout/stderr.  The returned task resolves to
        the exit code (``127`` when the command cannot be started) and never
        raises for a failed install.  Must be called from a running loop.
        """
        command = list(self.config.install_command)
        print_info(f"Running {' '.join(command)}")

        async def _install() -> int:
            try:
                returncode, _, _ = await run_command(
                    command, cwd=project_root, timeout=None, capture=False
                )
            except OSError as exc:
                print_error(f"Error: {exc}")
                returncode = 127
            if returncode == 0:
                print_success(f"{' '.join(command)} completed successfully.")
            else:
                print_error(f"{' '.join(command)} failed with code {returncode}")
            if on_complete is not None:
                try:
                    on_complete(returncode)
                except Exception as exc:
                    print_error(f"Install completion callback failed: {exc}")
            return returncode

        return asyncio.create_task(_install())

    # -- Helpers -----------------------------------------------------------

    def static_files(self) -> list[tuple[str, str]]:
        """Return ``(source, destination)`` pairs for the configured extension."""
        return [
            (source, destination.format(ext=self.config.extension))
            for source, destination in STATIC_FILES
        ]

    @staticmethod
    def _report(name: str, outcome: WriteOutcome) -> None:
        if outcome is WriteOutcome.SKIPPED:
            print_warning(f"Skipped existing file: {name}")
        else:
            print_success(f"Created file: {name}")
