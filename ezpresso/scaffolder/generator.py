"""Artifact generation orchestrator.

Generates controllers, services, models and routers for an entity inside an
existing project::

    generator = ArtifactGenerator(Config())
    results = await generator.generate_many(
        Path("."), "user", GENERATABLE_KINDS, fields=parse_fields("email:String:true")
    )

Each artifact is resolved, rendered and written independently.  A failure in
one kind is reported and recorded in its :class:`ArtifactResult`; the next
kind is still attempted.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Optional

from ezpresso.config import Config
from ezpresso.errors import ScaffoldError
from ezpresso.models import (
    ArtifactKind,
    ArtifactResult,
    FieldSpec,
    WriteOutcome,
    WritePolicy,
)
from ezpresso.utils import print_error, print_info, print_success, print_warning

from .context import ScaffoldContext, build_context
from .templates import TemplateRenderer, TemplateResolver
from .writer import write_artifact


class ArtifactGenerator:
    """Resolves, renders and writes single artifacts for an entity."""

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

    # -- Paths -------------------------------------------------------------

    def target_path(
        self, project_root: str | Path, entity_name: str, kind: ArtifactKind | str
    ) -> Path:
        """Return ``<root>/src/<kind>s/<entity>.<kind>.<ext>``."""
        kind = ArtifactKind(kind).value
        return (
            Path(project_root)
            / "src"
            / f"{kind}s"
            / f"{entity_name}.{kind}.{self.config.extension}"
        )

    # -- Single artifact ---------------------------------------------------

    async def generate(
        self,
        project_root: str | Path,
        entity_name: str,
        kind: ArtifactKind | str,
        context: ScaffoldContext,
        *,
        policy: Optional[WritePolicy] = None,
    ) -> ArtifactResult:
        """Generate one artifact of *kind* for *entity_name*.

        Never raises for template, render or filesystem failures; they are
        reported on the console and returned as a ``failed`` result.
        """
        kind = ArtifactKind(kind)
        policy = policy or self.config.generate_policy
        print_info(f"Generating {kind.value} for '{entity_name}'...")

        if not entity_name:
            print_error("No entity name provided")
            return ArtifactResult(kind=kind, status="failed", error="No entity name provided")

        try:
            descriptor = self.resolver.resolve(kind)
        except ScaffoldError as exc:
            print_error(str(exc))
            return ArtifactResult(kind=kind, status="failed", error=str(exc))

        try:
            content = self.renderer.render_descriptor(descriptor, context)
        except ScaffoldError as exc:
            print_error(str(exc))
            return ArtifactResult(kind=kind, status="failed", error=str(exc))

        target = self.target_path(project_root, entity_name, kind)
        try:
            outcome = await asyncio.to_thread(write_artifact, target, content, policy)
        except ScaffoldError as exc:
            print_error(str(exc))
            return ArtifactResult(kind=kind, status="failed", path=target, error=str(exc))

        if outcome is WriteOutcome.SKIPPED:
            print_warning(f"Skipped existing file: {target}")
        else:
            print_success(f"Created {kind.value}: {target}")
        return ArtifactResult(kind=kind, status=outcome.value, path=target)

    # -- Batch -------------------------------------------------------------

    async def generate_many(
        self,
        project_root: str | Path,
        entity_name: str,
        kinds: Iterable[ArtifactKind | str],
        fields: Optional[Sequence[FieldSpec]] = None,
        *,
        policy: Optional[WritePolicy] = None,
    ) -> list[ArtifactResult]:
        """Generate every kind in *kinds*, in order, isolating failures.

        Model artifacts get a context that includes *fields* (an empty tuple
        when none are given); every other kind gets the base context.

        Raises:
            UserInputError: If *entity_name* is empty.
        """
        base_context = build_context(entity_name)
        model_context = build_context(entity_name, fields or ())

        results: list[ArtifactResult] = []
        for kind in kinds:
            kind = ArtifactKind(kind)
            context = model_context if kind is ArtifactKind.MODEL else base_context
            results.append(
                await self.generate(project_root, entity_name, kind, context, policy=policy)
            )
        return results
