"""Pydantic v2 models and enumerations shared across ezpresso.

Defines the artifact kinds, write/conflict policies, parsed field descriptors,
manifest answers, and the result records returned by generation and bootstrap.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ArtifactKind(str, Enum):
    """Template kinds known to the resolver."""
    CONTROLLER = "controller"
    SERVICE = "service"
    MODEL = "model"
    ROUTER = "router"
    MANIFEST = "manifest"


# Kinds that produce a ``src/<kind>s/<name>.<kind>.<ext>`` artifact, in the
# order used when "all" is requested.
GENERATABLE_KINDS: tuple[ArtifactKind, ...] = (
    ArtifactKind.ROUTER,
    ArtifactKind.MODEL,
    ArtifactKind.SERVICE,
    ArtifactKind.CONTROLLER,
)

KIND_ALIASES: dict[str, ArtifactKind] = {
    "c": ArtifactKind.CONTROLLER,
    "s": ArtifactKind.SERVICE,
    "m": ArtifactKind.MODEL,
    "r": ArtifactKind.ROUTER,
}


class WritePolicy(str, Enum):
    """What to do when a target file already exists."""
    OVERWRITE = "overwrite"
    SKIP = "skip"
    FAIL = "fail"


class ConflictPolicy(str, Enum):
    """What bootstrap does when the project root already exists."""
    ABORT = "abort"
    MERGE = "merge"
    OVERWRITE = "overwrite"

    @property
    def write_policy(self) -> WritePolicy:
        """File write policy implied by this conflict policy."""
        if self is ConflictPolicy.OVERWRITE:
            return WritePolicy.OVERWRITE
        if self is ConflictPolicy.ABORT:
            return WritePolicy.FAIL
        return WritePolicy.SKIP


class WriteOutcome(str, Enum):
    """Result of a single materializer write."""
    WRITTEN = "written"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"


class BootstrapStage(str, Enum):
    """Progress markers for project bootstrap, in order."""
    START = "start"
    ROOT_ENSURED = "root_ensured"
    SKELETON_CREATED = "skeleton_created"
    STATIC_FILES_COPIED = "static_files_copied"
    MANIFEST_WRITTEN = "manifest_written"
    INSTALL_TRIGGERED = "install_triggered"


# ---------------------------------------------------------------------------
# Field descriptors
# ---------------------------------------------------------------------------

DEFAULT_FIELD_TYPE = "String"


class FieldSpec(BaseModel):
    """One data-model field parsed from the field mini-language."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Field name, trimmed")
    type_tag: str = Field(default=DEFAULT_FIELD_TYPE, description="Mongoose schema type")
    required: bool = Field(default=False)


class FieldDiagnostic(BaseModel):
    """A token that was ignored or replaced by a default during parsing."""

    model_config = ConfigDict(frozen=True)

    entry_index: int = Field(..., ge=0, description="Zero-based position of the entry")
    entry: str = Field(..., description="The raw comma-separated entry")
    token: str = Field(..., description="Which token fell back: name, type, required, extra")
    message: str


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

class ManifestData(BaseModel):
    """Values rendered into the generated ``package.json``."""

    name: str
    version: str = "1.0.0"
    description: str = ""
    main: str = "index.js"
    author: str = ""
    license: str = "ISC"

    @classmethod
    def from_answers(cls, project_name: str, answers: dict[str, str]) -> "ManifestData":
        """Build manifest data from raw prompt answers.

        Blank or missing answers fall back to the per-field defaults; the
        ``name`` answer falls back to *project_name*.
        """
        values: dict[str, str] = {}
        for key, raw in answers.items():
            if key in cls.model_fields and raw is not None and raw.strip():
                values[key] = raw.strip()
        values.setdefault("name", project_name)
        return cls(**values)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class ArtifactResult(BaseModel):
    """Outcome of generating a single artifact."""

    kind: ArtifactKind
    status: str = Field(..., description="written, overwritten, skipped or failed")
    path: Optional[Path] = Field(default=None, description="Target path, when computed")
    error: str = Field(default="")

    @property
    def ok(self) -> bool:
        return self.status != "failed"
