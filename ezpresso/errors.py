"""Exception hierarchy for ezpresso.

Every error raised by the scaffolding engine derives from ``ScaffoldError`` so
that callers can isolate per-artifact failures with a single ``except`` clause
while still telling the categories apart.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class UserInputError(ScaffoldError):
    """Raised for missing or invalid user input (entity name, project gate)."""


class TemplateNotFoundError(ScaffoldError):
    """Raised when the template for an artifact kind does not exist."""

    def __init__(self, kind: str, path: Path) -> None:
        self.kind = kind
        self.path = path
        super().__init__(f"Template not found for '{kind}': {path}")


class RenderError(ScaffoldError):
    """Raised when a template fails to compile or render."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__(f"Error rendering {template}: {message}")


class FileSystemError(ScaffoldError):
    """Raised when a directory or file cannot be created or written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class FileConflictError(FileSystemError):
    """Raised when a target file exists and the write policy forbids replacing it."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "file already exists")


class ProjectExistsError(ScaffoldError):
    """Raised when bootstrapping into an existing directory under the abort policy."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Project directory already exists: {path}")


class FieldSpecError(ScaffoldError):
    """Raised by strict field parsing when any token fell back to a default."""
