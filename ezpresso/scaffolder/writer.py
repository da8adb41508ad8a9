"""File materialization for generated projects.

All writes are synchronous: when a function returns, the bytes have been
handed to the filesystem.  Async callers run these through
``asyncio.to_thread`` and await each call in order.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from ezpresso.errors import FileConflictError, FileSystemError
from ezpresso.models import WriteOutcome, WritePolicy


def ensure_directory(path: str | Path) -> Path:
    """Create *path* and any missing ancestors.

    Succeeds without changes when the directory already exists.

    Raises:
        FileSystemError: If *path* exists but is not a directory, or the
            directory cannot be created.
    """
    dir_path = Path(path)
    if dir_path.is_dir():
        return dir_path
    if dir_path.exists():
        raise FileSystemError(dir_path, "exists and is not a directory")
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileSystemError(dir_path, exc.strerror or str(exc)) from exc
    return dir_path


def _check_target(path: Path, policy: WritePolicy) -> WriteOutcome | None:
    """Apply *policy* to an existing target.

    Returns ``SKIPPED`` when the write must not happen, ``OVERWRITTEN`` when
    an existing file will be replaced, and ``None`` for a fresh target.
    """
    if not path.exists():
        return None
    if path.is_dir():
        raise FileSystemError(path, "is a directory")
    if policy is WritePolicy.SKIP:
        return WriteOutcome.SKIPPED
    if policy is WritePolicy.FAIL:
        raise FileConflictError(path)
    return WriteOutcome.OVERWRITTEN


def write_artifact(
    path: str | Path,
    content: str,
    policy: WritePolicy = WritePolicy.OVERWRITE,
) -> WriteOutcome:
    """Write *content* to *path*, creating parent directories first.

    Raises:
        FileConflictError: If the file exists and *policy* is ``FAIL``.
        FileSystemError: If the directory or file cannot be written.
    """
    target = Path(path)
    ensure_directory(target.parent)
    existing = _check_target(target, policy)
    if existing is WriteOutcome.SKIPPED:
        return existing
    try:
        data = content.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise FileSystemError(target, f"content is not valid UTF-8: {exc.reason}") from exc
    try:
        target.write_bytes(data)
    except OSError as exc:
        raise FileSystemError(target, exc.strerror or str(exc)) from exc
    return existing or WriteOutcome.WRITTEN


def copy_static(
    source: str | Path,
    destination: str | Path,
    policy: WritePolicy = WritePolicy.OVERWRITE,
) -> WriteOutcome:
    """Copy *source* to *destination* byte-for-byte, without rendering.

    Raises:
        FileSystemError: If the source is missing or the copy fails.
        FileConflictError: If the destination exists and *policy* is ``FAIL``.
    """
    src = Path(source)
    dest = Path(destination)
    if not src.is_file():
        raise FileSystemError(src, "static file not found")
    ensure_directory(dest.parent)
    existing = _check_target(dest, policy)
    if existing is WriteOutcome.SKIPPED:
        return existing
    try:
        shutil.copyfile(src, dest)
    except OSError as exc:
        raise FileSystemError(dest, exc.strerror or str(exc)) from exc
    return existing or WriteOutcome.WRITTEN
