"""Shared pytest fixtures for the ezpresso test suite.

Provides reusable fixtures for:
- A throwaway copy of the bundled templates (safe to break or delete from)
- Configs pointing at the bundled or copied templates, with install disabled
- An existing generated-project directory for artifact generation
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from ezpresso.config import DEFAULT_TEMPLATE_ROOT, Config


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer EZPRESSO_* variables out of the tests."""
    for var in (
        "EZPRESSO_TEMPLATE_ROOT",
        "EZPRESSO_STACK",
        "EZPRESSO_INSTALL_COMMAND",
        "EZPRESSO_SKIP_INSTALL",
        "EZPRESSO_ON_CONFLICT",
    ):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Templates & config
# ---------------------------------------------------------------------------

@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """Writable copy of the bundled template root."""
    target = tmp_path / "templates"
    shutil.copytree(DEFAULT_TEMPLATE_ROOT, target)
    return target


@pytest.fixture
def stack_dir(template_root: Path) -> Path:
    """The ``typescript/express`` directory inside the template copy."""
    return template_root / "typescript" / "express"


@pytest.fixture
def config() -> Config:
    """Config using the bundled templates, with the install step disabled."""
    return Config(run_install=False)


@pytest.fixture
def copied_config(template_root: Path) -> Config:
    """Config using the writable template copy, with the install step disabled."""
    return Config(template_root=template_root, run_install=False)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An existing project with ``package.json`` and ``src/``."""
    root = tmp_path / "my-api"
    (root / "src").mkdir(parents=True)
    (root / "package.json").write_text('{"name": "my-api"}\n', encoding="utf-8")
    return root
