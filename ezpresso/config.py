"""ezpresso configuration.

Typed configuration for template lookup, output conventions and the install
step. Settings are a Pydantic v2 model so they can be validated at
construction time and populated from environment variables without
boiler-plate.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ezpresso.models import ConflictPolicy, WritePolicy

DEFAULT_TEMPLATE_ROOT = Path(__file__).parent / "scaffolder" / "templates"


class Config(BaseModel):
    """Global ezpresso configuration.

    Instances are created once by the CLI entry point (or by tests) and then
    passed to the generator and bootstrapper.
    """

    template_root: Path = Field(default=DEFAULT_TEMPLATE_ROOT)
    stack: str = Field(default="typescript/express", description="Subtree of the template root")
    extension: str = Field(default="ts", description="Extension of generated source files")
    manifest_filename: str = Field(default="package.json")
    install_command: list[str] = Field(default_factory=lambda: ["npm", "install"])
    run_install: bool = Field(default=True)
    generate_policy: WritePolicy = Field(default=WritePolicy.OVERWRITE)
    bootstrap_conflict: ConflictPolicy = Field(default=ConflictPolicy.MERGE)

    @property
    def stack_dir(self) -> Path:
        """Directory holding the templates and static files for ``stack``."""
        return self.template_root / self.stack

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            EZPRESSO_TEMPLATE_ROOT, EZPRESSO_STACK, EZPRESSO_INSTALL_COMMAND,
            EZPRESSO_SKIP_INSTALL, EZPRESSO_ON_CONFLICT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EZPRESSO_TEMPLATE_ROOT"):
            kwargs["template_root"] = Path(os.environ["EZPRESSO_TEMPLATE_ROOT"])
        if os.environ.get("EZPRESSO_STACK"):
            kwargs["stack"] = os.environ["EZPRESSO_STACK"]
        if os.environ.get("EZPRESSO_INSTALL_COMMAND"):
            kwargs["install_command"] = shlex.split(os.environ["EZPRESSO_INSTALL_COMMAND"])
        if os.environ.get("EZPRESSO_SKIP_INSTALL", "").lower() in ("1", "true", "yes"):
            kwargs["run_install"] = False
        if os.environ.get("EZPRESSO_ON_CONFLICT"):
            policy = ConflictPolicy(os.environ["EZPRESSO_ON_CONFLICT"].lower())
            kwargs["bootstrap_conflict"] = policy
            kwargs["generate_policy"] = policy.write_policy
        return cls(**kwargs)
