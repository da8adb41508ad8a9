"""Interactive prompts for the CLI.

Answers are returned raw; blank answers are defaulted by the caller (see
:meth:`ManifestData.from_answers`) rather than re-prompted.
"""

from __future__ import annotations

from rich.prompt import Prompt

from ezpresso.models import ManifestData
from ezpresso.utils import console

FIELDS_PROMPT = (
    "Enter model fields in the format fieldName:Type:required "
    "(comma-separated, e.g. email:String:true, name:String:false)"
)


def ask(label: str) -> str:
    """Ask a single question; an empty answer returns ``""``."""
    return Prompt.ask(label, default="", show_default=False, console=console)


def ask_manifest(project_name: str) -> ManifestData:
    """Prompt for the ``package.json`` fields of a new project."""
    answers = {
        "name": ask(f"Project name ({project_name})"),
        "version": ask("Version (1.0.0)"),
        "description": ask("Description"),
        "main": ask("Main file (index.js)"),
        "author": ask("Author"),
        "license": ask("License (ISC)"),
    }
    return ManifestData.from_answers(project_name, answers)


def ask_model_fields() -> str:
    """Prompt for the model field definitions as raw mini-language text."""
    return ask(FIELDS_PROMPT)
