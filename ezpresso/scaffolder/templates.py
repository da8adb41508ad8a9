"""Template resolution and Jinja2 rendering for artifact generation.

``TemplateResolver`` maps an artifact kind to its ``<kind>.j2`` file under the
configured stack directory and confirms the file exists.
``TemplateRenderer`` renders those templates (or inline strings) against a
scaffold context, with a handful of naming filters available inside the
templates.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)
from pydantic import BaseModel, ConfigDict

from ezpresso.errors import RenderError, TemplateNotFoundError
from ezpresso.models import ArtifactKind
from ezpresso.utils import camel_case, capitalize, pascal_case, pluralize

TEMPLATE_SUFFIX = ".j2"


# ---------------------------------------------------------------------------
# TemplateResolver
# ---------------------------------------------------------------------------


class TemplateDescriptor(BaseModel):
    """A resolved template: the kind it serves and where it lives."""

    model_config = ConfigDict(frozen=True)

    kind: ArtifactKind
    name: str
    path: Path


class TemplateResolver:
    """Maps artifact kinds to template files under *template_dir*."""

    def __init__(self, template_dir: str | Path) -> None:
        self.template_dir = Path(template_dir)

    @staticmethod
    def template_name(kind: ArtifactKind | str) -> str:
        return f"{ArtifactKind(kind).value}{TEMPLATE_SUFFIX}"

    def resolve(self, kind: ArtifactKind | str) -> TemplateDescriptor:
        """Return the descriptor for *kind*.

        Raises:
            TemplateNotFoundError: If the template file is absent.
        """
        kind = ArtifactKind(kind)
        name = self.template_name(kind)
        path = self.template_dir / name
        if not path.is_file():
            raise TemplateNotFoundError(kind.value, path)
        return TemplateDescriptor(kind=kind, name=name, path=path)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for artifact and manifest generation.

    Undefined variables are errors rather than empty strings, so a context
    that does not match its template surfaces as a :class:`RenderError`.
    Autoescaping is off: the output is source code, not HTML.
    """

    def __init__(self, template_dir: str | Path) -> None:
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([], default_for_string=False),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Replaces Jinja2's builtin, which lower-cases the remainder.
        self.env.filters["capitalize"] = capitalize
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["camel_case"] = camel_case
        self.env.filters["plural"] = pluralize
        self.env.filters["ts_type"] = ts_type
        self.env.filters["schema_type"] = schema_type

    def render(self, template_path: str, context: Mapping[str, Any]) -> str:
        """Render the template at *template_path* (relative to the template dir).

        Raises:
            TemplateNotFoundError: If the loader cannot find the template.
            RenderError: On syntax errors or context mismatches.
        """
        try:
            template = self.env.get_template(template_path)
            return template.render(**context)
        except TemplateNotFound:
            raise TemplateNotFoundError(template_path, self.template_dir / template_path)
        except TemplateSyntaxError as exc:
            raise RenderError(template_path, f"line {exc.lineno}: {exc.message}") from exc
        except TemplateError as exc:
            raise RenderError(template_path, str(exc)) from exc
        except Exception as exc:
            # Filters and operators raise plain Python errors on mismatched data.
            raise RenderError(template_path, f"{type(exc).__name__}: {exc}") from exc

    def render_descriptor(
        self, descriptor: TemplateDescriptor, context: Mapping[str, Any]
    ) -> str:
        return self.render(descriptor.name, context)

    def render_string(self, template_string: str, context: Mapping[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        try:
            template = self.env.from_string(template_string)
            return template.render(**context)
        except TemplateError as exc:
            raise RenderError("<string>", str(exc)) from exc
        except Exception as exc:
            raise RenderError("<string>", f"{type(exc).__name__}: {exc}") from exc


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

_TS_TYPE_MAP: dict[str, str] = {
    "string": "string",
    "number": "number",
    "boolean": "boolean",
    "date": "Date",
    "buffer": "Buffer",
    "objectid": "Types.ObjectId",
    "schema.types.objectid": "Types.ObjectId",
    "decimal128": "Types.Decimal128",
    "array": "unknown[]",
    "map": "Map<string, unknown>",
    "mixed": "unknown",
}


def ts_type(type_tag: str) -> str:
    """Map a mongoose schema type tag to the matching TypeScript type."""
    return _TS_TYPE_MAP.get(type_tag.strip().lower(), "unknown")


_SCHEMA_TYPES_NAMESPACED = ("ObjectId", "Mixed", "Decimal128", "UUID")


def schema_type(type_tag: str) -> str:
    """Qualify mongoose types that only exist under ``Schema.Types``."""
    tag = type_tag.strip()
    if tag in _SCHEMA_TYPES_NAMESPACED:
        return f"Schema.Types.{tag}"
    return tag
