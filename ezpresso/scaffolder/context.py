"""Rendering context construction for generated artifacts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Optional

from ezpresso.errors import UserInputError
from ezpresso.models import FieldSpec
from ezpresso.utils import capitalize

ScaffoldContext = Mapping[str, Any]


def check_entity_name(entity_name: str) -> None:
    """Reject empty, blank or non-UTF-8 entity names.

    Names taken from argv may carry surrogate-escaped bytes that cannot be
    written to a file or printed.

    Raises:
        UserInputError: If the name is unusable.
    """
    if not entity_name or not entity_name.strip():
        raise UserInputError("No entity name provided")
    try:
        entity_name.encode("utf-8")
    except UnicodeEncodeError:
        raise UserInputError("Entity name is not valid UTF-8") from None


def build_context(
    entity_name: str,
    fields: Optional[Iterable[FieldSpec]] = None,
) -> ScaffoldContext:
    """Build the read-only template context for *entity_name*.

    The context always carries ``name`` (as given) and ``Name`` (first
    character upper-cased).  ``fields`` is only present when a field sequence
    is passed, which is the case for model artifacts.

    Raises:
        UserInputError: If *entity_name* is empty, blank or not valid UTF-8.
    """
    check_entity_name(entity_name)

    context: dict[str, Any] = {
        "name": entity_name,
        "Name": capitalize(entity_name),
    }
    if fields is not None:
        context["fields"] = tuple(fields)
    return MappingProxyType(context)
