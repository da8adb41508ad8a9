"""Parser for the model field mini-language.

Fields are entered as comma-separated ``name:Type:required`` entries::

    email:String:true, age:Number, nickname

Parsing is permissive: absent tokens fall back to defaults (``String`` and
``false``) and the parser never raises.  Tokens that were present but unusable
are reported as :class:`FieldDiagnostic` records, which ``strict=True`` turns
into a :class:`FieldSpecError`.
"""

from __future__ import annotations

from ezpresso.errors import FieldSpecError
from ezpresso.models import DEFAULT_FIELD_TYPE, FieldDiagnostic, FieldSpec

_ENTRY_SEPARATOR = ","
_PART_SEPARATOR = ":"
_REQUIRED_LITERALS = ("true", "false")


def parse_fields_with_diagnostics(
    text: str,
) -> tuple[list[FieldSpec], list[FieldDiagnostic]]:
    """Parse *text* and return the fields plus any fallback diagnostics.

    Field order follows the input.  Duplicate names are kept as-is.  Entries
    whose name is empty (e.g. a trailing comma) are dropped with a diagnostic.
    """
    fields: list[FieldSpec] = []
    diagnostics: list[FieldDiagnostic] = []
    if not text or not text.strip():
        return fields, diagnostics

    for index, entry in enumerate(text.split(_ENTRY_SEPARATOR)):
        parts = [part.strip() for part in entry.split(_PART_SEPARATOR)]

        def _note(token: str, message: str) -> None:
            diagnostics.append(
                FieldDiagnostic(
                    entry_index=index,
                    entry=entry.strip(),
                    token=token,
                    message=message,
                )
            )

        name = parts[0]
        if not name:
            _note("name", "empty field name, entry ignored")
            continue

        type_tag = DEFAULT_FIELD_TYPE
        if len(parts) > 1:
            if parts[1]:
                type_tag = parts[1]
            else:
                _note("type", f"empty type, defaulted to {DEFAULT_FIELD_TYPE}")

        required = False
        if len(parts) > 2:
            literal = parts[2].lower()
            required = literal == "true"
            if literal not in _REQUIRED_LITERALS:
                _note("required", f"unrecognised required flag {parts[2]!r}, defaulted to false")

        if len(parts) > 3:
            _note("extra", f"ignored extra tokens: {':'.join(parts[3:])}")

        fields.append(FieldSpec(name=name, type_tag=type_tag, required=required))

    return fields, diagnostics


def parse_fields(text: str, *, strict: bool = False) -> list[FieldSpec]:
    """Parse the field mini-language into :class:`FieldSpec` descriptors.

    Empty or whitespace-only input yields an empty list.  With ``strict=True``
    any diagnostic raises :class:`FieldSpecError` instead of silently falling
    back.
    """
    fields, diagnostics = parse_fields_with_diagnostics(text)
    if strict and diagnostics:
        details = "; ".join(
            f"entry {d.entry_index + 1} ({d.entry!r}): {d.message}" for d in diagnostics
        )
        raise FieldSpecError(f"Invalid field definitions: {details}")
    return fields
