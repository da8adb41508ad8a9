"""Tests for scaffold context construction."""

from __future__ import annotations

import pytest

from ezpresso.errors import UserInputError
from ezpresso.models import FieldSpec
from ezpresso.scaffolder.context import build_context

pytestmark = pytest.mark.unit


class TestBuildContext:
    def test_lower_name_capitalized(self):
        ctx = build_context("user")
        assert ctx["name"] == "user"
        assert ctx["Name"] == "User"

    def test_already_capitalized_unchanged(self):
        assert build_context("User")["Name"] == "User"

    def test_only_first_character_changes(self):
        assert build_context("userRole")["Name"] == "UserRole"

    def test_no_fields_key_without_fields(self):
        assert "fields" not in build_context("user")

    def test_fields_preserved_in_order(self):
        fields = [FieldSpec(name="b"), FieldSpec(name="a", required=True)]
        ctx = build_context("user", fields)
        assert [f.name for f in ctx["fields"]] == ["b", "a"]

    def test_empty_field_list_still_present(self):
        assert build_context("user", [])["fields"] == ()

    def test_context_is_read_only(self):
        ctx = build_context("user")
        with pytest.raises(TypeError):
            ctx["name"] = "other"  # type: ignore[index]

    def test_surrogate_escaped_name_rejected(self):
        with pytest.raises(UserInputError, match="UTF-8"):
            build_context("user\udcff")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name):
        with pytest.raises(UserInputError):
            build_context(name)
