"""Unit tests for utility functions (ezpresso.utils).

Tests cover:
- run_command (success, failure, cwd, timeout, capture=False, missing executable)
- Naming helpers (capitalize, pascal_case, camel_case, pluralize)
- Rich output helpers
"""

from __future__ import annotations

from pathlib import Path

import pytest

from ezpresso.utils import (
    camel_case,
    capitalize,
    pascal_case,
    pluralize,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    async def test_successful_command_list(self):
        returncode, stdout, _ = await run_command(["echo", "hello"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    async def test_failing_command(self):
        returncode, _, _ = await run_command("exit 3")
        assert returncode == 3

    @pytest.mark.unit
    async def test_cwd(self, tmp_path: Path):
        _, stdout, _ = await run_command(["pwd"], cwd=tmp_path)
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    async def test_timeout(self):
        returncode, _, stderr = await run_command(["sleep", "5"], timeout=1)
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    async def test_no_capture(self):
        returncode, stdout, stderr = await run_command(["true"], capture=False)
        assert (returncode, stdout, stderr) == (0, "", "")

    @pytest.mark.unit
    async def test_env(self):
        _, stdout, _ = await run_command("echo $EZ_TEST_VAR", env={"EZ_TEST_VAR": "set"})
        assert stdout == "set"

    @pytest.mark.unit
    async def test_missing_executable(self):
        with pytest.raises(OSError):
            await run_command(["definitely-not-a-real-binary-ezpresso"])


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------


class TestNaming:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("user", "User"), ("User", "User"), ("userRole", "UserRole"), ("", ""), ("x", "X")],
    )
    def test_capitalize(self, value, expected):
        assert capitalize(value) == expected

    @pytest.mark.unit
    def test_pascal_case(self):
        assert pascal_case("order-item") == "OrderItem"
        assert pascal_case("order_item") == "OrderItem"
        assert pascal_case("orderItem") == "OrderItem"

    @pytest.mark.unit
    def test_camel_case(self):
        assert camel_case("order-item") == "orderItem"
        assert camel_case("User") == "user"
        assert camel_case("") == ""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("user", "users"),
            ("category", "categories"),
            ("key", "keys"),
            ("box", "boxes"),
            ("status", "statuses"),
            ("", ""),
        ],
    )
    def test_pluralize(self, word, expected):
        assert pluralize(word) == expected


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_messages_with_brackets_do_not_break_markup(self, capsys):
        print_success("[/done] ok")
        print_error("[bold] failed")
        print_warning("[1] skipped")
        print_info("[/] info")
        out = capsys.readouterr().out
        assert "[/done] ok" in out
        assert "[1] skipped" in out

    @pytest.mark.unit
    def test_summary_table(self, capsys):
        print_summary_table({"controller": "written"}, title="Generated")
        out = capsys.readouterr().out
        assert "controller" in out
        assert "written" in out
