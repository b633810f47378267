"""Unit tests for utility functions (flg.utils).

Tests cover:
- run_command (success, failure, cwd, env vars, missing executable)
- ensure_dir / write_file (use tmp_path)
- Reporter output helpers (colour off, verbose-only detail, markup escaping)
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from flg.config import RunOptions
from flg.utils import ensure_dir, run_command, write_file


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "print('hello')"]
        )
        assert returncode == 0
        assert stdout == "hello"
        assert stderr == ""

    @pytest.mark.unit
    async def test_failed_command(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "boom"

    @pytest.mark.unit
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    async def test_command_with_env(self):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['FLG_TEST_VAR'])"],
            env={"FLG_TEST_VAR": "riverpod"},
        )
        assert returncode == 0
        assert stdout == "riverpod"

    @pytest.mark.unit
    async def test_missing_executable(self):
        returncode, stdout, stderr = await run_command(["flg-no-such-binary-xyz", "--help"])
        assert returncode == 127
        assert stdout == ""
        assert "command not found" in stderr


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


class TestFileHelpers:
    @pytest.mark.unit
    def test_ensure_dir_creates_parents(self, tmp_path: Path):
        target = tmp_path / "lib" / "core" / "error"
        result = ensure_dir(target)
        assert result == target
        assert target.is_dir()

    @pytest.mark.unit
    def test_ensure_dir_existing(self, tmp_path: Path):
        assert ensure_dir(tmp_path) == tmp_path

    @pytest.mark.unit
    async def test_write_file_creates_parents(self, tmp_path: Path):
        target = tmp_path / "lib" / "main.dart"
        written = await write_file(target, "void main() {}\n")
        assert written == target
        assert target.read_text(encoding="utf-8") == "void main() {}\n"

    @pytest.mark.unit
    async def test_write_file_overwrites(self, tmp_path: Path):
        target = tmp_path / "a.dart"
        await write_file(target, "one")
        await write_file(target, "two")
        assert target.read_text(encoding="utf-8") == "two"


# ---------------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------------


class TestReporter:
    @pytest.mark.unit
    def test_success_and_error(self, reporter, read_output):
        reporter.success("Feature generated")
        reporter.error("Feature missing")
        out = read_output(reporter)
        assert "Feature generated" in out
        assert "Error: Feature missing" in out

    @pytest.mark.unit
    def test_warning_prefix(self, reporter, read_output):
        reporter.warning("flutter pub get failed")
        assert "Warning: flutter pub get failed" in read_output(reporter)

    @pytest.mark.unit
    def test_detail_hidden_without_verbose(self, reporter, read_output):
        reporter.detail("diagnostic")
        assert read_output(reporter) == ""

    @pytest.mark.unit
    def test_detail_shown_with_verbose(self, reporter_factory, read_output):
        reporter = reporter_factory(RunOptions(verbose=True))
        reporter.detail("stderr: [exit 1]")
        assert "stderr: [exit 1]" in read_output(reporter)

    @pytest.mark.unit
    def test_created_and_planned(self, reporter, read_output):
        reporter.created("lib/main.dart")
        reporter.planned("lib/core/error/failures.dart")
        out = read_output(reporter)
        assert "create lib/main.dart" in out
        assert "would create lib/core/error/failures.dart" in out

    @pytest.mark.unit
    def test_code_is_printed_verbatim(self, reporter, read_output):
        reporter.code("GoRoute(path: '/[id]')")
        assert "GoRoute(path: '/[id]')" in read_output(reporter)

    @pytest.mark.unit
    def test_table(self, reporter, read_output):
        reporter.table({"Router": "go_router"}, title="flg configuration")
        out = read_output(reporter)
        assert "flg configuration" in out
        assert "go_router" in out

    @pytest.mark.unit
    def test_colour_follows_options(self):
        from flg.utils import Reporter

        assert Reporter(RunOptions(color=False)).console.no_color is True
        assert Reporter(RunOptions(color=True)).console.no_color is False
