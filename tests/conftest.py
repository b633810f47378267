"""Shared pytest fixtures for the flg test suite.

Provides reusable fixtures for:
- Run options and a Reporter whose console output is captured
- Sample configurations (the ``shop_app`` project in every variant)
- Temporary Flutter project roots with or without a feature
- A mocked ToolRunner so no Flutter / Dart executable is needed
"""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from rich.console import Console

from flg.config import ConfigStore, FlgConfig, RunOptions, StateManagement
from flg.scaffolder.paths import feature_directories
from flg.scaffolder.tools import ToolResult, ToolRunner
from flg.utils import Reporter


# ---------------------------------------------------------------------------
# Console & options
# ---------------------------------------------------------------------------


def make_reporter(options: RunOptions | None = None) -> Reporter:
    """Reporter writing plain text into an in-memory buffer."""
    console = Console(
        file=io.StringIO(),
        width=200,
        no_color=True,
        highlight=False,
        force_terminal=False,
    )
    return Reporter(options or RunOptions(), console=console)


def output_of(reporter: Reporter) -> str:
    """Everything *reporter* printed so far."""
    return reporter.console.file.getvalue()


@pytest.fixture
def options(tmp_path: Path) -> RunOptions:
    """Default (writing) run options rooted at the temp directory."""
    return RunOptions(cwd=tmp_path, skip_prompts=True, color=False)


@pytest.fixture
def dry_options(tmp_path: Path) -> RunOptions:
    """Dry-run options rooted at the temp directory."""
    return RunOptions(cwd=tmp_path, skip_prompts=True, color=False, dry_run=True)


@pytest.fixture
def reporter(options: RunOptions) -> Reporter:
    return make_reporter(options)


@pytest.fixture
def dry_reporter(dry_options: RunOptions) -> Reporter:
    return make_reporter(dry_options)


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def shop_config() -> FlgConfig:
    """The ``shop_app`` project: riverpod, go_router, freezed, dio."""
    return FlgConfig(project_name="shop_app", org="com.shop", features=("product",))


@pytest.fixture
def bloc_config(shop_config: FlgConfig) -> FlgConfig:
    return shop_config.model_copy(update={"state_management": StateManagement.BLOC})


@pytest.fixture
def plain_config() -> FlgConfig:
    """Provider state, auto_route, hand-written models and package:http."""
    return FlgConfig(
        project_name="shop_app",
        org="com.shop",
        state_management="provider",
        router="auto_route",
        use_freezed=False,
        use_dio_client=False,
        features=("product",),
    )


# ---------------------------------------------------------------------------
# Project trees
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An empty project directory (no features yet)."""
    root = tmp_path / "shop_app"
    root.mkdir()
    return root


def add_feature_dirs(root: Path, feature: str) -> None:
    for directory in feature_directories(feature):
        (root / directory).mkdir(parents=True, exist_ok=True)


@pytest.fixture
def project_with_product(project_root: Path, shop_config: FlgConfig) -> Path:
    """Project root with ``flg.json`` and the ``product`` feature directories."""
    add_feature_dirs(project_root, "product")
    ConfigStore().save(project_root, shop_config)
    return project_root


def snapshot(root: Path) -> dict[str, bytes]:
    """Map of every file under *root* to its bytes."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


# ---------------------------------------------------------------------------
# External tools
# ---------------------------------------------------------------------------


def ok_result(*cmd: str) -> ToolResult:
    return ToolResult(tuple(cmd), 0, "", "")


@pytest.fixture
def mock_tools() -> ToolRunner:
    """ToolRunner whose commands all succeed without spawning processes."""
    tools = ToolRunner()
    tools.flutter_create = AsyncMock(return_value=ok_result("flutter", "create"))
    tools.pub_get = AsyncMock(return_value=ok_result("flutter", "pub", "get"))
    tools.build_runner = AsyncMock(return_value=ok_result("dart", "run", "build_runner"))
    return tools


# ---------------------------------------------------------------------------
# Helper fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def reporter_factory():
    """Build a captured Reporter for arbitrary RunOptions."""
    return make_reporter


@pytest.fixture
def read_output():
    """Return the text printed by a captured Reporter."""
    return output_of


@pytest.fixture
def tree_snapshot():
    """Return a ``{relative_path: bytes}`` map of a directory tree."""
    return snapshot


@pytest.fixture
def make_feature():
    """Create the nine layer directories of a feature under a root."""
    return add_feature_dirs
