"""MCP server exposing the ``flg`` generators as tools.

Run with ``flg-mcp`` (stdio transport).  Every tool drives the same command
handler as the CLI, in-process, with prompts disabled and the console output
captured; that output is the tool result.  A failing command is raised as a
``ToolError`` so the client sees ``isError``.

Tools::

    flg_generate_feature     flg_generate_screen     flg_generate_widget
    flg_generate_provider    flg_generate_usecase    flg_generate_repository
    flg_setup                flg_info
"""

from __future__ import annotations

import io
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from rich.console import Console

from .cli import EXIT_OK, build_parser
from .config import ConfigStore, RunOptions
from .utils import Reporter

INSTRUCTIONS = """\
flg - Clean Architecture scaffolding for Flutter.

Generate features, screens, widgets, providers, use cases and repositories
inside a Flutter project, set flg up in an existing project, or read its
flg.json configuration.  Every tool takes an optional project `path`
(default: the server's working directory).
"""

server = FastMCP("flg", instructions=INSTRUCTIONS)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _project_dir(path: str | None) -> Path:
    root = Path(path).expanduser() if path else Path.cwd()
    if not root.is_dir():
        raise ToolError(f"Project path does not exist: {root}")
    return root.resolve()


async def _run(argv: list[str], path: str | None) -> str:
    """Run one ``flg`` command in *path* and return what it printed."""
    cwd = _project_dir(path)
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as exc:
        raise ToolError(f"Invalid arguments for flg {' '.join(argv)}") from exc

    options = RunOptions.from_args(args).model_copy(
        update={"cwd": cwd, "skip_prompts": True, "color": False}
    )
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, no_color=True, highlight=False)
    code = await args.handler(args, options, Reporter(options, console=console))

    output = buffer.getvalue().strip()
    if code != EXIT_OK:
        raise ToolError(f"Command failed with exit code {code}\n\n{output}")
    return output or "Command completed successfully."


# ---------------------------------------------------------------------------
# Generate tools
# ---------------------------------------------------------------------------


@server.tool(name="flg_generate_feature")
async def generate_feature(name: str, path: str | None = None, dry_run: bool = False) -> str:
    """Generate a complete feature module with domain, data and presentation layers.

    Creates the entity, repository, model, data source, screen, state
    management and widget files, and records the feature in flg.json.
    """
    argv = ["generate", "feature", name]
    if dry_run:
        argv.append("--dry-run")
    return await _run(argv, path)


@server.tool(name="flg_generate_screen")
async def generate_screen(name: str, feature: str, path: str | None = None) -> str:
    """Generate a screen widget for a feature and print its route snippet."""
    return await _run(["generate", "screen", name, "--feature", feature], path)


@server.tool(name="flg_generate_widget")
async def generate_widget(
    name: str, feature: str, type: str | None = None, path: str | None = None
) -> str:
    """Generate a widget for a feature.

    *type* is one of stateless, stateful, card, list_tile or form.
    """
    argv = ["generate", "widget", name, "--feature", feature]
    if type:
        argv += ["--type", type]
    return await _run(argv, path)


@server.tool(name="flg_generate_provider")
async def generate_provider(name: str, feature: str, path: str | None = None) -> str:
    """Generate a notifier, bloc or change notifier for the project's state management."""
    return await _run(["generate", "provider", name, "--feature", feature], path)


@server.tool(name="flg_generate_usecase")
async def generate_usecase(
    name: str,
    feature: str,
    action: str | None = None,
    crud: bool = False,
    path: str | None = None,
) -> str:
    """Generate use cases for an entity.

    *action* is get, getAll, create, update or delete (default get);
    *crud* generates all five.
    """
    argv = ["generate", "usecase", name, "--feature", feature]
    if crud:
        argv.append("--crud")
    elif action:
        argv += ["--action", action]
    return await _run(argv, path)


@server.tool(name="flg_generate_repository")
async def generate_repository(name: str, feature: str, path: str | None = None) -> str:
    """Generate a repository interface, its implementation and a remote data source."""
    return await _run(["generate", "repository", name, "--feature", feature], path)


# ---------------------------------------------------------------------------
# Project tools
# ---------------------------------------------------------------------------


@server.tool(name="flg_setup")
async def setup(
    path: str | None = None,
    state: str | None = None,
    router: str | None = None,
) -> str:
    """Set up flg in an existing Flutter project.

    Creates flg.json and the core structure and adds the required packages
    to pubspec.yaml.
    """
    argv = ["setup"]
    if state:
        argv += ["--state", state]
    if router:
        argv += ["--router", router]
    return await _run(argv, path)


@server.tool(name="flg_info")
async def info(path: str | None = None) -> str:
    """Show the flg configuration of a project (its flg.json)."""
    root = _project_dir(path)
    store = ConfigStore()
    config = store.load(root)
    if config is None:
        raise ToolError(
            f"No readable {store.file_name} found in {root}\n\n"
            'Run "flg setup" to initialize flg in this project.'
        )
    return f"flg configuration ({store.path_for(root)}):\n\n{config.to_json()}"


def main() -> None:
    """Serve the tools over stdio."""
    server.run()
