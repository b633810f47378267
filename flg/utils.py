"""Shared helpers for flg: console reporting, subprocesses and file writes.

The ``Reporter`` wraps a Rich console built from ``RunOptions`` so colour and
verbosity are decided per invocation rather than through module globals.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from .config import RunOptions


# ---------------------------------------------------------------------------
# Console reporting
# ---------------------------------------------------------------------------


class Reporter:
    """User-facing output for one CLI invocation."""

    def __init__(
        self,
        options: RunOptions | None = None,
        console: Console | None = None,
    ) -> None:
        self.options = options or RunOptions()
        self.console = console or Console(
            no_color=not self.options.color,
            highlight=False,
        )

    @property
    def verbose(self) -> bool:
        return self.options.verbose

    def header(self, title: str) -> None:
        """Print a full-width rule with *title*."""
        self.console.print()
        self.console.print(Rule(f"[bold cyan] {title} [/bold cyan]", style="cyan"))
        self.console.print()

    def step(self, message: str) -> None:
        self.console.print(f"[bold blue]>[/bold blue] {message}")

    def success(self, message: str) -> None:
        """Print a green success message."""
        self.console.print(f"[bold green]{message}[/bold green]")

    def info(self, message: str) -> None:
        self.console.print(message)

    def warning(self, message: str) -> None:
        """Print a yellow warning message."""
        self.console.print(f"[bold yellow]Warning:[/bold yellow] {message}")

    def error(self, message: str) -> None:
        """Print a red error message."""
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def muted(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def detail(self, message: str) -> None:
        """Print *message* only with ``--verbose``."""
        if self.verbose:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def created(self, path: str | Path) -> None:
        self.console.print(f"  [green]create[/green] {path}")

    def planned(self, path: str | Path) -> None:
        self.console.print(f"  [cyan]would create[/cyan] {path}")

    def table(self, data: dict[str, str], title: str = "Summary") -> None:
        """Print a two-column key/value table."""
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Setting", style="dim", no_wrap=True)
        table.add_column("Value")
        for key, value in data.items():
            table.add_row(key, str(value))
        self.console.print(table)

    def code(self, snippet: str) -> None:
        """Print a code snippet without markup interpretation."""
        self.console.print(snippet, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run *cmd* to completion and capture its output.

    No timeout is applied; the call returns when the child exits.

    Args:
        cmd: Executable followed by its arguments.
        cwd: Working directory for the child process.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A missing executable is
        reported as return code 127 with the OS error in *stderr*.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )
    except FileNotFoundError as exc:
        return (127, "", f"{cmd[0]}: command not found ({exc})")

    stdout_bytes, stderr_bytes = await process.communicate()
    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


async def write_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path* off the event loop, creating parents.

    An existing file is overwritten.
    """
    out = Path(path)
    await asyncio.to_thread(_write_file, out, content)
    return out
