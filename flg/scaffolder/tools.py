"""External Flutter / Dart tool invocation.

The three tools flg drives (``flutter create``, ``flutter pub get`` and
``dart run build_runner build``) are run to completion one at a time.  A
non-zero exit status or a missing executable is never fatal: the caller gets
a ``ToolResult`` and decides how to report it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..config import FlgConfig
from ..utils import run_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """Exit status and captured output of one external command."""

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def display(self) -> str:
        return " ".join(self.command)

    def failure_message(self) -> str:
        """One line describing a failed run, for use as a warning."""
        detail = self.stderr.splitlines()[-1] if self.stderr else ""
        message = f'"{self.display}" exited with code {self.returncode}'
        return f"{message}: {detail}" if detail else message


def flutter_create_command(config: FlgConfig) -> list[str]:
    return [
        "flutter",
        "create",
        "--no-pub",
        f"--platforms={','.join(config.platform_strings)}",
        f"--org={config.org}",
        config.project_name,
    ]


PUB_GET_COMMAND: tuple[str, ...] = ("flutter", "pub", "get")
BUILD_RUNNER_COMMAND: tuple[str, ...] = (
    "dart",
    "run",
    "build_runner",
    "build",
    "--delete-conflicting-outputs",
)


class ToolRunner:
    """Runs the Flutter toolchain commands used during ``init`` / ``setup``."""

    async def run(self, cmd: list[str] | tuple[str, ...], cwd: str | Path) -> ToolResult:
        command = tuple(cmd)
        logger.debug("Running %s in %s", " ".join(command), cwd)
        returncode, stdout, stderr = await run_command(list(command), cwd=cwd)
        result = ToolResult(command, returncode, stdout, stderr)
        if not result.ok:
            logger.debug("%s failed: %s", result.display, stderr)
        return result

    async def flutter_create(self, config: FlgConfig, parent_dir: str | Path) -> ToolResult:
        """``flutter create`` the project as a child of *parent_dir*."""
        return await self.run(flutter_create_command(config), parent_dir)

    async def pub_get(self, project_root: str | Path) -> ToolResult:
        return await self.run(PUB_GET_COMMAND, project_root)

    async def build_runner(self, project_root: str | Path) -> ToolResult:
        return await self.run(BUILD_RUNNER_COMMAND, project_root)
