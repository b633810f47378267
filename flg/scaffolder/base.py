"""Shared plumbing for the feature-scoped generators.

Every generator follows the same sequence: check preconditions, build an
ordered plan of ``GenerationTarget`` values, then either report the plan
(dry run) or create directories and write the targets one after another.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from ..config import FlgConfig, RunOptions
from ..utils import Reporter, ensure_dir, write_file
from .paths import feature_dir
from .templates import TemplateRenderer, default_renderer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Plan & result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GenerationTarget:
    """One file to produce: a project-relative POSIX path and its content."""

    path: PurePosixPath
    content: str


class GenerationStatus(str, Enum):
    SUCCESS = "success"
    DRY_RUN = "dry_run"
    PRECONDITION_FAILED = "precondition_failed"
    VALIDATION_FAILED = "validation_failed"


class GenerationResult(BaseModel):
    """Outcome of one generator invocation."""

    kind: str
    name: str = ""
    status: GenerationStatus = GenerationStatus.SUCCESS
    paths: list[str] = Field(
        default_factory=list,
        description="Planned or written paths, in write order",
    )
    error: str | None = None
    hint: str | None = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status in (GenerationStatus.SUCCESS, GenerationStatus.DRY_RUN)


# ---------------------------------------------------------------------------
# BaseGenerator
# ---------------------------------------------------------------------------


class BaseGenerator:
    """Common state and the plan/write cycle of all generators."""

    kind: str = "component"

    def __init__(
        self,
        config: FlgConfig,
        project_root: str | Path,
        *,
        options: RunOptions | None = None,
        reporter: Reporter | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.project_root = Path(project_root)
        self.options = options or RunOptions()
        self.reporter = reporter or Reporter(self.options)
        self.renderer = renderer or default_renderer()

    @property
    def dry_run(self) -> bool:
        return self.options.dry_run

    # -- Preconditions -----------------------------------------------------

    def feature_exists(self, feature: str) -> bool:
        return (self.project_root / feature_dir(feature)).is_dir()

    def require_feature(self, feature: str, name: str = "") -> GenerationResult | None:
        """Return a failed result (and report it) when *feature* is missing."""
        if self.feature_exists(feature):
            return None
        error = f'Feature "{feature}" does not exist.'
        hint = f'Run "flg generate feature {feature}" first.'
        self.reporter.error(error)
        self.reporter.info(hint)
        return GenerationResult(
            kind=self.kind,
            name=name or feature,
            status=GenerationStatus.PRECONDITION_FAILED,
            error=error,
            hint=hint,
        )

    # -- Plan execution ----------------------------------------------------

    async def emit(
        self,
        name: str,
        targets: Sequence[GenerationTarget],
        *,
        directories: Iterable[PurePosixPath] = (),
        warnings: Iterable[str] = (),
    ) -> GenerationResult:
        """Report (dry run) or write *targets* in order.

        *directories* are created before any file is written, so empty layer
        directories exist even when nothing is placed in them.
        """
        paths = [target.path.as_posix() for target in targets]
        warning_list = list(warnings)
        for warning in warning_list:
            self.reporter.warning(warning)

        if self.dry_run:
            for path in paths:
                self.reporter.planned(path)
            return GenerationResult(
                kind=self.kind,
                name=name,
                status=GenerationStatus.DRY_RUN,
                paths=paths,
                warnings=warning_list,
            )

        for directory in directories:
            await asyncio.to_thread(ensure_dir, self.project_root / directory)

        for target in targets:
            destination = self.project_root / target.path
            await write_file(destination, target.content)
            logger.debug("Wrote %s (%d bytes)", destination, len(target.content))
            self.reporter.created(target.path.as_posix())

        return GenerationResult(
            kind=self.kind,
            name=name,
            status=GenerationStatus.SUCCESS,
            paths=paths,
            warnings=warning_list,
        )
