"""Project-level scaffolding orchestrators.

``ProjectGenerator`` backs ``flg init``: it runs ``flutter create`` and then
lays the Clean Architecture skeleton, core files, ``main.dart`` and the
configured features over the fresh project.  ``SetupGenerator`` backs
``flg setup`` and retrofits the same structure into an existing Flutter
project, merging the required packages into its ``pubspec.yaml``.

Both finish by saving ``flg.json`` and running ``flutter pub get`` plus
``build_runner`` when code generation is needed.  Tool failures are reported
as warnings; files already written stay on disk.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from ..config import ConfigStore, FlgConfig, RunOptions
from ..utils import Reporter, write_file
from . import renderers
from .base import BaseGenerator, GenerationResult, GenerationStatus, GenerationTarget
from .feature_gen import FeatureGenerator
from .paths import (
    CONFIG_PATH,
    CORE_DIRECTORIES,
    DEFAULT_ARB_PATH,
    L10N_CONFIG_PATH,
    PUBSPEC_PATH,
    CoreFile,
    core_path,
    feature_directories,
)
from .strategies import project_dependencies
from .templates import TemplateRenderer
from .tools import ToolResult, ToolRunner

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shared planning helpers
# ---------------------------------------------------------------------------


def core_targets(config: FlgConfig, renderer: TemplateRenderer) -> list[GenerationTarget]:
    """Error types, use-case base, router and API client under ``lib/core``."""
    return [
        GenerationTarget(
            core_path(CoreFile.EXCEPTIONS), renderers.render_exceptions(config, renderer=renderer)
        ),
        GenerationTarget(
            core_path(CoreFile.FAILURES), renderers.render_failures(config, renderer=renderer)
        ),
        GenerationTarget(
            core_path(CoreFile.USECASE_BASE),
            renderers.render_usecase_base(config, renderer=renderer),
        ),
        GenerationTarget(
            core_path(CoreFile.ROUTER), renderers.render_router(config, renderer=renderer)
        ),
        GenerationTarget(
            core_path(CoreFile.API_CLIENT), renderers.render_api_client(config, renderer=renderer)
        ),
    ]


def feature_names(config: FlgConfig) -> list[str]:
    """Configured features to scaffold, without blanks or repeats."""
    return [names.raw for names in renderers.unique_features(config)]


def _load_pubspec(project_root: str | Path) -> Any:
    pubspec = Path(project_root) / PUBSPEC_PATH
    if not pubspec.is_file():
        return None
    try:
        return yaml.safe_load(pubspec.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.warning("Cannot parse %s: %s", pubspec, exc)
        return None


def read_project_name(project_root: str | Path) -> str | None:
    """Return the ``name`` of ``pubspec.yaml`` in *project_root*, if readable."""
    data = _load_pubspec(project_root)
    if not isinstance(data, dict):
        return None
    name = data.get("name")
    return str(name) if name else None


def _section_keys(data: Any, section: str) -> set[str]:
    if not isinstance(data, dict) or not isinstance(data.get(section), dict):
        return set()
    return {str(key) for key in data[section]}


def declared_dependencies(project_root: str | Path) -> set[str]:
    """Package names listed under ``dependencies`` in the project pubspec."""
    return _section_keys(_load_pubspec(project_root), "dependencies")


def merge_pubspec_dependencies(
    text: str,
    dependencies: dict[str, str],
    dev_dependencies: dict[str, str],
) -> tuple[str, list[str], list[str]]:
    """Insert the packages missing from pubspec *text*.

    New entries are placed right below the ``dependencies:`` /
    ``dev_dependencies:`` headers; a missing ``dev_dependencies`` section is
    appended.  Existing entries are left untouched.

    Returns:
        ``(updated_text, added, added_dev)``.
    """
    data = yaml.safe_load(text) or {}
    existing = _section_keys(data, "dependencies")
    existing_dev = _section_keys(data, "dev_dependencies")

    added = [name for name in dependencies if name not in existing]
    added_dev = [name for name in dev_dependencies if name not in existing_dev]

    def insert(content: str, header: str, block: str) -> str | None:
        match = re.search(rf"^{header}:[ \t]*\n", content, re.MULTILINE)
        if match is None:
            return None
        return content[: match.end()] + block + content[match.end() :]

    updated = text
    if added:
        block = "".join(f"  {name}: {dependencies[name]}\n" for name in added)
        result = insert(updated, "dependencies", block)
        if result is None:
            updated = updated.rstrip("\n") + f"\n\ndependencies:\n{block}"
        else:
            updated = result
    if added_dev:
        block = "".join(f"  {name}: {dev_dependencies[name]}\n" for name in added_dev)
        result = insert(updated, "dev_dependencies", block)
        if result is None:
            updated = updated.rstrip("\n") + f"\n\ndev_dependencies:\n{block}"
        else:
            updated = result
    return updated, added, added_dev


class _ProjectGeneratorBase(BaseGenerator):
    """Validation, tool runs and feature planning shared by init and setup."""

    def __init__(
        self,
        config: FlgConfig,
        project_root: str | Path,
        *,
        options: RunOptions | None = None,
        reporter: Reporter | None = None,
        renderer: TemplateRenderer | None = None,
        tools: ToolRunner | None = None,
        store: ConfigStore | None = None,
    ) -> None:
        super().__init__(
            config, project_root, options=options, reporter=reporter, renderer=renderer
        )
        self.tools = tools or ToolRunner()
        self.store = store or ConfigStore()
        self.warnings: list[str] = []

    def _validation_failure(self) -> GenerationResult | None:
        errors = self.config.violations()
        if not errors:
            return None
        self.reporter.error("Configuration validation failed:")
        for error in errors:
            self.reporter.error(f"  - {error}")
        return GenerationResult(
            kind=self.kind,
            name=self.config.project_name,
            status=GenerationStatus.VALIDATION_FAILED,
            error="; ".join(errors),
        )

    def _feature_generator(self) -> FeatureGenerator:
        return FeatureGenerator(
            self.config,
            self.project_root,
            options=self.options,
            reporter=self.reporter,
            renderer=self.renderer,
        )

    def _feature_plan(self) -> tuple[list[GenerationTarget], list[PurePosixPath]]:
        generator = self._feature_generator()
        targets: list[GenerationTarget] = []
        directories: list[PurePosixPath] = []
        for feature in feature_names(self.config):
            targets.extend(generator.plan(feature))
            directories.extend(feature_directories(feature))
        return targets, directories

    def _config_target(self) -> GenerationTarget:
        return GenerationTarget(CONFIG_PATH, self.config.to_json())

    def _tool_warning(self, result: ToolResult, hint: str) -> None:
        if result.ok:
            return
        message = f"{result.failure_message()}. {hint}"
        self.warnings.append(message)
        self.reporter.warning(message)
        if result.stderr:
            self.reporter.detail(result.stderr)

    async def _run_post_tools(self) -> None:
        self.reporter.step("Running flutter pub get...")
        pub_get = await self.tools.pub_get(self.project_root)
        self._tool_warning(pub_get, 'Run "flutter pub get" manually.')
        if pub_get.ok:
            self.reporter.success("Dependencies installed")

        if self.config.needs_code_generation:
            self.reporter.step("Running build_runner...")
            build = await self.tools.build_runner(self.project_root)
            self._tool_warning(
                build, 'Run "dart run build_runner build --delete-conflicting-outputs" manually.'
            )
            if build.ok:
                self.reporter.success("Code generation complete")

    def _finish(self, result: GenerationResult) -> GenerationResult:
        return result.model_copy(update={"warnings": [*result.warnings, *self.warnings]})

    def _print_next_steps(self, *steps: str) -> None:
        self.reporter.info("")
        self.reporter.info("Next steps:")
        for step in steps:
            self.reporter.step(step)


# ---------------------------------------------------------------------------
# flg init
# ---------------------------------------------------------------------------


class ProjectGenerator(_ProjectGeneratorBase):
    """Creates a new Flutter project with Clean Architecture.

    The project is created as ``<output_dir>/<project_name>``.
    """

    kind = "project"

    def __init__(
        self,
        config: FlgConfig,
        output_dir: str | Path,
        *,
        options: RunOptions | None = None,
        reporter: Reporter | None = None,
        renderer: TemplateRenderer | None = None,
        tools: ToolRunner | None = None,
        store: ConfigStore | None = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        super().__init__(
            config,
            self.output_dir / config.project_name,
            options=options,
            reporter=reporter,
            renderer=renderer,
            tools=tools,
            store=store,
        )

    def plan(self) -> tuple[list[GenerationTarget], list[PurePosixPath]]:
        """Files in write order plus the directories to create first.

        ``flg.json`` comes last; it is written by the config store.
        """
        config, r = self.config, self.renderer
        targets = [GenerationTarget(PUBSPEC_PATH, renderers.render_pubspec(config, renderer=r))]
        if config.l10n:
            targets.append(
                GenerationTarget(L10N_CONFIG_PATH, renderers.render_l10n_yaml(config, renderer=r))
            )
            targets.append(
                GenerationTarget(DEFAULT_ARB_PATH, renderers.render_default_arb(config, renderer=r))
            )
        targets.extend(core_targets(config, r))
        targets.append(
            GenerationTarget(core_path(CoreFile.MAIN), renderers.render_main(config, renderer=r))
        )

        feature_targets, feature_dirs = self._feature_plan()
        targets.extend(feature_targets)
        targets.append(self._config_target())
        return targets, [*CORE_DIRECTORIES, *feature_dirs]

    async def generate(self) -> GenerationResult:
        failed = self._validation_failure()
        if failed is not None:
            return failed

        self.reporter.header(f"Creating project: {self.config.project_name}")
        targets, directories = self.plan()

        if self.dry_run:
            self.reporter.info("Dry run mode - no files will be created")
            return await self.emit(self.config.project_name, targets)

        if self.project_root.exists() and not self.options.force:
            error = f'Directory "{self.config.project_name}" already exists.'
            hint = "Use --force to generate into the existing directory."
            self.reporter.error(error)
            self.reporter.info(hint)
            return GenerationResult(
                kind=self.kind,
                name=self.config.project_name,
                status=GenerationStatus.PRECONDITION_FAILED,
                error=error,
                hint=hint,
            )

        self.reporter.step("Running flutter create...")
        created = await self.tools.flutter_create(self.config, self.output_dir)
        self._tool_warning(created, "Continuing with the generated sources only.")
        if created.ok:
            self.reporter.success("Flutter project created")

        self.reporter.step("Generating project files...")
        result = await self.emit(self.config.project_name, targets[:-1], directories=directories)
        self.store.save(self.project_root, self.config)
        self.reporter.created(CONFIG_PATH.as_posix())
        result = result.model_copy(update={"paths": [*result.paths, CONFIG_PATH.as_posix()]})

        await self._run_post_tools()

        self.reporter.info("")
        self.reporter.success("Project created successfully!")
        self._print_next_steps(f"cd {self.config.project_name}", "flutter run")
        return self._finish(result)


# ---------------------------------------------------------------------------
# flg setup
# ---------------------------------------------------------------------------


class SetupGenerator(_ProjectGeneratorBase):
    """Adds the Clean Architecture structure to an existing Flutter project."""

    kind = "setup"

    def __init__(self, *args: Any, skip_deps: bool = False, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.skip_deps = skip_deps

    def _merged_pubspec(self) -> tuple[str, list[str], list[str]] | None:
        if self.skip_deps:
            return None
        text = (self.project_root / PUBSPEC_PATH).read_text(encoding="utf-8")
        dependencies, dev_dependencies = project_dependencies(self.config)
        return merge_pubspec_dependencies(text, dependencies, dev_dependencies)

    def plan(self) -> tuple[list[GenerationTarget], list[PurePosixPath]]:
        """Files in write order: pubspec (when changed), core, ``flg.json``, features."""
        targets: list[GenerationTarget] = []
        merged = self._merged_pubspec()
        if merged is not None and (merged[1] or merged[2]):
            targets.append(GenerationTarget(PUBSPEC_PATH, merged[0]))
        targets.extend(core_targets(self.config, self.renderer))
        targets.append(self._config_target())
        feature_targets, feature_dirs = self._feature_plan()
        targets.extend(feature_targets)
        return targets, [*CORE_DIRECTORIES, *feature_dirs]

    async def generate(self) -> GenerationResult:
        if not (self.project_root / PUBSPEC_PATH).is_file():
            error = "No pubspec.yaml found in current directory."
            hint = 'Run this command from a Flutter project root, or use "flg init <project_name>".'
            self.reporter.error(error)
            self.reporter.info(hint)
            return GenerationResult(
                kind=self.kind,
                name=self.config.project_name,
                status=GenerationStatus.PRECONDITION_FAILED,
                error=error,
                hint=hint,
            )

        failed = self._validation_failure()
        if failed is not None:
            return failed

        self.reporter.header(f"Setting up flg for: {self.config.project_name}")
        targets, _ = self.plan()
        if self.dry_run:
            self.reporter.info("Dry run mode - no files will be modified")
            return await self.emit(self.config.project_name, targets)

        paths: list[str] = []
        pubspec = next((target for target in targets if target.path == PUBSPEC_PATH), None)
        if pubspec is not None:
            self.reporter.step("Adding dependencies to pubspec.yaml...")
            await write_file(self.project_root / PUBSPEC_PATH, pubspec.content)
            paths.append(PUBSPEC_PATH.as_posix())
            self.reporter.success("Dependencies added to pubspec.yaml")
        elif not self.skip_deps:
            self.reporter.success("All dependencies already present")

        self.reporter.step("Generating core files...")
        result = await self.emit(
            self.config.project_name,
            core_targets(self.config, self.renderer),
            directories=CORE_DIRECTORIES,
        )
        paths.extend(result.paths)

        self.store.save(self.project_root, self.config)
        self.reporter.created(CONFIG_PATH.as_posix())
        paths.append(CONFIG_PATH.as_posix())

        features = self._feature_generator()
        for feature in feature_names(self.config):
            feature_result = await features.generate(feature)
            paths.extend(feature_result.paths)

        await self._run_post_tools()

        self.reporter.info("")
        self.reporter.success("flg setup completed!")
        self._print_next_steps(
            "flg g f <feature_name>  - Generate a new feature",
            "flg g s <screen_name> --feature <feature>  - Generate a screen",
            "flutter run",
        )
        return self._finish(result.model_copy(update={"paths": paths}))
