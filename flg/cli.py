"""Command-line entry point for ``flg``.

Usage::

    flg init shop_app --state bloc -p android -p web --feature product -s
    flg setup --skip-deps
    flg generate feature product
    flg g screen product_detail --feature product
    flg g usecase order --feature order --crud
    flg info

Every command builds an explicit ``RunOptions`` from its flags and threads it
(with a ``Reporter``) into the generators.  Exit codes: 0 on success, 1 on a
validation / precondition failure or an unhandled error, 2 on a usage error.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import (
    ConfigStore,
    FlgConfig,
    FlgError,
    Platform,
    RouterOption,
    RunOptions,
    StateManagement,
)
from .prompts import Prompter, prompt_for_existing_project, prompt_for_new_project
from .scaffolder import (
    FeatureGenerator,
    GenerationResult,
    GenerationStatus,
    ProjectGenerator,
    ProviderGenerator,
    RepositoryGenerator,
    ScreenGenerator,
    SetupGenerator,
    UseCaseGenerator,
    WidgetGenerator,
    WidgetType,
    read_project_name,
)
from .utils import Reporter


EXIT_OK = 0
EXIT_FAILURE = 1


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _common_flags() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without writing files",
    )
    common.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    common.add_argument(
        "-f", "--force", action="store_true", help="Proceed even if targets already exist"
    )
    common.add_argument(
        "-s",
        "--skip-prompts",
        action="store_true",
        help="Skip interactive prompts and use flags / defaults",
    )
    return common


def _add_config_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--state",
        choices=[s.value for s in StateManagement],
        default=None,
        help="State management solution (default: riverpod)",
    )
    parser.add_argument(
        "--router",
        choices=[r.value for r in RouterOption],
        default=None,
        help="Router solution (default: go_router)",
    )
    parser.add_argument(
        "--freezed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use Freezed for data classes (default: on)",
    )
    parser.add_argument(
        "--dio",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use the Dio HTTP client instead of package:http (default: on)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flg",
        description="flg -- Clean Architecture scaffolding for Flutter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  flg init shop_app --state bloc --feature product\n"
            "  flg setup\n"
            "  flg g feature product\n"
            "  flg g screen product_detail --feature product\n"
            "  flg g usecase order --feature order --crud\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"flg {__version__}")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")

    common = _common_flags()
    commands = parser.add_subparsers(dest="command", metavar="<command>")
    commands.required = True

    # -- init --------------------------------------------------------------
    init = commands.add_parser(
        "init",
        parents=[common],
        help="Create a new Flutter project with Clean Architecture",
    )
    init.add_argument("project_name", help="Dart package name of the new project")
    init.add_argument("-o", "--org", default=None, help="Organization (default: com.example)")
    _add_config_flags(init)
    init.add_argument(
        "-p",
        "--platforms",
        action="append",
        default=None,
        metavar="PLATFORM",
        help=(
            "Target platform, repeatable or comma-separated "
            f"({', '.join(p.value for p in Platform)}; default: android,ios)"
        ),
    )
    init.add_argument("--feature", default=None, help="Initial feature (default: home)")
    init.add_argument(
        "--l10n",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate localization files",
    )
    init.set_defaults(handler=cmd_init)

    # -- setup -------------------------------------------------------------
    setup = commands.add_parser(
        "setup",
        parents=[common],
        help="Set up flg in an existing Flutter project",
    )
    _add_config_flags(setup)
    setup.add_argument("--feature", default=None, help="Initial feature (default: none)")
    setup.add_argument(
        "--skip-deps",
        action="store_true",
        help="Do not add dependencies to pubspec.yaml",
    )
    setup.set_defaults(handler=cmd_setup)

    # -- generate ----------------------------------------------------------
    generate = commands.add_parser(
        "generate", aliases=["g"], help="Generate a component in the current project"
    )
    kinds = generate.add_subparsers(dest="kind", metavar="<kind>")
    kinds.required = True

    def kind_parser(name: str, alias: str, help_text: str, *, scoped: bool = True):
        sub = kinds.add_parser(name, aliases=[alias], parents=[common], help=help_text)
        sub.add_argument("name", help=f"Name of the {name}")
        if scoped:
            sub.add_argument(
                "--feature",
                default=None,
                help="Owning feature (default: first feature in flg.json)",
            )
        sub.set_defaults(handler=cmd_generate, kind=name)
        return sub

    kind_parser("feature", "f", "Generate a complete feature", scoped=False)

    screen = kind_parser("screen", "s", "Generate a screen")
    screen.add_argument(
        "--simple", action="store_true", help="Stateless screen without state management"
    )

    widget = kind_parser("widget", "w", "Generate a widget")
    widget.add_argument(
        "--type",
        dest="widget_type",
        choices=[t.value for t in WidgetType],
        default=WidgetType.STATELESS.value,
        help="Widget variant (default: stateless)",
    )
    widget.add_argument(
        "--entity",
        default=None,
        help="Entity shown by card / list_tile / form widgets (default: the widget name)",
    )

    kind_parser("provider", "p", "Generate state-management files")

    usecase = kind_parser("usecase", "u", "Generate use cases for an entity")
    actions = usecase.add_mutually_exclusive_group()
    actions.add_argument(
        "--action",
        default=None,
        help="Action such as get, getAll, create, update, delete (default: get)",
    )
    actions.add_argument(
        "--crud", action="store_true", help="Generate get, getAll, create, update and delete"
    )

    repository = kind_parser("repository", "r", "Generate a repository")
    repository.add_argument(
        "--no-datasource",
        action="store_true",
        help="Skip the remote data source",
    )
    repository.add_argument(
        "--local",
        action="store_true",
        help="Generate a local (cache) data source instead",
    )

    # -- info --------------------------------------------------------------
    info = commands.add_parser("info", help="Show the configuration of the current project")
    info.set_defaults(handler=cmd_info)

    return parser


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
        force=True,
    )


def _exit_code(result: GenerationResult) -> int:
    return EXIT_OK if result.ok else EXIT_FAILURE


def _interactive(options: RunOptions) -> bool:
    return not options.skip_prompts and sys.stdin.isatty()


def _flatten_platforms(values: list[str] | None) -> list[str] | None:
    if not values:
        return None
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def cmd_init(args: argparse.Namespace, options: RunOptions, reporter: Reporter) -> int:
    flags = {**vars(args), "platforms": _flatten_platforms(args.platforms)}
    config = FlgConfig.from_args(flags)

    if _interactive(options):
        config = prompt_for_new_project(Prompter(reporter.console), args.project_name, config)

    project_root = options.cwd / config.project_name
    if project_root.exists() and not options.dry_run and not options.force:
        if _interactive(options) and Prompter(reporter.console).confirm(
            f'Directory "{config.project_name}" already exists. Generate into it anyway?',
            default=False,
        ):
            options = options.model_copy(update={"force": True})

    generator = ProjectGenerator(config, options.cwd, options=options, reporter=reporter)
    return _exit_code(await generator.generate())


async def cmd_setup(args: argparse.Namespace, options: RunOptions, reporter: Reporter) -> int:
    project_root = options.cwd
    store = ConfigStore()

    project_name = read_project_name(project_root)
    if project_name is None:
        if (project_root / "pubspec.yaml").is_file():
            reporter.error("Could not parse project name from pubspec.yaml")
        else:
            reporter.error("No pubspec.yaml found in current directory.")
            reporter.info(
                'Run this command from a Flutter project root, or use "flg init <project_name>".'
            )
        return EXIT_FAILURE

    if store.exists(project_root) and not options.force:
        reporter.warning(f"{store.file_name} already exists.")
        if not _interactive(options) or not Prompter(reporter.console).confirm(
            "Do you want to reconfigure?", default=False
        ):
            reporter.info(
                'Use "flg g f <feature_name>" to generate features, or --force to reconfigure.'
            )
            return EXIT_OK

    flags = {
        **vars(args),
        "project_name": project_name,
        "features": [args.feature] if args.feature else [],
    }
    config = FlgConfig.from_args(flags)
    if _interactive(options):
        config = prompt_for_existing_project(Prompter(reporter.console), project_name, config)

    generator = SetupGenerator(
        config,
        project_root,
        options=options,
        reporter=reporter,
        store=store,
        skip_deps=args.skip_deps,
    )
    return _exit_code(await generator.generate())


def _load_project(options: RunOptions, reporter: Reporter) -> tuple[Path, FlgConfig, bool]:
    """Return ``(project_root, config, found)`` for a ``generate`` command."""
    store = ConfigStore()
    root = store.find_project_root(options.cwd)
    if root is None:
        reporter.warning(
            f"No {store.file_name} found; using the default configuration in the current directory."
        )
        return options.cwd, FlgConfig(), False
    config = store.load(root)
    if config is None:
        reporter.warning(f"Could not read {store.path_for(root)}; using the default configuration.")
        return root, FlgConfig(), False
    reporter.detail(f"Using configuration from {store.path_for(root)}")
    return root, config, True


async def cmd_generate(args: argparse.Namespace, options: RunOptions, reporter: Reporter) -> int:
    root, config, found = _load_project(options, reporter)
    kwargs: dict[str, Any] = {"options": options, "reporter": reporter}

    if args.kind == "feature":
        result = await FeatureGenerator(config, root, **kwargs).generate(args.name)
        if found and result.status is GenerationStatus.SUCCESS:
            ConfigStore().save(root, config.with_feature(args.name))
        if result.ok and not options.dry_run:
            reporter.success(f'Feature "{args.name}" generated.')
        return _exit_code(result)

    feature = args.feature or (config.features[0] if config.features else None)
    if not feature:
        reporter.error("No feature given and none recorded in flg.json.")
        reporter.info("Pass --feature <name>.")
        return EXIT_FAILURE

    if args.kind == "screen":
        generator = ScreenGenerator(config, root, **kwargs)
        result = await generator.generate(args.name, feature, simple=args.simple)
    elif args.kind == "widget":
        result = await WidgetGenerator(config, root, **kwargs).generate(
            args.name, feature, widget_type=args.widget_type, entity=args.entity
        )
    elif args.kind == "provider":
        result = await ProviderGenerator(config, root, **kwargs).generate(args.name, feature)
    elif args.kind == "usecase":
        usecases = UseCaseGenerator(config, root, **kwargs)
        if args.crud:
            result = await usecases.generate_common(feature, entity=args.name)
        else:
            result = await usecases.generate(args.action or "get", args.name, feature)
    elif args.kind == "repository":
        repositories = RepositoryGenerator(config, root, **kwargs)
        if args.local:
            result = await repositories.generate_local_datasource(args.name, feature)
        else:
            result = await repositories.generate(
                args.name, feature, with_datasource=not args.no_datasource
            )
    else:  # pragma: no cover - argparse restricts the choices
        raise FlgError(f"Unknown component kind: {args.kind}")

    return _exit_code(result)


async def cmd_info(args: argparse.Namespace, options: RunOptions, reporter: Reporter) -> int:
    store = ConfigStore()
    root = store.find_project_root(options.cwd)
    config = store.load(root) if root is not None else None
    if root is None or config is None:
        reporter.error(f"No readable {store.file_name} found.")
        reporter.info('Run "flg init <project_name>" or "flg setup" first.')
        return EXIT_FAILURE

    reporter.table(
        {
            "Project root": str(root),
            "Project name": config.project_name,
            "Organization": config.org,
            "State management": config.state_management.value,
            "Router": config.router.value,
            "Freezed": "yes" if config.use_freezed else "no",
            "HTTP client": "dio" if config.use_dio_client else "http",
            "Platforms": ", ".join(config.platform_strings),
            "Features": ", ".join(config.features) or "-",
            "Localization": "yes" if config.l10n else "no",
        },
        title="flg configuration",
    )
    return EXIT_OK


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, run the selected command and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    options = RunOptions.from_args(args)
    reporter = Reporter(options)
    _configure_logging(options.verbose, reporter.console)

    try:
        return asyncio.run(args.handler(args, options, reporter))
    except (OSError, FlgError) as exc:
        reporter.error(str(exc))
        if options.verbose:
            reporter.console.print_exception()
        return EXIT_FAILURE
    except KeyboardInterrupt:
        reporter.error("Interrupted")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
