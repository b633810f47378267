"""Interactive configuration prompts.

Questions are asked through ``rich.prompt`` on the reporter's console.  The
answers only ever produce a new ``FlgConfig``; validation happens afterwards
exactly as for flag-built configurations.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from .config import FlgConfig, Platform, RouterOption, StateManagement, parse_platforms


STATE_CHOICES: tuple[tuple[StateManagement, str], ...] = (
    (StateManagement.RIVERPOD, "Riverpod (Recommended)"),
    (StateManagement.BLOC, "Bloc"),
    (StateManagement.PROVIDER, "Provider"),
)

ROUTER_CHOICES: tuple[tuple[RouterOption, str], ...] = (
    (RouterOption.GO_ROUTER, "GoRouter (Recommended)"),
    (RouterOption.AUTO_ROUTE, "AutoRoute"),
)


class Prompter:
    """Thin wrapper over ``rich.prompt`` bound to one console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def ask(self, question: str, default: str = "") -> str:
        answer = Prompt.ask(question, default=default, console=self.console)
        return (answer or "").strip()

    def confirm(self, question: str, default: bool = True) -> bool:
        return Confirm.ask(question, default=default, console=self.console)

    def select(self, question: str, options: Sequence[str], default: int = 0) -> int:
        """Show a numbered list and return the zero-based index picked."""
        self.console.print(f"[bold]{question}[/bold]")
        for number, option in enumerate(options, 1):
            self.console.print(f"  {number}) {option}")
        choice = IntPrompt.ask(
            "Enter number",
            choices=[str(number) for number in range(1, len(options) + 1)],
            default=default + 1,
            show_choices=False,
            console=self.console,
        )
        return choice - 1


def _select_value(prompter: Prompter, question: str, choices, current):
    values = [value for value, _ in choices]
    labels = [label for _, label in choices]
    default = values.index(current) if current in values else 0
    return values[prompter.select(question, labels, default)]


def prompt_for_new_project(
    prompter: Prompter, project_name: str, defaults: FlgConfig | None = None
) -> FlgConfig:
    """Ask every ``flg init`` question, starting from *defaults*."""
    defaults = defaults or FlgConfig(project_name=project_name)
    prompter.console.rule("Project Configuration")

    org = prompter.ask("Organization (reverse domain)", defaults.org)
    state = _select_value(
        prompter, "Select state management:", STATE_CHOICES, defaults.state_management
    )
    router = _select_value(prompter, "Select router:", ROUTER_CHOICES, defaults.router)
    use_freezed = prompter.confirm("Use Freezed for data classes?", defaults.use_freezed)
    use_dio = prompter.confirm("Include Dio HTTP client?", defaults.use_dio_client)
    platforms = prompter.ask(
        f"Target platforms ({', '.join(p.value for p in Platform)})",
        ",".join(defaults.platform_strings),
    )
    feature = prompter.ask(
        "Initial feature name", defaults.features[0] if defaults.features else "home"
    )
    l10n = prompter.confirm("Enable localization (l10n)?", defaults.l10n)
    generate_tests = prompter.confirm("Generate test files?", defaults.generate_tests)

    return defaults.model_copy(
        update={
            "project_name": project_name,
            "org": org,
            "state_management": state,
            "router": router,
            "use_freezed": use_freezed,
            "use_dio_client": use_dio,
            "platforms": parse_platforms(platforms),
            "features": (feature,) if feature else (),
            "l10n": l10n,
            "generate_tests": generate_tests,
        }
    )


def prompt_for_existing_project(
    prompter: Prompter, project_name: str, defaults: FlgConfig | None = None
) -> FlgConfig:
    """Ask the ``flg setup`` questions; organisation and platforms are kept."""
    defaults = defaults or FlgConfig(project_name=project_name)
    prompter.console.rule("Project Configuration")

    state = _select_value(
        prompter, "Select state management:", STATE_CHOICES, defaults.state_management
    )
    router = _select_value(prompter, "Select router:", ROUTER_CHOICES, defaults.router)
    use_freezed = prompter.confirm("Use Freezed for data classes?", defaults.use_freezed)
    use_dio = prompter.confirm("Include Dio HTTP client?", defaults.use_dio_client)
    generate_tests = prompter.confirm("Generate test files?", defaults.generate_tests)
    feature = prompter.ask("Initial feature name (leave empty to skip)", "")

    return defaults.model_copy(
        update={
            "project_name": project_name,
            "state_management": state,
            "router": router,
            "use_freezed": use_freezed,
            "use_dio_client": use_dio,
            "generate_tests": generate_tests,
            "features": (feature,) if feature else (),
        }
    )
