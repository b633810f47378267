"""Variant lookup tables for state management and routing.

Each supported state-management style and router is described once here.
Generators never branch on the enum themselves; they look the strategy up in
``STATE_STRATEGIES`` / ``ROUTER_STRATEGIES`` and use its templates, provider
file list and pubspec dependencies.  Supporting a new variant means adding
one entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import FlgConfig, RouterOption, StateManagement
from .paths import ComponentKind


@dataclass(frozen=True)
class ProviderFile:
    """One presentation-layer file written for a provider family."""

    kind: ComponentKind
    template: str


@dataclass(frozen=True)
class StateStrategy:
    """Everything that differs between state-management variants."""

    variant: StateManagement
    label: str
    screen_template: str
    main_template: str
    provider_files: tuple[ProviderFile, ...]
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)

    @property
    def primary_kind(self) -> ComponentKind:
        """Kind of the main provider file (notifier, bloc or provider)."""
        return self.provider_files[0].kind


@dataclass(frozen=True)
class RouterStrategy:
    variant: RouterOption
    label: str
    router_template: str
    snippet_template: str
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)


STATE_STRATEGIES: dict[StateManagement, StateStrategy] = {
    StateManagement.RIVERPOD: StateStrategy(
        variant=StateManagement.RIVERPOD,
        label="Riverpod (code generation)",
        screen_template="screen/riverpod_screen.dart.j2",
        main_template="core/main_riverpod.dart.j2",
        provider_files=(
            ProviderFile(ComponentKind.NOTIFIER, "state/riverpod_notifier.dart.j2"),
            ProviderFile(ComponentKind.STATE, "state/riverpod_state.dart.j2"),
        ),
        dependencies={
            "flutter_riverpod": "^2.4.9",
            "riverpod_annotation": "^2.3.3",
        },
        dev_dependencies={"riverpod_generator": "^2.3.9"},
    ),
    StateManagement.BLOC: StateStrategy(
        variant=StateManagement.BLOC,
        label="BLoC",
        screen_template="screen/bloc_screen.dart.j2",
        main_template="core/main_bloc.dart.j2",
        provider_files=(
            ProviderFile(ComponentKind.BLOC, "state/bloc.dart.j2"),
            ProviderFile(ComponentKind.EVENT, "state/bloc_event.dart.j2"),
            ProviderFile(ComponentKind.STATE, "state/bloc_state.dart.j2"),
        ),
        dependencies={"flutter_bloc": "^8.1.3"},
    ),
    StateManagement.PROVIDER: StateStrategy(
        variant=StateManagement.PROVIDER,
        label="Provider (ChangeNotifier)",
        screen_template="screen/provider_screen.dart.j2",
        main_template="core/main_provider.dart.j2",
        provider_files=(
            ProviderFile(ComponentKind.CHANGE_NOTIFIER, "state/change_notifier.dart.j2"),
        ),
        dependencies={"provider": "^6.1.1"},
    ),
}

ROUTER_STRATEGIES: dict[RouterOption, RouterStrategy] = {
    RouterOption.GO_ROUTER: RouterStrategy(
        variant=RouterOption.GO_ROUTER,
        label="GoRouter",
        router_template="core/app_router_go.dart.j2",
        snippet_template="core/route_snippet_go.dart.j2",
        dependencies={"go_router": "^13.0.1"},
    ),
    RouterOption.AUTO_ROUTE: RouterStrategy(
        variant=RouterOption.AUTO_ROUTE,
        label="AutoRoute",
        router_template="core/app_router_auto.dart.j2",
        snippet_template="core/route_snippet_auto.dart.j2",
        dependencies={"auto_route": "^7.8.4"},
        dev_dependencies={"auto_route_generator": "^7.3.2"},
    ),
}

# ---------------------------------------------------------------------------
# Shared pubspec dependencies
# ---------------------------------------------------------------------------

CORE_DEPENDENCIES: dict[str, str] = {
    "equatable": "^2.0.5",
    "dartz": "^0.10.1",
}
FREEZED_DEPENDENCIES: dict[str, str] = {"freezed_annotation": "^2.4.1"}
FREEZED_DEV_DEPENDENCIES: dict[str, str] = {
    "freezed": "^2.4.6",
    "json_serializable": "^6.7.1",
}
DIO_DEPENDENCIES: dict[str, str] = {"dio": "^5.4.0"}
HTTP_DEPENDENCIES: dict[str, str] = {"http": "^1.1.2"}
L10N_DEPENDENCIES: dict[str, str] = {"intl": "^0.18.1"}
CORE_DEV_DEPENDENCIES: dict[str, str] = {
    "flutter_lints": "^3.0.1",
    "build_runner": "^2.4.8",
    "mocktail": "^1.0.1",
}


def state_strategy(config: FlgConfig) -> StateStrategy:
    return STATE_STRATEGIES[config.state_management]


def router_strategy(config: FlgConfig) -> RouterStrategy:
    return ROUTER_STRATEGIES[config.router]


def project_dependencies(config: FlgConfig) -> tuple[dict[str, str], dict[str, str]]:
    """Return ``(dependencies, dev_dependencies)`` for *config*'s pubspec.

    Order: core packages, state management, router, data classes, HTTP
    client, localisation.  ``flutter`` / ``flutter_test`` SDK entries are
    written by the pubspec template itself.
    """
    state = state_strategy(config)
    router = router_strategy(config)

    deps: dict[str, str] = dict(CORE_DEPENDENCIES)
    deps.update(state.dependencies)
    deps.update(router.dependencies)
    if config.use_freezed:
        deps.update(FREEZED_DEPENDENCIES)
    deps.update(DIO_DEPENDENCIES if config.use_dio_client else HTTP_DEPENDENCIES)
    if config.l10n:
        deps.update(L10N_DEPENDENCIES)

    dev_deps: dict[str, str] = dict(state.dev_dependencies)
    dev_deps.update(router.dev_dependencies)
    if config.use_freezed:
        dev_deps.update(FREEZED_DEV_DEPENDENCIES)
    dev_deps.update(CORE_DEV_DEPENDENCIES)
    return deps, dev_deps
