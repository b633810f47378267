"""Per-kind render functions producing Dart source text.

Every function is pure: it maps component names, the project configuration
and a few keyword options to a string, choosing template variants through the
strategy tables.  Nothing here reads or writes files.

Feature-internal references are relative imports; references into
``lib/core`` use ``package:<projectName>/...`` imports built from the
configuration, so the output compiles wherever the feature lives.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

from ..config import FlgConfig
from ..naming import ComponentNames, to_pascal_case, to_snake_case
from .paths import ComponentKind, CoreFile, core_path, package_import
from .strategies import project_dependencies, router_strategy, state_strategy
from .templates import TemplateRenderer, default_renderer


# ---------------------------------------------------------------------------
# Entity properties
# ---------------------------------------------------------------------------


class Property(NamedTuple):
    """A field of a generated entity / model (``DateTime?`` marks optional)."""

    type: str
    name: str
    json_key: str | None = None

    @property
    def optional(self) -> bool:
        return self.type.endswith("?")

    @property
    def is_datetime(self) -> bool:
        return self.type.startswith("DateTime")

    @property
    def key(self) -> str:
        return self.json_key or self.name


DEFAULT_PROPERTIES: tuple[Property, ...] = (
    Property("String", "id"),
    Property("String", "name"),
    Property("DateTime", "createdAt", "created_at"),
    Property("DateTime?", "updatedAt", "updated_at"),
)


# ---------------------------------------------------------------------------
# Use-case action table
# ---------------------------------------------------------------------------


class ParamField(NamedTuple):
    type: str
    name: str


class _ActionRule(NamedTuple):
    repository_call: str
    returns: str  # "entity", "list" or "void"
    param: str | None  # "id", "entity" or None for NoParams


_GET_ALL = _ActionRule("getAll()", "list", None)

USECASE_ACTIONS: dict[str, _ActionRule] = {
    "get": _ActionRule("getById(params.id)", "entity", "id"),
    "getall": _GET_ALL,
    "get_all": _GET_ALL,
    "list": _GET_ALL,
    "create": _ActionRule("create(params.entity)", "entity", "entity"),
    "update": _ActionRule("update(params.entity)", "entity", "entity"),
    "delete": _ActionRule("delete(params.id)", "void", "id"),
}

COMMON_USECASE_ACTIONS: tuple[str, ...] = ("get", "getAll", "create", "update", "delete")


@dataclass(frozen=True)
class UseCaseShape:
    """Signature details of one generated use case."""

    repository_call: str
    return_type: str
    params_type: str
    params_fields: tuple[ParamField, ...]
    known_action: bool


def is_known_action(action: str) -> bool:
    return _lookup_action(action) is not None


def _lookup_action(action: str) -> _ActionRule | None:
    return USECASE_ACTIONS.get(action.lower()) or USECASE_ACTIONS.get(to_snake_case(action))


def usecase_shape(action: str, entity: ComponentNames) -> UseCaseShape:
    """Map *action* onto a repository call for *entity*.

    Unknown actions are passed through verbatim as ``<action>(params)`` with
    ``NoParams``; ``known_action`` is then ``False``.
    """
    rule = _lookup_action(action)
    entity_type = f"{entity.pascal}Entity"
    if rule is None:
        return UseCaseShape(
            repository_call=f"{action}(params)",
            return_type=entity_type,
            params_type="NoParams",
            params_fields=(),
            known_action=False,
        )

    return_type = {
        "entity": entity_type,
        "list": f"List<{entity_type}>",
        "void": "void",
    }[rule.returns]

    if rule.param is None:
        return UseCaseShape(rule.repository_call, return_type, "NoParams", (), True)

    field_type = "String" if rule.param == "id" else entity_type
    return UseCaseShape(
        repository_call=rule.repository_call,
        return_type=return_type,
        params_type=f"{to_pascal_case(action)}{entity.pascal}Params",
        params_fields=(ParamField(field_type, rule.param),),
        known_action=True,
    )


# ---------------------------------------------------------------------------
# Widget variants
# ---------------------------------------------------------------------------


class WidgetType(str, Enum):
    STATELESS = "stateless"
    STATEFUL = "stateful"
    CARD = "card"
    LIST_TILE = "list_tile"
    FORM = "form"


WIDGET_VARIANTS: dict[WidgetType, tuple[ComponentKind, str]] = {
    WidgetType.STATELESS: (ComponentKind.WIDGET, "widget/stateless.dart.j2"),
    WidgetType.STATEFUL: (ComponentKind.WIDGET, "widget/stateful.dart.j2"),
    WidgetType.CARD: (ComponentKind.CARD, "widget/card.dart.j2"),
    WidgetType.LIST_TILE: (ComponentKind.LIST_TILE, "widget/list_tile.dart.j2"),
    WidgetType.FORM: (ComponentKind.FORM, "widget/form.dart.j2"),
}


def widget_kind(widget_type: WidgetType) -> ComponentKind:
    return WIDGET_VARIANTS[widget_type][0]


# ---------------------------------------------------------------------------
# Context helpers
# ---------------------------------------------------------------------------


def _core_imports(config: FlgConfig) -> dict[str, str]:
    package = config.project_name
    return {
        "exceptions": package_import(package, core_path(CoreFile.EXCEPTIONS)),
        "failures": package_import(package, core_path(CoreFile.FAILURES)),
        "usecase_base": package_import(package, core_path(CoreFile.USECASE_BASE)),
    }


def _context(config: FlgConfig, **values: Any) -> dict[str, Any]:
    return {
        "config": config,
        "package": config.project_name,
        "imports": _core_imports(config),
        **values,
    }


def _renderer(renderer: TemplateRenderer | None) -> TemplateRenderer:
    return renderer or default_renderer()


def unique_features(config: FlgConfig) -> list[ComponentNames]:
    """Configured features as names, first occurrence of each snake name."""
    seen: set[str] = set()
    result: list[ComponentNames] = []
    for feature in config.features:
        names = ComponentNames.from_name(feature)
        if names.snake and names.snake not in seen:
            seen.add(names.snake)
            result.append(names)
    return result


# ---------------------------------------------------------------------------
# Domain layer
# ---------------------------------------------------------------------------


def render_entity(
    names: ComponentNames,
    config: FlgConfig,
    *,
    properties: Sequence[Property] | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    return _renderer(renderer).render(
        "feature/entity.dart.j2",
        _context(config, names=names, properties=list(properties or DEFAULT_PROPERTIES)),
    )


def render_repository(
    names: ComponentNames,
    config: FlgConfig,
    *,
    renderer: TemplateRenderer | None = None,
) -> str:
    return _renderer(renderer).render("feature/repository.dart.j2", _context(config, names=names))


def render_usecase(
    names: ComponentNames,
    config: FlgConfig,
    *,
    action: str,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the ``<Action><Entity>UseCase`` class for entity *names*."""
    shape = usecase_shape(action, names)
    return _renderer(renderer).render(
        "feature/usecase.dart.j2",
        _context(config, names=names, action=ComponentNames.from_name(action), shape=shape),
    )


def render_common_usecases(
    names: ComponentNames,
    config: FlgConfig,
    *,
    renderer: TemplateRenderer | None = None,
) -> list[tuple[str, str]]:
    """Render get / getAll / create / update / delete as ``(action, source)``."""
    return [
        (action, render_usecase(names, config, action=action, renderer=renderer))
        for action in COMMON_USECASE_ACTIONS
    ]


# ---------------------------------------------------------------------------
# Data layer
# ---------------------------------------------------------------------------


def render_model(
    names: ComponentNames,
    config: FlgConfig,
    *,
    properties: Sequence[Property] | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Freezed model when ``use_freezed`` is set, hand-written otherwise."""
    return _renderer(renderer).render(
        "feature/model.dart.j2",
        _context(config, names=names, properties=list(properties or DEFAULT_PROPERTIES)),
    )


def render_repository_impl(
    names: ComponentNames,
    config: FlgConfig,
    *,
    renderer: TemplateRenderer | None = None,
) -> str:
    return _renderer(renderer).render(
        "feature/repository_impl.dart.j2", _context(config, names=names)
    )


def render_remote_datasource(
    names: ComponentNames,
    config: FlgConfig,
    *,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Dio-backed when ``use_dio_client`` is set, ``package:http`` otherwise."""
    template = (
        "feature/remote_datasource_dio.dart.j2"
        if config.use_dio_client
        else "feature/remote_datasource_http.dart.j2"
    )
    return _renderer(renderer).render(template, _context(config, names=names))


def render_local_datasource(
    names: ComponentNames,
    config: FlgConfig,
    *,
    renderer: TemplateRenderer | None = None,
) -> str:
    return _renderer(renderer).render(
        "feature/local_datasource.dart.j2", _context(config, names=names)
    )


# ---------------------------------------------------------------------------
# Presentation layer
# ---------------------------------------------------------------------------


def render_screen(
    names: ComponentNames,
    config: FlgConfig,
    *,
    feature: ComponentNames | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Screen bound to *feature*'s provider family (defaults to *names*)."""
    template = state_strategy(config).screen_template
    return _renderer(renderer).render(
        template, _context(config, names=names, feature=feature or names)
    )


def render_simple_screen(
    names: ComponentNames,
    config: FlgConfig,
    *,
    renderer: TemplateRenderer | None = None,
) -> str:
    return _renderer(renderer).render("screen/simple_screen.dart.j2", _context(config, names=names))


def render_route_snippet(
    names: ComponentNames,
    config: FlgConfig,
    *,
    feature: ComponentNames,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Route entry to paste into ``app_router.dart`` for a new screen."""
    template = router_strategy(config).snippet_template
    return _renderer(renderer).render(
        template, _context(config, names=names, feature=feature)
    )


def render_provider_files(
    names: ComponentNames,
    config: FlgConfig,
    *,
    renderer: TemplateRenderer | None = None,
) -> list[tuple[ComponentKind, str]]:
    """Render the provider family of the configured state management.

    Returns ``(kind, source)`` pairs in write order, e.g. notifier then state
    for Riverpod, or bloc, event, state for BLoC.
    """
    r = _renderer(renderer)
    context = _context(config, names=names)
    return [
        (provider_file.kind, r.render(provider_file.template, context))
        for provider_file in state_strategy(config).provider_files
    ]


def render_widget(
    names: ComponentNames,
    config: FlgConfig,
    *,
    widget_type: WidgetType = WidgetType.STATELESS,
    entity: ComponentNames | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render a widget; card, list tile and form display *entity* (defaults to *names*)."""
    _, template = WIDGET_VARIANTS[WidgetType(widget_type)]
    return _renderer(renderer).render(
        template, _context(config, names=names, entity=entity or names)
    )


# ---------------------------------------------------------------------------
# Core and project files
# ---------------------------------------------------------------------------


def render_exceptions(config: FlgConfig, *, renderer: TemplateRenderer | None = None) -> str:
    return _renderer(renderer).render("core/exceptions.dart.j2", _context(config))


def render_failures(config: FlgConfig, *, renderer: TemplateRenderer | None = None) -> str:
    return _renderer(renderer).render("core/failures.dart.j2", _context(config))


def render_usecase_base(config: FlgConfig, *, renderer: TemplateRenderer | None = None) -> str:
    return _renderer(renderer).render("core/usecase.dart.j2", _context(config))


def render_api_client(config: FlgConfig, *, renderer: TemplateRenderer | None = None) -> str:
    return _renderer(renderer).render("core/api_client.dart.j2", _context(config))


def render_router(config: FlgConfig, *, renderer: TemplateRenderer | None = None) -> str:
    """``app_router.dart`` with one route per configured feature.

    The first feature is mounted at ``/``; the rest at ``/<feature>``.
    """
    return _renderer(renderer).render(
        router_strategy(config).router_template,
        _context(config, features=unique_features(config)),
    )


def render_main(config: FlgConfig, *, renderer: TemplateRenderer | None = None) -> str:
    return _renderer(renderer).render(
        state_strategy(config).main_template,
        _context(config, app_name=to_pascal_case(config.project_name)),
    )


def render_pubspec(config: FlgConfig, *, renderer: TemplateRenderer | None = None) -> str:
    dependencies, dev_dependencies = project_dependencies(config)
    return _renderer(renderer).render(
        "project/pubspec.yaml.j2",
        _context(config, dependencies=dependencies, dev_dependencies=dev_dependencies),
    )


def render_l10n_yaml(config: FlgConfig, *, renderer: TemplateRenderer | None = None) -> str:
    return _renderer(renderer).render("project/l10n.yaml.j2", _context(config))


def render_default_arb(config: FlgConfig, *, renderer: TemplateRenderer | None = None) -> str:
    return _renderer(renderer).render(
        "project/app_en.arb.j2", _context(config, app_title=config.project_name)
    )
