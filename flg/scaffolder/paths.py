"""File-path conventions of a generated Clean Architecture project.

Every feature lives under ``lib/features/<feature>/`` and is split into the
``domain``, ``data`` and ``presentation`` layers.  The mapping from a
component kind to its layer, sub-directory and file suffix is the fixed
``COMPONENT_LAYOUT`` table below; nothing here touches the file system.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import NamedTuple

from ..config import CONFIG_FILE_NAME
from ..naming import to_snake_case


LIB_DIR = PurePosixPath("lib")
FEATURES_DIR = LIB_DIR / "features"
CORE_DIR = LIB_DIR / "core"


class ComponentKind(str, Enum):
    """Every kind of feature-scoped Dart file flg can write."""

    ENTITY = "entity"
    REPOSITORY = "repository"
    USECASE = "usecase"
    MODEL = "model"
    REPOSITORY_IMPL = "repository_impl"
    REMOTE_DATASOURCE = "remote_datasource"
    LOCAL_DATASOURCE = "local_datasource"
    SCREEN = "screen"
    WIDGET = "widget"
    CARD = "card"
    LIST_TILE = "list_tile"
    FORM = "form"
    NOTIFIER = "notifier"
    BLOC = "bloc"
    EVENT = "event"
    STATE = "state"
    CHANGE_NOTIFIER = "change_notifier"


class Layout(NamedTuple):
    layer: str
    subdir: str
    suffix: str


COMPONENT_LAYOUT: dict[ComponentKind, Layout] = {
    ComponentKind.ENTITY: Layout("domain", "entities", "entity"),
    ComponentKind.REPOSITORY: Layout("domain", "repositories", "repository"),
    ComponentKind.USECASE: Layout("domain", "usecases", "usecase"),
    ComponentKind.MODEL: Layout("data", "models", "model"),
    ComponentKind.REPOSITORY_IMPL: Layout("data", "repositories", "repository_impl"),
    ComponentKind.REMOTE_DATASOURCE: Layout("data", "datasources", "remote_datasource"),
    ComponentKind.LOCAL_DATASOURCE: Layout("data", "datasources", "local_datasource"),
    ComponentKind.SCREEN: Layout("presentation", "screens", "screen"),
    ComponentKind.WIDGET: Layout("presentation", "widgets", "widget"),
    ComponentKind.CARD: Layout("presentation", "widgets", "card"),
    ComponentKind.LIST_TILE: Layout("presentation", "widgets", "list_tile"),
    ComponentKind.FORM: Layout("presentation", "widgets", "form"),
    ComponentKind.NOTIFIER: Layout("presentation", "providers", "notifier"),
    ComponentKind.BLOC: Layout("presentation", "providers", "bloc"),
    ComponentKind.EVENT: Layout("presentation", "providers", "event"),
    ComponentKind.STATE: Layout("presentation", "providers", "state"),
    ComponentKind.CHANGE_NOTIFIER: Layout("presentation", "providers", "provider"),
}

# Layer directories created for every feature, in dependency order.
FEATURE_SUBDIRS: tuple[tuple[str, str], ...] = (
    ("domain", "entities"),
    ("domain", "repositories"),
    ("domain", "usecases"),
    ("data", "models"),
    ("data", "repositories"),
    ("data", "datasources"),
    ("presentation", "screens"),
    ("presentation", "widgets"),
    ("presentation", "providers"),
)


# ---------------------------------------------------------------------------
# Feature-scoped paths
# ---------------------------------------------------------------------------


def feature_dir(feature: str) -> PurePosixPath:
    """``lib/features/<snake(feature)>``."""
    return FEATURES_DIR / to_snake_case(feature)


def feature_directories(feature: str) -> list[PurePosixPath]:
    """The nine layer directories of *feature*."""
    base = feature_dir(feature)
    return [base / layer / subdir for layer, subdir in FEATURE_SUBDIRS]


def component_file_name(
    kind: ComponentKind, name: str, *, action: str | None = None
) -> str:
    """File name of one component, e.g. ``user_profile_entity.dart``.

    Use cases are prefixed with the snake-cased *action*
    (``get_all_order_usecase.dart``).
    """
    layout = COMPONENT_LAYOUT[kind]
    stem = to_snake_case(name)
    if kind is ComponentKind.USECASE and action:
        stem = f"{to_snake_case(action)}_{stem}"
    return f"{stem}_{layout.suffix}.dart"


def derive_path(
    feature: str,
    kind: ComponentKind,
    name: str,
    *,
    action: str | None = None,
    project_root: str | Path | None = None,
) -> PurePosixPath | Path:
    """Return the path of a component inside *feature*.

    The result is relative to the project root, or absolute under
    *project_root* when one is given.
    """
    layout = COMPONENT_LAYOUT[kind]
    relative = (
        feature_dir(feature)
        / layout.layer
        / layout.subdir
        / component_file_name(kind, name, action=action)
    )
    if project_root is None:
        return relative
    return Path(project_root) / relative


# ---------------------------------------------------------------------------
# Core and project-level paths
# ---------------------------------------------------------------------------


class CoreFile(str, Enum):
    EXCEPTIONS = "exceptions"
    FAILURES = "failures"
    USECASE_BASE = "usecase_base"
    ROUTER = "router"
    API_CLIENT = "api_client"
    MAIN = "main"


CORE_FILES: dict[CoreFile, PurePosixPath] = {
    CoreFile.EXCEPTIONS: CORE_DIR / "error" / "exceptions.dart",
    CoreFile.FAILURES: CORE_DIR / "error" / "failures.dart",
    CoreFile.USECASE_BASE: CORE_DIR / "usecases" / "usecase.dart",
    CoreFile.ROUTER: CORE_DIR / "router" / "app_router.dart",
    CoreFile.API_CLIENT: CORE_DIR / "network" / "api_client.dart",
    CoreFile.MAIN: LIB_DIR / "main.dart",
}

CORE_DIRECTORIES: tuple[PurePosixPath, ...] = (
    CORE_DIR / "error",
    CORE_DIR / "usecases",
    CORE_DIR / "router",
    CORE_DIR / "network",
    CORE_DIR / "utils",
    FEATURES_DIR,
    PurePosixPath("test") / "unit",
    PurePosixPath("test") / "integration",
    PurePosixPath("test") / "fixtures",
)

PUBSPEC_PATH = PurePosixPath("pubspec.yaml")
L10N_CONFIG_PATH = PurePosixPath("l10n.yaml")
DEFAULT_ARB_PATH = LIB_DIR / "l10n" / "app_en.arb"
CONFIG_PATH = PurePosixPath(CONFIG_FILE_NAME)


def core_path(core_file: CoreFile) -> PurePosixPath:
    return CORE_FILES[core_file]


def package_import(package: str, path: PurePosixPath) -> str:
    """Absolute Dart import for a file under ``lib/``.

    ``package_import("shop_app", PurePosixPath("lib/core/error/failures.dart"))``
    gives ``package:shop_app/core/error/failures.dart``.
    """
    return f"package:{package}/{path.relative_to(LIB_DIR).as_posix()}"
