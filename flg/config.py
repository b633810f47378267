"""Project configuration for flg.

``FlgConfig`` is the single source of truth for a generation session: it is
built from CLI flags or interactive answers, persisted as ``flg.json`` in the
project root, and read back by every later ``generate`` invocation.  All
settings use a frozen Pydantic v2 model so updates are whole-value
replacements (``with_feature`` / ``model_copy``).

``ConfigStore`` handles reading and writing ``flg.json`` and locating the
project root.  ``RunOptions`` carries the per-invocation switches
(``--dry-run``, ``--verbose`` ...) explicitly through the CLI.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from argparse import Namespace
from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "flg.json"

PROJECT_NAME_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class FlgError(Exception):
    """Base class for errors raised by flg."""


class ConfigParseError(FlgError):
    """Raised when ``flg.json`` content cannot be turned into a config."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class StateManagement(str, Enum):
    RIVERPOD = "riverpod"
    BLOC = "bloc"
    PROVIDER = "provider"


class RouterOption(str, Enum):
    GO_ROUTER = "go_router"
    AUTO_ROUTE = "auto_route"


class Platform(str, Enum):
    ANDROID = "android"
    IOS = "ios"
    WEB = "web"
    MACOS = "macos"
    WINDOWS = "windows"
    LINUX = "linux"


def _parse_enum(enum_cls: type[Enum], value: Any, default: Enum) -> Enum:
    """Map *value* onto *enum_cls*, falling back to *default* when unknown."""
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return default


def parse_platforms(values: Iterable[Any] | str | None) -> tuple[Platform, ...]:
    """Parse platform names, keeping first-seen order and dropping repeats.

    A comma-separated string is accepted as well as any iterable.  Unknown
    names fall back to ``android``.
    """
    if values is None:
        return DEFAULT_PLATFORMS
    if isinstance(values, str):
        values = [part for part in values.split(",") if part.strip()]
    elif not isinstance(values, Iterable):
        raise ValueError(f"platforms must be a list of names, not {type(values).__name__}")
    parsed: list[Platform] = []
    for value in values:
        platform = _parse_enum(Platform, value, Platform.ANDROID)
        if platform not in parsed:
            parsed.append(platform)
    return tuple(parsed)


DEFAULT_PLATFORMS: tuple[Platform, ...] = (Platform.ANDROID, Platform.IOS)
DEFAULT_FEATURES: tuple[str, ...] = ("home",)


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class FlgConfig(BaseModel):
    """Generation settings of one Flutter project.

    Field aliases are the camelCase keys used in ``flg.json``.  Unknown enum
    strings fall back to the first variant (riverpod, go_router, android)
    instead of failing; use :meth:`validate` for the structural checks.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_name: str = Field(default="my_app", alias="projectName")
    org: str = Field(default="com.example", description="Reverse-domain organisation")
    state_management: StateManagement = Field(
        default=StateManagement.RIVERPOD, alias="stateManagement"
    )
    router: RouterOption = Field(default=RouterOption.GO_ROUTER)
    use_freezed: bool = Field(default=True, alias="useFreezed")
    use_dio_client: bool = Field(default=True, alias="useDioClient")
    platforms: tuple[Platform, ...] = Field(default=DEFAULT_PLATFORMS)
    features: tuple[str, ...] = Field(
        default=DEFAULT_FEATURES,
        description="Scaffolded features in generation order",
    )
    generate_tests: bool = Field(
        default=True,
        alias="generateTests",
        description="Stored for compatibility; test generation is not implemented",
    )
    l10n: bool = Field(default=False, description="Whether localisation files are generated")

    # -- Permissive parsing ------------------------------------------------

    @field_validator("state_management", mode="before")
    @classmethod
    def _parse_state_management(cls, value: Any) -> StateManagement:
        return _parse_enum(StateManagement, value, StateManagement.RIVERPOD)

    @field_validator("router", mode="before")
    @classmethod
    def _parse_router(cls, value: Any) -> RouterOption:
        return _parse_enum(RouterOption, value, RouterOption.GO_ROUTER)

    @field_validator("platforms", mode="before")
    @classmethod
    def _parse_platforms(cls, value: Any) -> tuple[Platform, ...]:
        return parse_platforms(value)

    @field_validator("features", mode="before")
    @classmethod
    def _parse_features(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return DEFAULT_FEATURES
        if isinstance(value, str):
            return (value,)
        if not isinstance(value, Iterable):
            raise ValueError(f"features must be a list of names, not {type(value).__name__}")
        return tuple(str(item) for item in value)

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    @property
    def uses_riverpod(self) -> bool:
        return self.state_management is StateManagement.RIVERPOD

    @property
    def uses_bloc(self) -> bool:
        return self.state_management is StateManagement.BLOC

    @property
    def uses_provider(self) -> bool:
        return self.state_management is StateManagement.PROVIDER

    @property
    def uses_go_router(self) -> bool:
        return self.router is RouterOption.GO_ROUTER

    @property
    def uses_auto_route(self) -> bool:
        return self.router is RouterOption.AUTO_ROUTE

    @property
    def needs_code_generation(self) -> bool:
        """True when ``build_runner`` has to run after scaffolding."""
        return self.use_freezed or self.uses_riverpod or self.uses_auto_route

    @property
    def platform_strings(self) -> list[str]:
        return [platform.value for platform in self.platforms]

    # ------------------------------------------------------------------
    # Validation & functional updates
    # ------------------------------------------------------------------

    def violations(self) -> list[str]:
        """Return one message per violated invariant (empty when valid)."""
        errors: list[str] = []
        if not self.project_name:
            errors.append("Project name is required")
        elif not PROJECT_NAME_PATTERN.match(self.project_name):
            errors.append(
                "Project name must be valid Dart package name (lowercase, underscores)"
            )
        if not self.platforms:
            errors.append("At least one platform must be selected")
        if not self.org.strip():
            errors.append("Organization is required")
        return errors

    def with_feature(self, name: str) -> "FlgConfig":
        """Return a copy with *name* appended to ``features``."""
        if name in self.features:
            return self
        return self.model_copy(update={"features": (*self.features, name)})

    # ------------------------------------------------------------------
    # Construction & serialisation
    # ------------------------------------------------------------------

    @classmethod
    def from_args(cls, flags: Namespace | Mapping[str, Any]) -> "FlgConfig":
        """Build a config from parsed CLI flags.

        Recognised keys (all optional): ``project_name``, ``org``, ``state``,
        ``router``, ``freezed``, ``dio``, ``platforms``, ``feature`` or
        ``features``, ``generate_tests``, ``l10n``.  ``None`` means "flag not
        given" and selects the default.
        """
        values = dict(flags) if isinstance(flags, Mapping) else vars(flags)

        features = values.get("features")
        if features is None and values.get("feature") is not None:
            features = [values["feature"]]

        candidates: dict[str, Any] = {
            "project_name": values.get("project_name"),
            "org": values.get("org"),
            "state_management": values.get("state"),
            "router": values.get("router"),
            "use_freezed": values.get("freezed"),
            "use_dio_client": values.get("dio"),
            "platforms": values.get("platforms") or None,
            "features": features,
            "generate_tests": values.get("generate_tests"),
            "l10n": values.get("l10n"),
        }
        return cls(**{key: value for key, value in candidates.items() if value is not None})

    @classmethod
    def from_json(cls, text: str) -> "FlgConfig":
        """Parse ``flg.json`` content.

        Missing (or ``null``) keys fall back to the defaults.

        Raises:
            ConfigParseError: If *text* is not a JSON object or a field has
                an unusable type.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigParseError(f"Invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigParseError("Configuration must be a JSON object")

        data = {key: value for key, value in data.items() if value is not None}
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigParseError(str(exc)) from exc

    def to_json(self) -> str:
        """Serialise every field with its ``flg.json`` key."""
        payload = self.model_dump(mode="json", by_alias=True)
        return json.dumps(payload, indent=2) + "\n"


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ConfigStore:
    """Reads and writes ``flg.json`` in a project root."""

    def __init__(self, file_name: str = CONFIG_FILE_NAME) -> None:
        self.file_name = file_name

    def path_for(self, project_root: str | Path) -> Path:
        return Path(project_root) / self.file_name

    def exists(self, project_root: str | Path) -> bool:
        return self.path_for(project_root).is_file()

    def load(self, project_root: str | Path) -> FlgConfig | None:
        """Load the config of *project_root*.

        Returns ``None`` when the file is missing or cannot be parsed; a
        corrupt file is logged as a warning.
        """
        path = self.path_for(project_root)
        if not path.is_file():
            return None
        try:
            return FlgConfig.from_json(path.read_text(encoding="utf-8"))
        except (ConfigParseError, UnicodeDecodeError) as exc:
            logger.warning("Ignoring unreadable %s: %s", path, exc)
            return None

    def save(self, project_root: str | Path, config: FlgConfig) -> Path:
        """Write *config* to ``flg.json``, replacing any previous file.

        The content goes to a temporary file in the same directory first and
        is then moved over the target in one step.
        """
        target = self.path_for(project_root)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.file_name}.", suffix=".tmp", dir=target.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(config.to_json())
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved configuration to %s", target)
        return target

    def find_project_root(self, start: str | Path) -> Path | None:
        """Walk up from *start* to the first directory holding ``flg.json``."""
        current = Path(start).resolve()
        for candidate in (current, *current.parents):
            if (candidate / self.file_name).is_file():
                return candidate
        return None


# ---------------------------------------------------------------------------
# Per-invocation options
# ---------------------------------------------------------------------------


class RunOptions(BaseModel):
    """Switches shared by every command, passed explicitly to collaborators."""

    model_config = ConfigDict(frozen=True)

    dry_run: bool = Field(default=False, description="Report paths without writing")
    verbose: bool = Field(default=False, description="Print diagnostic detail")
    force: bool = Field(default=False, description="Proceed even if targets exist")
    skip_prompts: bool = Field(default=False, description="Use defaults instead of asking")
    color: bool = Field(default=True, description="Colourise console output")
    cwd: Path = Field(default_factory=Path.cwd)

    @classmethod
    def from_args(cls, args: Namespace) -> "RunOptions":
        return cls(
            dry_run=getattr(args, "dry_run", False),
            verbose=getattr(args, "verbose", False),
            force=getattr(args, "force", False),
            skip_prompts=getattr(args, "skip_prompts", False),
            color=not getattr(args, "no_color", False),
        )
