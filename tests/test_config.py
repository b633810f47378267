"""Tests for the configuration model, the flg.json store and RunOptions.

Covers:
- FlgConfig defaults and permissive enum parsing
- violations() messages
- Functional updates (with_feature, model_copy)
- from_args() from argparse namespaces and mappings
- JSON round trip and parse errors
- ConfigStore load / save / exists / find_project_root
- RunOptions.from_args()
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

import pytest

from flg.config import (
    CONFIG_FILE_NAME,
    ConfigParseError,
    ConfigStore,
    FlgConfig,
    Platform,
    RouterOption,
    RunOptions,
    StateManagement,
    parse_platforms,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> ConfigStore:
    """A ConfigStore using the default flg.json file name."""
    return ConfigStore()


@pytest.fixture
def full_config() -> FlgConfig:
    """A configuration with every field away from its default."""
    return FlgConfig(
        project_name="shop_app",
        org="com.shop",
        state_management=StateManagement.BLOC,
        router=RouterOption.AUTO_ROUTE,
        use_freezed=False,
        use_dio_client=False,
        platforms=(Platform.WEB, Platform.LINUX),
        features=("product", "cart"),
        generate_tests=False,
        l10n=True,
    )


# ---------------------------------------------------------------------------
# Defaults & parsing
# ---------------------------------------------------------------------------


class TestDefaults:
    """Tests for FlgConfig default values."""

    def test_defaults(self) -> None:
        config = FlgConfig()
        assert config.project_name == "my_app"
        assert config.org == "com.example"
        assert config.state_management is StateManagement.RIVERPOD
        assert config.router is RouterOption.GO_ROUTER
        assert config.use_freezed is True
        assert config.use_dio_client is True
        assert config.platforms == (Platform.ANDROID, Platform.IOS)
        assert config.features == ("home",)
        assert config.generate_tests is True
        assert config.l10n is False

    def test_derived_queries(self) -> None:
        config = FlgConfig(state_management="bloc", router="auto_route", use_freezed=False)
        assert config.uses_bloc and not config.uses_riverpod and not config.uses_provider
        assert config.uses_auto_route and not config.uses_go_router
        assert config.needs_code_generation is True

    def test_no_code_generation_needed(self) -> None:
        config = FlgConfig(state_management="provider", use_freezed=False)
        assert config.needs_code_generation is False

    def test_platform_strings(self) -> None:
        assert FlgConfig().platform_strings == ["android", "ios"]

    def test_is_frozen(self) -> None:
        config = FlgConfig()
        with pytest.raises(Exception):
            config.project_name = "other"  # type: ignore[misc]


class TestPermissiveParsing:
    """Unknown enum strings fall back to the first variant."""

    def test_unknown_state_falls_back_to_riverpod(self) -> None:
        assert FlgConfig(state_management="mobx").state_management is StateManagement.RIVERPOD

    def test_unknown_router_falls_back_to_go_router(self) -> None:
        assert FlgConfig(router="beamer").router is RouterOption.GO_ROUTER

    def test_values_are_case_insensitive(self) -> None:
        assert FlgConfig(state_management="BLoC").state_management is StateManagement.BLOC

    def test_unknown_platform_becomes_android(self) -> None:
        assert parse_platforms(["ios", "fuchsia"]) == (Platform.IOS, Platform.ANDROID)

    def test_platforms_deduplicated_in_order(self) -> None:
        assert parse_platforms(["web", "ios", "web"]) == (Platform.WEB, Platform.IOS)

    def test_comma_separated_platforms(self) -> None:
        assert parse_platforms("android, web") == (Platform.ANDROID, Platform.WEB)

    def test_platforms_none_is_default(self) -> None:
        assert parse_platforms(None) == (Platform.ANDROID, Platform.IOS)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestViolations:
    """Tests for FlgConfig.violations()."""

    def test_valid(self) -> None:
        assert FlgConfig(project_name="shop_app").violations() == []

    @pytest.mark.parametrize("name", ["ShopApp", "shop-app", "1shop", "shop app"])
    def test_invalid_project_name(self, name: str) -> None:
        errors = FlgConfig(project_name=name).violations()
        assert errors == [
            "Project name must be valid Dart package name (lowercase, underscores)"
        ]

    def test_empty_project_name(self) -> None:
        assert FlgConfig(project_name="").violations() == ["Project name is required"]

    def test_empty_platforms(self) -> None:
        errors = FlgConfig(platforms=()).violations()
        assert "At least one platform must be selected" in errors

    def test_blank_org(self) -> None:
        assert FlgConfig(org="  ").violations() == ["Organization is required"]

    def test_collects_every_violation(self) -> None:
        errors = FlgConfig(project_name="Bad", org="", platforms=()).violations()
        assert len(errors) == 3


# ---------------------------------------------------------------------------
# Functional updates
# ---------------------------------------------------------------------------


class TestFunctionalUpdate:
    """Tests for with_feature() and model_copy()."""

    def test_with_feature_appends(self) -> None:
        config = FlgConfig(features=("home",))
        updated = config.with_feature("product")
        assert updated.features == ("home", "product")
        assert config.features == ("home",)

    def test_with_feature_skips_recorded_name(self) -> None:
        config = FlgConfig(features=("home",))
        assert config.with_feature("home") is config

    def test_loaded_duplicates_are_kept(self) -> None:
        config = FlgConfig.from_json('{"features": ["home", "home"]}')
        assert config.features == ("home", "home")


# ---------------------------------------------------------------------------
# from_args
# ---------------------------------------------------------------------------


class TestFromArgs:
    """Tests for FlgConfig.from_args()."""

    def test_namespace_with_all_flags(self) -> None:
        args = Namespace(
            project_name="shop_app",
            org="com.shop",
            state="bloc",
            router="auto_route",
            freezed=False,
            dio=False,
            platforms=["web"],
            feature="product",
            l10n=True,
        )
        config = FlgConfig.from_args(args)
        assert config.project_name == "shop_app"
        assert config.org == "com.shop"
        assert config.state_management is StateManagement.BLOC
        assert config.router is RouterOption.AUTO_ROUTE
        assert config.use_freezed is False
        assert config.use_dio_client is False
        assert config.platforms == (Platform.WEB,)
        assert config.features == ("product",)
        assert config.l10n is True

    def test_none_means_default(self) -> None:
        config = FlgConfig.from_args({"project_name": "shop_app", "state": None, "freezed": None})
        assert config.state_management is StateManagement.RIVERPOD
        assert config.use_freezed is True
        assert config.features == ("home",)

    def test_explicit_empty_features(self) -> None:
        config = FlgConfig.from_args({"project_name": "shop_app", "features": []})
        assert config.features == ()


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


class TestJson:
    """Tests for to_json() / from_json()."""

    def test_round_trip(self, full_config: FlgConfig) -> None:
        assert FlgConfig.from_json(full_config.to_json()) == full_config

    def test_uses_camel_case_keys(self, full_config: FlgConfig) -> None:
        data = json.loads(full_config.to_json())
        assert set(data) == {
            "projectName",
            "org",
            "stateManagement",
            "router",
            "useFreezed",
            "useDioClient",
            "platforms",
            "features",
            "generateTests",
            "l10n",
        }
        assert data["stateManagement"] == "bloc"
        assert data["platforms"] == ["web", "linux"]

    def test_two_space_indent_and_trailing_newline(self) -> None:
        text = FlgConfig().to_json()
        assert text.endswith("}\n")
        assert '\n  "projectName": "my_app"' in text

    def test_missing_keys_use_defaults(self) -> None:
        config = FlgConfig.from_json('{"projectName": "shop_app"}')
        assert config.project_name == "shop_app"
        assert config.router is RouterOption.GO_ROUTER

    def test_null_values_use_defaults(self) -> None:
        config = FlgConfig.from_json('{"projectName": "shop_app", "features": null}')
        assert config.features == ("home",)

    def test_malformed_json(self) -> None:
        with pytest.raises(ConfigParseError):
            FlgConfig.from_json("{not json")

    def test_non_object(self) -> None:
        with pytest.raises(ConfigParseError):
            FlgConfig.from_json("[1, 2]")

    def test_wrong_field_type(self) -> None:
        with pytest.raises(ConfigParseError):
            FlgConfig.from_json('{"useFreezed": "maybe"}')

    @pytest.mark.parametrize("text", ['{"features": 5}', '{"platforms": 7}'])
    def test_non_list_names(self, text: str) -> None:
        with pytest.raises(ConfigParseError, match="must be a list of names"):
            FlgConfig.from_json(text)


# ---------------------------------------------------------------------------
# ConfigStore
# ---------------------------------------------------------------------------


class TestConfigStore:
    """Tests for ConfigStore."""

    def test_exists(self, store: ConfigStore, tmp_path: Path) -> None:
        assert store.exists(tmp_path) is False
        (tmp_path / CONFIG_FILE_NAME).write_text("{}", encoding="utf-8")
        assert store.exists(tmp_path) is True

    def test_load_missing_returns_none(self, store: ConfigStore, tmp_path: Path) -> None:
        assert store.load(tmp_path) is None

    def test_save_then_load(self, store: ConfigStore, tmp_path: Path, full_config: FlgConfig) -> None:
        path = store.save(tmp_path, full_config)
        assert path == tmp_path / CONFIG_FILE_NAME
        assert store.load(tmp_path) == full_config

    def test_save_overwrites(self, store: ConfigStore, tmp_path: Path) -> None:
        store.save(tmp_path, FlgConfig(project_name="one"))
        store.save(tmp_path, FlgConfig(project_name="two"))
        assert store.load(tmp_path).project_name == "two"

    def test_save_leaves_no_temp_files(self, store: ConfigStore, tmp_path: Path) -> None:
        store.save(tmp_path, FlgConfig())
        assert [p.name for p in tmp_path.iterdir()] == [CONFIG_FILE_NAME]

    def test_corrupt_file_warns_and_returns_none(
        self, store: ConfigStore, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("{broken", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="flg.config"):
            assert store.load(tmp_path) is None
        assert "Ignoring unreadable" in caplog.text

    @pytest.mark.parametrize(
        "payload",
        [
            b'{"features": 5}',
            b'{"platforms": 7}',
            b"\xff\xfe{not utf8",
        ],
    )
    def test_unusable_content_returns_none(
        self, store: ConfigStore, tmp_path: Path, caplog: pytest.LogCaptureFixture, payload: bytes
    ) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_bytes(payload)
        with caplog.at_level(logging.WARNING, logger="flg.config"):
            assert store.load(tmp_path) is None
        assert "Ignoring unreadable" in caplog.text

    def test_find_project_root_walks_up(self, store: ConfigStore, tmp_path: Path) -> None:
        store.save(tmp_path, FlgConfig())
        nested = tmp_path / "lib" / "features" / "product"
        nested.mkdir(parents=True)
        assert store.find_project_root(nested) == tmp_path.resolve()

    def test_find_project_root_none(self, store: ConfigStore, tmp_path: Path) -> None:
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        # Only meaningful when no ancestor of tmp_path carries a flg.json.
        if store.find_project_root(tmp_path.parent) is None:
            assert store.find_project_root(nested) is None


# ---------------------------------------------------------------------------
# RunOptions
# ---------------------------------------------------------------------------


class TestRunOptions:
    """Tests for RunOptions."""

    def test_defaults(self) -> None:
        options = RunOptions()
        assert not options.dry_run and not options.verbose and not options.force
        assert options.color is True
        assert options.cwd == Path.cwd()

    def test_from_args(self) -> None:
        args = Namespace(dry_run=True, verbose=True, force=False, skip_prompts=True, no_color=True)
        options = RunOptions.from_args(args)
        assert options.dry_run and options.verbose and options.skip_prompts
        assert options.color is False

    def test_from_args_missing_flags(self) -> None:
        options = RunOptions.from_args(Namespace())
        assert options.dry_run is False
        assert options.color is True
