"""Tests for configuration loading and resolution."""

from pathlib import Path

import pytest
from siteredirect.config import (
    AppConfig,
    CliAppConfig,
    UserConfig,
    load_user_config,
    resolve_app_config,
    resolve_cli_app_config,
    resolve_mode,
    resolve_user_config_conventional_path,
)


class TestUserConfigLoad:
    """Tests for UserConfig.load()."""

    def test__full_config__loads_values(self, tmp_path: Path) -> None:
        """Load all settings, resolving directories against the config file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("""
base = "/docs/"
title = "My Docs"
temp = ".tmp"
cache = ".cache-dir"
""")

        config = UserConfig.load(config_file)

        assert config.base == "/docs/"
        assert config.title == "My Docs"
        assert config.temp == tmp_path / ".tmp"
        assert config.cache == tmp_path / ".cache-dir"

    def test__empty_config__all_unset(self, tmp_path: Path) -> None:
        """Leave every setting unset for an empty file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("")

        config = UserConfig.load(config_file)

        assert config == UserConfig()

    def test__missing_file__raises_error(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for missing config file."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            UserConfig.load(tmp_path / "nonexistent.toml")

    def test__wrong_type__raises_error(self, tmp_path: Path) -> None:
        """Raise ValueError for non-string values."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("base = 5")

        with pytest.raises(ValueError, match="base must be a string"):
            UserConfig.load(config_file)


class TestLoadUserConfig:
    """Tests for load_user_config()."""

    def test__no_path__returns_empty_config(self) -> None:
        """Return empty config when no file was found."""
        assert load_user_config(None) == UserConfig()

    def test__path__loads_file(self, tmp_path: Path) -> None:
        """Load the given file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('base = "/x/"')

        assert load_user_config(config_file).base == "/x/"


class TestResolveUserConfigConventionalPath:
    """Tests for resolve_user_config_conventional_path()."""

    def test__file_present__returns_path(self, tmp_path: Path) -> None:
        """Find .vuepress/config.toml under source."""
        config_file = tmp_path / ".vuepress" / "config.toml"
        config_file.parent.mkdir()
        config_file.write_text("")

        assert resolve_user_config_conventional_path(tmp_path) == config_file

    def test__file_missing__returns_none(self, tmp_path: Path) -> None:
        """Return None when there is no conventional config file."""
        assert resolve_user_config_conventional_path(tmp_path) is None


class TestResolveCliAppConfig:
    """Tests for resolve_cli_app_config()."""

    def test__relative_paths__resolved_against_cwd(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Resolve source, cache and temp against the working directory."""
        monkeypatch.chdir(tmp_path)

        config = resolve_cli_app_config("docs", cache="c", temp="t")

        assert config.source == (tmp_path / "docs").resolve()
        assert config.cache == (tmp_path / "c").resolve()
        assert config.temp == (tmp_path / "t").resolve()

    def test__no_overrides__leaves_dirs_unset(self, tmp_path: Path) -> None:
        """Leave cache and temp unset when not given."""
        config = resolve_cli_app_config(tmp_path)

        assert config.cache is None
        assert config.temp is None


class TestResolveAppConfig:
    """Tests for resolve_app_config()."""

    def test__defaults__conventional_dirs(self, tmp_path: Path) -> None:
        """Use conventional directories under source by default."""
        config = resolve_app_config(cli=CliAppConfig(source=tmp_path), user=UserConfig())

        assert config is not None
        assert config.base == "/"
        assert config.temp == tmp_path / ".vuepress" / ".temp"
        assert config.cache == tmp_path / ".vuepress" / ".cache"

    def test__user_config__overrides_defaults(self, tmp_path: Path) -> None:
        """Apply user config over defaults."""
        user = UserConfig(base="/docs/", title="Docs", cache=tmp_path / "uc")

        config = resolve_app_config(cli=CliAppConfig(source=tmp_path), user=user)

        assert config is not None
        assert config.base == "/docs/"
        assert config.title == "Docs"
        assert config.cache == tmp_path / "uc"

    def test__cli__overrides_user_config(self, tmp_path: Path) -> None:
        """Apply command line settings over user config."""
        user = UserConfig(cache=tmp_path / "uc", temp=tmp_path / "ut")
        cli = CliAppConfig(source=tmp_path, cache=tmp_path / "cc")

        config = resolve_app_config(cli=cli, user=user)

        assert config is not None
        assert config.cache == tmp_path / "cc"
        assert config.temp == tmp_path / "ut"

    def test__explicit_default__used_as_base_layer(self, tmp_path: Path) -> None:
        """Start from the given default config."""
        default = AppConfig.for_source(tmp_path).with_overrides(title="Default")

        config = resolve_app_config(
            cli=CliAppConfig(source=tmp_path),
            user=UserConfig(),
            default=default,
        )

        assert config is not None
        assert config.title == "Default"

    @pytest.mark.parametrize("base", ["docs/", "/docs", "docs", ""])
    def test__invalid_base__returns_none(self, tmp_path: Path, base: str) -> None:
        """Return None when base doesn't start and end with a slash."""
        config = resolve_app_config(
            cli=CliAppConfig(source=tmp_path),
            user=UserConfig(base=base),
        )

        assert config is None


class TestResolveMode:
    """Tests for resolve_mode()."""

    def test__unset__defaults_to_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Default to production mode."""
        monkeypatch.delenv("SITEREDIRECT_MODE", raising=False)

        assert resolve_mode() == "production"

    def test__set__returns_env_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Use the environment value when set."""
        monkeypatch.setenv("SITEREDIRECT_MODE", "development")

        assert resolve_mode() == "development"
