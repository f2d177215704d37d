"""Configuration management for siteredirect.

The site configuration is resolved from three layers: built-in defaults,
the user config file (TOML, auto-discovered under the source directory)
and command line options. Later layers win.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)

SITE_DIRNAME = ".vuepress"
CONFIG_FILENAME = "config.toml"
MODE_ENV_VAR = "SITEREDIRECT_MODE"
DEFAULT_MODE = "production"
DEFAULT_HOSTNAME = "/"


@dataclass(frozen=True)
class UserConfig:
    """Settings read from the user config file."""

    base: str | None = None
    title: str | None = None
    temp: Path | None = None
    cache: Path | None = None

    @classmethod
    def load(cls, path: Path) -> "UserConfig":
        """Load user configuration from a TOML file.

        Relative directories are resolved against the config file's directory.

        Args:
            path: Path to TOML configuration file

        Returns:
            UserConfig instance

        Raises:
            FileNotFoundError: If path doesn't exist
            ValueError: If configuration is invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            base=cls._parse_str(data, "base"),
            title=cls._parse_str(data, "title"),
            temp=cls._parse_dir(data, "temp", config_dir),
            cache=cls._parse_dir(data, "cache", config_dir),
        )

    @classmethod
    def _parse_str(cls, data: dict, key: str) -> str | None:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{key} must be a string")
        return value

    @classmethod
    def _parse_dir(cls, data: dict, key: str, config_dir: Path) -> Path | None:
        value = cls._parse_str(data, key)
        if value is None:
            return None
        return config_dir / value


@dataclass(frozen=True)
class CliAppConfig:
    """Site settings given on the command line."""

    source: Path
    cache: Path | None = None
    temp: Path | None = None


@dataclass(frozen=True)
class AppConfig:
    """Resolved site configuration."""

    source: Path
    temp: Path
    cache: Path
    base: str = "/"
    title: str = ""

    @classmethod
    def for_source(cls, source: Path) -> "AppConfig":
        """Create config with conventional directories under source.

        Args:
            source: Site source directory

        Returns:
            AppConfig with default values
        """
        site_dir = source / SITE_DIRNAME
        return cls(
            source=source,
            temp=site_dir / ".temp",
            cache=site_dir / ".cache",
        )

    def with_overrides(
        self,
        *,
        source: Path | None = None,
        temp: Path | None = None,
        cache: Path | None = None,
        base: str | None = None,
        title: str | None = None,
    ) -> "AppConfig":
        """Create a new AppConfig with overrides applied.

        Only non-None values override the existing config.

        Returns:
            New AppConfig instance with overrides applied
        """
        return replace(
            self,
            source=source if source is not None else self.source,
            temp=temp if temp is not None else self.temp,
            cache=cache if cache is not None else self.cache,
            base=base if base is not None else self.base,
            title=title if title is not None else self.title,
        )


@dataclass(frozen=True)
class RunConfig:
    """Options for a single redirect generation run."""

    hostname: str
    output_folder: Path
    base: str
    clean_cache: bool = False
    clean_temp: bool = False
    mode: str = DEFAULT_MODE


def resolve_mode() -> str:
    """Return the execution mode, defaulting to production when unset."""
    return os.environ.get(MODE_ENV_VAR) or DEFAULT_MODE


def resolve_cli_app_config(
    source_dir: str | Path,
    *,
    cache: str | Path | None = None,
    temp: str | Path | None = None,
) -> CliAppConfig:
    """Resolve command line site settings to absolute paths.

    Relative paths are resolved against the current working directory.
    """
    return CliAppConfig(
        source=Path(source_dir).resolve(),
        cache=Path(cache).resolve() if cache else None,
        temp=Path(temp).resolve() if temp else None,
    )


def resolve_user_config_conventional_path(source: Path) -> Path | None:
    """Return the conventional user config file under source, if present."""
    candidate = source / SITE_DIRNAME / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def load_user_config(path: Path | None) -> UserConfig:
    """Load user config, returning an empty config when there is no file.

    Args:
        path: Config file path, or None when none was found

    Returns:
        UserConfig instance
    """
    if path is None:
        logger.debug("No user config file found, using defaults")
        return UserConfig()
    logger.info(f"Loading user config from {path}")
    return UserConfig.load(path)


def resolve_app_config(
    *,
    cli: CliAppConfig,
    user: UserConfig,
    default: AppConfig | None = None,
) -> AppConfig | None:
    """Merge defaults, user config and command line settings.

    Args:
        cli: Command line settings (highest priority)
        user: User config file settings
        default: Base config, conventional directories under cli.source if None

    Returns:
        Resolved AppConfig, or None if the result is not usable
    """
    config = default if default is not None else AppConfig.for_source(cli.source)
    config = config.with_overrides(
        source=cli.source,
        temp=user.temp,
        cache=user.cache,
        base=user.base,
        title=user.title,
    )
    config = config.with_overrides(temp=cli.temp, cache=cli.cache)

    if not config.base.startswith("/") or not config.base.endswith("/"):
        logger.error(f"base should start and end with a slash (/), got {config.base!r}")
        return None

    return config
