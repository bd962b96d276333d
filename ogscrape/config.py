"""
Configuration for ogscrape.

Settings come from, lowest to highest priority: defaults, the user file
(~/.config/ogscrape/config.toml), the first local file found (./ogscrape.toml,
./.ogscraperc), a file named with --config, OGSCRAPE_* environment
variables, and command-line flags.

Every layer goes through ``OgConfig.update``, which checks each value
against the field's type, so a TOML ``timeout = "x"`` is refused the same
way as ``OGSCRAPE_TIMEOUT=x``.
"""
import logging
import os
import tomli
import tomli_w
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
from dataclasses import dataclass, field, fields, asdict

from .constants import DEFAULT_MAX_REDIRECTS, DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "OGSCRAPE_"
TRUE_WORDS = ("true", "1", "yes", "on")
FALSE_WORDS = ("false", "0", "no", "off")
OUTPUT_FORMATS = ("json", "tree")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def user_config_path() -> Path:
    return Path.home() / ".config" / "ogscrape" / "config.toml"


def local_config_paths() -> List[Path]:
    return [Path.cwd() / "ogscrape.toml", Path.cwd() / ".ogscraperc"]


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
    raise ValueError(f"expected one of {', '.join(TRUE_WORDS + FALSE_WORDS)}")


def _to_number(value: Any, kind: type) -> Any:
    if isinstance(value, bool):
        raise ValueError("expected a number")
    try:
        number = kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"expected {'a whole number' if kind is int else 'a number'}") from None
    if kind is int and isinstance(value, float) and number != value:
        raise ValueError("expected a whole number")
    if number < 0:
        raise ValueError("must not be negative")
    return number


def _to_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("expected a string")
    return value


_CONVERTERS = {
    bool: _to_bool,
    int: lambda value: _to_number(value, int),
    float: lambda value: _to_number(value, float),
    str: _to_str,
}

_CHOICES = {
    "output_format": OUTPUT_FORMATS,
    "log_level": LOG_LEVELS,
}


@dataclass
class OgConfig:
    """Settings for fetching, extraction and output."""

    # Network
    timeout: float = field(default=float(DEFAULT_REQUEST_TIMEOUT))  # seconds
    user_agent: str = field(default=DEFAULT_USER_AGENT)
    verify_ssl: bool = field(default=True)
    max_redirects: int = field(default=DEFAULT_MAX_REDIRECTS)

    # Extraction
    strict: bool = field(default=False)
    fallbacks: bool = field(default=True)  # <title>/<img> fallbacks

    # Output
    output_format: str = field(default="json")
    log_level: str = field(default="WARNING")

    @classmethod
    def field_types(cls) -> Dict[str, type]:
        return {f.name: f.type for f in fields(cls)}

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "OgConfig":
        """
        Build a configuration from config files and the environment.

        Args:
            config_file: Extra file applied after the user and local files;
                ignored if it does not exist

        Raises:
            ConfigError: If a file is not valid TOML or holds a bad value
        """
        config = cls()

        files = [user_config_path()]
        files += [p for p in local_config_paths() if p.exists()][:1]
        if config_file is not None:
            files.append(Path(config_file))

        for path in files:
            if path.exists():
                config.update(cls._read_toml(path), source=str(path))

        config.update(cls._read_env(), source="environment")
        return config

    @staticmethod
    def _read_toml(path: Path) -> Dict[str, Any]:
        try:
            with open(path, "rb") as f:
                return tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"{path} is not valid TOML: {e}", source=str(path)) from e

    @staticmethod
    def _read_env() -> Dict[str, str]:
        return {
            key[len(ENV_PREFIX):].lower(): value
            for key, value in os.environ.items()
            if key.startswith(ENV_PREFIX)
        }

    def update(self, values: Mapping[str, Any], source: str = "overrides"):
        """
        Apply settings from one source, converting each to its field's type.

        Unknown keys are skipped. None values leave the field unchanged.

        Raises:
            ConfigError: If a value cannot be converted or is not an allowed choice
        """
        types = self.field_types()
        for key, value in values.items():
            if key not in types:
                logger.debug(f"Ignoring unknown setting '{key}' from {source}")
                continue
            if value is None:
                continue
            try:
                converted = _CONVERTERS[types[key]](value)
            except ValueError as e:
                raise ConfigError(f"Invalid value {value!r} for '{key}' in {source}: {e}", key, source) from e

            choices = _CHOICES.get(key)
            if choices is not None:
                if key == "log_level":
                    converted = converted.upper()
                if converted not in choices:
                    raise ConfigError(
                        f"Invalid value {value!r} for '{key}' in {source}: expected one of {', '.join(choices)}",
                        key, source,
                    )
            setattr(self, key, converted)

    def save(self, path: Optional[Path] = None):
        """Write the configuration as TOML (default: the user config file)."""
        path = path or user_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            tomli_w.dump(asdict(self), f)


_config: Optional[OgConfig] = None


def get_config(reload: bool = False, config_file: Optional[Path] = None) -> OgConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None or reload:
        _config = OgConfig.load(config_file)
    return _config


def init_config(config_file: Optional[Path] = None, **overrides) -> OgConfig:
    """
    Load configuration afresh and apply command-line overrides.

    Args:
        config_file: Extra config file to load
        **overrides: Flag values; None means the flag was not given

    Raises:
        ConfigError: If any layer holds a bad value
    """
    config = get_config(reload=True, config_file=config_file)
    config.update(overrides, source="command line")
    return config
