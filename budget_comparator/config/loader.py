"""
YAML settings loader with validation.

Loads settings from YAML files with:
- Environment variable substitution
- Type validation
- Default values
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
import structlog

logger = structlog.get_logger(__name__)


CONFIG_PATH_ENV = "BUDGET_COMPARATOR_CONFIG"
DEFAULT_SETTINGS_FILE = "settings.yml"


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variables in text.

    Supports formats:
    - ${VAR_NAME} - required, warning and empty string if missing
    - ${VAR_NAME:-default} - optional with default

    Args:
        text: Text with env var placeholders

    Returns:
        Text with substituted values
    """
    def replace(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)
        else:
            value = os.getenv(var_expr)
            if value is None:
                logger.warning("env_var_not_set", var=var_expr)
                return ""
            return value

    return re.sub(r"\$\{([^}]+)\}", replace, text)


@dataclass
class PortalSettings:
    """How report pages are fetched and where the data lives in them."""

    table_selector: str = "table.Data"
    label_column: int = 1
    amount_column: int = 7
    min_columns: int = 8

    verify_tls: bool = False
    timeout: Optional[float] = None
    accept_language: str = "es-PE,es;q=0.9"


@dataclass
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class LoggingSettings:
    level: str = "INFO"
    json: bool = False


@dataclass
class Settings:
    """Top-level application settings."""
    portal: PortalSettings = field(default_factory=PortalSettings)
    server: ServerSettings = field(default_factory=ServerSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def _coerce(section: str, key: str, value, expected: type):
    """Coerce a YAML scalar into the expected type or raise ValueError."""
    name = f"{section}.{key}"

    if expected is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes", "on"):
            return True
        if isinstance(value, str) and value.strip().lower() in ("false", "0", "no", "off", ""):
            return False
        raise ValueError(f"Invalid boolean for {name}: {value!r}")

    if expected is int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer for {name}: {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid integer for {name}: {value!r}")

    if expected is float:
        if isinstance(value, bool):
            raise ValueError(f"Invalid number for {name}: {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid number for {name}: {value!r}")

    if value is None:
        raise ValueError(f"Missing value for {name}")
    return str(value)


def _build_section(section: str, cls, data: Optional[dict]):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValueError(f"Section '{section}' must be a mapping")

    defaults = cls()
    values = {}
    for key, value in data.items():
        if not hasattr(defaults, key):
            logger.warning("unknown_setting", section=section, key=key)
            continue
        default = getattr(defaults, key)
        if default is None:
            # Optional numeric setting; blank keeps it unset
            values[key] = None if value in (None, "") else _coerce(section, key, value, float)
            continue
        values[key] = _coerce(section, key, value, type(default))

    return cls(**values)


class ConfigLoader:
    """
    Settings loader.

    Loads YAML config files and validates against expected schema.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
                       (defaults to package config directory)
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = Path(__file__).parent

    def load_file(self, filename: str) -> dict:
        """
        Load YAML config file.

        Args:
            filename: Config file name (relative to config_dir)

        Returns:
            Parsed config dict
        """
        filepath = self.config_dir / filename

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.debug("loading_config", file=str(filepath))

        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()

        # Substitute environment variables
        content = substitute_env_vars(content)

        config = yaml.safe_load(content)

        return config or {}

    def load_settings(self, filename: str = DEFAULT_SETTINGS_FILE) -> Settings:
        """
        Load application settings from YAML.

        Args:
            filename: Settings file name

        Returns:
            Settings object

        Raises:
            ValueError: If a value has the wrong type
        """
        config = self.load_file(filename)

        return Settings(
            portal=_build_section("portal", PortalSettings, config.get("portal")),
            server=_build_section("server", ServerSettings, config.get("server")),
            logging=_build_section("logging", LoggingSettings, config.get("logging")),
        )


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Convenience function to load settings.

    Args:
        config_path: Optional path to a settings file; falls back to the
                     BUDGET_COMPARATOR_CONFIG environment variable, then
                     to the packaged settings.yml

    Returns:
        Settings object
    """
    config_path = config_path or os.getenv(CONFIG_PATH_ENV)
    if config_path:
        loader = ConfigLoader(str(Path(config_path).parent))
        return loader.load_settings(Path(config_path).name)
    else:
        loader = ConfigLoader()
        return loader.load_settings()
