"""
Configuration loader for the SWAPI fetcher.
Loads settings from config.json with fallback defaults.
"""

import json
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from swapi_fetcher.utils.exceptions import ConfigError


DEFAULT_START_URL = "https://swapi.dev/api/people/?format=json"


@dataclass
class ApiConfig:
    """API configuration."""
    start_url: str = DEFAULT_START_URL
    timeout: float = 10.0
    connect_timeout: float = 10.0
    user_agent: str = "SwapiFetcher/1.0"


@dataclass
class BufferConfig:
    """Buffer size and time-based flush configuration."""
    capacity: int = 10
    flush_interval: float = 0.25


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: Optional[str] = None


@dataclass
class Config:
    """Root configuration object."""
    api: ApiConfig = field(default_factory=ApiConfig)
    buffer: BufferConfig = field(default_factory=BufferConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> "Config":
        """Raise ConfigError for values the pipeline cannot run with."""
        if self.buffer.capacity < 1:
            raise ConfigError(f"buffer.capacity must be >= 1, got {self.buffer.capacity}")
        if self.buffer.flush_interval <= 0:
            raise ConfigError(
                f"buffer.flush_interval must be positive, got {self.buffer.flush_interval}"
            )
        if self.api.timeout <= 0 or self.api.connect_timeout <= 0:
            raise ConfigError("api timeouts must be positive")
        if not isinstance(self.api.start_url, str) or not self.api.start_url:
            raise ConfigError("api.start_url must be a non-empty string")
        if not isinstance(self.api.user_agent, str):
            raise ConfigError("api.user_agent must be a string")
        if not isinstance(self.logging.level, str):
            raise ConfigError(f"logging.level must be a level name, got {self.logging.level!r}")
        if self.logging.log_dir is not None and not isinstance(self.logging.log_dir, str):
            raise ConfigError("logging.log_dir must be a path string")
        return self


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a config section, which must be a JSON object if present."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' section must be an object, got {type(section).__name__}")
    return section


def _number(section: Dict[str, Any], key: str, default: Any, cast: Callable[[Any], Any]) -> Any:
    """Convert a numeric setting, reporting bad values as ConfigError."""
    value = section.get(key, default)
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{key}' must be a number, got {value!r}") from e


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to config.json. If None, uses the default location,
            which may be absent. An explicit path must exist.

    Returns:
        Config dataclass populated from JSON.

    Raises:
        ConfigError: explicit file missing, unreadable or invalid
    """
    if config_path is None:
        config_path = Path(__file__).parent / "config.json"
        if not config_path.exists():
            return Config().validate()

    try:
        with open(config_path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")

    config = Config()

    # API
    if "api" in data:
        api = _section(data, "api")
        config.api = ApiConfig(
            start_url=api.get("start_url", DEFAULT_START_URL),
            timeout=_number(api, "timeout", 10.0, float),
            connect_timeout=_number(api, "connect_timeout", 10.0, float),
            user_agent=api.get("user_agent", "SwapiFetcher/1.0"),
        )

    # Buffer
    if "buffer" in data:
        b = _section(data, "buffer")
        config.buffer = BufferConfig(
            capacity=_number(b, "capacity", 10, int),
            flush_interval=_number(b, "flush_interval", 0.25, float),
        )

    # Logging
    if "logging" in data:
        lg = _section(data, "logging")
        config.logging = LoggingConfig(
            level=lg.get("level", "INFO"),
            log_dir=lg.get("log_dir"),
        )

    return config.validate()


# Global config singleton
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global config singleton, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[Config]) -> None:
    """Set global config singleton (for testing)."""
    global _config
    _config = config
