"""
Global Package Settings

Centralized configuration for logging and event delivery, with optional
overrides from the environment or a ``.env`` file.
"""

from typing import Dict, Any, Optional
import os
import json
from dataclasses import dataclass, field, asdict

import dotenv

ENV_PREFIX = "REACTIVE_OBSERVERS_"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass
class LoggingSettings:
    """Logging configuration"""

    log_level: str = "WARNING"
    log_format: str = (
        "%(asctime)s %(log_color)s%(class_name)s:%(levelname)s%(reset)s - %(message)s"
    )
    use_colors: bool = True


@dataclass
class EventSettings:
    """Event delivery settings"""

    # Log every publish/notify at INFO instead of DEBUG
    log_deliveries: bool = False


@dataclass
class Settings:
    """Global package settings"""

    debug: bool = False
    version: str = "0.1.0"

    # Sub-configurations
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    events: EventSettings = field(default_factory=EventSettings)

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug flag"""
        return "DEBUG" if self.debug else self.logging.log_level.upper()

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary"""
        return asdict(self)

    def save_to_file(self, file_path: str) -> None:
        """Save current settings to a JSON file"""
        with open(file_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, file_path: str) -> "Settings":
        """Load settings from a JSON file"""
        with open(file_path, "r") as f:
            data = json.load(f)

        return cls(
            debug=data.get("debug", False),
            version=data.get("version", "0.1.0"),
            logging=LoggingSettings(**data.get("logging", {})),
            events=EventSettings(**data.get("events", {})),
        )

    @classmethod
    def from_env(cls, base: Optional["Settings"] = None) -> "Settings":
        """Apply REACTIVE_OBSERVERS_* environment variables (and .env) on top of base"""
        dotenv.load_dotenv()
        settings = base or cls()

        settings.debug = _env_flag("DEBUG", settings.debug)
        level = os.environ.get(ENV_PREFIX + "LOG_LEVEL")
        if level:
            settings.logging.log_level = level.strip().upper()
        settings.events.log_deliveries = _env_flag(
            "LOG_DELIVERIES", settings.events.log_deliveries
        )
        return settings


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def initialize_settings(config_file: Optional[str] = None, **overrides) -> Settings:
    """Initialize settings with optional config file and overrides"""
    global _settings

    if config_file and os.path.exists(config_file):
        base = Settings.load_from_file(config_file)
    else:
        base = Settings()
    _settings = Settings.from_env(base)

    for key, value in overrides.items():
        if not hasattr(_settings, key):
            raise AttributeError(f"Unknown setting: {key}")
        setattr(_settings, key, value)

    return _settings


def reset_settings() -> None:
    """Reset settings to default (useful for testing)"""
    global _settings
    _settings = None
