"""Configuration settings for debugrepl."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

CLEAR_SCREEN_SEQUENCE = "\u001b[2J"


@dataclass
class ReplConfig:
    """Output log limits."""

    max_length: int = 10000  # Entries retained before the oldest are evicted
    max_children: int = 1000  # Children expanded per snapshot value
    clear_sequence: str = CLEAR_SCREEN_SEQUENCE


@dataclass
class ConsoleConfig:
    """Interactive console rendering."""

    prompt: str = ">>>"
    show_source: bool = True
    styles: Dict[str, str] = field(default_factory=lambda: {
        "info": "",
        "warning": "yellow",
        "error": "red",
        "ignore": "dim italic",
    })


@dataclass
class LocaleConfig:
    """Localized message catalog."""

    catalog: str = ""  # Optional YAML file of message overrides


@dataclass
class Settings:
    """Main settings configuration."""

    repl: ReplConfig = field(default_factory=ReplConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    locale: LocaleConfig = field(default_factory=LocaleConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "Settings":
        """Load settings from YAML file with environment variable expansion."""
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        data = cls._expand_env_vars(data)

        return cls(
            repl=ReplConfig(**(data.get("repl") or {})),
            console=cls._parse_console_config(data.get("console") or {}),
            locale=LocaleConfig(**(data.get("locale") or {})),
        )

    @staticmethod
    def _expand_env_vars(data: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(data, dict):
            return {k: Settings._expand_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [Settings._expand_env_vars(item) for item in data]
        elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
            env_var = data[2:-1]
            return os.environ.get(env_var, "")
        return data

    @staticmethod
    def _parse_console_config(data: Dict[str, Any]) -> ConsoleConfig:
        """Parse console configuration, merging partial style maps over the defaults."""
        styles = ConsoleConfig().styles
        user_styles = data.get("styles") or {}
        if isinstance(user_styles, dict):
            styles.update({k.lower(): v or "" for k, v in user_styles.items()})

        return ConsoleConfig(
            prompt=data.get("prompt", ">>>"),
            show_source=data.get("show_source", True),
            styles=styles,
        )


def load_settings(config_path: str = "config.yaml") -> Settings:
    """Load settings from configuration file."""
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    return Settings.from_yaml(config_path)
