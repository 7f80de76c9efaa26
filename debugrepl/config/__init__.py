"""Configuration for debugrepl."""

from .settings import ConsoleConfig, LocaleConfig, ReplConfig, Settings, load_settings

__all__ = [
    "ConsoleConfig",
    "LocaleConfig",
    "ReplConfig",
    "Settings",
    "load_settings",
]
