"""Localized message lookup.

Messages are addressed by key and carry an English default. A YAML catalog
mapping keys to translated strings can be loaded to override the defaults.
Placeholders use the ``{0}``, ``{1}`` form.
"""

import re
from typing import Any, Dict

import yaml

_catalog: Dict[str, str] = {}

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


def localize(key: str, default: str, *args: Any) -> str:
    """
    Look up a message and fill its placeholders.

    Args:
        key: Message key
        default: Message used when the catalog has no entry for key
        *args: Values for {0}, {1}, ... placeholders

    Returns:
        Localized message
    """
    message = _catalog.get(key, default)
    if not args:
        return message

    def _replace(match: "re.Match[str]") -> str:
        index = int(match.group(1))
        return str(args[index]) if index < len(args) else match.group(0)

    return _PLACEHOLDER.sub(_replace, message)


def load_catalog(path: str) -> int:
    """
    Load message overrides from a YAML file of ``key: message`` pairs.

    Args:
        path: Path to the catalog file

    Returns:
        Number of messages loaded
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    messages = {str(k): str(v) for k, v in data.items()}
    _catalog.update(messages)
    return len(messages)


def reset_catalog() -> None:
    """Drop all loaded overrides."""
    _catalog.clear()
