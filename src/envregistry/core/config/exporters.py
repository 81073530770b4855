"""Helpers that project flattened configuration into environment-like stores."""

from __future__ import annotations

from typing import Any, Dict, MutableMapping
import json

DEFAULT_ENV_PREFIX = "APP_"

_STRUCTURED_TYPES = (dict, list, tuple, set)


def _is_structured(value: Any) -> bool:
    return isinstance(value, _STRUCTURED_TYPES)


def to_env_string(value: Any) -> str:
    """
    Render a configuration value as an environment variable string.

    Structured values are encoded as JSON with sorted keys so the output is
    stable across runs. ``None`` becomes an empty string and booleans use
    lowercase ``true``/``false``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_structured(value):
        if isinstance(value, set):
            value = sorted(value, key=repr)
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return str(value)


def copy_pairs(
    dotmap: Dict[str, Any],
    target: MutableMapping[str, Any],
    prefix: str = "",
    serialize: bool = False,
) -> MutableMapping[str, Any]:
    """Write every dotted pair into ``target`` under ``prefix``, overwriting existing keys."""
    for key, value in dotmap.items():
        target[f"{prefix}{key}"] = to_env_string(value) if serialize else value
    return target
