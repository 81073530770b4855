"""Dotted-path helpers over nested configuration trees."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

_MISSING = object()


def copy_tree(value: Any) -> Any:
    """Return an independent copy of a tree; mappings become dicts, tuples become lists."""
    if isinstance(value, Mapping):
        return {key: copy_tree(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [copy_tree(item) for item in value]
    return value


def flatten(nested: Any, prefix: str = "") -> Dict[str, Any]:
    """Flatten nested dicts and lists to a dotpath map; list items are keyed by index."""
    if isinstance(nested, Mapping):
        entries = nested.items()
    else:
        entries = enumerate(nested)

    items: Dict[str, Any] = {}
    for key, value in entries:
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, (Mapping, list, tuple)):
            items.update(flatten(value, full_key))
        else:
            items[full_key] = value
    return items


def unflatten(dotmap: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert dotpath map to nested dict."""
    nested: Dict[str, Any] = {}
    for key, value in dotmap.items():
        parts = key.split(".")
        cursor = nested
        for part in parts[:-1]:
            if part not in cursor or not isinstance(cursor[part], dict):
                cursor[part] = {}
            cursor = cursor[part]
        cursor[parts[-1]] = value
    return nested


def deep_merge(
    base: Mapping[str, Any], incoming: Mapping[str, Any], append_lists: bool = False
) -> Dict[str, Any]:
    """
    Recursively merge ``incoming`` into a copy of ``base``.

    Mappings on both sides are merged key by key; otherwise the incoming value
    wins. With ``append_lists`` an existing list absorbs the incoming value
    instead of being replaced (extended by a list, appended to by anything else).
    Values taken from ``incoming`` are copied, never shared.
    """
    merged = dict(base)
    for key, value in incoming.items():
        existing = merged.get(key, _MISSING)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(existing, value, append_lists)
        elif append_lists and isinstance(existing, list):
            extra = copy_tree(value) if isinstance(value, (list, tuple)) else [copy_tree(value)]
            merged[key] = existing + extra
        else:
            merged[key] = copy_tree(value)
    return merged


def list_index(container: Any, segment: str) -> int | None:
    """
    Return the list position addressed by ``segment``, or None.

    Only decimal segments within the list, or one past its end, qualify.
    """
    if not isinstance(container, list) or not segment.isdecimal():
        return None
    index = int(segment)
    return index if index <= len(container) else None
