"""Configuration registry."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Dict, Iterable, List, Optional
import os

from envregistry.core.utils.logger import (
    log_configuration_change,
    log_debug,
    log_error,
    log_info,
    log_warning,
)

from .errors import MissingVariableError
from .exporters import DEFAULT_ENV_PREFIX, copy_pairs
from .loader import load_source
from .tree import copy_tree, deep_merge, flatten, list_index


def _read(container: Any, segment: str) -> Any:
    index = list_index(container, segment)
    if index is not None:
        return container[index] if index < len(container) else None
    return container.get(segment)


def _write(container: Any, segment: str, value: Any) -> None:
    index = list_index(container, segment)
    if index is None:
        container[segment] = value
    elif index == len(container):
        container.append(value)
    else:
        container[index] = value


class ConfigRegistry:
    """
    Holds one configuration tree plus the list of keys it must provide.

    The registry starts unloaded and empty. ``load`` installs a tree and
    validates required keys, ``flush`` empties it again. Reads and writes are
    allowed in either state.

    Collaborators are injectable so that tests and embedding applications can
    supply their own loader, request/server maps and process environment.
    """

    def __init__(
        self,
        required: Optional[Iterable[str]] = None,
        loader: Callable[[Any], Mapping[str, Any]] = load_source,
        env_map: Optional[MutableMapping[str, Any]] = None,
        server_map: Optional[MutableMapping[str, Any]] = None,
        environ: Optional[MutableMapping[str, str]] = None,
    ):
        self._variables: Dict[str, Any] = {}
        self._required: List[str] = list(required or [])
        self._is_loaded = False
        self._loader = loader
        self.env_map: MutableMapping[str, Any] = env_map if env_map is not None else {}
        self.server_map: MutableMapping[str, Any] = (
            server_map if server_map is not None else {}
        )
        self._environ = environ

    def __repr__(self) -> str:
        state = "loaded" if self._is_loaded else "unloaded"
        return f"<ConfigRegistry {state} keys={len(self._variables)} required={len(self._required)}>"

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    @property
    def required(self) -> List[str]:
        return list(self._required)

    def load(self, source: Any) -> None:
        """
        Install a configuration tree, replacing any previous one.

        Args:
            source: A mapping used as the tree, or a file reference passed to
                the loader.

        Raises:
            MissingVariableError: If a required key is missing from the new tree.
        """
        if isinstance(source, Mapping):
            self._variables = copy_tree(source)
            origin = "mapping"
        else:
            self._variables = copy_tree(self._loader(source))
            origin = str(source)
        self._is_loaded = True
        log_info("REGISTRY", f"Loaded configuration with {len(self._variables)} top-level keys", context=origin)

        self._check_required_variables()

    def all(self) -> Dict[str, Any]:
        """Return the current tree. The returned object is live; do not mutate it."""
        return self._variables

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a value by dotted path.

        Decimal segments index into lists. Absent keys, paths that run into a
        scalar and explicit ``None`` values all return ``default``.
        """
        value: Any = self._variables
        for segment in key.split("."):
            if isinstance(value, Mapping):
                if segment not in value:
                    return default
                value = value[segment]
                continue
            index = list_index(value, segment)
            if index is None or index == len(value):
                return default
            value = value[index]
        return default if value is None else value

    def set(self, keys: Any, value: Any = None, append_lists: bool = False) -> None:
        """
        Set a value by dotted path, or deep-merge a mapping into the tree.

        The dotted form walks into lists through decimal segments; a segment
        equal to the list length appends. A list addressed by a non-index
        segment becomes a tree keyed by the former positions. Absent and
        scalar intermediates are replaced by empty trees.

        Args:
            keys: Dotted path, or a mapping to merge into the current tree.
            value: Value stored at the dotted path (ignored for the mapping form).
            append_lists: Mapping form only; append to existing lists instead
                of replacing them.
        """
        if isinstance(keys, Mapping):
            self._variables = deep_merge(self._variables, keys, append_lists)
            log_debug("REGISTRY", f"Merged {len(keys)} top-level keys")
            return

        segments = keys.split(".")
        cursor: Any = self._variables
        for position, segment in enumerate(segments[:-1]):
            child = _read(cursor, segment)
            if isinstance(child, list):
                if list_index(child, segments[position + 1]) is None:
                    child = {str(index): item for index, item in enumerate(child)}
                    _write(cursor, segment, child)
            elif not isinstance(child, MutableMapping):
                if child is not None:
                    log_warning(
                        "REGISTRY",
                        f"Replacing scalar {child!r} with a tree",
                        context=".".join(segments[: position + 1]),
                    )
                child = {}
                _write(cursor, segment, child)
            cursor = child

        old_value = _read(cursor, segments[-1])
        _write(cursor, segments[-1], copy_tree(value))
        log_configuration_change(keys, old_value, value)

    def set_required(self, keys: Iterable[str]) -> None:
        """Replace the required keys; validates immediately when already loaded."""
        self._required = list(keys)

        if self._is_loaded:
            self._check_required_variables()

    def flush(self) -> None:
        """Delete all variables. Required keys are kept."""
        self._variables = {}
        self._is_loaded = False
        log_info("REGISTRY", "Flushed configuration")

    def missing_required(self) -> List[str]:
        """Return every required key that currently resolves to None."""
        return [key for key in self._required if self.get(key) is None]

    def copy_vars_to_process_env(self, prefix: str = DEFAULT_ENV_PREFIX) -> None:
        """Export every flattened variable to the process environment as ``{prefix}{key}``."""
        environ = self._environ if self._environ is not None else os.environ
        copy_pairs(flatten(self.all()), environ, prefix=prefix, serialize=True)

    def copy_vars_to_env_map(
        self, target: Optional[MutableMapping[str, Any]] = None
    ) -> MutableMapping[str, Any]:
        """Copy every flattened variable, unserialized, into the request-level map."""
        return copy_pairs(flatten(self.all()), self.env_map if target is None else target)

    def copy_vars_to_server_map(
        self, target: Optional[MutableMapping[str, Any]] = None
    ) -> MutableMapping[str, Any]:
        """Copy every flattened variable, unserialized, into the server-level map."""
        return copy_pairs(flatten(self.all()), self.server_map if target is None else target)

    def _check_required_variables(self) -> None:
        for key in self._required:
            if self.get(key) is None:
                log_error("REGISTRY", f"Required variable '{key}' is missing")
                raise MissingVariableError(key)
