"""Resolve configuration file references into nested trees."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Dict, Union
import json
import os
import runpy

from dotenv import dotenv_values

from envregistry.core.utils.logger import log_debug

from .errors import ConfigSourceError
from .tree import unflatten

SourceRef = Union[str, "os.PathLike[str]"]

PYTHON_SOURCE_VARIABLE = "CONFIG"


def _is_dotenv_file(path: Path) -> bool:
    return path.suffix.lower() == ".env" or path.name == ".env" or path.name.startswith(".env.")


def _unwrap_config(payload: Dict[str, Any]) -> Dict[str, Any]:
    if "config" in payload and "schema_version" in payload and isinstance(payload["config"], dict):
        return payload["config"]
    return payload


def _load_json(path: Path) -> Any:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigSourceError(str(path), f"invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigSourceError(str(path), f"cannot read file: {e}") from e
    if isinstance(payload, dict):
        payload = _unwrap_config(payload)
    return payload


def _load_python(path: Path) -> Any:
    try:
        namespace = runpy.run_path(str(path))
    except Exception as e:
        raise ConfigSourceError(str(path), f"error executing file: {e}") from e
    if PYTHON_SOURCE_VARIABLE not in namespace:
        raise ConfigSourceError(str(path), f"no module-level {PYTHON_SOURCE_VARIABLE} defined")
    return namespace[PYTHON_SOURCE_VARIABLE]


def _load_dotenv(path: Path) -> Any:
    try:
        values = dotenv_values(dotenv_path=path, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigSourceError(str(path), f"cannot read file: {e}") from e
    return unflatten(dict(values))


_LOADERS: Dict[str, Callable[[Path], Any]] = {
    ".json": _load_json,
    ".py": _load_python,
}


def load_source(source: SourceRef) -> Dict[str, Any]:
    """
    Load a configuration tree from a file.

    Supported sources:
    - ``.json`` files, optionally wrapped as ``{"schema_version": N, "config": {...}}``
    - ``.py`` files defining a module-level ``CONFIG`` mapping
    - dotenv files (``.env``, ``.env.local``, ``prod.env``); dotted keys become nested trees

    Raises:
        ConfigSourceError: If the file is missing, unsupported, unparseable or
            does not produce a mapping.
    """
    path = Path(source)
    if not path.is_file():
        raise ConfigSourceError(str(path), "file not found")

    if _is_dotenv_file(path):
        loader = _load_dotenv
    else:
        loader = _LOADERS.get(path.suffix.lower())
        if loader is None:
            raise ConfigSourceError(str(path), f"unsupported file type '{path.suffix}'")

    tree = loader(path)
    if not isinstance(tree, Mapping):
        raise ConfigSourceError(
            str(path), f"expected a mapping, got {type(tree).__name__}"
        )
    log_debug("LOADER", f"Loaded {len(tree)} top-level keys", context=str(path))
    return dict(tree)
