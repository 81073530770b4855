"""Configuration registry, loader and export helpers."""

from .errors import ConfigSourceError, EnvRegistryError, MissingVariableError
from .exporters import DEFAULT_ENV_PREFIX, copy_pairs, to_env_string
from .loader import load_source
from .registry import ConfigRegistry
from .tree import copy_tree, deep_merge, flatten, unflatten
from .provider import (
    RegistryProvider,
    get_registry,
    get_registry_provider,
    reset_registry,
    set_registry,
    with_registry,
)

__all__ = [
    "ConfigRegistry",
    "ConfigSourceError",
    "DEFAULT_ENV_PREFIX",
    "EnvRegistryError",
    "MissingVariableError",
    "RegistryProvider",
    "copy_pairs",
    "copy_tree",
    "deep_merge",
    "flatten",
    "get_registry",
    "get_registry_provider",
    "load_source",
    "reset_registry",
    "set_registry",
    "to_env_string",
    "unflatten",
    "with_registry",
]
