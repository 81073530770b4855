"""
envregistry - process-wide configuration registry

Loads nested key-value settings from a mapping or a file, exposes dotted-path
lookup and mutation, validates required keys, and copies the flattened
settings into the process environment or request/server-level maps.

Package Structure:
- core/config/: registry, file loader, export helpers and shared provider
- core/utils/: logging setup
- cli/: command-line interface for inspecting configuration sources
"""

__version__ = "0.1.0"

from envregistry.core.config import (
    ConfigRegistry,
    ConfigSourceError,
    EnvRegistryError,
    MissingVariableError,
    get_registry,
    set_registry,
)

__all__ = [
    "ConfigRegistry",
    "ConfigSourceError",
    "EnvRegistryError",
    "MissingVariableError",
    "__version__",
    "get_registry",
    "set_registry",
]
