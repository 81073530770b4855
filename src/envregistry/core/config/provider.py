"""
Process-wide registry provider.

The application's composition root owns one ``ConfigRegistry`` and exposes it
here for code that needs the shared instance. Code that can take the registry
as an argument should do so instead; tests construct their own instances or
swap the shared one with ``with_registry``.

Access is not synchronized. Load the registry before starting threads that
read it.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from .registry import ConfigRegistry


class RegistryProvider:
    """Holds the shared registry, creating an empty one on first access."""

    def __init__(self, registry: Optional[ConfigRegistry] = None):
        self._registry = registry

    def get_registry(self) -> ConfigRegistry:
        if self._registry is None:
            self._registry = ConfigRegistry()
        return self._registry

    def set_registry(self, registry: ConfigRegistry) -> None:
        self._registry = registry

    def clear(self) -> None:
        """Drop the shared registry; the next access creates a fresh one."""
        self._registry = None

    @contextmanager
    def with_registry(self, registry: ConfigRegistry) -> Iterator[ConfigRegistry]:
        """
        Context manager for temporarily replacing the shared registry.

        Example:
            with provider.with_registry(ConfigRegistry()) as registry:
                registry.load({"db": {"host": "localhost"}})
                run_job()
        """
        previous = self._registry
        self._registry = registry
        try:
            yield registry
        finally:
            self._registry = previous


_provider: Optional[RegistryProvider] = None


def get_registry_provider() -> RegistryProvider:
    """Get the global registry provider."""
    global _provider
    if _provider is None:
        _provider = RegistryProvider()
    return _provider


def get_registry() -> ConfigRegistry:
    """Get the process-wide registry."""
    return get_registry_provider().get_registry()


def set_registry(registry: ConfigRegistry) -> None:
    """Install ``registry`` as the process-wide registry."""
    get_registry_provider().set_registry(registry)


def reset_registry() -> None:
    """Forget the process-wide registry. Intended for tests."""
    get_registry_provider().clear()


@contextmanager
def with_registry(registry: ConfigRegistry) -> Iterator[ConfigRegistry]:
    """Temporarily use ``registry`` as the process-wide registry."""
    with get_registry_provider().with_registry(registry):
        yield registry
