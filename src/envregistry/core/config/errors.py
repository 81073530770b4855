"""Exception hierarchy for the configuration registry."""


class EnvRegistryError(Exception):
    """Base exception for all envregistry errors."""


class MissingVariableError(EnvRegistryError):
    """A required configuration variable resolved to None."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Configuration variable '{key}' is missing")


class ConfigSourceError(EnvRegistryError, ValueError):
    """A configuration source could not be resolved into a tree."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load configuration from {source}: {reason}")
