"""Command-line interface for envregistry."""
