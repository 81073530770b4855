"""
Test suite for envregistry.

Tests mirror the package layout:

- core/config/: registry, loader, exporters and provider
- core/utils/: logging helpers
- cli/: command-line interface
"""
