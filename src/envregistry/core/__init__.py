"""Core registry and utilities for envregistry."""
