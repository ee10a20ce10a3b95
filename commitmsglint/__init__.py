"""Commit message linting for pre-push hooks and CI checks."""

__version__ = "0.1.0"
