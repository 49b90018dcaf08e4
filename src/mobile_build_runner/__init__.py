"""Command-line driven mobile build runner."""

__version__ = "0.1.0"
