"""Debounced photo feed search client."""

__version__ = "0.1.0"
