"""Sleng - a single-user slang dictionary."""

__version__ = "0.1.0"
