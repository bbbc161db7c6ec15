from __future__ import annotations


class ConfigurationError(ValueError):
    """A chain specification could not be turned into actions."""
