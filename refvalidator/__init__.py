"""Reference validator backend: provider registry, mock providers and HTTP API."""

__version__ = "0.1.0"
