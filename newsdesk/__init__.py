"""Multi-agent news research pipeline backend."""

__version__ = "1.0.0"
