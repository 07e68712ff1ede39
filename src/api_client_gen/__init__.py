"""api-client-gen: typed builder-style REST client generator."""

__version__ = "0.1.0"
