"""memoproxy: caching and lazy proxies in front of expensive services."""

__version__ = "0.1.0"
