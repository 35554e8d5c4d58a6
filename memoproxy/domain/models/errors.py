"""Domain error types.

The proxy itself never originates errors; these describe failures of the
services behind it and of the configuration used to build them.
"""


class MemoProxyError(Exception):
    """Base class for all memoproxy errors."""


class OperationFailed(MemoProxyError):
    """Raised when a real service could not produce a result."""

    def __init__(self, service: str, reason: str):
        self.service = service
        self.reason = reason
        super().__init__(f"{service} failed: {reason}")


class ConfigurationError(MemoProxyError):
    """Raised when a configuration value is missing or invalid."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Invalid configuration for '{key}': {message}")
