"""Interface for presenting proxied call outcomes to the user.

Defines the contract for displaying results, cache statistics, errors and
informational messages, allowing different UI implementations (e.g., console).
"""

import abc
from typing import Any, Mapping

from memoproxy.domain.models.common import ProxyStats

class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_result(self, label: str, result: Any, cache_status: str, **kwargs: Any) -> None:
        """Displays the result of one proxied call.

        Args:
            label: Short description of the request (e.g., '50.0 USD').
            result: The result returned by the proxy.
            cache_status: 'hit', 'miss' or 'coalesced'.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_stats(self, stats: Mapping[str, ProxyStats], **kwargs: Any) -> None:
        """Displays cache statistics for one or more named proxies.

        Args:
            stats: Proxy name -> statistics snapshot.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user.

        Args:
            info_message: The informational message string.
            **kwargs: Additional arguments for formatting.
        """
        pass
