"""Interface for proxied services.

Defines the single capability that both a real (expensive or remote)
service and every proxy in front of it implement, so a proxy can be used
anywhere the real service is expected.
"""

import abc
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")


class Service(abc.ABC, Generic[RequestT, ResultT]):
    """Abstract Base Class for a service that answers one kind of request."""

    @abc.abstractmethod
    async def perform(self, request: RequestT) -> ResultT:
        """Performs the operation for a request asynchronously.

        Args:
            request: The immutable request arguments.

        Returns:
            The result produced for the request.

        Raises:
            OperationFailed: If the service could not produce a result.
        """
        pass
