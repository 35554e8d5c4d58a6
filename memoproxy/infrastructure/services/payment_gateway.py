"""Simulated payment gateway.

Stands in for an expensive remote payment call. Every invocation costs a
configurable latency, which is what a caching proxy in front of it saves.
"""

import asyncio
import logging

from memoproxy.domain.interfaces.service import Service
from memoproxy.domain.models.common import PaymentRequest, PaymentResult
from memoproxy.domain.models.errors import OperationFailed

logger = logging.getLogger(__name__)

DEFAULT_LATENCY_SECONDS = 0.0

class PaymentGateway(Service[PaymentRequest, PaymentResult]):
    """Concrete payment service that charges through a (simulated) gateway."""

    def __init__(self, latency_seconds: float = DEFAULT_LATENCY_SECONDS, available: bool = True):
        """Initializes the gateway.

        Args:
            latency_seconds: Simulated round-trip time per payment.
            available: When False every payment raises OperationFailed.
        """
        self.latency_seconds = latency_seconds
        self.available = available
        self.calls = 0
        logger.info(f"PaymentGateway initialized (latency={latency_seconds}s, available={available})")

    async def perform(self, request: PaymentRequest) -> PaymentResult:
        """Charges the requested amount.

        Non-positive amounts and blank currencies are declined with a
        failed PaymentResult rather than an error.

        Raises:
            OperationFailed: If the gateway is unavailable.
        """
        self.calls += 1
        logger.debug(f"Charging {request.amount} {request.currency} (call #{self.calls})")
        # Always yields to the event loop, like a real network round-trip.
        await asyncio.sleep(self.latency_seconds)

        if not self.available:
            raise OperationFailed("PaymentGateway", "gateway unavailable")

        success = request.amount > 0 and bool(request.currency.strip())
        if not success:
            logger.info(f"Payment declined: amount={request.amount}, currency={request.currency!r}")
        return PaymentResult(success=success, amount=request.amount, currency=request.currency)


def payment_declined(result: PaymentResult) -> bool:
    """Failure predicate for PaymentResult, for use with MemoizingProxy."""
    return not result.success
