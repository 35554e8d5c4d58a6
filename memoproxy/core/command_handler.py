"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and runs them
through the memoizing proxies, reporting each result together with the
cache status observed for it.
"""

import asyncio
import logging
from typing import Any, List, Sequence, Tuple

from memoproxy.core.services.memoizing_proxy import MemoizingProxy
from memoproxy.domain.events.cache_events import CacheHit, CacheMiss, RequestCoalesced
from memoproxy.domain.interfaces.user_interface import UserInterface
from memoproxy.domain.models.common import LargeDataRequest, PaymentRequest
from memoproxy.infrastructure.monitoring.event_dispatcher import EventDispatcher, EventRecorder

logger = logging.getLogger(__name__)

_STATUS_BY_EVENT = {
    CacheHit: "hit",
    CacheMiss: "miss",
    RequestCoalesced: "coalesced",
}

class CommandHandler:
    """Handles incoming commands and delegates to the proxied services."""

    def __init__(
        self,
        payment_proxy: MemoizingProxy,
        data_proxy: MemoizingProxy,
        dispatcher: EventDispatcher,
        ui: UserInterface,
    ):
        """Initializes the CommandHandler with the proxies and the UI."""
        self.payment_proxy = payment_proxy
        self.data_proxy = data_proxy
        self.dispatcher = dispatcher
        self.ui = ui
        self._recorder = EventRecorder()
        for event_type in _STATUS_BY_EVENT:
            self.dispatcher.subscribe(event_type, self._recorder)

    async def _run(
        self, proxy: MemoizingProxy, requests: Sequence[Any], concurrent: bool = False
    ) -> List[Tuple[Any, str]]:
        """Performs requests through a proxy, pairing each result with its cache status.

        Status events are published before a call first suspends, so their
        order matches the order the calls were started in.
        """
        mark = len(self._recorder.events)
        if concurrent:
            results = await asyncio.gather(*(proxy.perform(r) for r in requests))
        else:
            results = [await proxy.perform(r) for r in requests]
        statuses = [
            _STATUS_BY_EVENT[type(e)]
            for e in self._recorder.events[mark:]
            if getattr(e, "proxy", None) == proxy.name
        ]
        return list(zip(results, statuses))

    async def handle_pay(self, amount: float, currency: str, repeat: int = 1) -> None:
        """Handles the 'pay' command."""
        logger.info(f"Handling 'pay' command: {amount} {currency} x{repeat}")
        request = PaymentRequest(amount=amount, currency=currency)
        try:
            for result, status in await self._run(self.payment_proxy, [request] * repeat):
                self.ui.display_result(f"pay {amount} {currency}", result, status)
        except Exception as e:
            logger.error(f"Payment command failed: {e}", exc_info=True)
            self.ui.display_error(f"Payment failed: {e}")
            return
        self.ui.display_stats({self.payment_proxy.name: self.payment_proxy.stats})

    async def handle_fetch(self, repeat: int = 1) -> None:
        """Handles the 'fetch' command."""
        logger.info(f"Handling 'fetch' command x{repeat}")
        try:
            for result, status in await self._run(self.data_proxy, [LargeDataRequest()] * repeat):
                self.ui.display_result("fetch large data", result, status)
        except Exception as e:
            logger.error(f"Fetch command failed: {e}", exc_info=True)
            self.ui.display_error(f"Fetch failed: {e}")
            return
        self.ui.display_stats({self.data_proxy.name: self.data_proxy.stats})

    async def handle_demo(self) -> None:
        """Handles the 'demo' command: repeated, distinct and concurrent requests."""
        logger.info("Handling 'demo' command")
        try:
            self.ui.display_info("Repeated and distinct payments")
            payments = [
                PaymentRequest(50.0, "USD"),
                PaymentRequest(100.0, "USD"),
                PaymentRequest(50.0, "USD"),
            ]
            for request, (result, status) in zip(payments, await self._run(self.payment_proxy, payments)):
                self.ui.display_result(f"pay {request.amount} {request.currency}", result, status)

            self.ui.display_info("Concurrent identical payments share one gateway call")
            burst = [PaymentRequest(75.0, "EUR")] * 3
            for result, status in await self._run(self.payment_proxy, burst, concurrent=True):
                self.ui.display_result("pay 75.0 EUR", result, status)

            self.ui.display_info("Parameterless fetch is cached under one key")
            for result, status in await self._run(self.data_proxy, [LargeDataRequest()] * 2):
                self.ui.display_result("fetch large data", result, status)
        except Exception as e:
            logger.error(f"Demo failed: {e}", exc_info=True)
            self.ui.display_error(f"Demo failed: {e}")
            return

        self.ui.display_stats({
            self.payment_proxy.name: self.payment_proxy.stats,
            self.data_proxy.name: self.data_proxy.stats,
        })
