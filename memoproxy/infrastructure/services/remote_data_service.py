import asyncio
import logging
from typing import Tuple

from memoproxy.domain.interfaces.service import Service
from memoproxy.domain.models.common import LargeDataPayload, LargeDataRequest

logger = logging.getLogger(__name__)

DEFAULT_LATENCY_SECONDS = 0.0
DEFAULT_DATA: Tuple[int, ...] = tuple(range(1, 11))

class RemoteDataService(Service[LargeDataRequest, LargeDataPayload]):
    """Simulates fetching a large, request-independent data set from a remote API."""

    def __init__(self, latency_seconds: float = DEFAULT_LATENCY_SECONDS, data: Tuple[int, ...] = DEFAULT_DATA):
        self.latency_seconds = latency_seconds
        self._data = tuple(data)
        self.calls = 0

    async def perform(self, request: LargeDataRequest) -> LargeDataPayload:
        self.calls += 1
        logger.debug(f"Fetching large data remotely (call #{self.calls})")
        await asyncio.sleep(self.latency_seconds)
        return LargeDataPayload(data=self._data)
