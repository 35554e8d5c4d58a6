import asyncio

import pytest

from memoproxy.domain.interfaces.service import Service
from memoproxy.infrastructure.config import settings
from memoproxy.infrastructure.monitoring.event_dispatcher import EventDispatcher, EventRecorder
from memoproxy.domain.events.cache_events import DomainEvent
from memoproxy.infrastructure.services.payment_gateway import PaymentGateway
from memoproxy.infrastructure.services.remote_data_service import RemoteDataService


class GatedService(Service):
    """Real service double whose calls block until the test releases them."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []
        self.release = asyncio.Event()

    async def perform(self, request):
        self.calls.append(request)
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.result if self.result is not None else ("result", request)


@pytest.fixture
def gateway():
    return PaymentGateway()

@pytest.fixture
def remote_data():
    return RemoteDataService()

@pytest.fixture
def dispatcher():
    return EventDispatcher()

@pytest.fixture
def recorder(dispatcher):
    """Records every event published through the dispatcher fixture."""
    recorder = EventRecorder()
    dispatcher.subscribe(DomainEvent, recorder)
    return recorder

@pytest.fixture
def gated_service():
    return GatedService()

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keeps tests independent of the developer's config files and environment."""
    for key in list(settings.DEFAULTS):
        monkeypatch.delenv(settings.env_var_name(key), raising=False)
    monkeypatch.setattr(settings, "DEFAULT_CONFIG_FILE", tmp_path / "missing.yaml")
    monkeypatch.setattr(settings, "find_dotenv_path", lambda: None)
    settings.reset_configuration()
    settings.clear_test_config()
    yield
    settings.reset_configuration()
    settings.clear_test_config()
