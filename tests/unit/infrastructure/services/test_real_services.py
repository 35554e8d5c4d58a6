import pytest

from memoproxy.domain.models.common import LargeDataPayload, LargeDataRequest, PaymentRequest, PaymentResult
from memoproxy.domain.models.errors import OperationFailed
from memoproxy.infrastructure.services.payment_gateway import PaymentGateway, payment_declined
from memoproxy.infrastructure.services.remote_data_service import RemoteDataService


@pytest.mark.asyncio
async def test_gateway_approves_valid_payment(gateway):
    result = await gateway.perform(PaymentRequest(50.0, "USD"))
    assert result == PaymentResult(success=True, amount=50.0, currency="USD")
    assert not payment_declined(result)

@pytest.mark.asyncio
@pytest.mark.parametrize("amount, currency", [(0.0, "USD"), (-10.0, "USD"), (10.0, "  ")])
async def test_gateway_declines_invalid_payment(gateway, amount, currency):
    result = await gateway.perform(PaymentRequest(amount, currency))
    assert result.success is False
    assert payment_declined(result)

@pytest.mark.asyncio
async def test_unavailable_gateway_raises_operation_failed():
    gateway = PaymentGateway(available=False)
    with pytest.raises(OperationFailed) as exc_info:
        await gateway.perform(PaymentRequest(50.0, "USD"))
    assert exc_info.value.service == "PaymentGateway"
    assert exc_info.value.reason == "gateway unavailable"
    assert str(exc_info.value) == "PaymentGateway failed: gateway unavailable"
    assert gateway.calls == 1

@pytest.mark.asyncio
async def test_gateway_counts_every_call(gateway):
    for _ in range(3):
        await gateway.perform(PaymentRequest(50.0, "USD"))
    assert gateway.calls == 3

@pytest.mark.asyncio
async def test_remote_data_service_returns_payload(remote_data):
    payload = await remote_data.perform(LargeDataRequest())
    assert payload == LargeDataPayload(data=(1, 2, 3, 4, 5, 6, 7, 8, 9, 10))
    assert remote_data.calls == 1

@pytest.mark.asyncio
async def test_remote_data_service_custom_data():
    service = RemoteDataService(data=[3, 2, 1])
    payload = await service.perform(LargeDataRequest())
    assert payload.data == (3, 2, 1)
