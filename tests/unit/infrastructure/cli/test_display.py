import pytest
from rich.console import Console

from memoproxy.domain.models.common import LargeDataPayload, PaymentResult, ProxyStats
from memoproxy.infrastructure.cli.display import ConsoleDisplay

@pytest.fixture
def console_display():
    """ConsoleDisplay writing into a recording console instead of the terminal."""
    return ConsoleDisplay(console=Console(record=True, width=120, color_system=None))

def _text(display: ConsoleDisplay) -> str:
    return display.console.export_text()

def test_format_payment_result():
    assert ConsoleDisplay.format_result(PaymentResult(True, 50.0, "USD")) == "approved: 50.0 USD"
    assert ConsoleDisplay.format_result(PaymentResult(False, 0.0, "USD")) == "declined: 0.0 USD"

def test_format_payload_result():
    assert ConsoleDisplay.format_result(LargeDataPayload(data=(1, 2))) == "2 items: [1, 2]"

def test_display_result_shows_status_and_counts(console_display: ConsoleDisplay):
    console_display.display_result("pay 50.0 USD", PaymentResult(True, 50.0, "USD"), "miss")
    console_display.display_result("pay 50.0 USD", PaymentResult(True, 50.0, "USD"), "hit")

    text = _text(console_display)
    assert "MISS" in text
    assert "HIT" in text
    assert "approved: 50.0 USD" in text
    assert console_display.result_count == 2

def test_display_stats_renders_one_row_per_proxy(console_display: ConsoleDisplay):
    console_display.display_stats({
        "payments": ProxyStats(hits=2, misses=1, size=1),
        "large-data": ProxyStats(hits=0, misses=1, size=1),
    })

    text = _text(console_display)
    assert "Cache statistics" in text
    assert "payments" in text
    assert "large-data" in text

def test_display_error(console_display: ConsoleDisplay):
    console_display.display_error("Something went wrong")
    text = _text(console_display)
    assert "Error" in text
    assert "Something went wrong" in text

def test_display_info(console_display: ConsoleDisplay):
    console_display.display_info("Process completed")
    assert "Process completed" in _text(console_display)
