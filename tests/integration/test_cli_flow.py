import pytest
from typer.testing import CliRunner

from memoproxy.infrastructure.config.settings import set_config_for_testing
from memoproxy.main import app, create_dependencies

@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()

@pytest.fixture(autouse=True)
def quiet_logging(mocker):
    """Keeps setup_logging from attaching handlers to CliRunner's short-lived streams."""
    return mocker.patch('memoproxy.main.setup_logging')

def test_pay_repeat_hits_cache(runner: CliRunner):
    result = runner.invoke(app, ["pay", "50", "USD", "--repeat", "3"])

    assert result.exit_code == 0, result.output
    assert result.output.count("HIT") == 2
    assert result.output.count("MISS") == 1
    assert "approved: 50.0 USD" in result.output

def test_pay_declined_amount(runner: CliRunner):
    result = runner.invoke(app, ["pay", "--", "-5", "USD"])

    assert result.exit_code == 0, result.output
    assert "declined" in result.output

def test_fetch_repeat(runner: CliRunner):
    result = runner.invoke(app, ["fetch", "-r", "2"])

    assert result.exit_code == 0, result.output
    assert "MISS" in result.output
    assert "HIT" in result.output
    assert "10 items" in result.output

def test_demo_shows_coalesced_requests_and_stats(runner: CliRunner):
    result = runner.invoke(app, ["demo"])

    assert result.exit_code == 0, result.output
    assert result.output.count("COALESCED") == 2
    assert "Cache statistics" in result.output
    assert "payments" in result.output
    assert "large-data" in result.output

def test_invalid_configuration_exits_with_error(runner: CliRunner):
    set_config_for_testing({'cache.max_entries': -1})

    result = runner.invoke(app, ["fetch"])

    assert result.exit_code == 1
    assert "Initialization Failed" in result.output

def test_repeat_must_be_positive(runner: CliRunner):
    result = runner.invoke(app, ["fetch", "--repeat", "0"])
    assert result.exit_code != 0

@pytest.mark.asyncio
async def test_composition_root_wires_lazy_services_behind_proxies():
    deps = create_dependencies()

    assert not deps['payment_service'].initialized
    await deps['command_handler'].handle_pay(10.0, "USD", repeat=2)

    assert deps['payment_service'].initialized
    assert deps['payment_proxy'].stats.hits == 1
    assert not deps['data_service'].initialized
