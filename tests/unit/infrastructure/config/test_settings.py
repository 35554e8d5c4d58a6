import pytest

from memoproxy.domain.models.errors import ConfigurationError
from memoproxy.infrastructure.config import settings
from memoproxy.infrastructure.config.settings import (
    get_cache_failures, get_cache_max_entries, get_config, get_latency_seconds,
    load_configuration, set_config_for_testing,
)


def test_defaults_apply_without_any_source():
    assert get_cache_max_entries() is None
    assert get_cache_failures() is True
    assert get_latency_seconds('gateway.latency_seconds') == 0.0
    assert get_config('logging.level') == 'WARNING'
    assert get_config('unknown.key', 'fallback') == 'fallback'

def test_yaml_file_is_flattened(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("cache:\n  max_entries: 10\n  cache_failures: false\n")

    load_configuration(config_file=config_file)

    assert get_config('cache.max_entries') == 10
    assert get_cache_max_entries() == 10
    assert get_cache_failures() is False

def test_environment_overrides_yaml(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("cache:\n  max_entries: 10\n")
    monkeypatch.setenv("MEMOPROXY_CACHE_MAX_ENTRIES", "3")

    load_configuration(config_file=config_file)

    assert get_cache_max_entries() == 3

def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("MEMOPROXY_GATEWAY_LATENCY_SECONDS=0.25\n")
    # Registers removal of the variable load_dotenv is about to set.
    monkeypatch.delenv("MEMOPROXY_GATEWAY_LATENCY_SECONDS", raising=False)

    load_configuration(config_file=tmp_path / "absent.yaml", env_file=env_file)

    assert get_latency_seconds('gateway.latency_seconds') == 0.25

def test_test_config_has_highest_priority(monkeypatch):
    monkeypatch.setenv("MEMOPROXY_CACHE_CACHE_FAILURES", "true")
    set_config_for_testing({'cache.cache_failures': False})
    assert get_cache_failures() is False

def test_zero_max_entries_means_unbounded():
    set_config_for_testing({'cache.max_entries': 0})
    assert get_cache_max_entries() is None

@pytest.mark.parametrize("value", [-1, "many", True])
def test_invalid_max_entries_raises(value):
    set_config_for_testing({'cache.max_entries': value})
    with pytest.raises(ConfigurationError, match="cache.max_entries"):
        get_cache_max_entries()

def test_invalid_cache_failures_string_raises():
    set_config_for_testing({'cache.cache_failures': 'sometimes'})
    with pytest.raises(ConfigurationError):
        get_cache_failures()

def test_negative_latency_raises():
    set_config_for_testing({'remote.latency_seconds': -0.5})
    with pytest.raises(ConfigurationError, match="must not be negative"):
        get_latency_seconds('remote.latency_seconds')

def test_env_var_name():
    assert settings.env_var_name('cache.max_entries') == "MEMOPROXY_CACHE_MAX_ENTRIES"
