"""Test basic setup and configuration."""

import pytest
from pydantic import ValidationError

from hamvaxmap.config.settings import Settings, load_source_config
from hamvaxmap.decoders import DECODER_MAP, KvhhRowDecoder, get_decoder


def test_settings_creation():
    """Test that settings can be created with defaults."""
    settings = Settings(geocode_api_key="test-key")

    assert settings.geocode_api_key == "test-key"
    assert settings.geocode_endpoint == "https://maps.googleapis.com/maps/api/geocode/json"
    assert settings.source == "kvhh"
    assert settings.max_concurrent_lookups == 10
    assert settings.failure_policy == "fail_fast"
    assert settings.cache_ttl_seconds == 0


def test_settings_read_api_key_from_environment(monkeypatch):
    """Test that the credential is injected through the environment."""
    monkeypatch.setenv("GEOCODE_API_KEY", "from-env")
    monkeypatch.setenv("FAILURE_POLICY", "isolate")

    settings = Settings()

    assert settings.geocode_api_key == "from-env"
    assert settings.failure_policy == "isolate"


def test_settings_reject_unknown_failure_policy():
    """Test that only the documented failure policies are accepted."""
    with pytest.raises(ValidationError):
        Settings(geocode_api_key="test-key", failure_policy="retry")


def test_settings_reject_zero_concurrency():
    """Test that the worker pool needs at least one slot."""
    with pytest.raises(ValidationError):
        Settings(geocode_api_key="test-key", max_concurrent_lookups=0)


def test_source_config_loads():
    """Test that source configuration loads correctly."""
    config = load_source_config()

    assert "sources" in config
    kvhh = config["sources"]["kvhh"]
    assert kvhh["url"].startswith("https://www.kvhh.net/")
    assert kvhh["decoder"] in DECODER_MAP
    assert kvhh["resources"][0]["name"] == "Liste der KVHH"


def test_get_decoder():
    """Test decoder lookup by name."""
    assert isinstance(get_decoder("kvhh"), KvhhRowDecoder)

    with pytest.raises(ValueError, match="No row decoder"):
        get_decoder("unknown")


def test_with_overrides_replaces_fields():
    """Test that overrides keep the other settings."""
    settings = Settings(geocode_api_key="test-key")

    updated = settings.with_overrides(failure_policy="isolate", max_concurrent_lookups=3)

    assert updated.failure_policy == "isolate"
    assert updated.max_concurrent_lookups == 3
    assert updated.geocode_api_key == "test-key"
    assert settings.failure_policy == "fail_fast"


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_concurrent_lookups": -1},
        {"max_concurrent_lookups": 0},
        {"failure_policy": "retry"},
        {"cache_ttl_seconds": -5},
    ],
)
def test_with_overrides_validates(overrides):
    """Test that overrides obey the same constraints as the environment."""
    settings = Settings(geocode_api_key="test-key")

    with pytest.raises(ValidationError):
        settings.with_overrides(**overrides)
