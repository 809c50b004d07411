"""Tests for configuration management."""

from pathlib import Path

import pytest

from visitormap.config import GeoIPSettings, Settings, get_settings


def test_default_settings():
    """Test default settings are loaded correctly."""
    settings = Settings()

    assert settings.name == "VisitorMap"
    assert settings.version == "0.1.0"
    assert settings.environment == "development"
    assert settings.debug is False


def test_environment_override(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("APP_NAME", "Custom Name")
    monkeypatch.setenv("APP_DEBUG", "true")
    monkeypatch.setenv("APP_ENVIRONMENT", "production")

    settings = Settings()

    assert settings.name == "Custom Name"
    assert settings.debug is True
    assert settings.environment == "production"


def test_logparser_settings():
    """Test access log configuration."""
    settings = Settings()

    assert settings.logparser.log_path == Path("/var/log/nginx/access.log")
    assert settings.logparser.default_lines == 200


def test_geoip_settings():
    """Test GeoIP configuration."""
    test_db = Path("test_geoip.mmdb")
    test_db.touch()

    try:
        settings = Settings(geoip=GeoIPSettings(db_path=test_db, validate_db_path=True))
        assert settings.geoip.db_path == test_db
        assert settings.geoip.batch_url == "http://ip-api.com/batch"
        assert settings.geoip.batch_size == 100
        assert settings.geoip.timeout == 5.0
    finally:
        test_db.unlink()


def test_geoip_missing_file():
    """Test GeoIP validation fails for missing file when validation is enabled."""
    with pytest.raises(ValueError, match="GeoIP database file not found"):
        GeoIPSettings(
            db_path=Path("/nonexistent/file.mmdb"),
            validate_db_path=True  # Enable validation
        )


def test_geoip_invalid_locale():
    with pytest.raises(ValueError, match="Invalid GeoIP locales"):
        GeoIPSettings(locales=["xx"])


@pytest.mark.parametrize("batch_size", [0, 101])
def test_geoip_batch_size_limits(batch_size):
    with pytest.raises(ValueError, match="batch size"):
        GeoIPSettings(batch_size=batch_size)


def test_api_settings():
    """Test API server configuration."""
    settings = Settings()

    assert settings.api.host == "0.0.0.0"
    assert settings.api.port == 3001
    assert settings.api.log_level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def test_visitor_and_static_settings():
    settings = Settings()

    assert settings.visitors.max_entries == 50
    assert settings.static.directory == Path("public")
    assert settings.static.enabled is False  # disabled by the test environment


def test_environment_properties():
    """Test environment helper properties."""
    dev_settings = Settings(environment="development")
    assert dev_settings.is_development is True
    assert dev_settings.is_production is False

    prod_settings = Settings(environment="production")
    assert prod_settings.is_production is True
    assert prod_settings.is_development is False


def test_settings_caching():
    """Test that get_settings returns cached instance."""
    settings1 = get_settings()
    settings2 = get_settings()

    # Should be the same instance due to @lru_cache
    assert settings1 is settings2


def test_nested_settings_override(monkeypatch):
    """Test overriding nested settings via environment variables."""
    monkeypatch.setenv("LOGPARSER_LOG_PATH", "/tmp/custom.log")
    monkeypatch.setenv("LOGPARSER_DEFAULT_LINES", "500")
    monkeypatch.setenv("GEOIP_CACHE_MAX_ENTRIES", "0")
    monkeypatch.setenv("API_PORT", "9000")

    settings = Settings()

    assert settings.logparser.log_path == Path("/tmp/custom.log")
    assert settings.logparser.default_lines == 500
    assert settings.geoip.cache_max_entries == 0
    assert settings.api.port == 9000


def test_list_settings_from_env(monkeypatch):
    """Test list settings can be set via environment variables."""
    monkeypatch.setenv("GEOIP_LOCALES", '["de"]')

    settings = Settings()

    assert "de" in settings.geoip.locales
    assert len(settings.geoip.locales) == 1
