from pathlib import Path

import pytest

from shopfront.core.config import ConfigurationError, Settings


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})
    assert settings.catalog_source == "file"
    assert settings.catalog_table == "products"
    assert settings.search_debounce_seconds == pytest.approx(0.3)
    assert settings.request_timeout == 10.0
    assert settings.log_level == "INFO"
    assert "http://localhost:3000" in settings.cors_allow_origins


def test_values_are_read_from_environment():
    settings = Settings.from_env(
        {
            "CATALOG_SOURCE": "PostgREST",
            "SUPABASE_URL": "https://db.example.co",
            "SUPABASE_ANON_KEY": "anon",
            "CATALOG_TABLE": "items",
            "CATALOG_PATH": "/tmp/catalog.json",
            "SEARCH_DEBOUNCE_MS": "150",
            "CATALOG_REQUEST_TIMEOUT": "2.5",
            "CORS_ALLOW_ORIGINS": "https://shop.example.com, ,https://admin.example.com",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.catalog_source == "postgrest"
    assert settings.catalog_table == "items"
    assert settings.catalog_path == Path("/tmp/catalog.json")
    assert settings.search_debounce_seconds == pytest.approx(0.15)
    assert settings.request_timeout == 2.5
    assert settings.cors_allow_origins == ["https://shop.example.com", "https://admin.example.com"]
    assert settings.log_level == "DEBUG"


def test_invalid_numbers_fall_back_to_defaults():
    settings = Settings.from_env({"SEARCH_DEBOUNCE_MS": "soon", "CATALOG_REQUEST_TIMEOUT": "x"})
    assert settings.search_debounce_seconds == pytest.approx(0.3)
    assert settings.request_timeout == 10.0


def test_postgrest_requires_credentials():
    with pytest.raises(ConfigurationError):
        Settings.from_env({"CATALOG_SOURCE": "postgrest", "SUPABASE_URL": "https://db.example.co"})


def test_unknown_source_is_rejected():
    with pytest.raises(ConfigurationError):
        Settings.from_env({"CATALOG_SOURCE": "mysql"})
