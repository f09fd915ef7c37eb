import pytest
from leadfinder.config import SearchCredentials, Settings
from pydantic import ValidationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GOOGLE_API_KEY",
        "GOOGLE_CSE_ID",
        "SEARCH_TIMEOUT_SECONDS",
        "FETCH_TIMEOUT_SECONDS",
        "ENRICH_CONCURRENCY",
        "ENRICH_MAX_PAGES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestSettings:
    """Unit tests for Settings configuration."""

    def test_settings_default_values(self):
        settings = Settings(_env_file=None)

        assert settings.google_api_key is None
        assert settings.google_cse_id is None
        assert settings.search_timeout_seconds == 5.0
        assert settings.fetch_timeout_seconds == 4.0
        assert settings.enrich_concurrency == 3
        assert settings.enrich_max_pages == 4
        assert settings.log_file is None

    def test_settings_with_valid_env(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
        monkeypatch.setenv("GOOGLE_CSE_ID", "test-cx")
        monkeypatch.setenv("ENRICH_CONCURRENCY", "5")

        settings = Settings(_env_file=None)

        assert settings.google_api_key == "test-key"
        assert settings.google_cse_id == "test-cx"
        assert settings.enrich_concurrency == 5

    def test_blank_credentials_become_none(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "   ")

        settings = Settings(_env_file=None)

        assert settings.google_api_key is None
        assert settings.search_credentials.is_complete is False

    def test_search_credentials_property(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "k")
        monkeypatch.setenv("GOOGLE_CSE_ID", "cx")

        creds = Settings(_env_file=None).search_credentials

        assert creds == SearchCredentials(api_key="k", search_engine_id="cx")
        assert creds.is_complete is True

    def test_invalid_concurrency_validation(self, monkeypatch):
        monkeypatch.setenv("ENRICH_CONCURRENCY", "0")
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)
        assert "greater than or equal to 1" in str(exc_info.value)

    def test_invalid_timeout_validation(self, monkeypatch):
        monkeypatch.setenv("SEARCH_TIMEOUT_SECONDS", "0")
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)
        assert "greater than 0" in str(exc_info.value)

    def test_case_insensitive_env_vars(self, monkeypatch):
        monkeypatch.setenv("google_api_key", "lower")
        monkeypatch.setenv("GoOgLe_CsE_Id", "mixed")

        settings = Settings(_env_file=None)

        assert settings.google_api_key == "lower"
        assert settings.google_cse_id == "mixed"


@pytest.mark.unit
class TestSearchCredentials:
    def test_incomplete_without_cx(self):
        assert SearchCredentials(api_key="k").is_complete is False

    def test_incomplete_when_empty(self):
        assert SearchCredentials().is_complete is False
