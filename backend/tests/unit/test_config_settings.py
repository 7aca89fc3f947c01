"""Unit tests for application settings configuration."""

from pathlib import Path

from taxdesk.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_record_store_urls_can_be_overridden_from_environment(monkeypatch):
    monkeypatch.setenv("RECORDS_API_URL", "https://records.test/taxes")
    monkeypatch.setenv("COUNTRIES_API_URL", "https://records.test/countries")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "5")

    settings = Settings()

    assert settings.records_api_url == "https://records.test/taxes"
    assert settings.countries_api_url == "https://records.test/countries"
    assert settings.http_timeout_seconds == 5.0
