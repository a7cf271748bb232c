"""Tests for environment-backed settings."""

import pytest

from tablesnap.config import Settings, load_environment, validate_settings

ENV_VARS = [
    "TABLESNAP_API_KEY",
    "TABLESNAP_PROVIDER",
    "TABLESNAP_EXTRACTION_MODEL",
    "TABLESNAP_EDIT_MODEL",
    "TABLESNAP_REQUEST_TIMEOUT",
    "TABLESNAP_MAX_IMAGE_BYTES",
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment():
    settings = Settings.from_env()

    assert settings.provider == "openai"
    assert settings.api_key == ""
    assert settings.extraction_model == "gpt-4o"
    assert settings.edit_model == "gpt-image-1"
    assert not settings.has_credential


def test_provider_specific_key_and_models(monkeypatch):
    monkeypatch.setenv("TABLESNAP_PROVIDER", "gemini")
    monkeypatch.setenv("GEMINI_API_KEY", " secret ")

    settings = Settings.from_env()

    assert settings.api_key == "secret"
    assert settings.extraction_model == "gemini-2.5-flash"
    assert settings.edit_model == "gemini-2.5-flash-image"


def test_project_key_wins_over_provider_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "provider")
    monkeypatch.setenv("TABLESNAP_API_KEY", "project")

    assert Settings.from_env().api_key == "project"


def test_model_overrides(monkeypatch):
    monkeypatch.setenv("TABLESNAP_EXTRACTION_MODEL", "gpt-4.1-mini")
    monkeypatch.setenv("TABLESNAP_REQUEST_TIMEOUT", "30")

    settings = Settings.from_env()

    assert settings.extraction_model == "gpt-4.1-mini"
    assert settings.request_timeout == 30.0


def test_api_key_is_not_in_repr():
    assert "hunter2" not in repr(Settings(api_key="hunter2"))


def test_validate_settings_reports_missing_key_and_unknown_provider():
    issues = validate_settings(Settings(provider="acme"))

    assert any("Unknown provider" in issue for issue in issues)
    assert any("Missing API key" in issue for issue in issues)


def test_validate_settings_passes_with_key():
    assert validate_settings(Settings(api_key="k")) == []


def test_load_environment_reads_dotenv(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("TABLESNAP_API_KEY=from-dotenv\n", encoding="utf-8")

    # registered so monkeypatch removes the variable again after the test
    monkeypatch.setenv("TABLESNAP_API_KEY", "placeholder")

    load_environment(env_file)

    assert Settings.from_env().api_key == "from-dotenv"


def test_malformed_numbers_fall_back_and_are_reported(monkeypatch):
    monkeypatch.setenv("TABLESNAP_REQUEST_TIMEOUT", "soon")
    monkeypatch.setenv("TABLESNAP_MAX_IMAGE_BYTES", "10MB")

    settings = Settings.from_env()

    assert settings.request_timeout == 120.0
    assert settings.max_image_bytes == 10 * 1024 * 1024
    issues = validate_settings(settings)
    assert any("TABLESNAP_REQUEST_TIMEOUT" in issue for issue in issues)
    assert any("TABLESNAP_MAX_IMAGE_BYTES" in issue for issue in issues)


def test_well_formed_numbers_leave_no_issues(monkeypatch):
    monkeypatch.setenv("TABLESNAP_API_KEY", "k")
    monkeypatch.setenv("TABLESNAP_MAX_IMAGE_BYTES", "2048")

    settings = Settings.from_env()

    assert settings.max_image_bytes == 2048
    assert validate_settings(settings) == []
