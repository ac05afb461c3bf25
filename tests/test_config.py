"""Tests for settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from transtudio.config import Settings
from transtudio.utils.language import TargetLanguage


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "ANTHROPIC_API_KEY",
        "GOOGLE_API_KEY",
        "GOOGLE_GENERATIVE_AI_API_KEY",
        "GEMINI_API_KEY",
        "UPLOAD_DIR",
        "DEFAULT_MODEL_ID",
        "DEFAULT_TARGET_LANGUAGE",
        "MAX_UPLOAD_SIZE_MB",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.upload_dir == Path("uploads")
    assert settings.max_upload_bytes == 10 * 1024 * 1024
    assert settings.default_model_id == "gemini-2.5-flash"
    assert settings.default_target_language == TargetLanguage.ENGLISH
    assert settings.translation_temperature == 0.1
    assert settings.anthropic_api_key is None
    assert settings.google_api_key is None


def test_values_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "anthropic-key")
    monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "google-key")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path))
    monkeypatch.setenv("DEFAULT_TARGET_LANGUAGE", "zh")
    monkeypatch.setenv("MAX_UPLOAD_SIZE_MB", "2")

    settings = Settings(_env_file=None)

    assert settings.anthropic_api_key == "anthropic-key"
    assert settings.google_api_key == "google-key"
    assert settings.upload_dir == tmp_path
    assert settings.default_target_language == TargetLanguage.CHINESE_SIMPLIFIED
    assert settings.max_upload_bytes == 2 * 1024 * 1024


def test_values_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("GEMINI_API_KEY=from-file\nLOG_LEVEL=DEBUG\n", encoding="utf-8")

    settings = Settings(_env_file=env_file)

    assert settings.google_api_key == "from-file"
    assert settings.log_level == "DEBUG"


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_upload_size_mb=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_target_language="fr")
