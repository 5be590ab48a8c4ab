"""Tests for environment-driven settings."""

from pathlib import Path

from adaptlearn.classroom.hints import DEFAULT_TIMEOUT
from adaptlearn.classroom.storage import DEFAULT_STORAGE_DIR
from adaptlearn.config import load_settings, settings_from_env


def test_defaults():
    settings = settings_from_env({})
    assert settings.api_base_url is None
    assert settings.auth_token is None
    assert settings.data_dir == DEFAULT_STORAGE_DIR
    assert settings.hint_timeout == DEFAULT_TIMEOUT
    assert settings.log_level == "INFO"


def test_values_from_env(tmp_path):
    settings = settings_from_env({
        "ADAPTLEARN_API_BASE_URL": "https://api.example.test",
        "ADAPTLEARN_AUTH_TOKEN": "secret",
        "ADAPTLEARN_DATA_DIR": str(tmp_path),
        "ADAPTLEARN_HINT_TIMEOUT": "2.5",
        "ADAPTLEARN_LOG_LEVEL": "debug",
    })
    assert settings.api_base_url == "https://api.example.test"
    assert settings.auth_token == "secret"
    assert settings.storage_path == Path(tmp_path) / "storage.db"
    assert settings.hint_timeout == 2.5
    assert settings.log_level == "DEBUG"


def test_bad_timeout_falls_back():
    assert settings_from_env({"ADAPTLEARN_HINT_TIMEOUT": "soon"}).hint_timeout == DEFAULT_TIMEOUT


def test_load_settings_reads_env_file(tmp_path, monkeypatch):
    # setenv first so teardown removes whatever load_dotenv writes
    monkeypatch.setenv("ADAPTLEARN_API_BASE_URL", "")
    monkeypatch.delenv("ADAPTLEARN_API_BASE_URL")
    env_file = tmp_path / ".env"
    env_file.write_text("ADAPTLEARN_API_BASE_URL=http://localhost:8080\n", encoding="utf-8")

    assert load_settings(env_file).api_base_url == "http://localhost:8080"
