"""Tests for settings and the user .env writer."""

from core.config import AppSettings, write_user_env_vars


def test_defaults(monkeypatch):
    monkeypatch.delenv("SHORTENER_API_BASE_URL", raising=False)
    settings = AppSettings(_env_file=None)

    assert settings.api_base_url == "http://localhost:8080"
    assert settings.api_url == "http://localhost:8080/api"
    assert settings.http_timeout_seconds is None
    assert settings.toast_duration_seconds == 5.0
    assert settings.toast_animation_seconds == 0.3
    assert settings.copy_feedback_seconds == 2.0
    assert settings.truncate_length == 50


def test_environment_override(monkeypatch):
    monkeypatch.setenv("SHORTENER_API_BASE_URL", "https://sho.rt/")
    monkeypatch.setenv("SHORTENER_TOAST_DURATION_SECONDS", "1.5")

    settings = AppSettings(_env_file=None)

    assert settings.api_url == "https://sho.rt/api"
    assert settings.toast_duration_seconds == 1.5


def test_env_file_is_read(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SHORTENER_API_BASE_URL=http://from-file:9000\n", encoding="utf-8")

    settings = AppSettings(_env_file=str(env_file))

    assert settings.api_base_url == "http://from-file:9000"


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"SHORTENER_API_BASE_URL": "http://a:1", "SHORTENER_LOG_LEVEL": "INFO"}, env_path)

    write_user_env_vars({"SHORTENER_API_BASE_URL": "http://b:2", "IGNORED": None}, env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert "SHORTENER_API_BASE_URL=http://b:2" in lines
    assert "SHORTENER_LOG_LEVEL=INFO" in lines
    assert not any(line.startswith("IGNORED") for line in lines)
