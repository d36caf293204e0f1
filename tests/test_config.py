import os

from roadmap_tutor.config import DEFAULT_DB_PATH, Settings


def _clear(monkeypatch):
    for name in ("TUTOR_DB_PATH", "TUTOR_USER_ID", "TUTOR_ADVANCE_DELAY_MS", "TUTOR_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    _clear(monkeypatch)
    settings = Settings()
    assert settings.db_path == os.path.abspath(DEFAULT_DB_PATH)
    assert settings.user_id == "local"
    assert settings.advance_delay_ms == 500
    assert settings.advance_delay == 0.5
    assert settings.log_level == "WARNING"


def test_values_from_environment(monkeypatch, tmp_path):
    _clear(monkeypatch)
    monkeypatch.setenv("TUTOR_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("TUTOR_USER_ID", "sara")
    monkeypatch.setenv("TUTOR_ADVANCE_DELAY_MS", "250")
    monkeypatch.setenv("TUTOR_LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.db_path == str(tmp_path / "x.db")
    assert settings.user_id == "sara"
    assert settings.advance_delay == 0.25
    assert settings.log_level == "DEBUG"


def test_bad_delay_falls_back(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("TUTOR_ADVANCE_DELAY_MS", "soon")
    assert Settings().advance_delay_ms == 500


def test_negative_delay_is_zero(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("TUTOR_ADVANCE_DELAY_MS", "-20")
    assert Settings().advance_delay_ms == 0
