import json
import logging

from settings import load_settings, log_level, save_settings


def test_missing_file_gives_defaults(settings_file):
    s = load_settings(settings_file)
    assert s["log_level"] == "INFO"
    assert s["date_format"] == "%Y-%m-%d"
    assert s["window_x"] is None and s["window_y"] is None
    assert s["last_applied"] is None


def test_corrupt_file_gives_defaults(settings_file):
    with open(settings_file, "w", encoding="utf-8") as f:
        f.write("{not json")
    assert load_settings(settings_file)["log_level"] == "INFO"


def test_round_trip_keeps_valid_values(settings_file):
    s = load_settings(settings_file)
    s["window_x"] = 120
    s["window_y"] = 80
    s["log_level"] = "debug"
    s["last_applied"] = ["2026-10-01", "2026-10-18"]
    save_settings(s, settings_file)

    loaded = load_settings(settings_file)
    assert loaded["window_x"] == 120
    assert loaded["window_y"] == 80
    assert loaded["log_level"] == "DEBUG"
    assert loaded["last_applied"] == ["2026-10-01", "2026-10-18"]


def test_wrongly_typed_keys_ignored(settings_file):
    with open(settings_file, "w", encoding="utf-8") as f:
        json.dump({
            "window_x": "left",
            "window_y": True,
            "log_level": "LOUD",
            "date_format": "",
            "last_applied": ["2026-10-18", "2026-10-01"],
        }, f)
    s = load_settings(settings_file)
    assert s["window_x"] is None
    assert s["window_y"] is None
    assert s["log_level"] == "INFO"
    assert s["date_format"] == "%Y-%m-%d"
    assert s["last_applied"] is None


def test_log_level_env_override(monkeypatch):
    monkeypatch.delenv("DATE_RANGE_PICKER_LOG_LEVEL", raising=False)
    assert log_level({"log_level": "WARNING"}) == logging.WARNING
    monkeypatch.setenv("DATE_RANGE_PICKER_LOG_LEVEL", "debug")
    assert log_level({"log_level": "WARNING"}) == logging.DEBUG
    monkeypatch.setenv("DATE_RANGE_PICKER_LOG_LEVEL", "nonsense")
    assert log_level({}) == logging.INFO
