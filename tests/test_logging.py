"""Tests for the log sinks and context construction."""

import pytest

from farmspawn import ConsoleLog, FarmerRoster, LogLevel, RecordingLog, SpawnContext, TileGrid
from farmspawn.config import Config
from farmspawn.logging_utils import EMOJI_INFO, EMOJI_WARN


def test_recording_log_filters_below_min_level():
    log = RecordingLog(min_level=LogLevel.INFO)
    log.trace("scan detail")
    log.debug("count detail")
    log.info("bad region")
    log.warn("odd config")

    assert log.messages() == ["bad region", "odd config"]
    assert log.messages(LogLevel.WARN) == ["odd config"]

    log.clear()
    assert log.records == []


def test_console_log_prints_markers_without_color(monkeypatch, capsys):
    monkeypatch.setenv("FARMSPAWN_NO_COLOR", "1")
    log = ConsoleLog()

    log.info("Issue: bad region")
    log.log("careful", LogLevel.WARN)

    out = capsys.readouterr().out.splitlines()
    assert out == [f"{EMOJI_INFO} Issue: bad region", f"{EMOJI_WARN} careful"]


def test_console_log_uses_ansi_colors_by_default(monkeypatch, capsys):
    monkeypatch.delenv("FARMSPAWN_NO_COLOR", raising=False)
    ConsoleLog().error("broken")

    out = capsys.readouterr().out
    assert "\033[" in out
    assert "broken" in out


@pytest.mark.parametrize("raw, expected", [("info", LogLevel.INFO), ("WARN", LogLevel.WARN), (0, LogLevel.TRACE)])
def test_log_level_parse(raw, expected):
    assert LogLevel.parse(raw) is expected


def test_log_level_parse_rejects_unknown():
    with pytest.raises(ValueError):
        LogLevel.parse("verbose")


def test_context_from_config_seeds_rng(monkeypatch):
    monkeypatch.setattr(Config, "LOG_LEVEL", "warn")
    first = SpawnContext.from_config(TileGrid(), FarmerRoster(), seed=9)
    second = SpawnContext.from_config(TileGrid(), FarmerRoster(), seed=9)

    assert [first.rng.randint(0, 100) for _ in range(5)] == [second.rng.randint(0, 100) for _ in range(5)]
    assert first.log.min_level is LogLevel.WARN


def test_context_from_config_accepts_explicit_log():
    log = RecordingLog()
    context = SpawnContext.from_config(TileGrid(), FarmerRoster(), log=log)
    assert context.log is log


def test_config_validate_rejects_missing_settings_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "LOG_LEVEL", "info")
    monkeypatch.setattr(Config, "SETTINGS_DIR", tmp_path)
    Config.validate()

    monkeypatch.setattr(Config, "SETTINGS_DIR", tmp_path / "missing")
    with pytest.raises(ValueError, match="FARMSPAWN_SETTINGS_DIR"):
        Config.validate()


def test_config_validate_rejects_unknown_log_level(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "SETTINGS_DIR", tmp_path)
    monkeypatch.setattr(Config, "LOG_LEVEL", "verbose")
    with pytest.raises(ValueError):
        Config.validate()


def test_config_display_lists_settings(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "NO_COLOR", True)
    monkeypatch.setattr(Config, "SEED", None)
    monkeypatch.setattr(Config, "SETTINGS_DIR", tmp_path)

    text = Config.display()

    assert "Colors: off" in text
    assert "Seed: (random)" in text
    assert str(tmp_path) in text
