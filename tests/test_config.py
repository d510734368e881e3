"""Tests for deadlink.config and deadlink.logging (env, .env file, log levels)."""

import logging
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from deadlink.config import DeadlinkConfig, load_config, load_environment


def test_defaults(monkeypatch) -> None:
    for name in ("DEADLINK_GC_COLLECT", "DEADLINK_SKIP_EMPTY", "DEADLINK_COLOR", "DEADLINK_VERBOSE"):
        monkeypatch.delenv(name, raising=False)

    assert load_config() == DeadlinkConfig(gc_collect=True, skip_empty=False, color=None, verbose=False)


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DEADLINK_GC_COLLECT", "0")
    monkeypatch.setenv("DEADLINK_SKIP_EMPTY", "yes")
    monkeypatch.setenv("DEADLINK_COLOR", "true")
    monkeypatch.setenv("DEADLINK_VERBOSE", "on")

    cfg = load_config()

    assert cfg.gc_collect is False
    assert cfg.skip_empty is True
    assert cfg.color is True
    assert cfg.verbose is True


def test_malformed_values_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("DEADLINK_GC_COLLECT", "maybe")
    monkeypatch.setenv("DEADLINK_COLOR", "sometimes")

    cfg = load_config()

    assert cfg.gc_collect is True
    assert cfg.color is None


def test_load_environment_overrides_exported_values(tmp_path: Path, monkeypatch) -> None:
    """Project .env should override exported DEADLINK_* keys."""
    env_file = tmp_path / ".env"
    env_file.write_text("DEADLINK_SKIP_EMPTY=1\nDEADLINK_COLOR=off\n", encoding="utf-8")
    monkeypatch.setenv("DEADLINK_SKIP_EMPTY", "0")
    monkeypatch.setenv("DEADLINK_COLOR", "on")

    assert load_environment(env_file) is True

    assert os.environ["DEADLINK_SKIP_EMPTY"] == "1"
    cfg = load_config()
    assert cfg.skip_empty is True
    assert cfg.color is False


def test_load_environment_missing_file(tmp_path: Path) -> None:
    assert load_environment(tmp_path / "absent.env") is False


def test_logger_level_from_env(monkeypatch) -> None:
    import deadlink.logging as dl_logging

    monkeypatch.setattr(dl_logging, "_pinned", None)
    monkeypatch.setenv("DEADLINK_LOG_LEVEL", "debug")

    assert dl_logging.get_logger("levels").level == logging.DEBUG

    monkeypatch.setenv("DEADLINK_LOG_LEVEL", "nonsense")
    assert dl_logging.get_logger("levels").level == logging.WARNING


def test_configure_logging_pins_every_deadlink_logger(monkeypatch) -> None:
    import deadlink.logging as dl_logging

    monkeypatch.setattr(dl_logging, "_pinned", None)
    monkeypatch.setenv("DEADLINK_LOG_LEVEL", "error")
    existing = dl_logging.get_logger("snapshot")

    assert dl_logging.configure_logging(verbose=True) == logging.DEBUG
    assert existing.level == logging.DEBUG
    assert logging.getLogger("deadlink").level == logging.DEBUG

    assert dl_logging.configure_logging("info") == logging.INFO
    assert dl_logging.get_logger("created_later").level == logging.INFO

    assert dl_logging.configure_logging() == logging.ERROR
    assert existing.level == logging.ERROR
