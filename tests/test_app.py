"""Settings, logging setup and app wiring."""

from __future__ import annotations

import logging
import os
import tempfile

import pytest
import structlog

from conftest import make_trade
from tradelog import create_app
from tradelog.ledger.ledger_models import LedgerEntryKind
from tradelog.utils import config as config_module
from tradelog.utils.config import Settings, get_settings, reload_settings
from tradelog.utils.logger import get_logger, setup_logging


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_dir=str(tmp_path / "docs"),
        log_file=str(tmp_path / "logs" / "tradelog.log"),
    )


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TRADELOG_DATA_DIR", raising=False)
        s = Settings(_env_file=None)
        assert s.journal_file == "journal_entries.json"
        assert s.ledger_file == "pnl_entries.json"
        assert s.log_level == "INFO"

    def test_env_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TRADELOG_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("TRADELOG_LEDGER_FILE", "ledger.json")
        s = Settings(_env_file=None)
        assert s.resolve_data_dir() == str(tmp_path)
        assert s.ledger_path == os.path.join(str(tmp_path), "ledger.json")

    def test_falls_back_to_documents(self, monkeypatch, tmp_path):
        (tmp_path / "Documents").mkdir()
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv("TRADELOG_DATA_DIR", raising=False)
        assert Settings(_env_file=None).resolve_data_dir() == str(tmp_path / "Documents")

    def test_falls_back_to_temp_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv("TRADELOG_DATA_DIR", raising=False)
        assert Settings(_env_file=None).resolve_data_dir() == tempfile.gettempdir()

    def test_get_settings_is_cached(self, monkeypatch):
        monkeypatch.setattr(config_module, "_settings", None)
        assert get_settings() is get_settings()
        assert reload_settings() is not None
        assert get_settings() is config_module._settings


class TestLogging:

    def test_setup_creates_log_file(self, settings, restore_logging):
        setup_logging(settings)
        get_logger("tradelog.test").info("log_file_event", value=1)
        for handler in logging.getLogger().handlers:
            handler.flush()
        with open(settings.log_file, encoding="utf-8") as f:
            assert "log_file_event" in f.read()

    def test_empty_log_file_is_console_only(self, tmp_path, restore_logging):
        setup_logging(Settings(data_dir=str(tmp_path), log_file=""))
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], logging.FileHandler)


class TestCreateApp:

    def test_wires_stores_into_data_dir(self, settings):
        app = create_app(settings, configure_logging=False)
        data_dir = settings.resolve_data_dir()

        assert app.journal.path == os.path.join(data_dir, "journal_entries.json")
        assert app.ledger.path == os.path.join(data_dir, "pnl_entries.json")
        assert app.blobs.directory == app.journal.directory
        assert app.journal_service.store is app.journal
        assert app.ledger_service.store is app.ledger

    def test_end_to_end_reopen(self, settings):
        app = create_app(settings, configure_logging=False)
        app.journal_service.save_new(make_trade(id="E2E"), image_data=b"img")
        app.ledger_service.add_from_input("250", LedgerEntryKind.PAYOUT)
        app.ledger_service.add_from_input("50", LedgerEntryKind.EXPENSE)

        reopened = create_app(settings, configure_logging=False)

        assert [e.id for e in reopened.journal.entries] == ["E2E"]
        assert reopened.blobs.load(reopened.journal.get("E2E")) == b"img"
        assert reopened.ledger.running_total() == 200.0
