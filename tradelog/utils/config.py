from __future__ import annotations

import os
import tempfile
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Optional[str] = Field(default=None, description="Directory holding the JSON files and image blobs")
    journal_file: str = Field(default="journal_entries.json", description="Trade journal file name")
    ledger_file: str = Field(default="pnl_entries.json", description="P&L ledger file name")

    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/tradelog.log", description="Log file path")

    model_config = {
        "env_prefix": "TRADELOG_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def resolve_data_dir(self) -> str:
        """Configured data dir, else the user's documents dir, else the temp dir."""
        if self.data_dir:
            return self.data_dir
        documents = os.path.join(os.path.expanduser("~"), "Documents")
        if os.path.isdir(documents):
            return documents
        return tempfile.gettempdir()

    @property
    def journal_path(self) -> str:
        return os.path.join(self.resolve_data_dir(), self.journal_file)

    @property
    def ledger_path(self) -> str:
        return os.path.join(self.resolve_data_dir(), self.ledger_file)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = Settings()
    return _settings
