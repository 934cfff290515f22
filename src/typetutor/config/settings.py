"""Configuration model for TypeTutor."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

DEFAULT_DATA_DIR = Path.home() / ".typetutor"


class PracticeConfig(BaseModel):
    target_wpm: int = 60


class Settings(BaseModel):
    starting_level: str = "beginner-1"
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    practice: PracticeConfig = Field(default_factory=PracticeConfig)

    def get_log_level(self) -> str:
        return (os.environ.get("TYPETUTOR_LOG_LEVEL") or self.log_level).upper()

    @property
    def history_path(self) -> Path:
        return self.data_dir / "history.db"

    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> "Settings":
        config_path = (data_dir or DEFAULT_DATA_DIR) / "config.yaml"
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            settings = cls(**data)
        else:
            settings = cls()
        if data_dir is not None:
            settings.data_dir = data_dir
        return settings

    def save(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.data_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
