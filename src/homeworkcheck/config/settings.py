"""Configuration model for HomeworkCheck."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

MAX_DISTANCE_ENV = "HOMEWORKCHECK_MAX_DISTANCE"


class ToleranceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    default_max_distance: int = Field(default=2, ge=0)
    short_answer_length: int = Field(default=4, ge=0)
    short_answer_max_distance: int = Field(default=1, ge=0)
    blank_max_distance: int = Field(default=1, ge=0)
    correction_max_distance: int = Field(default=3, ge=0)


class WritingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    key_element_pass_ratio: float = Field(default=0.75, ge=0.0, le=1.0)
    key_element_fail_ratio: float = Field(default=0.5, ge=0.0, le=1.0)
    min_sentence_words: int = Field(default=3, ge=0)


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    tolerance: ToleranceConfig = Field(default_factory=ToleranceConfig)
    writing: WritingConfig = Field(default_factory=WritingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Read settings from YAML, then apply the environment override once."""
        config_path = config_path or Path.home() / ".homeworkcheck" / "config.yaml"
        data: dict = {}
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

        override = os.environ.get(MAX_DISTANCE_ENV)
        if override and override.isdigit():
            tolerance = dict(data.get("tolerance") or {})
            tolerance["default_max_distance"] = int(override)
            data = {**data, "tolerance": tolerance}
        return cls(**data)


DEFAULT_SETTINGS = Settings()
