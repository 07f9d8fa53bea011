"""Application configuration: settings schema and config.yaml loader"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
MARKDOWN_PRESETS = {"commonmark", "default", "zero", "gfm-like", "js-default"}


class Settings(BaseModel):
    app_name:      str   = "hashview"
    base_url:      str   = Field(default="http://localhost:8080", description="Content resolution server")
    content_path:  str   = Field(default="/content/{identifier}", description="Path template; must contain {identifier}")
    timeout:       float = Field(default=15.0, gt=0, description="Request timeout in seconds")
    parser_config: str   = Field(default="gfm-like", description="MarkdownIt parser preset name")
    theme:         str   = Field(default="light", pattern="^(light|dark)$", description="light or dark")
    log_level:     str   = Field(default="WARNING", description="Logging level name")

    @field_validator("content_path")
    @classmethod
    def _has_identifier(cls, v: str) -> str:
        if "{identifier}" not in v:
            raise ValueError("content_path must contain '{identifier}'")
        return v

    @field_validator("parser_config")
    @classmethod
    def _known_preset(cls, v: str) -> str:
        if v not in MARKDOWN_PRESETS:
            raise ValueError(f"Unknown markdown-it preset: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then HASHVIEW_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"HASHVIEW_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
