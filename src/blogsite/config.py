"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "BLOGSITE_"
DEFAULT_EXCLUDE = ("README.md", "CHANGELOG.md", "LICENSE.md")


class Settings(BaseModel):
    site_title:     str = "blogsite"
    source_dir:     str = Field(default=".",         description="Root directory holding posts and pages")
    posts_dir:      str = Field(default="_posts",    description="Directory (relative to source_dir) whose files are posts")
    output_dir:     str = Field(default="_site",     description="Directory for rendered HTML output")
    parser_config:  str = Field(default="commonmark", description="MarkdownIt parser preset name")
    write_manifest: bool = Field(default=True,       description="Write site.json alongside the rendered pages")
    exclude:        list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE),
                                      description="File names never loaded as content")

    @field_validator("exclude", mode="before")
    @classmethod
    def _split_exclude(cls, value):
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BLOGSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
