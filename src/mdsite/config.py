"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    site_title:     str  = "mdsite"
    base_url:       str  = Field(default="/", description="URL prefix for generated links")
    content_dir:    str  = Field(default="content", description="Directory of markdown articles")
    output_dir:     str  = Field(default="public",  description="Directory for rendered HTML pages")
    parser_config:  str  = Field(default="gfm-like", pattern="^(commonmark|default|zero|js-default|gfm-like)$",
                                 description="MarkdownIt parser preset name")
    include_drafts: bool = Field(default=False, description="Render draft pages (never indexed)")
    workers:        int  = Field(default=1, ge=1, description="Parallel parse/render workers")
    clean:          bool = Field(default=False, description="Remove output_dir before writing")
    log_level:      str  = Field(default="WARNING", description="Root logging level")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
