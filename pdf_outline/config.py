"""
Configuration management using Pydantic Settings.

Environment variables:
- PDF_OUTLINE_LOG_LEVEL: logging level name for the CLI
- PDF_OUTLINE_JSON_INDENT: indent of exported outline.json
- PDF_OUTLINE_MARKDOWN_INDENT: spaces per level in outline.md
- PDF_OUTLINE_DEFAULT_OUT_DIR: default directory for `export`
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="PDF_OUTLINE_", env_file=".env", extra="ignore")

    log_level: str = Field(default="WARNING")
    json_indent: int = Field(default=2, ge=0)
    markdown_indent: int = Field(default=2, ge=1)
    default_out_dir: str = Field(default="outputs/outline")


@lru_cache
def get_settings() -> Settings:
    return Settings()
