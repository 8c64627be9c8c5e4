"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError


CONFIG_FILE = "config.yaml"


class ConfigError(ValueError):
    """Raised when settings or the content-type registry cannot be loaded."""


class ContentTypeSettings(BaseModel):
    source_dir: str
    parser:     str = Field(..., description="Enhancer name: faq, guidance or list")
    schema_name: Optional[str] = Field(default=None, alias="schema")

    model_config = {"populate_by_name": True}


class Settings(BaseModel):
    app_name:       str = "faqhub"
    project_root:   str = Field(default=".",                          description="Root all relative paths resolve against")
    faq_dir:        str = Field(default="_cache/faq",                 description="FAQ documents")
    guidance_dir:   str = Field(default="_cache/faq/pending-guidance", description="Guidance request documents")
    lists_dir:      str = Field(default="src/_lists",                 description="Curated list definitions")
    schema_dir:     Optional[str] = Field(default=None,               description="JSON Schema directory; None = bundled")
    schema_version: str = Field(default="1.0.0",                      description="Schema-set version tag recorded in stats")
    validation_log: str = Field(default="validation-errors.log",      description="JSON Lines validation diagnostics")
    debug_dir:      str = Field(default="_tmp",                       description="Scratch dir for faq.json snapshot; '' disables")
    output_dir:     str = Field(default="dist",                       description="Directory for the assembled content.json")
    markdown_preset: str = Field(default="commonmark",                description="MarkdownIt preset used for summaries")
    edit_url_base:  str = Field(default="https://github.com/orcwg/cra-hub/edit/main/faq")
    log_level:      str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")
    content_types:  Optional[dict[str, ContentTypeSettings]] = None

    def resolve(self, path: str) -> Path:
        """Resolve a configured path against project_root."""
        p = Path(path)
        return p if p.is_absolute() else Path(self.project_root) / p

    def type_settings(self) -> dict[str, ContentTypeSettings]:
        """Return the configured content types, or the three defaults."""
        if self.content_types:
            return dict(self.content_types)
        return {
            "faq":      ContentTypeSettings(source_dir=self.faq_dir, parser="faq", schema="faq"),
            "guidance": ContentTypeSettings(source_dir=self.guidance_dir, parser="guidance", schema="guidance"),
            "list":     ContentTypeSettings(source_dir=self.lists_dir, parser="list", schema="list"),
        }


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then FAQHUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if name == "content_types":
            continue
        if val := os.getenv(f"FAQHUB_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
