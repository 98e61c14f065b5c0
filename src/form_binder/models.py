"""Pydantic models for form configuration validation.

The YAML config is parsed into these models at startup.  Invalid configs
fail fast with clear error messages before any lookup is opened.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator

from form_binder.failures import DEFAULT_FALLBACK_MESSAGE


class FormSettings(BaseModel):
    log_level: str = "INFO"
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE


class TransformStepConfig(BaseModel):
    name: str
    config_file: str | None = None
    inline_config: dict[str, Any] | None = None


class LookupConfig(BaseModel):
    source: str
    config_file: str | None = None
    inline_config: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _require_some_config(self):
        if self.config_file is None and self.inline_config is None:
            raise ValueError(
                "Lookup must provide at least one of "
                "'config_file' or 'inline_config'"
            )
        return self


class FieldConfig(BaseModel):
    name: str
    model_transformers: list[TransformStepConfig] = []
    view_transformers: list[TransformStepConfig] = []
    invalid_message: str | None = None
    invalid_message_parameters: dict[str, Any] = {}


class FormDefinition(BaseModel):
    name: str
    description: str = ""
    lookups: dict[str, LookupConfig] = {}
    fields: list[FieldConfig]

    @model_validator(mode="after")
    def _unique_field_names(self):
        seen: set[str] = set()
        for field in self.fields:
            if field.name in seen:
                raise ValueError(f"Duplicate field name {field.name!r}")
            seen.add(field.name)
        return self


class FormConfig(BaseModel):
    """Root model — represents the entire form YAML file."""

    version: str = "1.0"
    form: FormDefinition
    settings: FormSettings = FormSettings()
