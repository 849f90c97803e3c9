from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator

from subcheck.formatting import DEFAULT_INDENT, Formatting, TypeFormatter, configure


def import_object(path: str) -> Any:
    """Import ``package.module:attr`` or ``package.module.attr``."""
    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ValueError(f"invalid import path '{path}', expected 'module:attr'")
    module = importlib.import_module(module_name)
    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


class FormatConfig(BaseModel):
    """Failure report settings, usually loaded from ``subcheck.yaml``."""

    model_config = ConfigDict(extra="forbid")
    indent: str = DEFAULT_INDENT
    type_formatter: str | None = None

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: str) -> str:
        if v.strip():
            raise ValueError(f"indent must be whitespace only, got {v!r}")
        return v

    @field_validator("type_formatter")
    @classmethod
    def validate_type_formatter(cls, v: str | None) -> str | None:
        if not v:
            return None
        try:
            obj = import_object(v)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"type_formatter '{v}' can not be imported: {e}") from e
        if not callable(obj):
            raise ValueError(f"type_formatter '{v}' is not callable")
        return v

    def resolve_type_formatter(self) -> TypeFormatter | None:
        if self.type_formatter is None:
            return None
        return import_object(self.type_formatter)

    def to_formatting(self) -> Formatting:
        return Formatting(type_formatter=self.resolve_type_formatter(), indent=self.indent)


def _expand(raw: Any) -> Any:
    if isinstance(raw, str):
        return expandvars(raw, nounset=True)
    if isinstance(raw, dict):
        return {k: _expand(v) for k, v in raw.items()}
    if isinstance(raw, list):
        return [_expand(v) for v in raw]
    return raw


def load_config(path: Path) -> FormatConfig:
    """Load and validate a config from a YAML file.

    String values may reference environment variables as ``${VAR}`` or
    ``${VAR:-default}``. An unset variable without a default is an error.
    """
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return FormatConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"config file {path} must contain a mapping")

    try:
        expanded = _expand(raw)
    except Exception as e:
        raise ValueError(f"config file {path} references an unset variable: {e}") from e
    return FormatConfig(**expanded)


def apply_config(config: FormatConfig) -> Formatting:
    """Install the formatting described by *config*; return the previous one."""
    return configure(config.to_formatting())
