"""Pydantic models describing the mailexport configuration document."""
from __future__ import annotations

from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.fields import ALL_FIELDS, DEFAULT_FIELDS
from ..core.privacy import Category, SanitizeConfig, default_categories


DEFAULT_BODY_MAX_CHARS = 8000


class ValidationError(ValueError):
    """Raised when configuration data does not satisfy the schema."""


def _check_fields(value: List[str]) -> List[str]:
    unknown = [name for name in value if name not in ALL_FIELDS]
    if unknown:
        raise ValidationError(f"unknown export fields: {', '.join(unknown)}")
    return list(dict.fromkeys(value))


class SanitizeSettings(BaseModel):
    """``sanitize`` section: redaction toggle and category selection."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = False
    categories: Optional[List[Category]] = None

    def selected(self) -> FrozenSet[Category]:
        if self.categories is None:
            return default_categories()
        return frozenset(self.categories)


class ExportOptions(BaseModel):
    """``export`` section of ``mailexport.yaml``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    body_max_chars: int = Field(default=DEFAULT_BODY_MAX_CHARS, ge=0)
    fields: List[str] = Field(default_factory=lambda: list(DEFAULT_FIELDS), min_length=1)
    workers: Optional[int] = Field(default=None, gt=0)

    @field_validator("fields")
    @classmethod
    def _validate_fields(cls, value: List[str]) -> List[str]:
        return _check_fields(value)


class ExportSettings(BaseModel):
    """Everything a message transform needs, resolved from configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    body_max_chars: int = Field(default=DEFAULT_BODY_MAX_CHARS, ge=0)
    fields: List[str] = Field(default_factory=lambda: list(DEFAULT_FIELDS), min_length=1)
    sanitize: SanitizeSettings = Field(default_factory=SanitizeSettings)
    workers: Optional[int] = Field(default=None, gt=0)

    @field_validator("fields")
    @classmethod
    def _validate_fields(cls, value: List[str]) -> List[str]:
        return _check_fields(value)

    def sanitize_config(self) -> SanitizeConfig:
        """Translate the ``sanitize`` settings into the redaction engine's config."""

        return SanitizeConfig(enabled=self.sanitize.enabled, categories=self.sanitize.selected())


class RuntimeConfig(BaseModel):
    """Root configuration loaded from ``mailexport.yaml``."""

    model_config = ConfigDict(extra="forbid")

    version: int = 1
    export: ExportOptions = Field(default_factory=ExportOptions)
    sanitize: SanitizeSettings = Field(default_factory=SanitizeSettings)

    @field_validator("version")
    @classmethod
    def _validate_version(cls, value: int) -> int:
        if value != 1:
            raise ValidationError(f"unsupported configuration version: {value}")
        return value

    @classmethod
    def defaults(cls) -> "RuntimeConfig":
        """Built-in configuration used when no file overrides it."""

        return cls()

    def settings(self) -> ExportSettings:
        return ExportSettings(
            body_max_chars=self.export.body_max_chars,
            fields=list(self.export.fields),
            sanitize=self.sanitize,
            workers=self.export.workers,
        )


__all__ = [
    "DEFAULT_BODY_MAX_CHARS",
    "ExportOptions",
    "ExportSettings",
    "RuntimeConfig",
    "SanitizeSettings",
    "ValidationError",
]
