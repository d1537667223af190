"""mailexport configuration package.

What:
  Import surface for loading and validating ``mailexport.yaml``.

Interfaces:
  - get_runtime_config / load_runtime_config / reset_runtime_config /
    parse_runtime_config: discovery, parsing and caching.
  - RuntimeConfig / ExportSettings / SanitizeSettings: pydantic models.
  - ConfigLoadError / RuntimeConfigError: failures surfaced to callers.
"""

from .loader import (
    ConfigLoadError,
    RuntimeConfigError,
    get_runtime_config,
    load_runtime_config,
    parse_runtime_config,
    reset_runtime_config,
)
from .schema import ExportOptions, ExportSettings, RuntimeConfig, SanitizeSettings, ValidationError

__all__ = [
    "ConfigLoadError",
    "RuntimeConfigError",
    "get_runtime_config",
    "load_runtime_config",
    "parse_runtime_config",
    "reset_runtime_config",
    "ExportOptions",
    "ExportSettings",
    "RuntimeConfig",
    "SanitizeSettings",
    "ValidationError",
]
