"""Discovery, parsing and caching of the mailexport runtime configuration.

What:
  Locate ``mailexport.yaml``, parse it with PyYAML and validate it into a
  :class:`~mailexport.config.schema.RuntimeConfig`.

Why:
  The configuration is edited by hand and may be malformed. Funnelling every
  read through one loader keeps error messages consistent and guarantees that
  only validated settings reach the export pipeline.

How:
  Candidate paths are resolved in precedence order (explicit argument,
  ``MAILEXPORT_CONFIG_PATH``, then the working-directory defaults). YAML is
  decoded with ``yaml.safe_load`` and validated with pydantic; failures of
  either step become :class:`RuntimeConfigError` with file context. The last
  successful result is cached until :func:`reset_runtime_config` or
  ``reload=True``.

Interfaces:
  :class:`ConfigLoadError`, :class:`RuntimeConfigError`,
  :func:`parse_runtime_config`, :func:`load_runtime_config`,
  :func:`get_runtime_config`, :func:`reset_runtime_config`.

Invariants:
  - An explicitly requested file (argument or environment variable) must
    exist; only the implicit default locations may be absent, in which case
    the built-in defaults apply.
  - Returned models have always passed strict validation.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

import yaml
from pydantic import ValidationError as _PydanticValidationError

from ..utils.logging import get_logger
from .schema import RuntimeConfig


class ConfigLoadError(Exception):
    """Base error for configuration parsing or validation failures.

    What:
      Represents fatal problems met while reading or validating a
      configuration document.

    Why:
      Callers such as the CLI handle operator mistakes separately from
      programming errors, so they need one type to catch.
    """


class RuntimeConfigError(ConfigLoadError):
    """Raised when ``mailexport.yaml`` cannot be located, read or validated."""


CONFIG_ENV = "MAILEXPORT_CONFIG_PATH"
_DEFAULT_LOCATIONS: Tuple[Path, ...] = (
    Path("mailexport.yaml"),
    Path("config") / "mailexport.yaml",
)
_RUNTIME_CACHE: Optional[Tuple[Optional[Path], RuntimeConfig]] = None

_LOGGER = get_logger("config")


def _candidate_paths(path: Optional[Path]) -> Iterable[Tuple[Path, bool]]:
    """Yield ``(candidate, required)`` pairs in priority order.

    What:
      Produce the ordered locations inspected for ``mailexport.yaml`` and
      whether a missing file at that location is an error.

    Why:
      Operators override the location through an argument or the
      ``MAILEXPORT_CONFIG_PATH`` environment variable; a typo there must fail
      loudly instead of silently exporting with defaults.

    How:
      Yield the explicit argument, then the environment variable, then the
      default locations, expanding ``~``. An explicit or environment path
      ends the search.
    """

    if path is not None:
        yield path.expanduser(), True
        return
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        yield Path(env_path).expanduser(), True
        return
    for default in _DEFAULT_LOCATIONS:
        yield default.expanduser(), False


def _validate(payload: Any, source: str) -> RuntimeConfig:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise RuntimeConfigError(f"{source} must contain a mapping at the top level")
    try:
        return RuntimeConfig.model_validate(payload)
    except _PydanticValidationError as exc:
        raise RuntimeConfigError(f"Invalid configuration in {source}: {exc}") from exc


def parse_runtime_config(text: str, source: str = "<string>") -> RuntimeConfig:
    """Parse and validate an in-memory configuration document.

    Args:
      text: YAML document.
      source: Label used in error messages.

    Raises:
      RuntimeConfigError: If the YAML is malformed or fails validation.
    """

    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeConfigError(f"Invalid YAML in {source}: {exc}") from exc
    return _validate(payload, source)


def _load_runtime_from_path(path: Path) -> RuntimeConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise RuntimeConfigError(f"Configuration file missing: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem surface
        raise RuntimeConfigError(f"Unable to read configuration file {path}: {exc}") from exc
    return parse_runtime_config(text, str(path))


def load_runtime_config(
    path: Optional[Path | str] = None,
    *,
    reload: bool = False,
) -> RuntimeConfig:
    """Resolve, parse and cache the runtime configuration.

    What:
      Returns the validated configuration from the first existing candidate
      file, or the built-in defaults when no default location holds one.

    Why:
      The CLI and batch helpers read settings repeatedly; caching avoids disk
      reads while ``reload`` gives tests and long-running callers a way to
      pick up edits.

    How:
      Serve the cache unless ``reload`` is set or a different explicit path is
      requested, then walk :func:`_candidate_paths`. A missing required
      candidate raises; a missing default candidate is skipped.

    Args:
      path: Optional explicit location of ``mailexport.yaml``.
      reload: Bypass the cache when ``True``.

    Raises:
      RuntimeConfigError: If a required file is missing or any file found is
      invalid.
    """

    global _RUNTIME_CACHE

    requested_path = Path(path).expanduser() if isinstance(path, (str, Path)) else None
    if not reload and _RUNTIME_CACHE is not None:
        cached_path, cached_config = _RUNTIME_CACHE
        if requested_path is None or cached_path == requested_path:
            return cached_config

    searched: list[str] = []
    for candidate, required in _candidate_paths(requested_path):
        if not candidate.exists():
            if required:
                raise RuntimeConfigError(f"Configuration file missing: {candidate}")
            searched.append(str(candidate))
            continue
        config = _load_runtime_from_path(candidate)
        _LOGGER.info("config_loaded", path=str(candidate))
        _RUNTIME_CACHE = (candidate, config)
        return config

    _LOGGER.info("config_defaults", searched=searched)
    config = RuntimeConfig.defaults()
    _RUNTIME_CACHE = (None, config)
    return config


def get_runtime_config() -> RuntimeConfig:
    """Return the cached runtime configuration, loading it on demand."""

    return load_runtime_config()


def reset_runtime_config() -> None:
    """Forget the cached configuration so the next call reloads it."""

    global _RUNTIME_CACHE
    _RUNTIME_CACHE = None
