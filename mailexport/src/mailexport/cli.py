"""mailexport command-line interface.

What:
  Typer application for inspecting the redaction categories and export fields
  and for transforming locally saved message documents into field maps.

Why:
  Operators tune field selections and redaction categories before running a
  full export. A local command that applies exactly the same pipeline to
  saved ``users.messages`` JSON shows the effect of a configuration without
  touching a mailbox.

How:
  ``transform`` loads the runtime configuration, applies command-line
  overrides on top of it, reads every document (a single message object or a
  list of them), runs :func:`~mailexport.core.engine.transform_many` and
  prints one JSON object per message on stdout. Diagnostics go to stderr as
  JSON log records.

Interfaces:
  ``app`` (Typer application), ``categories``, ``fields``, ``transform``.

Invariants & Safety:
  - Exit codes follow shell expectations (``0`` success, ``1`` failure).
  - stdout carries data only.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from pydantic import ValidationError as _PydanticValidationError

from .config.loader import ConfigLoadError, load_runtime_config
from .config.schema import ExportSettings, SanitizeSettings
from .core.engine import transform_many
from .core.fields import FIELD_DEFINITIONS, parse_fields
from .core.privacy import REGISTRY, all_categories, parse_categories
from .utils.logging import get_logger


app = typer.Typer(help="Mailbox export field mapping and redaction tools")

LOGGER = get_logger("cli")


def _on_off(value: bool) -> str:
    return "on" if value else "off"


@app.command("categories")
def categories() -> None:
    """List redaction categories in application order."""

    for spec in REGISTRY:
        typer.echo(f"{spec.category.value:<20} {_on_off(spec.default_enabled):<4} {spec.description}")


@app.command("fields")
def fields() -> None:
    """List export fields with their group and default selection."""

    for info in FIELD_DEFINITIONS:
        typer.echo(f"{info.name:<22} {info.group:<12} {_on_off(info.default):<4} {info.description}")


def _read_messages(path: Path) -> List[Dict[str, Any]]:
    """Load one JSON document holding a message object or a list of them."""

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"unable to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON in {path}: {exc}") from exc
    if isinstance(document, dict):
        return [document]
    if isinstance(document, list) and all(isinstance(item, dict) for item in document):
        return document
    raise ValueError(f"{path} must contain a message object or a list of message objects")


def _resolve_settings(
    base: ExportSettings,
    *,
    fields_csv: Optional[str],
    body_max_chars: Optional[int],
    sanitize_flag: Optional[bool],
    categories_csv: Optional[str],
    workers: Optional[int],
) -> ExportSettings:
    """Apply command-line overrides on top of the configured settings.

    Raises:
      ValueError: For unknown categories or a field list without valid names.
      pydantic.ValidationError: When an override violates the schema.
    """

    payload = base.model_dump()
    if fields_csv is not None:
        selected = parse_fields(fields_csv)
        if selected is None:
            raise ValueError(f"no known export fields in {fields_csv!r}")
        payload["fields"] = list(selected)
    if body_max_chars is not None:
        payload["body_max_chars"] = body_max_chars
    if workers is not None:
        payload["workers"] = workers
    sanitize = dict(payload["sanitize"])
    if sanitize_flag is not None:
        sanitize["enabled"] = sanitize_flag
    if categories_csv is not None:
        names = categories_csv.split(",")
        if [name.strip().lower() for name in names] == ["all"]:
            sanitize["categories"] = list(all_categories())
        else:
            sanitize["categories"] = sorted(parse_categories(names), key=all_categories().index)
    payload["sanitize"] = SanitizeSettings.model_validate(sanitize)
    return ExportSettings.model_validate(payload)


@app.command("transform")
def transform(
    paths: List[Path] = typer.Argument(..., help="Message JSON documents to transform"),
    *,
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to mailexport.yaml"),
    fields_csv: Optional[str] = typer.Option(None, "--fields", help="Comma-separated export fields"),
    body_max_chars: Optional[int] = typer.Option(
        None,
        "--body-max-chars",
        help="Body character limit (0 = unlimited)",
    ),
    sanitize_flag: Optional[bool] = typer.Option(
        None,
        "--sanitize/--no-sanitize",
        help="Enable or disable redaction of body fields",
    ),
    categories_csv: Optional[str] = typer.Option(
        None,
        "--categories",
        help="Comma-separated redaction categories, or 'all'",
    ),
    workers: Optional[int] = typer.Option(None, "--workers", help="Worker threads for the batch"),
) -> None:
    """Transform saved messages and print one JSON field map per line.

    What:
      Reads each document, applies the configured pipeline with overrides and
      writes the resulting rows to stdout in input order.

    Why:
      Lets operators preview exactly what an export will contain, including
      the effect of redaction categories, on real saved messages.

    How:
      Resolve settings from the runtime configuration plus options, load all
      messages up front so a broken document fails before any output, then
      transform the whole batch at once.
    """

    try:
        runtime = load_runtime_config(config_path, reload=config_path is not None)
        settings = _resolve_settings(
            runtime.settings(),
            fields_csv=fields_csv,
            body_max_chars=body_max_chars,
            sanitize_flag=sanitize_flag,
            categories_csv=categories_csv,
            workers=workers,
        )
    except ConfigLoadError as exc:
        LOGGER.error("config_invalid", error=str(exc))
        raise typer.Exit(code=1) from exc
    except (ValueError, _PydanticValidationError) as exc:
        LOGGER.error("options_invalid", error=str(exc))
        raise typer.Exit(code=1) from exc

    messages: List[Dict[str, Any]] = []
    try:
        for path in paths:
            messages.extend(_read_messages(path))
    except ValueError as exc:
        LOGGER.error("input_invalid", error=str(exc))
        raise typer.Exit(code=1) from exc

    for row in transform_many(messages, settings):
        typer.echo(json.dumps(row, ensure_ascii=False))


def main() -> None:
    """Execute the Typer application entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover
    main()
