"""mailexport.core.engine

What:
  Turn one provider message into a flat field map of strings, and fan a batch
  of messages out over a bounded thread pool.

Why:
  The CSV writer, the CLI and tests all need the same row for the same
  message. Assembling it in one place keeps field semantics (boolean
  rendering, list joining, which fields are computed) consistent.

How:
  :func:`transform_message` walks the payload once, parses the address
  headers, and computes the body columns only when they are selected. Body
  columns are truncated first and then redacted when sanitization is enabled.
  :func:`transform_many` submits each message with its index to a
  :class:`~concurrent.futures.ThreadPoolExecutor` and reassembles results by
  index so output order always matches input order.

Interfaces:
  :data:`FIELD_ORDER`, :func:`transform_message`, :func:`transform_many`.

Invariants & Safety:
  - Every catalogue field is present in the returned map; unselected fields
    are ``""``.
  - :func:`transform_message` performs no I/O and never raises on malformed
    messages.
"""
from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..config.schema import ExportSettings
from ..utils.logging import get_logger
from ..utils.mime import Message, walk_payload
from .body import body_html_from_walk, body_text_from_walk
from .fields import ALL_FIELDS
from .headers import get_header, parse_address
from .privacy import SanitizeConfig, sanitize

FIELD_ORDER = ALL_FIELDS

MessageLike = Union[Message, Dict[str, Any]]

_LOGGER = get_logger("engine")


def _as_message(message: MessageLike) -> Message:
    return message if isinstance(message, Message) else Message.from_api(message)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _redacted(text: str, config: SanitizeConfig) -> Tuple[str, int]:
    if not config.enabled:
        return text, 0
    result = sanitize(text, config)
    return result.text, result.total_count


def _transform(message: MessageLike, settings: ExportSettings) -> Tuple[Dict[str, str], int]:
    msg = _as_message(message)
    headers = msg.headers
    sender = parse_address(get_header(headers, "From"))
    reply_to = parse_address(get_header(headers, "Reply-To"))
    delivered_to = parse_address(get_header(headers, "Delivered-To"))
    walk = walk_payload(msg.payload)
    attachments = walk.attachments

    values: Dict[str, str] = {
        "from_email": sender.email,
        "from_name": sender.display_name,
        "sender_domain": sender.domain,
        "reply_to": reply_to.email,
        "reply_to_domain": reply_to.domain if reply_to.email else "",
        "delivered_to": delivered_to.email,
        "to": get_header(headers, "To"),
        "cc": get_header(headers, "Cc"),
        "bcc": get_header(headers, "Bcc"),
        "subject": get_header(headers, "Subject"),
        "snippet": msg.snippet,
        "date": get_header(headers, "Date"),
        "message_id": get_header(headers, "Message-ID"),
        "thread_id": msg.thread_id,
        "labels": ";".join(msg.label_ids),
        "has_attachment": _flag(attachments.has_attachment),
        "attachment_types": ";".join(attachments.types),
        "attachment_count": str(attachments.count),
        "has_list_unsubscribe": _flag(bool(get_header(headers, "List-Unsubscribe").strip())),
    }

    sanitize_config = settings.sanitize_config()
    redactions = 0
    row = {name: "" for name in FIELD_ORDER}
    for name in settings.fields:
        if name == "body_text":
            row[name], found = _redacted(body_text_from_walk(walk, settings.body_max_chars), sanitize_config)
            redactions += found
        elif name == "body_html":
            row[name], found = _redacted(body_html_from_walk(walk, settings.body_max_chars), sanitize_config)
            redactions += found
        else:
            row[name] = values[name]
    return row, redactions


def transform_message(message: MessageLike, settings: ExportSettings) -> Dict[str, str]:
    """Build the field map for a single message.

    What:
      Produces a ``{field: str}`` mapping covering the whole field catalogue.

    Why:
      Writers need a uniform, string-only row regardless of which fields the
      operator selected or how incomplete the message is.

    How:
      Accepts either a :class:`~mailexport.utils.mime.Message` or the raw
      decoded API mapping. Selected fields are filled; the body fields are
      only decoded, normalised and redacted when selected.

    Args:
      message: Message object or raw ``users.messages`` mapping.
      settings: Field selection, body limit and sanitize configuration.

    Returns:
      Mapping with every field in :data:`FIELD_ORDER`.
    """

    row, _ = _transform(message, settings)
    return row


def _worker_count(requested: Optional[int], pending: int) -> int:
    limit = requested or os.cpu_count() or 1
    return max(1, min(limit, pending))


def transform_many(
    messages: Sequence[MessageLike],
    settings: ExportSettings,
    workers: Optional[int] = None,
) -> List[Dict[str, str]]:
    """Transform a batch of messages concurrently, preserving input order.

    Args:
      messages: Messages to transform.
      settings: Shared, immutable export settings.
      workers: Pool size; defaults to ``settings.workers`` and then to the CPU
        count. Never exceeds the number of messages.

    Returns:
      One field map per message, in input order.
    """

    if not messages:
        return []
    pool_size = _worker_count(workers or settings.workers, len(messages))
    rows: List[Optional[Dict[str, str]]] = [None] * len(messages)
    redactions = 0
    with ThreadPoolExecutor(max_workers=pool_size) as pool:
        futures = {pool.submit(_transform, message, settings): index for index, message in enumerate(messages)}
        for future in as_completed(futures):
            row, found = future.result()
            rows[futures[future]] = row
            redactions += found
    _LOGGER.info(
        "batch_transformed",
        messages=len(messages),
        workers=pool_size,
        redactions=redactions,
        sanitize=settings.sanitize.enabled,
    )
    return [row for row in rows if row is not None]
