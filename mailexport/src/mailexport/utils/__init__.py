"""Utility surface for mailexport: structured logging and MIME tree helpers."""

from .logging import get_logger
from .mime import Message, MessagePart, collect_attachments, walk_payload

__all__ = [
    "get_logger",
    "Message",
    "MessagePart",
    "collect_attachments",
    "walk_payload",
]
