"""Export field catalogue.

Every column an export can carry, with a description, a display group and
whether it is selected by default. Field selection from configuration files
and the command line resolves names against this list.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union


@dataclass(frozen=True)
class FieldInfo:
    name: str
    description: str
    group: str
    default: bool


FIELD_DEFINITIONS: Tuple[FieldInfo, ...] = (
    FieldInfo("from_email", "Email address of the sender", "sender", True),
    FieldInfo("from_name", "Display name of the sender (if available)", "sender", True),
    FieldInfo("sender_domain", 'Domain extracted from sender email (e.g., "gmail.com")', "sender", True),
    FieldInfo("reply_to", "Reply-To email address (often different from From)", "sender", False),
    FieldInfo("reply_to_domain", "Domain of the Reply-To address", "sender", True),
    FieldInfo("delivered_to", "Email address the message was delivered to", "recipient", True),
    FieldInfo("to", "To header (may include multiple recipients)", "recipient", False),
    FieldInfo("cc", "CC recipients", "recipient", False),
    FieldInfo("bcc", "BCC recipients (rarely populated)", "recipient", False),
    FieldInfo("subject", "Email subject line", "content", True),
    FieldInfo("snippet", "Short preview of email content", "content", True),
    FieldInfo("body_text", "Plain text body content (cleaned, URLs preserved)", "content", False),
    FieldInfo("body_html", "Raw HTML body content", "content", False),
    FieldInfo("date", "Date header (when the email was sent)", "metadata", False),
    FieldInfo("message_id", "Unique Message-ID header", "metadata", False),
    FieldInfo("thread_id", "Thread ID (groups conversations)", "metadata", False),
    FieldInfo("labels", "Labels applied to this message", "metadata", False),
    FieldInfo("has_attachment", "Whether the email has attachments (true/false)", "attachments", True),
    FieldInfo("attachment_types", "File extensions of attachments (semicolon-separated)", "attachments", True),
    FieldInfo("attachment_count", "Number of attachments", "attachments", False),
    FieldInfo(
        "has_list_unsubscribe",
        "Whether email has List-Unsubscribe header (newsletter indicator)",
        "attachments",
        True,
    ),
)

ALL_FIELDS: Tuple[str, ...] = tuple(info.name for info in FIELD_DEFINITIONS)
DEFAULT_FIELDS: Tuple[str, ...] = tuple(info.name for info in FIELD_DEFINITIONS if info.default)


def parse_fields(value: Union[str, Iterable[str], None]) -> Optional[Tuple[str, ...]]:
    """Resolve a comma-separated string or a list of names to known fields.

    Unknown names are dropped and the given order is kept. Returns ``None``
    when nothing valid remains so callers can fall back to their defaults.
    """

    if value is None:
        return None
    names = value.split(",") if isinstance(value, str) else list(value)
    known = []
    for name in names:
        candidate = str(name).strip()
        if candidate in ALL_FIELDS and candidate not in known:
            known.append(candidate)
    return tuple(known) or None
