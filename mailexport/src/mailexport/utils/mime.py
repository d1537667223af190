"""MIME tree helpers tuned for provider message payloads.

What:
  Model the recursive part tree returned by the Gmail ``users.messages`` API
  and walk it to classify attachments and collect still-encoded text and HTML
  body segments.

Why:
  Payloads come from a remote service whose structure is outside our control:
  any level may omit ``body``, ``filename``, ``mimeType`` or ``parts``. The
  walker normalises those shapes so the body normaliser and the engine can
  operate deterministically without ever failing on a partial tree.

How:
  Build frozen :class:`MessagePart` objects through tolerant ``from_api``
  constructors, then perform a single depth-first pre-order traversal that
  records attachment extensions and routes ``text/plain``/``text/html`` data
  into ordered segment lists.

Interfaces:
  :class:`Header`, :class:`PartBody`, :class:`MessagePart`, :class:`Message`,
  :class:`AttachmentSummary`, :class:`PayloadWalk`, :func:`walk_payload`,
  :func:`collect_attachments`.

Invariants & Safety:
  - Input trees are never mutated; every container is a frozen dataclass.
  - Attachment extensions are unique and sorted for deterministic output.
  - Body segments stay base64url-encoded here; decoding belongs to
    :mod:`mailexport.core.body`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple


_EXTENSION_RE = re.compile(r"\.([a-z0-9]{1,10})$")
TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"
UNKNOWN_TYPE = "unknown"


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


@dataclass(frozen=True)
class Header:
    """Single ``name: value`` header as delivered by the provider."""

    name: str
    value: str

    @classmethod
    def from_api(cls, raw: Any) -> Optional["Header"]:
        if not isinstance(raw, Mapping):
            return None
        return cls(name=_as_str(raw.get("name")) or "", value=_as_str(raw.get("value")) or "")


@dataclass(frozen=True)
class PartBody:
    """Inline body data (or a pointer to out-of-line attachment data).

    Attributes:
      data: Base64url encoded content, empty when the data lives elsewhere.
      size: Declared size in bytes.
      attachment_id: Provider identifier for out-of-line attachment data.
    """

    data: str = ""
    size: int = 0
    attachment_id: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Any) -> Optional["PartBody"]:
        if not isinstance(raw, Mapping):
            return None
        return cls(
            data=_as_str(raw.get("data")) or "",
            size=_as_int(raw.get("size")),
            attachment_id=_as_str(raw.get("attachmentId")) or None,
        )


@dataclass(frozen=True)
class MessagePart:
    """One node of the MIME tree.

    What:
      Carries the MIME type, optional filename, optional body and ordered
      children of a message part.

    Why:
      A typed, immutable node makes the traversal explicit about which fields
      may be absent and guarantees callers' payloads are never modified.

    How:
      :meth:`from_api` accepts the provider's camelCase mapping and drops any
      field that is missing or of the wrong type instead of raising.
    """

    mime_type: Optional[str] = None
    filename: Optional[str] = None
    body: Optional[PartBody] = None
    headers: Tuple[Header, ...] = ()
    parts: Tuple["MessagePart", ...] = ()

    @classmethod
    def from_api(cls, raw: Any) -> Optional["MessagePart"]:
        """Build a part tree from a decoded JSON mapping, or ``None``."""

        if not isinstance(raw, Mapping):
            return None
        raw_headers = raw.get("headers")
        headers = tuple(
            header
            for header in (Header.from_api(item) for item in (raw_headers if isinstance(raw_headers, list) else []))
            if header is not None
        )
        raw_parts = raw.get("parts")
        parts = tuple(
            part
            for part in (cls.from_api(item) for item in (raw_parts if isinstance(raw_parts, list) else []))
            if part is not None
        )
        return cls(
            mime_type=_as_str(raw.get("mimeType")),
            filename=_as_str(raw.get("filename")),
            body=PartBody.from_api(raw.get("body")),
            headers=headers,
            parts=parts,
        )


@dataclass(frozen=True)
class Message:
    """Top-level message resource: identifiers, labels, snippet and payload."""

    id: str = ""
    thread_id: str = ""
    label_ids: Tuple[str, ...] = ()
    snippet: str = ""
    payload: Optional[MessagePart] = None

    @property
    def headers(self) -> Tuple[Header, ...]:
        return self.payload.headers if self.payload is not None else ()

    @classmethod
    def from_api(cls, raw: Any) -> "Message":
        if not isinstance(raw, Mapping):
            return cls()
        labels = raw.get("labelIds")
        return cls(
            id=_as_str(raw.get("id")) or "",
            thread_id=_as_str(raw.get("threadId")) or "",
            label_ids=tuple(label for label in (labels if isinstance(labels, list) else []) if isinstance(label, str)),
            snippet=_as_str(raw.get("snippet")) or "",
            payload=MessagePart.from_api(raw.get("payload")),
        )


@dataclass(frozen=True)
class AttachmentSummary:
    """Attachment descriptor derived from a part tree.

    Attributes:
      has_attachment: Whether at least one part classified as an attachment.
      types: Sorted unique extensions (or MIME type / ``"unknown"`` fallbacks).
      count: Number of attachment parts, duplicates of a type included.
    """

    has_attachment: bool = False
    types: Tuple[str, ...] = ()
    count: int = 0


@dataclass(frozen=True)
class PayloadWalk:
    """Everything a single traversal of the tree yields."""

    attachments: AttachmentSummary
    plain_segments: Tuple[str, ...] = ()
    html_segments: Tuple[str, ...] = ()


def is_attachment(part: MessagePart) -> bool:
    """Return ``True`` when ``part`` has a filename and attachment content.

    A part qualifies when its stripped filename is non-empty and it either
    references out-of-line data (``attachment_id``) or declares a positive
    body size.
    """

    filename = (part.filename or "").strip()
    if not filename:
        return False
    body = part.body
    if body is None:
        return False
    return bool(body.attachment_id) or body.size > 0


def attachment_type(part: MessagePart) -> str:
    """Infer the descriptor of an attachment part.

    What:
      Returns the lowercase file extension, falling back to the MIME type and
      finally to ``"unknown"``.

    Why:
      Exports group attachments by kind; senders frequently omit extensions so
      a stable fallback keeps the column populated.

    How:
      Match 1-10 ASCII alphanumerics after the last dot of the lowercased
      filename; otherwise use the lowercased MIME type when present.
    """

    filename = (part.filename or "").strip().lower()
    match = _EXTENSION_RE.search(filename)
    if match:
        return match.group(1)
    if part.mime_type:
        return part.mime_type.lower()
    return UNKNOWN_TYPE


def walk_payload(root: Optional[MessagePart]) -> PayloadWalk:
    """Traverse ``root`` depth-first, pre-order.

    What:
      Classify attachments and collect raw ``text/plain`` and ``text/html``
      body data in document order.

    Why:
      Both the attachment columns and the body columns derive from the same
      tree; one pass keeps them consistent.

    How:
      Use an explicit stack (children pushed in reverse) so deep trees cannot
      hit the recursion limit. Attachment parts contribute to the descriptor;
      non-attachment text parts with inline data contribute a segment. Every
      part's children are visited regardless of its own classification.

    Args:
      root: Root part of the message, or ``None`` when the payload is absent.

    Returns:
      :class:`PayloadWalk` with the attachment summary and both segment lists.
    """

    types: set[str] = set()
    count = 0
    plain: List[str] = []
    html: List[str] = []
    stack: List[MessagePart] = [root] if root is not None else []
    while stack:
        part = stack.pop()
        if is_attachment(part):
            count += 1
            types.add(attachment_type(part))
        else:
            data = part.body.data if part.body is not None else ""
            mime_type = (part.mime_type or "").lower()
            if data and mime_type == TEXT_PLAIN:
                plain.append(data)
            elif data and mime_type == TEXT_HTML:
                html.append(data)
        stack.extend(reversed(part.parts))
    summary = AttachmentSummary(has_attachment=count > 0, types=tuple(sorted(types)), count=count)
    return PayloadWalk(attachments=summary, plain_segments=tuple(plain), html_segments=tuple(html))


def collect_attachments(root: Optional[MessagePart]) -> AttachmentSummary:
    """Return only the attachment descriptor for ``root``."""

    return walk_payload(root).attachments
