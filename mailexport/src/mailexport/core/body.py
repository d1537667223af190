"""mailexport.core.body

What:
  Turn the raw body segments collected by :mod:`mailexport.utils.mime` into a
  bounded plain-text body (and a bounded raw HTML body).

Why:
  Inline part data arrives base64url encoded and, for many senders, only as
  HTML full of CSS, tracking markup, invisible characters and embedded blobs.
  Exports need one readable, size-bounded text column that the redaction
  engine can scan reliably.

How:
  - Decode base64url with deterministic padding and a best-effort fallback.
  - Prefer plain-text segments; only when none carry text convert the HTML
    segments through BeautifulSoup plus a few text clean-up passes.
  - Truncate strictly after normalisation so entities and whitespace rules
    are never cut mid-way.

Interfaces:
  :func:`decode_base64url`, :func:`decode_html_entities`, :func:`html_to_text`,
  :func:`select_body_text`, :func:`extract_body_text`,
  :func:`extract_body_html`, :func:`truncate`.

Invariants & Safety:
  - Every function is pure and deterministic and never raises on malformed
    input.
  - Entities that decode to control, zero-width or soft-hyphen characters
    decode to the empty string.
"""
from __future__ import annotations

import base64
import binascii
import html
import re
from html.entities import html5 as html5_entities
from typing import Iterable, Optional

from bs4 import BeautifulSoup, Comment, ParserRejectedMarkup, Tag

from ..utils.mime import MessagePart, PayloadWalk, walk_payload


_NON_BASE64_RE = re.compile(r"[^A-Za-z0-9+/]")

_HIDDEN_TAGS = ["script", "style", "noscript", "head", "svg"]

_CSS_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
_CSS_AT_RULE_RE = re.compile(
    r"(?<![\w.@-])@(?:media|(?:-webkit-|-moz-)?keyframes|font-face|supports|page|import|charset)\b"
    r"[^{};<>]*(?:\{(?:[^{}]*\{[^{}]*\})*[^{}]*\}|;)",
    re.IGNORECASE,
)
_CSS_PROPERTY_NAMES = (
    "background",
    "border",
    "bottom",
    "clear",
    "color",
    "content",
    "cursor",
    "direction",
    "display",
    "filter",
    "float",
    "font",
    "height",
    "left",
    "margin",
    "opacity",
    "outline",
    "overflow",
    "padding",
    "position",
    "right",
    "top",
    "visibility",
    "width",
    "zoom",
)
_CSS_PROPERTY_FAMILIES = (
    "align|animation|background|border|box|column|flex|font|grid|justify|letter|line|list|"
    "margin|max|min|mso|outline|overflow|padding|page|table|text|transform|transition|"
    "vertical|white|word"
)
_CSS_DECLARATION_RE = re.compile(
    r"(?<![\w-])(?:(?:-(?:webkit|moz|ms|o)-)?(?:" + _CSS_PROPERTY_FAMILIES + r")-[a-z-]+|"
    + "|".join(_CSS_PROPERTY_NAMES)
    + r")\s*:\s*[^;:<>{}\n]{1,100};"
)

BULLET = "\u2022 "

_ENTITY_RE = re.compile(r"&(?:#[xX][0-9a-fA-F]+|#[0-9]+|[A-Za-z][A-Za-z0-9]*);")
_CASE_FOLDED_ENTITIES = frozenset({"nbsp", "amp", "lt", "gt", "quot", "apos"})
_INVISIBLE_RE = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f\u00ad\u034f\u061c\u115f\u1160\u17b4\u17b5\u180e"
    r"\u200b-\u200f\u202a-\u202e\u2060-\u2064\u2066-\u206f\u3164\ufeff\uffa0]"
)

_DATA_URI_RE = re.compile(r"\bdata:[\w.+-]+/[\w.+-]+[^\s\"'<>()]*", re.IGNORECASE)
_BASE64_BLOB_RE = re.compile(r"[A-Za-z0-9+/=]{200,}")

_SPACE_RE = re.compile(r"\s+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def decode_base64url(data: Optional[str]) -> str:
    """Decode provider base64url data into text.

    What:
      Translates the URL-safe alphabet, pads to a multiple of four and decodes
      the bytes as UTF-8.

    Why:
      Part bodies are occasionally truncated or carry stray characters. An
      export must keep going, so decoding is lossy rather than fatal.

    How:
      The padded string goes through the non-validating decoder, which skips
      out-of-alphabet characters. If the decoder still rejects it (for instance
      a dangling single character), only alphabet characters are kept, the
      dangling sextet is dropped and the remainder is padded again. Invalid
      UTF-8 sequences become U+FFFD.

    Args:
      data: Base64url string, possibly ``None`` or malformed.

    Returns:
      Decoded text, ``""`` for empty input.
    """

    if not data:
        return ""
    translated = data.replace("-", "+").replace("_", "/")
    padded = translated + "=" * (-len(translated) % 4)
    try:
        raw = base64.b64decode(padded)
    except (binascii.Error, ValueError):
        cleaned = _NON_BASE64_RE.sub("", translated)
        if len(cleaned) % 4 == 1:
            cleaned = cleaned[:-1]
        raw = base64.b64decode(cleaned + "=" * (-len(cleaned) % 4))
    return raw.decode("utf-8", errors="replace")


def _is_invisible(char: str) -> bool:
    code = ord(char)
    return code < 0x20 or 0x200B <= code <= 0x200F or code in (0x034F, 0xFEFF, 0x00AD)


def _lookup_entity(entity: str) -> Optional[str]:
    if entity[1] == "#":
        decoded = html.unescape(entity)
        return None if decoded == entity else decoded
    name = entity[1:]
    if name[:-1].lower() in _CASE_FOLDED_ENTITIES:
        name = name.lower()
    # Exact names only; unescape() would also expand legacy prefixes like "&not".
    return html5_entities.get(name)


def _decode_entity(match: "re.Match[str]") -> str:
    entity = match.group(0)
    decoded = _lookup_entity(entity)
    if decoded is None:
        return entity
    if len(decoded) == 1 and _is_invisible(decoded):
        return ""
    return decoded


def _prepare_entity(match: "re.Match[str]") -> str:
    entity = match.group(0)
    decoded = _lookup_entity(entity)
    if decoded is None:
        return "&amp;" + entity[1:]
    if len(decoded) == 1 and _is_invisible(decoded):
        return ""
    return html.escape(decoded)


def decode_html_entities(text: str) -> str:
    """Decode named, decimal and hex entities; invisible results become ``""``."""

    return _ENTITY_RE.sub(_decode_entity, text)


def _strip_css(text: str) -> str:
    text = _CSS_COMMENT_RE.sub(" ", text)
    text = _CSS_AT_RULE_RE.sub(" ", text)
    return _CSS_DECLARATION_RE.sub(" ", text)


def _anchor_text(anchor: Tag) -> str:
    href = (anchor.get("href") or "").strip()
    inner = _SPACE_RE.sub(" ", anchor.get_text(" ")).strip()
    if not href:
        return inner or "link"
    if not inner:
        return href
    if href in inner:
        return inner
    return f"{inner} ({href})"


def _normalise_whitespace(text: str) -> str:
    lines = [_SPACE_RE.sub(" ", line).strip() for line in text.split("\n")]
    return _BLANK_RUN_RE.sub("\n\n", "\n".join(lines)).strip()


def html_to_text(markup: str) -> str:
    """Convert HTML into readable plain text while keeping link targets.

    What:
      Produces text such as ``"Hi\\nthere\\n\\nclick (http://x.co)"`` from
      ``<p>Hi<br>there</p><a href="http://x.co">click</a>``.

    Why:
      HTML-only mail is the norm for newsletters and receipts. The export
      keeps the readable content plus the URLs, which the redaction engine
      later inspects for tokens.

    How:
      Entities are settled first: unknown names are kept literally, invisible
      results are dropped and the rest are handed to BeautifulSoup re-escaped.
      On the parsed tree, comments and invisible elements are removed,
      anchors become ``text (href)``, and ``br``/``p``/``div``/``li`` gain
      their newlines and bullets. The collected text then loses stray CSS,
      invisible characters, data URIs and base64 blobs before whitespace is
      normalised.

    Args:
      markup: Decoded HTML document or fragment.

    Returns:
      Normalised text without leading or trailing whitespace.
    """

    prepared = _ENTITY_RE.sub(_prepare_entity, markup)
    try:
        soup = BeautifulSoup(prepared, "html.parser")
    except ParserRejectedMarkup:
        # Rejected markup is kept as literal text.
        soup = BeautifulSoup(html.escape(prepared, quote=False), "html.parser")
    for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()
    for tag in soup.find_all(_HIDDEN_TAGS):
        if not tag.decomposed:
            tag.decompose()
    for anchor in soup.find_all("a"):
        anchor.replace_with(_anchor_text(anchor))
    for tag in soup.find_all("br"):
        tag.replace_with("\n")
    for tag in soup.find_all("p"):
        tag.append("\n\n")
    for tag in soup.find_all("div"):
        tag.append("\n")
    for tag in soup.find_all("li"):
        tag.insert(0, BULLET)
        tag.append("\n")

    text = _strip_css(soup.get_text())
    text = _INVISIBLE_RE.sub("", text)
    text = _DATA_URI_RE.sub(" ", text)
    text = _BASE64_BLOB_RE.sub(" ", text)
    return _normalise_whitespace(text)


def truncate(text: str, max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` characters; ``0`` (or less) means unlimited."""

    if max_chars > 0 and len(text) > max_chars:
        return text[:max_chars]
    return text


def select_body_text(plain_segments: Iterable[str], html_segments: Iterable[str]) -> str:
    """Choose and normalise the body from encoded segments.

    Plain-text segments win: they are decoded, joined with newlines, trimmed
    and returned unchanged otherwise. HTML segments are only decoded and
    converted when the plain-text result is empty.
    """

    plain = "\n".join(decode_base64url(segment) for segment in plain_segments).strip()
    if plain:
        return plain
    markup = "\n".join(decode_base64url(segment) for segment in html_segments).strip()
    return html_to_text(markup) if markup else ""


def body_text_from_walk(walk: PayloadWalk, max_chars: int) -> str:
    return truncate(select_body_text(walk.plain_segments, walk.html_segments), max_chars)


def body_html_from_walk(walk: PayloadWalk, max_chars: int) -> str:
    markup = "\n".join(decode_base64url(segment) for segment in walk.html_segments).strip()
    return truncate(markup, max_chars)


def extract_body_text(root: Optional[MessagePart], max_chars: int) -> str:
    """Walk ``root`` and return its normalised, truncated text body."""

    return body_text_from_walk(walk_payload(root), max_chars)


def extract_body_html(root: Optional[MessagePart], max_chars: int) -> str:
    """Walk ``root`` and return its raw HTML body, decoded and truncated."""

    return body_html_from_walk(walk_payload(root), max_chars)
