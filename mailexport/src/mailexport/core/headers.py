"""mailexport.core.headers

What:
  Look up header values and split ``"Name <addr>"`` style address headers into
  display name, lowercase email and domain.

Why:
  Sender, Reply-To and Delivered-To columns all derive from loosely formatted
  header strings. A single parser keeps the three columns consistent and
  guarantees the domain is always derived from the email alone.

How:
  Header lookup is a case-insensitive scan that returns the first hit. Address
  parsing tries the trailing angle-bracket form first, then falls back to the
  first ``local@domain.tld`` substring.

Interfaces:
  :class:`ParsedAddress`, :func:`get_header`, :func:`parse_address`,
  :func:`domain_from_email`.

Invariants & Safety:
  - Functions never raise on ``None`` or malformed input; they degrade to
    empty strings.
  - ``ParsedAddress.domain`` is always ``domain_from_email(email)``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional


_ANGLE_ADDR_RE = re.compile(r"^(.*)<([^>]+)>$", re.DOTALL)
_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE | re.ASCII)
_NAME_STRIP_RE = re.compile(r'[<>"]')


@dataclass(frozen=True)
class ParsedAddress:
    """Address header split into its components."""

    display_name: str = ""
    email: str = ""

    @property
    def domain(self) -> str:
        return domain_from_email(self.email)


def _header_field(header: Any, key: str) -> str:
    if isinstance(header, Mapping):
        value = header.get(key)
    else:
        value = getattr(header, key, None)
    return value if isinstance(value, str) else ""


def get_header(headers: Optional[Iterable[Any]], name: str) -> str:
    """Return the value of the first header called ``name``.

    Args:
      headers: Ordered header objects or ``{"name", "value"}`` mappings.
      name: Header name, matched case-insensitively and exactly.

    Returns:
      The first matching value, or ``""`` when absent.
    """

    key = name.lower()
    for header in headers or ():
        if _header_field(header, "name").lower() == key:
            return _header_field(header, "value")
    return ""


def parse_address(raw: Optional[str]) -> ParsedAddress:
    """Split an address header into display name and lowercase email.

    What:
      Parses ``"John Doe" <John@Example.COM>`` into ``John Doe`` and
      ``john@example.com``.

    Why:
      Providers return free-form header strings; exports need stable, lowercase
      addresses for grouping and domain statistics.

    How:
      - Trailing ``<...>`` with a non-empty prefix: the prefix (quotes
        removed, trimmed) is the name and the bracket contents are the email.
      - Otherwise the first email-like substring is the email, and the name is
        the remaining text without brackets or quotes.
      - Without any email-like substring the whole trimmed string is the name.

    Args:
      raw: Header value, possibly ``None``.

    Returns:
      :class:`ParsedAddress` for the header.
    """

    text = (raw or "").strip()
    match = _ANGLE_ADDR_RE.match(text)
    if match and match.group(1) and match.group(2):
        return ParsedAddress(
            display_name=match.group(1).replace('"', "").strip(),
            email=match.group(2).strip().lower(),
        )
    found = _EMAIL_RE.search(text)
    if found is None:
        return ParsedAddress(display_name=text, email="")
    name = text.replace(found.group(0), "", 1)
    return ParsedAddress(display_name=_NAME_STRIP_RE.sub("", name).strip(), email=found.group(0).lower())


def domain_from_email(email: Optional[str]) -> str:
    """Return the lowercase text after the first ``@`` of ``email``."""

    value = email or ""
    at = value.find("@")
    return value[at + 1 :].lower() if at >= 0 else ""
