"""
Module: tests/unit/test_headers.py

What:
    Cover header lookup and address parsing used by the sender, reply-to and
    delivered-to columns.

Why:
    Header strings are free-form; these tests pin the accepted shapes so the
    exported addresses stay lowercase and the domains stay consistent.
"""

from mailexport.core.headers import ParsedAddress, domain_from_email, get_header, parse_address
from mailexport.utils.mime import Header


def test_get_header_is_case_insensitive_and_returns_first_match():
    headers = [
        {"name": "subject", "value": "first"},
        {"name": "SUBJECT", "value": "second"},
        Header(name="From", value="a@b.co"),
    ]
    assert get_header(headers, "Subject") == "first"
    assert get_header(headers, "from") == "a@b.co"
    assert get_header(headers, "Cc") == ""
    assert get_header(None, "Subject") == ""


def test_get_header_requires_exact_name():
    assert get_header([{"name": "X-Subject", "value": "nope"}], "Subject") == ""


def test_parse_angle_bracket_form_strips_quotes_and_lowercases():
    parsed = parse_address('"John Doe" <John@Example.COM>')
    assert parsed == ParsedAddress(display_name="John Doe", email="john@example.com")
    assert parsed.domain == "example.com"


def test_parse_bare_address():
    parsed = parse_address("  Support@Help.Example.org ")
    assert parsed.email == "support@help.example.org"
    assert parsed.display_name == ""
    assert parsed.domain == "help.example.org"


def test_parse_bracket_only_address_uses_fallback():
    parsed = parse_address("<noreply@shop.test>")
    assert parsed.email == "noreply@shop.test"
    assert parsed.display_name == ""


def test_parse_without_email_keeps_trimmed_text_as_name():
    parsed = parse_address("  undisclosed-recipients:; ")
    assert parsed.email == ""
    assert parsed.display_name == "undisclosed-recipients:;"
    assert parsed.domain == ""


def test_parse_empty_and_none():
    assert parse_address(None) == ParsedAddress()
    assert parse_address("") == ParsedAddress()


def test_domain_from_email():
    assert domain_from_email("a@B.Example") == "b.example"
    assert domain_from_email("no-at-sign") == ""
    assert domain_from_email(None) == ""
