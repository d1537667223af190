"""
Module: tests/unit/test_engine.py

What:
    Validate the message-to-row transform and the concurrent batch helper.

Why:
    Every export column flows through :func:`transform_message`; these tests
    pin the string rendering of flags and lists, the empty-string contract for
    unselected fields, and the truncate-then-redact order of the body columns.

How:
    Use the canned ``users.messages`` fixture and settings built either from
    the test configuration file or directly from :class:`ExportSettings`.

Invariants & Safety Rules:
    - Rows always carry every field in :data:`FIELD_ORDER`.
    - Batch output order equals input order whatever the pool size.
"""

from mailexport.config.loader import get_runtime_config
from mailexport.config.schema import ExportSettings, SanitizeSettings
from mailexport.core.engine import FIELD_ORDER, transform_many, transform_message
from mailexport.core.fields import ALL_FIELDS
from mailexport.utils.mime import Message

PLAIN_BODY = "Hello Jane,\nMy SSN is 123-45-6789 and my phone is 555-867-5309.\nThanks"


def _settings(fields, *, enabled=False, body_max_chars=8000, categories=None):
    return ExportSettings(
        fields=list(fields),
        body_max_chars=body_max_chars,
        sanitize=SanitizeSettings(enabled=enabled, categories=categories),
    )


def test_configured_row_from_fixture(raw_message):
    """
    What:
        Transform the fixture with the settings from ``tests/data/config.yaml``.

    Why:
        This is the path the CLI takes; the row must show parsed headers, the
        attachment descriptor and a redacted body side by side.
    """

    row = transform_message(raw_message, get_runtime_config().settings())
    assert tuple(row) == FIELD_ORDER
    assert row["from_email"] == "jane.roe@example.com"
    assert row["from_name"] == "Jane Roe"
    assert row["sender_domain"] == "example.com"
    assert row["reply_to_domain"] == "help.example.org"
    assert row["subject"] == "Your statement"
    assert row["has_attachment"] == "true"
    assert row["attachment_types"] == "application/octet-stream;pdf"
    assert row["attachment_count"] == "2"
    assert row["body_text"] == (
        "Hello Jane,\nMy SSN is [REDACTED_TAX_ID] and my phone is [REDACTED_PHONE].\nThanks"
    )
    # Not selected in the configuration file.
    assert row["snippet"] == ""
    assert row["delivered_to"] == ""
    assert row["body_html"] == ""


def test_all_fields_without_sanitize(raw_message):
    row = transform_message(raw_message, _settings(ALL_FIELDS))
    assert row["reply_to"] == "support@help.example.org"
    assert row["delivered_to"] == "me@inbox.test"
    assert row["to"] == "Me <me@inbox.test>"
    assert row["cc"] == ""
    assert row["date"] == "Tue, 14 Nov 2023 09:30:00 +0000"
    assert row["message_id"] == "<abc123@mail.example.com>"
    assert row["thread_id"] == "18c0ffee-thread"
    assert row["labels"] == "INBOX;CATEGORY_UPDATES"
    assert row["snippet"] == "Hello Jane, My SSN is 123-45-6789"
    assert row["has_list_unsubscribe"] == "true"
    assert row["body_text"] == PLAIN_BODY
    assert row["body_html"].startswith("<p>Hello Jane,</p>")


def test_snippet_and_subject_are_never_redacted(raw_message):
    row = transform_message(raw_message, _settings(["snippet", "body_text"], enabled=True))
    assert "123-45-6789" in row["snippet"]
    assert "123-45-6789" not in row["body_text"]


def test_body_is_truncated_before_redaction(raw_message):
    """A value cut by truncation is no longer recognisable and stays as is."""

    row = transform_message(raw_message, _settings(["body_text"], enabled=True, body_max_chars=25))
    assert row["body_text"] == PLAIN_BODY[:25]


def test_html_only_message_falls_back_to_converted_html(raw_message):
    alternative = raw_message["payload"]["parts"][0]
    alternative["parts"] = [alternative["parts"][1]]
    row = transform_message(raw_message, _settings(["body_text"]))
    assert row["body_text"] == "Hello Jane,\n\nVisit your orders (https://shop.example.com/orders)"


def test_reply_to_domain_empty_without_reply_to():
    message = {"payload": {"headers": [{"name": "From", "value": "a@b.example"}]}}
    row = transform_message(message, _settings(["sender_domain", "reply_to_domain", "has_list_unsubscribe"]))
    assert row["sender_domain"] == "b.example"
    assert row["reply_to_domain"] == ""
    assert row["has_list_unsubscribe"] == "false"


def test_malformed_message_yields_empty_row():
    row = transform_message({"payload": "broken"}, _settings(ALL_FIELDS))
    assert row["has_attachment"] == "false"
    assert row["attachment_count"] == "0"
    assert row["body_text"] == ""
    assert row["from_email"] == ""


def test_accepts_message_objects(raw_message):
    row = transform_message(Message.from_api(raw_message), _settings(["from_email"]))
    assert row["from_email"] == "jane.roe@example.com"


def test_transform_many_preserves_order():
    messages = [
        {"payload": {"headers": [{"name": "Subject", "value": f"message {index}"}]}} for index in range(12)
    ]
    rows = transform_many(messages, _settings(["subject"]), workers=4)
    assert [row["subject"] for row in rows] == [f"message {index}" for index in range(12)]
    assert transform_many([], _settings(["subject"])) == []
