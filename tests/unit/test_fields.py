"""Field catalogue and field-list parsing."""

from mailexport.core.fields import ALL_FIELDS, DEFAULT_FIELDS, FIELD_DEFINITIONS, parse_fields


def test_catalogue_shape():
    assert len(FIELD_DEFINITIONS) == 21
    assert len(set(ALL_FIELDS)) == len(ALL_FIELDS)
    assert {"body_text", "body_html"} <= set(ALL_FIELDS)
    assert not {"body_text", "body_html"} & set(DEFAULT_FIELDS)


def test_default_selection():
    assert DEFAULT_FIELDS == (
        "from_email",
        "from_name",
        "sender_domain",
        "reply_to_domain",
        "delivered_to",
        "subject",
        "snippet",
        "has_attachment",
        "attachment_types",
        "has_list_unsubscribe",
    )


def test_parse_fields_keeps_order_and_drops_unknown():
    assert parse_fields(" subject, bogus ,from_email,subject") == ("subject", "from_email")
    assert parse_fields(["body_text", "labels"]) == ("body_text", "labels")


def test_parse_fields_without_known_names():
    assert parse_fields(None) is None
    assert parse_fields("") is None
    assert parse_fields("nope,nada") is None
