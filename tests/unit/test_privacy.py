"""
Module: tests/unit/test_privacy.py

What:
    Verify the category registry and the redaction pass: ordering, default
    selection, placeholders, per-category counts and category toggles.

Why:
    Redaction is the last line of defence before exported text reaches
    spreadsheets. A broken toggle or a placeholder that re-matches on a second
    pass would leak data or corrupt counts.

How:
    Run :func:`sanitize` on short sentences with known sensitive values and
    assert on the exact output text and the count map.

Invariants & Safety Rules:
    - ``per_category`` always lists every category, including when disabled.
    - Sanitizing sanitized text changes nothing.
"""

import re

import pytest

from mailexport.core.privacy import (
    REGISTRY,
    Category,
    SanitizeConfig,
    all_categories,
    category_spec,
    default_categories,
    parse_categories,
    sanitize,
)

SAMPLE = "My SSN is 123-45-6789 and my phone is 555-867-5309. Visa 4111 1111 1111 1111."
MIXED_SAMPLE = (
    SAMPLE
    + " Password: hunter22. Ship to 742 Evergreen Terrace, Springfield IL 62704."
    + " Order #AB123456 total $42.50 via https://example.com/reset?token=abcdef1234567890 or jane@example.com."
)


def test_registry_order_and_size():
    assert len(REGISTRY) == 27
    assert all_categories()[0] is Category.CREDIT_CARDS
    assert all_categories()[-1] is Category.REGULAR_URLS
    assert all_categories().index(Category.TAX_IDS) < all_categories().index(Category.PHONE_NUMBERS)


def test_default_categories():
    disabled = set(all_categories()) - default_categories()
    assert disabled == {
        Category.EMAIL_ADDRESSES,
        Category.ORDER_NUMBERS,
        Category.TRACKING_NUMBERS,
        Category.BOOKING_REFERENCES,
        Category.FINANCIAL_AMOUNTS,
        Category.REGULAR_URLS,
    }
    assert SanitizeConfig().categories == default_categories()


def test_placeholders_are_bracketed_words_without_digits():
    for spec in REGISTRY:
        assert re.fullmatch(r"\[REDACTED_[A-Z_]+\]", spec.replacement), spec.category
    assert category_spec(Category.TAX_IDS).replacement == "[REDACTED_TAX_ID]"
    assert category_spec(Category.PHYSICAL_ADDRESSES).replacement == "[REDACTED_ADDRESS]"
    assert category_spec(Category.TOKEN_URLS).replacement == category_spec(Category.REGULAR_URLS).replacement


def test_disabled_config_is_identity_with_zero_counts():
    result = sanitize(SAMPLE, SanitizeConfig(enabled=False))
    assert result.text == SAMPLE
    assert result.total_count == 0
    assert set(result.per_category) == set(all_categories())
    assert not any(result.per_category.values())


def test_empty_text_returns_zero_counts():
    result = sanitize("", SanitizeConfig(enabled=True))
    assert result.text == ""
    assert result.total_count == 0
    assert len(result.per_category) == 27
    assert sanitize(None, SanitizeConfig(enabled=True)).text == ""


def test_ssn_is_counted_once_under_tax_ids():
    result = sanitize("My SSN is 123-45-6789", SanitizeConfig(enabled=True))
    assert result.text == "My SSN is [REDACTED_TAX_ID]"
    assert result.total_count == 1
    assert result.per_category[Category.TAX_IDS] == 1
    assert sum(count for category, count in result.per_category.items() if category is not Category.TAX_IDS) == 0


def test_default_redaction_of_sample():
    result = sanitize(SAMPLE, SanitizeConfig(enabled=True))
    assert result.text == "My SSN is [REDACTED_TAX_ID] and my phone is [REDACTED_PHONE]. Visa [REDACTED_CARD]."
    assert result.total_count == 3
    assert result.per_category[Category.CREDIT_CARDS] == 1
    assert result.per_category[Category.PHONE_NUMBERS] == 1


def test_sanitized_output_is_a_fixed_point():
    config = SanitizeConfig(enabled=True, categories=frozenset(all_categories()))
    once = sanitize(SAMPLE, config)
    twice = sanitize(once.text, config)
    assert twice.text == once.text
    assert twice.total_count == 0


@pytest.mark.parametrize("category", list(Category))
def test_each_category_output_is_a_fixed_point(category):
    config = SanitizeConfig(enabled=True, categories=frozenset({category}))
    once = sanitize(MIXED_SAMPLE, config)
    twice = sanitize(once.text, config)
    assert twice.text == once.text
    assert twice.total_count == 0


def test_disabling_a_category_leaves_its_values():
    text = "reach me at 555-867-5309"
    without_phone = default_categories() - {Category.PHONE_NUMBERS}
    kept = sanitize(text, SanitizeConfig(enabled=True, categories=without_phone))
    assert kept.text == text
    assert kept.total_count == 0
    redacted = sanitize(text, SanitizeConfig(enabled=True))
    assert redacted.text == "reach me at [REDACTED_PHONE]"


def test_disabled_category_survives_next_to_enabled_matches():
    text = "SSN 123-45-6789, reach me at 555-867-5309"
    without_phone = default_categories() - {Category.PHONE_NUMBERS}
    result = sanitize(text, SanitizeConfig(enabled=True, categories=without_phone))
    assert result.text == "SSN [REDACTED_TAX_ID], reach me at 555-867-5309"
    assert result.per_category[Category.TAX_IDS] == 1
    assert result.per_category[Category.PHONE_NUMBERS] == 0
    assert result.total_count == 1


def test_unicode_spaces_separate_values():
    result = sanitize("Call 555\xa0867\xa05309 or SSN 123\xa045\xa06789", SanitizeConfig(enabled=True))
    assert result.text == "Call [REDACTED_PHONE] or SSN [REDACTED_TAX_ID]"
    assert result.per_category[Category.PHONE_NUMBERS] == 1
    assert result.per_category[Category.TAX_IDS] == 1
    narrow = sanitize("SSN 123\u202f45\u202f6789", SanitizeConfig(enabled=True))
    assert narrow.text == "SSN [REDACTED_TAX_ID]"


def test_optional_categories_apply_when_selected():
    text = "Total $1,234.56 sent to jane@example.com"
    config = SanitizeConfig(
        enabled=True,
        categories=frozenset({Category.FINANCIAL_AMOUNTS, Category.EMAIL_ADDRESSES}),
    )
    result = sanitize(text, config)
    assert result.text == "Total [REDACTED_AMOUNT] sent to [REDACTED_EMAIL]"
    assert result.per_category[Category.FINANCIAL_AMOUNTS] == 1
    assert result.per_category[Category.EMAIL_ADDRESSES] == 1


def test_parse_categories():
    assert parse_categories([" Tax_IDs ", "", "phone_numbers"]) == {Category.TAX_IDS, Category.PHONE_NUMBERS}
    with pytest.raises(ValueError, match="unknown redaction category"):
        parse_categories(["tax_ids", "shoe_sizes"])
