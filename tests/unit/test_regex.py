"""Whitespace widening for ASCII-mode redaction patterns."""

import re

from mailexport.utils.regex import UNICODE_SPACES, compile_pattern, widen_spaces


def test_bare_and_class_whitespace_are_widened():
    assert widen_spaces(r"a\sb") == "a[\\s" + UNICODE_SPACES + "]b"
    assert widen_spaces(r"[^\s\-]") == "[^\\s" + UNICODE_SPACES + "\\-]"


def test_escaped_backslash_is_left_alone():
    assert widen_spaces(r"\\s\[\s") == "\\\\s\\[[\\s" + UNICODE_SPACES + "]"


def test_compiled_pattern_matches_unicode_spaces_under_ascii_flag():
    pattern = compile_pattern(r"\b[0-9]{3}[\s\-][0-9]{2}\s[0-9]{4}\b", re.ASCII)
    assert pattern.fullmatch("123\xa045\u20096789")
    assert pattern.fullmatch("123-45 6789")
    assert not pattern.fullmatch("123_45 6789")
