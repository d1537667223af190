"""Compile redaction patterns with Unicode-aware whitespace.

What:
  Offer :func:`compile_pattern`, a :func:`re.compile` wrapper that widens
  every ``\\s`` in a pattern source to also cover Unicode space separators.

Why:
  The redaction patterns run with :data:`re.ASCII` so ``\\b``, ``\\w`` and
  case-folding keep ASCII rules. In that mode ``\\s`` stops matching U+00A0
  and friends, and mail bodies routinely separate phone numbers, tax ids and
  street numbers with non-breaking spaces.

How:
  Walk the source once, tracking escapes and character classes. A ``\\s``
  inside a class gains the extra code points in place; a bare ``\\s`` becomes
  a class of its own.

Interfaces:
  :data:`UNICODE_SPACES`, :func:`widen_spaces`, :func:`compile_pattern`.
"""
from __future__ import annotations

import re
from typing import Pattern

UNICODE_SPACES = r"\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"


def widen_spaces(source: str) -> str:
    """Return ``source`` with every ``\\s`` extended by :data:`UNICODE_SPACES`."""

    out = []
    in_class = False
    index = 0
    while index < len(source):
        char = source[index]
        if char == "\\" and index + 1 < len(source):
            escape = source[index : index + 2]
            if escape == r"\s":
                escape = r"\s" + UNICODE_SPACES
                if not in_class:
                    escape = f"[{escape}]"
            out.append(escape)
            index += 2
            continue
        if char == "[" and not in_class:
            in_class = True
        elif char == "]" and in_class:
            in_class = False
        out.append(char)
        index += 1
    return "".join(out)


def compile_pattern(source: str, flags: int = 0) -> Pattern[str]:
    return re.compile(widen_spaces(source), flags)
