"""Pattern library — one compiled regex per output field.

Every pattern is run with ``finditer`` so matches come back global,
non-overlapping and in order of occurrence.  ``\\b``, ``\\d`` and ``\\w``
use ASCII semantics; whitespace separators use ``WHITESPACE``, which
also covers Unicode spaces such as U+00A0 (no-break space).
"""

from __future__ import annotations
import re

# ASCII \s plus the Unicode space separators, line/paragraph separators and BOM
WHITESPACE = r"[\s\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"

EMAIL = re.compile(
    r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b",
    re.ASCII,
)

# http(s), optional www., host with a short final label, optional path/query/fragment
URL = re.compile(
    r"https?://(?:www\.)?"
    r"[\-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"[\-a-zA-Z0-9()@:%_+.~#?&/=]*",
    re.ASCII,
)

# +1 (555) 123-4567, 555.123.4567, 555 123 4567 ...
_PHONE_SEP = rf"(?:[\-.]|{WHITESPACE})?"
PHONE_NUMBER = re.compile(
    rf"(?:\+?\d{{1,3}}{_PHONE_SEP})?"
    rf"\(?\d{{3}}\)?{_PHONE_SEP}"
    rf"\d{{3}}{_PHONE_SEP}\d{{4}}",
    re.ASCII,
)

CURRENCY_AMOUNT = re.compile(
    rf"\${WHITESPACE}?\d{{1,3}}(?:,\d{{3}})*(?:\.\d{{2}})?",
    re.ASCII,
)

# Four groups of four digits, optional "-" or whitespace between groups
CREDIT_CARD = re.compile(
    rf"\b(?:\d{{4}}(?:-|{WHITESPACE})?){{3}}\d{{4}}\b",
    re.ASCII,
)

# 24h "14:30", or 12h "2:15 PM" / "2:15pm"
TIMESTAMP = re.compile(
    rf"\b(?:[01]?\d|2[0-3]):[0-5]\d(?:{WHITESPACE}?[APM]{{2}})?\b",
    re.ASCII | re.IGNORECASE,
)

# Opening or closing tag; the body can't contain another "<" or ">"
# ("<a <b>" yields "<b>", not "<a <b>": a stray "<" never swallows the next tag)
HTML_TAG = re.compile(
    r"</?[a-z][^<>]*>",
    re.ASCII | re.IGNORECASE,
)

HASHTAG = re.compile(r"#\w+", re.ASCII)


def find_candidates(pattern: re.Pattern, text: str) -> list[str]:
    """Return every raw match of pattern in text, left to right."""
    return [m.group() for m in pattern.finditer(text)]
