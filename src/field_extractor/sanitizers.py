"""Per-field post-processing of raw candidates.

Three policies share one shape (``str -> str | None``):

  - reject-on-malformed: emails, HTML tags
  - reject-on-unsafe:    URLs
  - mask-on-sensitive:   credit cards (always kept, digits redacted)

Everything else is accepted verbatim.
"""

from __future__ import annotations
import re

from .patterns import WHITESPACE

CARD_DIGITS = 16
CARD_MASK_PREFIX = "****-****-****-"

_CARD_SEPARATORS = re.compile(rf"-|{WHITESPACE}")
_UNSAFE_URL_MARKERS = ("<script>", "javascript:")


def accept(candidate: str) -> str:
    return candidate


def reject_double_dot(candidate: str) -> str | None:
    """Drop emails with consecutive dots anywhere."""
    if ".." in candidate:
        return None
    return candidate


def reject_unsafe_url(candidate: str) -> str | None:
    """Drop URLs carrying a script tag or a javascript: scheme."""
    lowered = candidate.lower()
    if any(marker in lowered for marker in _UNSAFE_URL_MARKERS):
        return None
    return candidate


def mask_credit_card(candidate: str) -> str:
    """Keep only the last four digits of a 16-digit card number.

    Anything that doesn't strip down to exactly 16 digits is returned
    unchanged.
    """
    digits = _CARD_SEPARATORS.sub("", candidate)
    if len(digits) == CARD_DIGITS:
        return CARD_MASK_PREFIX + digits[-4:]
    return candidate


def reject_script_tag(candidate: str) -> str | None:
    """Drop any tag mentioning ``script`` (opening or closing)."""
    if "script" in candidate.lower():
        return None
    return candidate
