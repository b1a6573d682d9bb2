"""Extractor — the main API.  Eight independent field rules, one result.

Usage:
    from field_extractor import extract

    result = extract("Mail a@b.com, card 1234-5678-9012-3456")
    result.emails          # ("a@b.com",)
    result.credit_cards    # ("****-****-****-3456",)
"""

from __future__ import annotations
from dataclasses import fields
from typing import Iterable, Mapping

from . import patterns, sanitizers
from .types import ExtractionResult, FieldRule


# Order here is the serialized order of the result.
DEFAULT_RULES: tuple[FieldRule, ...] = (
    FieldRule("emails", "emails", patterns.EMAIL, sanitizers.reject_double_dot),
    FieldRule("urls", "urls", patterns.URL, sanitizers.reject_unsafe_url),
    FieldRule("phone_numbers", "phoneNumbers", patterns.PHONE_NUMBER, sanitizers.accept),
    FieldRule("currency_amounts", "currencyAmounts", patterns.CURRENCY_AMOUNT, sanitizers.accept),
    FieldRule("credit_cards", "creditCards", patterns.CREDIT_CARD, sanitizers.mask_credit_card),
    FieldRule("timestamps", "timestamps", patterns.TIMESTAMP, sanitizers.accept),
    FieldRule("html_tags", "htmlTags", patterns.HTML_TAG, sanitizers.reject_script_tag),
    FieldRule("hashtags", "hashtags", patterns.HASHTAG, sanitizers.accept),
)

_RESULT_FIELDS = tuple(f.name for f in fields(ExtractionResult))


class Extractor:
    """Runs every field rule over the same text.

    Reusable and thread-safe: rules are immutable and hold compiled
    patterns only.
    """

    def __init__(self, rules: Iterable[FieldRule] = DEFAULT_RULES) -> None:
        self.rules: tuple[FieldRule, ...] = tuple(rules)
        names = [r.name for r in self.rules]
        missing = [n for n in _RESULT_FIELDS if n not in names]
        unknown = [n for n in names if n not in _RESULT_FIELDS]
        if missing or unknown or len(names) != len(set(names)):
            raise ValueError(
                f"rules must cover each result field exactly once "
                f"(missing={missing}, unknown={unknown})"
            )

    def extract(self, text: str) -> ExtractionResult:
        """Apply all rules to text.  Never raises; no match means ()."""
        # No early exit: every rule runs even on empty input.
        collected = {rule.name: rule.apply(text) for rule in self.rules}
        return ExtractionResult(**collected)

    def extract_many(self, texts: Iterable[str]) -> list[ExtractionResult]:
        return [self.extract(t) for t in texts]

    @property
    def rule_map(self) -> Mapping[str, FieldRule]:
        """Rules keyed by their serialized output key."""
        return {r.output_key: r for r in self.rules}


_default = Extractor()


def extract(text: str) -> ExtractionResult:
    """Extract all eight fields from text with the default rules."""
    return _default.extract(text)
