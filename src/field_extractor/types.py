"""Core types."""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Callable

# Returns the accepted (possibly rewritten) value, or None to reject.
Sanitizer = Callable[[str], "str | None"]


@dataclass(frozen=True, slots=True)
class FieldRule:
    """A (pattern, sanitizer) pair producing one output field."""
    name: str              # attribute on ExtractionResult, e.g. "phone_numbers"
    output_key: str        # serialized key, e.g. "phoneNumbers"
    pattern: re.Pattern
    sanitize: Sanitizer

    def apply(self, text: str) -> tuple[str, ...]:
        """Match left-to-right, then keep whatever the sanitizer accepts."""
        out: list[str] = []
        for m in self.pattern.finditer(text):
            value = self.sanitize(m.group())
            if value is not None:
                out.append(value)
        return tuple(out)


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Structured data pulled out of one block of text."""
    emails: tuple[str, ...] = ()
    urls: tuple[str, ...] = ()
    phone_numbers: tuple[str, ...] = ()
    currency_amounts: tuple[str, ...] = ()
    credit_cards: tuple[str, ...] = ()     # masked, not verbatim
    timestamps: tuple[str, ...] = ()
    html_tags: tuple[str, ...] = ()
    hashtags: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not any((
            self.emails, self.urls, self.phone_numbers, self.currency_amounts,
            self.credit_cards, self.timestamps, self.html_tags, self.hashtags,
        ))
