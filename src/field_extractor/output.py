"""Output sink — serializes an ExtractionResult for display or transport."""

from __future__ import annotations
import json
from typing import Iterable

from .extractor import DEFAULT_RULES
from .types import ExtractionResult, FieldRule


def to_payload(
    result: ExtractionResult,
    rules: Iterable[FieldRule] = DEFAULT_RULES,
) -> dict[str, list[str]]:
    """Plain dict with camelCase keys, in rule order."""
    return {r.output_key: list(getattr(result, r.name)) for r in rules}


def dumps(
    result: ExtractionResult,
    *,
    indent: int | None = 4,
    ensure_ascii: bool = False,
) -> str:
    """Render a result as JSON text."""
    return json.dumps(to_payload(result), indent=indent, ensure_ascii=ensure_ascii)


def describe_rules(rules: Iterable[FieldRule] = DEFAULT_RULES) -> dict[str, str]:
    """Map each output key to the source of its pattern."""
    return {r.output_key: r.pattern.pattern for r in rules}
