"""Field Extractor — pull emails, URLs, phones, amounts, cards, times, tags and hashtags out of text."""

from .extractor import DEFAULT_RULES, Extractor, extract
from .types import ExtractionResult, FieldRule
from .output import dumps, to_payload
from .source import read_input
from .config import load_config, load_from_yaml

__all__ = [
    "extract", "Extractor", "DEFAULT_RULES",
    "ExtractionResult", "FieldRule",
    "dumps", "to_payload",
    "read_input",
    "load_config", "load_from_yaml",
]
__version__ = "0.1.0"
