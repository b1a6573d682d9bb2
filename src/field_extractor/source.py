"""Input source — turns a path or stream into text for the extractor.

Failures never propagate: a missing or unreadable source becomes ``""``
and the problem is logged.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)


def read_input(path: str | Path, *, encoding: str = "utf-8") -> str:
    """Read a whole text file, or return "" if it can't be read."""
    try:
        return Path(path).read_text(encoding=encoding)
    except FileNotFoundError:
        logger.error("input file %s not found", path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("could not read %s: %s", path, e)
    return ""


def read_stdin(stream: TextIO | None = None) -> str:
    """Read all of stdin (or the given stream)."""
    return (stream or sys.stdin).read()
