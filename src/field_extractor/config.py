"""YAML/dict config loader for field-extractor.

Supports loading from a YAML file or a plain dict (for embedding in a
larger config).  Only the collaborators (CLI, sidecar) are configurable;
the extraction rules themselves are fixed.

Example YAML:

    field_extractor:
      input_path: input.txt
      encoding: utf-8
      log_level: INFO
      output:
        indent: 4
        ensure_ascii: false
      server:
        host: 127.0.0.1
        port: 18792
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any

DEFAULT_PORT = int(os.environ.get("FIELD_EXTRACTOR_PORT", "18792"))
DEFAULT_CONFIG_PATH = os.environ.get("FIELD_EXTRACTOR_CONFIG", "")


def load_config(data: dict[str, Any] | None = None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "field_extractor" key or flat
    if "field_extractor" in data:
        data = data["field_extractor"] or {}

    output = data.get("output") or {}
    server = data.get("server") or {}

    indent = output.get("indent", 4)
    if indent is not None and (not isinstance(indent, int) or indent < 0):
        raise ValueError(f"output.indent must be a non-negative integer, got {indent!r}")
    port = server.get("port", DEFAULT_PORT)
    if not isinstance(port, int) or not 0 <= port <= 65535:
        raise ValueError(f"server.port must be an integer in 0-65535, got {port!r}")

    return {
        "input_path": str(data.get("input_path", "input.txt")),
        "encoding": data.get("encoding", "utf-8"),
        "log_level": str(data.get("log_level", "INFO")).upper(),
        "indent": indent,
        "ensure_ascii": bool(output.get("ensure_ascii", False)),
        "host": server.get("host", "127.0.0.1"),
        "port": port,
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        return load_config(yaml.safe_load(f))
