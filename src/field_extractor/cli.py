"""CLI interface for field-extractor.

Usage:
    # Extract from a file (defaults to ./input.txt), JSON on stdout
    python -m field_extractor.cli extract notes.txt

    # Extract from stdin
    echo 'ping a@b.com at 14:30 #ops' | python -m field_extractor.cli extract -

    # Show the pattern behind each output field
    python -m field_extractor.cli rules

    # Run the HTTP sidecar
    python -m field_extractor.cli serve --port 18792

Settings come from --config (YAML) and are overridden by flags.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys

from .config import DEFAULT_CONFIG_PATH, load_config, load_from_yaml
from .extractor import extract
from .output import describe_rules, dumps
from .source import read_input, read_stdin

logger = logging.getLogger(__name__)


def _settings(args: argparse.Namespace) -> dict:
    cfg = load_from_yaml(args.config) if args.config else load_config()
    if args.indent is not None:
        cfg["indent"] = args.indent
    if args.log_level:
        cfg["log_level"] = args.log_level.upper()
    return cfg


def cmd_extract(args: argparse.Namespace, cfg: dict) -> int:
    """Extract fields from a file or stdin and print them as JSON."""
    path = args.path or cfg["input_path"]
    text = read_stdin() if path == "-" else read_input(path, encoding=cfg["encoding"])

    if not text:
        # Missing, unreadable or empty source: nothing to hand to the extractor
        logger.warning("no input text from %s; nothing to extract", path)
        return 0

    result = extract(text)
    sys.stdout.write(dumps(result, indent=cfg["indent"], ensure_ascii=cfg["ensure_ascii"]))
    sys.stdout.write("\n")
    return 0


def cmd_rules(args: argparse.Namespace, cfg: dict) -> int:
    """Dump the pattern used for each output field."""
    json.dump(describe_rules(), sys.stdout, indent=cfg["indent"])
    sys.stdout.write("\n")
    return 0


def cmd_serve(args: argparse.Namespace, cfg: dict) -> int:
    """Run the HTTP sidecar until interrupted."""
    from .server import serve
    serve(
        host=args.host or cfg["host"],
        port=args.port if args.port is not None else cfg["port"],
        indent=cfg["indent"],
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="field-extractor",
        description="Extract emails, URLs, phones, amounts, cards, times, tags and hashtags from text",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH or None, help="YAML config path")
    parser.add_argument("--indent", type=int, default=None, help="JSON indent (default 4)")
    parser.add_argument("--log-level", default=None, help="Logging level (default INFO)")

    sub = parser.add_subparsers(dest="command", required=True)
    p_extract = sub.add_parser("extract", help="Extract fields from a file ('-' for stdin)")
    p_extract.add_argument("path", nargs="?", default=None)
    sub.add_parser("rules", help="Show the pattern for each field")
    p_serve = sub.add_parser("serve", help="Run the HTTP sidecar")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = _settings(args)

    logging.basicConfig(
        level=cfg["log_level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "extract": cmd_extract,
        "rules": cmd_rules,
        "serve": cmd_serve,
    }
    return cmds[args.command](args, cfg)


if __name__ == "__main__":
    sys.exit(main())
