"""CLI interface for scriptlens.

Usage:
    # Re-indent minified source (stdin or --input, stdout: formatted text)
    echo 'if(a){b()}else{c()}' | python -m scriptlens.cli beautify

    # List secret-like spans (stdout: JSON array of findings)
    python -m scriptlens.cli --input bundle.min.js scan

    # Beautify, then highlight (stdout: {"text": ..., "findings": [...]})
    python -m scriptlens.cli --input bundle.min.js annotate --beautify
"""

from __future__ import annotations
import argparse
import json
import sys

from .config import ConfigError, create_pipeline, load_config, load_from_yaml
from .log import configure_logging, get_logger
from .pipeline import Pipeline

logger = get_logger(__name__)


def _build_pipeline(args: argparse.Namespace) -> Pipeline:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.indent is not None:
        cfg["indent_size"] = args.indent
    if args.skip_kinds:
        cfg["skip_kinds"] = set(args.skip_kinds.split(","))
    if args.line_breaks:
        cfg["line_breaks"] = True
    return create_pipeline(cfg)


def _read_input(args: argparse.Namespace) -> str:
    if args.input:
        with open(args.input, encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def cmd_beautify(args: argparse.Namespace, pipeline: Pipeline) -> None:
    """Beautify source text."""
    sys.stdout.write(pipeline.beautify(_read_input(args)))


def cmd_scan(args: argparse.Namespace, pipeline: Pipeline) -> None:
    """Print findings as JSON (offsets into the escaped text)."""
    text = _read_input(args)
    if args.beautify:
        text = pipeline.beautify(text)
    findings = pipeline.scan(text)
    json.dump([f.as_dict() for f in findings], sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_annotate(args: argparse.Namespace, pipeline: Pipeline) -> None:
    """Print annotated markup and findings as JSON."""
    text = _read_input(args)
    result = pipeline.process(text) if args.beautify else pipeline.annotate(text)
    output = {
        "text": result.text,
        "findings": [f.as_dict() for f in result.findings],
    }
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="scriptlens",
        description="Re-indent minified scripts and highlight secret-like strings",
    )
    parser.add_argument("--config", default=None, help="YAML config path")
    parser.add_argument("--input", default=None, help="Read from this file instead of stdin")
    parser.add_argument("--indent", type=int, default=None, help="Spaces per indent level")
    parser.add_argument("--skip-kinds", default="", help="Comma-separated finding kinds to skip")
    parser.add_argument("--line-breaks", action="store_true", help="Emit <br> for newlines")
    parser.add_argument("--log-level", default="WARNING", help="Log level (stderr)")
    parser.add_argument("--json-logs", action="store_true", help="JSON log lines")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("beautify", help="Re-indent source text")
    for name, help_text in (("scan", "List findings as JSON"), ("annotate", "Highlight findings")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--beautify", action="store_true", help="Beautify before scanning")

    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level, json_output=args.json_logs)
    except ValueError as e:
        parser.error(str(e))

    try:
        pipeline = _build_pipeline(args)
    except (ConfigError, OSError) as e:
        parser.error(str(e))

    cmds = {
        "beautify": cmd_beautify,
        "scan": cmd_scan,
        "annotate": cmd_annotate,
    }
    try:
        cmds[args.command](args, pipeline)
    except OSError as e:
        logger.error("input unreadable", path=args.input, error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
