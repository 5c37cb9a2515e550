#!/usr/bin/env python3
"""
cmlint CLI

Thin wrapper over the analysis engine.
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path

from cmlint.config import build_config
from cmlint.detectors import DETECTORS
from cmlint.explanation import render_json, render_text
from cmlint.orchestrator import analyze_paths

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmlint",
        description="Report collection-mutation concurrency hazards in resolved program trees.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cmlint analyze build/trees
  cmlint analyze Example.json --disable ParallelLambdaInStaticBlock
  cmlint list
        """,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging and tracebacks on internal errors",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        metavar="{analyze,list}",
    )

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze serialized trees",
    )
    analyze_parser.add_argument(
        "paths",
        nargs="+",
        help="Tree files (.json) or directories containing them",
    )
    analyze_parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="NAME",
        help="Switch a detector off (repeatable)",
    )
    analyze_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )

    subparsers.add_parser(
        "list",
        help="List available detectors",
    )

    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.debug)

    if args.command == "list":
        for name, info in DETECTORS.items():
            print(f"{name}")
            print(f"    {info.summary}")
        return 0

    if args.command == "analyze":
        try:
            config = build_config(args.disable)
            findings = analyze_paths([Path(p) for p in args.paths], config)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except Exception:
            logger.debug("Analysis failed", exc_info=True)
            print("Internal error while analyzing.", file=sys.stderr)
            if args.debug:
                traceback.print_exc()
            else:
                print("Run with --debug for details.", file=sys.stderr)
            return 2

        if args.format == "json":
            print(render_json(findings))
            return 0

        for finding in findings:
            print(render_text(finding))
        print(f"Total findings: {len(findings)}")
        return 0

    # This should never happen because argparse enforces commands
    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
