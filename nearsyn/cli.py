#!/usr/bin/env python3
"""
nearsyn CLI - emit TypeScript bindings or Markdown documentation
for NEAR contract declarations.
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from nearsyn.core.config import DUPLICATE_POLICIES, GENERATOR_NAME, GENERATOR_VERSION, load_settings
from nearsyn.core.errors import NearSynError
from nearsyn.core.transpiler import transpile
from nearsyn.parser import load_unit_file

logger = logging.getLogger("nearsyn.cli")


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=GENERATOR_NAME,
        description="Analyzes NEAR contract declarations to generate TypeScript bindings or Markdown documentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # TypeScript bindings, without timestamp
    nearsyn ts --no-now contract.json

    # Markdown documentation from several units
    nearsyn md src/lib.json src/view.json

    # Serve the HTTP API
    nearsyn serve --port 8000
        """
    )
    parser.add_argument("--version", action="version", version=f"{GENERATOR_NAME} {GENERATOR_VERSION}")

    commands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("ts", "Emits TypeScript bindings"),
                            ("md", "Emits Markdown documentation"),
                            ("json", "Emits a JSON description of the contract")):
        cmd = commands.add_parser(name, help=help_text)
        cmd.add_argument("files", nargs="*", help="Declaration units (JSON) to analyze")
        cmd.add_argument("--no-now", action="store_true",
                         help="Does not emit date/time information, otherwise emits current time")
        cmd.add_argument("--now", help="Use this text as the current date/time")
        cmd.add_argument("--bindgen-only", action="store_true", default=settings.bindgen_only,
                         help="Only consider #[near_bindgen] implementations")
        cmd.add_argument("--duplicates", choices=DUPLICATE_POLICIES, default=settings.duplicates,
                         help="What to do when a method name is exported twice")
        cmd.add_argument("-o", "--output", help="Write to this file instead of stdout")
        cmd.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    serve = commands.add_parser("serve", help="Runs the HTTP API")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    return parser


def resolve_now(args) -> Optional[str]:
    if args.no_now:
        return None
    if args.now:
        return args.now
    return datetime.now(timezone.utc).isoformat(sep=" ", timespec="seconds")


def emit(args) -> int:
    for file_name in args.files:
        if not Path(file_name).exists():
            logger.error("File not found: %s", file_name)
            return 1

    try:
        units = [load_unit_file(file_name) for file_name in args.files]
        output = transpile(
            units,
            target=args.command,
            now=resolve_now(args),
            duplicates=args.duplicates,
            bindgen_only=args.bindgen_only,
        )
    except NearSynError as e:
        logger.error("%s", e)
        return 1

    # Output is written only once the whole run succeeded
    if args.output:
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
    else:
        sys.stdout.write(output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "serve":
        from nearsyn.server.app import run
        run(args.host, args.port)
        return 0

    return emit(args)


if __name__ == "__main__":
    sys.exit(main())
