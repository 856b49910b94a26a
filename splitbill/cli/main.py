#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Callable, Sequence

from splitbill.runtime import set_log_level


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Run a command handler that may call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Receipt bill-splitting CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <image>              Parse a receipt photo and print it as JSON
  split <bill.json>          Compute each participant's share of a bill
  serve [--host] [--port]    Start the HTTP server

Bill document:
  {"receipt": {...}, "participants": [...], "assignments": {"item": {"participant": share}}}
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse a receipt photo")
    parse_parser.add_argument("image", help="Path to receipt image (JPEG, PNG, WebP)")
    parse_parser.add_argument("--api-url", default=None, help="Completion API base URL (overrides settings)")
    parse_parser.add_argument("--model", default=None, help="Completion model (overrides settings)")

    split_parser = subparsers.add_parser("split", help="Split a bill document")
    split_parser.add_argument("bill", help="Path to bill JSON document")
    split_parser.add_argument("--currency", default=None, help="Display currency (default: from locale)")
    split_parser.add_argument("--json", action="store_true", help="Print the settlement as JSON")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.verbose:
        set_log_level(logging.DEBUG)

    if args.command == "parse":
        from splitbill.cli.bill import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "split":
        from splitbill.cli.bill import cmd_split

        return _run_command(cmd_split, args)
    elif args.command == "serve":
        from splitbill.cli.bill import cmd_serve

        return _run_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
