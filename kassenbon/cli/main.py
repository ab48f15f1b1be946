#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_legacy_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

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
        description="German receipt parser CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <file|->             Parse OCR text lines (or a .json row table)
  categorize <name>...       Show the category chosen for item names
  vendors                    List registered vendors and their grammars
  serve [--host] [--port]    Start the HTTP parse server

Configuration:
  $KASSENBON_ROOT/config/vendors.toml     extra vendors and keywords
  $KASSENBON_ROOT/config/categories.toml  extra category terms
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse a receipt")
    parse_parser.add_argument("file", help="Text file with one OCR line per row, a .json row table, or - for stdin")
    parse_parser.add_argument("--json", action="store_true", help="Print the receipt as JSON instead of a summary")
    parse_parser.add_argument("--vendor", default=None, help="Skip vendor detection and use this vendor")

    categorize_parser = subparsers.add_parser("categorize", help="Categorize item names")
    categorize_parser.add_argument("names", nargs="+", help="Item names as printed on the receipt")
    categorize_parser.add_argument("--debug", action="store_true", help="Show the closest terms with distances")

    subparsers.add_parser("vendors", help="List registered vendors")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP parse server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        from kassenbon.cli.receipt import cmd_parse

        return _run_legacy_command(cmd_parse, args)
    elif args.command == "categorize":
        from kassenbon.cli.receipt import cmd_categorize

        return _run_legacy_command(cmd_categorize, args)
    elif args.command == "vendors":
        from kassenbon.cli.receipt import cmd_vendors

        return _run_legacy_command(cmd_vendors, args)
    elif args.command == "serve":
        from kassenbon.cli.receipt import cmd_serve

        return _run_legacy_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
