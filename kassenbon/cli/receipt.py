"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path

from kassenbon.domain.rows import RowTable
from kassenbon.runtime import get_logger

logger = get_logger(__name__)


def _read_row_table(source: str) -> RowTable:
    """Read OCR text lines from a file or stdin; .json files hold a row table."""
    from kassenbon.receipt.row_sources import rows_from_lines, rows_from_mapping

    if source == "-":
        return rows_from_lines(sys.stdin.read().splitlines())

    path = Path(source)
    if not path.exists():
        print(f"Error: Receipt file not found: {path}")
        sys.exit(1)

    if path.suffix == ".json":
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            return rows_from_mapping(payload)
        except ValueError as exc:
            print(f"Error: Invalid row table in {path}: {exc}")
            sys.exit(1)

    return rows_from_lines(path.read_text(encoding="utf-8").splitlines())


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse a receipt and print its record."""
    from kassenbon.application.receipts import ReceiptParseRequest, run_receipt_parse
    from kassenbon.receipt.formatter import format_receipt, receipt_to_dict

    row_table = _read_row_table(args.file)
    result = run_receipt_parse(ReceiptParseRequest(row_table=row_table, vendor_override=args.vendor))

    if result.status == "empty_input":
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)

    if result.status == "unprocessable":
        logger.error("%s", result.error)
        print(f"Unprocessable receipt: {result.error}")
        print("No item rows found between the price header and the total row.")
        sys.exit(1)

    if result.status == "no_items":
        print(f"No items recognized: {result.error}")
        if result.store_is_fallback:
            print(f"Vendor was guessed as {result.store}; retry with --vendor <name>.")
        sys.exit(1)

    receipt = result.receipt
    if receipt is None:
        print("Parse failed: missing receipt output.")
        sys.exit(1)

    if args.json:
        print(json.dumps(receipt_to_dict(receipt), indent=2, ensure_ascii=False))
    else:
        print(format_receipt(receipt), end="")


def cmd_categorize(args: argparse.Namespace) -> None:
    """Print the category assigned to each item name."""
    from kassenbon.receipt.item_categories import categorize_item, categorize_item_debug
    from kassenbon.runtime import load_category_table, load_vendor_registry

    table = load_category_table()
    prefixes = load_vendor_registry().keywords.name_prefixes
    if not table.categories:
        print("No categories configured.")
        sys.exit(1)

    for name in args.names:
        category = categorize_item(name, table, name_prefixes=prefixes)
        print(f"{name}: {category}")
        if args.debug:
            for category_name, term, distance in categorize_item_debug(name, table, name_prefixes=prefixes):
                print(f"  {distance:>3}  {term} [{category_name}]")


def cmd_vendors(args: argparse.Namespace) -> None:
    """List the vendor registry in identification order."""
    from kassenbon.runtime import load_vendor_registry

    registry = load_vendor_registry()
    for entry in registry.vendors:
        marker = " (fallback)" if entry.vendor_id == registry.fallback_vendor else ""
        print(f"{entry.vendor_id}{marker}: grammar={entry.grammar} keywords={', '.join(entry.keywords)}")


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for parsing posted receipts."""
    import uvicorn

    from kassenbon.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print(f"Parse endpoint: http://{args.host}:{args.port}/parse")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
