"""
CLI interface for jsonbench.

Pipe-friendly document workbench: tree view, path queries, schema checks
and format conversion for JSON documents.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import get_config
from .errors import AdmissionError, WorkbenchError
from .formats.base import registry
from .traversal import collapse_all, format_display_tree
from .workbench import Workbench

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    get_config()

    parser = argparse.ArgumentParser(
        prog="jsonbench",
        description="Inspect, query, validate and convert JSON documents",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input file (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--query",
        "-q",
        type=str,
        help="Path expression to evaluate (e.g., '$.users[0].name', '$.tags.*')",
    )

    parser.add_argument(
        "--schema",
        "-S",
        type=str,
        help="Schema file to validate the document against (type/required/properties)",
    )

    parser.add_argument(
        "--export",
        "-e",
        type=str,
        dest="export_format",
        help="Convert the document (csv, xml, yaml, json, json-min)",
    )

    layout = parser.add_mutually_exclusive_group()
    layout.add_argument(
        "--pretty",
        "-p",
        action="store_true",
        help="Print the document re-encoded with indentation",
    )
    layout.add_argument(
        "--minify",
        "-m",
        action="store_true",
        help="Print the document without insignificant whitespace",
    )

    parser.add_argument(
        "--collapse",
        "-c",
        action="store_true",
        help="Show only the top level of the tree view",
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print node count and character count",
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=10000,
        help="Maximum output characters (default: 10000, 0 disables)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug information to stderr",
    )

    return parser.parse_args(args)


def read_input(filepath: str | None) -> tuple[str, str | None]:
    """
    Read from file or stdin, return (content, filename).

    Files larger than the configured input cap are refused before reading.
    """
    cfg = get_config()

    if filepath:
        file_size = os.path.getsize(filepath)
        if file_size > cfg.io.max_input_size:
            limit_mb = cfg.io.max_input_size / (1024 * 1024)
            raise AdmissionError(f"File too large. Maximum {limit_mb:g}MB allowed.")
        with open(filepath, encoding="utf-8") as f:
            return f.read(), filepath

    return sys.stdin.read(), None


def apply_output_limit(output: str, limit: int) -> str:
    """Keep limit characters of output, split between head and tail, and mark the cut."""
    if len(output) <= limit:
        return output

    head = limit // 2
    tail = limit - head
    omitted = len(output) - limit
    note = f"\n[... {omitted:,} chars omitted by --limit {limit:,}; narrow with --query PATH ...]\n"
    return output[:head] + note + (output[-tail:] if tail else "")


def run(bench: Workbench, parsed: argparse.Namespace) -> tuple[str, int]:
    """Perform the requested action on a loaded workbench, return (output, exit code)."""
    if parsed.schema:
        schema_text = Path(parsed.schema).read_text(encoding="utf-8")
        violations = bench.check_schema(schema_text)
        if not violations:
            return "valid", 0
        lines = ["invalid"] + [f"  {v}" for v in violations]
        return "\n".join(lines), 1

    if parsed.query:
        return bench.query(parsed.query), 0

    if parsed.export_format:
        return bench.export(parsed.export_format).content, 0

    if parsed.pretty:
        return bench.formatted(), 0

    if parsed.minify:
        return bench.minified(), 0

    view = bench.view()
    if parsed.stats:
        return f"{view.node_count} nodes, {bench.char_count():,} chars", 0

    if view.root is None:
        return view.message, 0

    if parsed.collapse:
        collapse_all(view.root)
        view.root.expanded = True
    return "\n".join(format_display_tree(view.root)), 0


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if parsed.export_format and registry.get_by_name(parsed.export_format) is None:
        known = ", ".join(registry.names)
        print(f"Error: Unknown export format {parsed.export_format!r} (known: {known})", file=sys.stderr)
        return 1

    try:
        content, filename = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError, WorkbenchError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    logger.debug("Read %d chars from %s", len(content), filename or "<stdin>")

    with Workbench() as bench:
        try:
            bench.load(content)
            if not bench.has_document:
                print("Error: No input", file=sys.stderr)
                return 1
            output, code = run(bench, parsed)
        except FileNotFoundError as e:
            print(f"Error: File not found: {e.filename}", file=sys.stderr)
            return 1
        except (OSError, UnicodeDecodeError, WorkbenchError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    # Apply output limit (unless disabled with --limit 0)
    if parsed.limit > 0:
        output = apply_output_limit(output, parsed.limit)

    print(output)
    return code


if __name__ == "__main__":
    sys.exit(main())
