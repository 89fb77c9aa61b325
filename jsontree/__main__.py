"""
jsontree command line.

    python -m jsontree hash a.json b.json      # persistent hashes, duplicates marked
    python -m jsontree compare a.json b.json   # exit 0 if structurally equal
    python -m jsontree get doc.json /items/0   # value at a JSON Pointer
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jsontree.core import JsonPointer, StructuralKey, TraversalConfig, json_equals, persistent_hash
from jsontree.errors import JsonTreeError
from jsontree.log import setup_logging
from jsontree.serialization import from_json, to_json

logger = logging.getLogger("jsontree.cli")

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


def _load(path: str) -> Any:
    logger.debug("Loading %s", path)
    return from_json(Path(path).read_text(encoding="utf-8"))


def _hex(hash_code: int) -> str:
    return f"{hash_code & 0xFFFFFFFF:08x}"


def cmd_hash(args: argparse.Namespace, config: TraversalConfig, console: Console) -> int:
    table = Table(title="Persistent hashes")
    table.add_column("File", style="cyan")
    table.add_column("Hash", justify="right")
    table.add_column("Hex", style="green")
    table.add_column("Duplicate of", style="yellow")

    # index of the first file holding each distinct document
    first_seen: dict[StructuralKey, int] = {}
    for index, path in enumerate(args.files):
        key = StructuralKey(_load(path), max_depth=config.max_depth)
        first = first_seen.setdefault(key, index)
        table.add_row(
            escape(path),
            str(key.persistent_hash),
            _hex(key.persistent_hash),
            escape(args.files[first]) if first != index else "",
        )

    console.print(table)
    return EXIT_OK


def cmd_compare(args: argparse.Namespace, config: TraversalConfig, console: Console) -> int:
    left = _load(args.left)
    right = _load(args.right)
    equal = json_equals(left, right, max_depth=config.max_depth)

    left_hash = _hex(persistent_hash(left, max_depth=config.max_depth))
    right_hash = _hex(persistent_hash(right, max_depth=config.max_depth))
    if equal:
        console.print(f"[green]equal[/green] [dim]({left_hash})[/dim]")
        return EXIT_OK
    console.print(f"[red]different[/red] [dim]({left_hash} vs {right_hash})[/dim]")
    return EXIT_MISMATCH


def cmd_get(args: argparse.Namespace, config: TraversalConfig, console: Console) -> int:
    pointer = JsonPointer.parse(args.pointer)
    resolution = pointer.resolve(_load(args.file))
    if not resolution.found:
        Console(stderr=True).print(
            f"[red]{resolution.status.value}[/red] at token {resolution.depth} "
            f"of {escape(repr(str(pointer)))}: {resolution.reason}"
        )
        return EXIT_MISMATCH
    console.print(to_json(resolution.value), markup=False, highlight=False, soft_wrap=True)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsontree",
        description="Structural comparison, persistent hashing and JSON Pointer lookup for JSON files.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="Reject documents nested deeper than this")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_hash = subparsers.add_parser("hash", help="Print persistent hashes of JSON files")
    p_hash.add_argument("files", nargs="+")
    p_hash.set_defaults(handler=cmd_hash)

    p_compare = subparsers.add_parser("compare", help="Compare two JSON files structurally")
    p_compare.add_argument("left")
    p_compare.add_argument("right")
    p_compare.set_defaults(handler=cmd_compare)

    p_get = subparsers.add_parser("get", help="Print the value at a JSON Pointer")
    p_get.add_argument("file")
    p_get.add_argument("pointer")
    p_get.set_defaults(handler=cmd_get)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")

    console = Console()
    try:
        config = TraversalConfig(max_depth=args.max_depth)
        return args.handler(args, config, console)
    except (JsonTreeError, OSError, ValueError, RecursionError) as exc:
        # ValueError covers json.JSONDecodeError and bad --max-depth values;
        # RecursionError comes from json.loads on very deeply nested files
        Console(stderr=True).print(f"[red]error:[/red] {escape(str(exc))}")
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
