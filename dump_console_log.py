#!/usr/bin/env python3
"""
Console Log Dump
Flattens a JSON document and prints what the console logger would send.

Usage:
    python dump_console_log.py data.json [--format json|script] [--label LABEL]
"""

import argparse
import json
import sys
from pathlib import Path
from console_logger import GraphFlattener, MAX_DEPTH, MAX_ITEMS
from console_logger.formatters import format_as_json, format_script_tag


def load_document(path: Path):
    """Load a JSON document from disk."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def render(value, output_format: str, label: str, max_depth: int, max_items: int) -> str:
    node = GraphFlattener(max_depth=max_depth, max_items=max_items).flatten(value)
    if output_format == "script":
        return format_script_tag(label, node)
    return format_as_json(node)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Flatten a JSON document for the browser console")
    parser.add_argument("path", help="JSON file to flatten")
    parser.add_argument("--format", choices=["json", "script"], default="json",
                        help="Output pretty JSON or the <script> tag (default: json)")
    parser.add_argument("--label", default=None, help="Console label (default: file name)")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH)
    parser.add_argument("--max-items", type=int, default=MAX_ITEMS)
    args = parser.parse_args(argv)

    path = Path(args.path)
    try:
        value = load_document(path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: {path} is not valid JSON: {e}", file=sys.stderr)
        return 1

    print(render(value, args.format, args.label or path.name, args.max_depth, args.max_items))
    return 0


if __name__ == "__main__":
    sys.exit(main())
