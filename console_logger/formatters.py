"""
Output formatters for flattened nodes.

Turns flattened nodes into text: pretty JSON for log files, and a
``<script>`` tag that replays the value through ``console.log`` in the
browser.
"""

import json
from typing import Any

from markupsafe import escape

DEFAULT_STYLE = (
    "color: white; background: #0073aa; padding: 2px 4px; "
    "border-radius: 4px; font-weight: bold;"
)

# Characters that could end a <script> block or break a JS string literal
_SCRIPT_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def format_as_json(node: Any, indent: int = 4) -> str:
    """
    Format a flattened node as JSON.

    Args:
        node: Flattened node
        indent: JSON indentation level (None for a single line)

    Returns:
        JSON-formatted string
    """
    return json.dumps(node, indent=indent, ensure_ascii=False)


def escape_for_script(text: str) -> str:
    """Make JSON text safe to embed inside an inline <script> element."""
    for char, replacement in _SCRIPT_ESCAPES.items():
        text = text.replace(char, replacement)
    return text


def script_literal(node: Any, indent: int = 4) -> str:
    """JavaScript literal for ``node``."""
    return escape_for_script(format_as_json(node, indent=indent))


def format_console_call(label: str, node: Any, style: str = DEFAULT_STYLE) -> str:
    """
    Build the console.log statement for one entry.

    The label is printed with CSS styling, followed by the value so the
    browser renders it as an expandable object.

    Args:
        label: Entry label
        node: Flattened node
        style: CSS applied to the label

    Returns:
        JavaScript statement
    """
    # a bare % in the label would be read as a format directive
    label_js = script_literal(f"%c{label.replace('%', '%%')}:", indent=None)
    style_js = script_literal(style, indent=None)
    return f"console.log({label_js}, {style_js}, {script_literal(node)});"


def format_script_tag(label: str, node: Any, style: str = DEFAULT_STYLE) -> str:
    """
    Wrap the console.log statement in a <script> tag.

    Args:
        label: Entry label, also exposed in the data-console-log attribute
        node: Flattened node
        style: CSS applied to the label

    Returns:
        HTML snippet
    """
    return (
        f'<script data-console-log="{escape(label)}">'
        f"{format_console_call(label, node, style)}"
        "</script>"
    )


def format_summary(label: str, node: Any) -> str:
    """One-line description of an entry, used as the log file header."""
    if isinstance(node, dict):
        shape = f"dict({len(node)})"
    elif isinstance(node, list):
        shape = f"list({len(node)})"
    else:
        shape = type(node).__name__
    return f"{label} | {shape}"
