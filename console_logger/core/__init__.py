"""
Framework-agnostic core of the console logger.

- GraphFlattener: bounded conversion of any value to plain nodes
- TraversalState: per-call depth and cycle bookkeeping
- PrettyLogger: human-readable append-only log files
"""

from .flattener import (
    CLOSURE_TEXT,
    MAX_DEPTH,
    MAX_ITEMS,
    GraphFlattener,
    TraversalState,
)
from .logger import PrettyLogger

__all__ = [
    "CLOSURE_TEXT",
    "MAX_DEPTH",
    "MAX_ITEMS",
    "GraphFlattener",
    "TraversalState",
    "PrettyLogger",
]
