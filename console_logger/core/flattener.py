"""
Bounded object-graph flattening.

Turns an arbitrary Python value into a tree made only of str, int, float,
bool, None, lists and str-keyed dicts, so it can be JSON-encoded and shown
in a browser console. Depth, width and cycles are bounded; values that
cannot be shown safely are replaced with single-key marker dicts.

Usage:
    from console_logger.core import GraphFlattener

    node = GraphFlattener().flatten(request_context)
"""

import itertools
from typing import Any, Dict, List, Optional, Tuple

from . import kinds

MAX_DEPTH = 10
MAX_ITEMS = 100

CLOSURE_TEXT = "Function object"


def max_depth_marker() -> Dict[str, Any]:
    return {"max_depth_reached": True}


def max_items_marker() -> Dict[str, Any]:
    return {"max_items_reached": True}


def resource_marker(value) -> Dict[str, Any]:
    return {"resource_type": kinds.type_name(value)}


def closure_marker() -> Dict[str, Any]:
    return {"closure": CLOSURE_TEXT}


def circular_marker(value) -> Dict[str, Any]:
    return {"circular_reference": kinds.type_name(value)}


def error_marker(error: Exception) -> Dict[str, Any]:
    return {"flatten_error": f"{type(error).__name__}: {error}"}


class TraversalState:
    """Bookkeeping for one top-level flatten call.

    Never share an instance between unrelated calls: ids in ``visited``
    would make fresh objects look circular.

    ``visited`` maps each id to its object. Holding the object keeps the
    id from being reused by something created later in the same walk.
    """

    def __init__(self):
        self.depth = 0
        self.visited: Dict[int, Any] = {}

    def seen(self, value) -> bool:
        return id(value) in self.visited

    def enter(self, value):
        self.visited[id(value)] = value


class GraphFlattener:
    """Depth-, width- and cycle-bounded converter to plain nodes."""

    def __init__(self, max_depth: int = MAX_DEPTH, max_items: int = MAX_ITEMS):
        self.max_depth = max_depth
        self.max_items = max_items

    def flatten(self, value, state: Optional[TraversalState] = None):
        """
        Flatten ``value`` into a plain node tree.

        Args:
            value: Anything
            state: Traversal state to continue; a fresh one when omitted

        Returns:
            Output node (scalar, list, dict, or marker dict)
        """
        if state is None:
            state = TraversalState()

        try:
            return self._flatten(value, state)
        except Exception as e:
            return error_marker(e)

    def _flatten(self, value, state: TraversalState):
        if state.depth > self.max_depth:
            return max_depth_marker()

        kind = kinds.classify(value)

        if kind == kinds.RESOURCE:
            return resource_marker(value)
        if kind == kinds.CALLABLE:
            return closure_marker()
        if kind == kinds.DATETIME:
            return kinds.datetime_marker(value)
        if kind == kinds.STRINGABLE:
            return kinds.stringable_text(value)
        if kind == kinds.SCALAR:
            return kinds.plain_scalar(value)

        if kinds.has_identity(value, kind):
            if state.seen(value):
                return circular_marker(value)
            state.enter(value)

        state.depth += 1
        try:
            if kind == kinds.AGGREGATE:
                return self._flatten_members(value, state)
            if kind == kinds.MAPPING:
                return self._flatten_mapping(value, state)
            return self._flatten_sequence(value, state)
        finally:
            state.depth -= 1

    def _flatten_members(self, value, state: TraversalState) -> Dict[str, Any]:
        result = {}
        for name, member in object_members(value):
            result[name] = self.flatten(member, state)
        return result

    def _flatten_mapping(self, value, state: TraversalState) -> Dict[str, Any]:
        # Only pull one more item than we can show
        items = list(itertools.islice(value.items(), self.max_items + 1))
        truncated = len(items) > self.max_items

        result = {}
        taken = set(max_items_marker()) if truncated else set()
        for key, item in items[: self.max_items]:
            name = unique_key(mapping_key(key), taken)
            taken.add(name)
            result[name] = self.flatten(item, state)

        if truncated:
            result.update(max_items_marker())
        return result

    def _flatten_sequence(self, value, state: TraversalState) -> List[Any]:
        items = list(itertools.islice(iter(value), self.max_items + 1))

        result = [self.flatten(item, state) for item in items[: self.max_items]]

        if len(items) > self.max_items:
            result.append(max_items_marker())
        return result


def mapping_key(key) -> str:
    if isinstance(key, str):
        return kinds.plain_scalar(key)
    try:
        return str(key)
    except Exception:
        return f"<{kinds.type_name(key)}>"


def unique_key(name: str, taken) -> str:
    """``name``, or ``name#2``, ``name#3``... if it is already in ``taken``."""
    if name not in taken:
        return name
    n = 2
    while f"{name}#{n}" in taken:
        n += 1
    return f"{name}#{n}"


def object_members(value) -> List[Tuple[str, Any]]:
    """
    Enumerate the stored members of an object.

    Returns (name, value) pairs for every instance ``__dict__`` entry and
    every filled slot declared anywhere in the MRO. Names are reported as
    stored, so name-mangled private members keep their ``_Class__`` prefix.
    Values are read straight from storage, bypassing ``__getattr__``,
    ``__getattribute__`` overrides and properties.
    """
    members = []
    seen_names = set()

    instance_dict = _instance_dict(value)
    if instance_dict is not None:
        for name, member in list(instance_dict.items()):
            name = mapping_key(name)
            seen_names.add(name)
            members.append((name, member))

    for cls in type(value).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            stored = _mangle(cls, slot)
            if stored in seen_names:
                continue
            descriptor = cls.__dict__.get(stored)
            if descriptor is None or not hasattr(descriptor, "__get__"):
                continue
            try:
                member = descriptor.__get__(value, cls)
            except AttributeError:
                # declared but never assigned
                continue
            seen_names.add(stored)
            members.append((stored, member))

    return members


def _instance_dict(value) -> Optional[dict]:
    try:
        instance_dict = object.__getattribute__(value, "__dict__")
    except AttributeError:
        return None
    if not isinstance(instance_dict, dict):
        return None
    return instance_dict


def _mangle(cls, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{cls.__name__.lstrip('_')}{name}"
    return name
