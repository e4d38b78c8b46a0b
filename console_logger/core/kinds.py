"""
Value-kind classification for the graph flattener.

Every value the flattener meets is sorted into exactly one kind by
runtime type inspection. The checks run in a fixed order so that
overlapping shapes resolve predictably: a file object is a resource even
though it is iterable, an ``OrderedDict`` is a mapping even though it has
an identity, and a class is a callable even though it has a ``__dict__``.
"""

import collections.abc
import datetime
import decimal
import enum
import fractions
import functools
import io
import ipaddress
import mmap
import pathlib
import socket
import sqlite3
import threading
import types
import uuid
import weakref

RESOURCE = "resource"
CALLABLE = "callable"
DATETIME = "datetime"
SCALAR = "scalar"
STRINGABLE = "stringable"
MAPPING = "mapping"
SEQUENCE = "sequence"
AGGREGATE = "aggregate"

SCALAR_TYPES = (str, int, float, bool, type(None))

# Handles onto OS or interpreter state. Iterating or introspecting these can
# consume data, block, or expose interpreter internals.
RESOURCE_TYPES = (
    io.IOBase,
    socket.socket,
    mmap.mmap,
    memoryview,
    sqlite3.Connection,
    sqlite3.Cursor,
    threading.Thread,
    type(threading.Lock()),
    type(threading.RLock()),
    weakref.ReferenceType,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    types.FrameType,
    types.TracebackType,
    types.CodeType,
    types.ModuleType,
)

CALLABLE_TYPES = (
    types.FunctionType,
    types.MethodType,
    types.BuiltinFunctionType,
    types.BuiltinMethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
    functools.partial,
    staticmethod,
    classmethod,
    type,
)

DATETIME_TYPES = (datetime.date, datetime.time)

# Value objects whose string form is the useful thing to show.
STRINGABLE_TYPES = (
    bytes,
    bytearray,
    decimal.Decimal,
    fractions.Fraction,
    complex,
    uuid.UUID,
    pathlib.PurePath,
    enum.Enum,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
)

SEQUENCE_TYPES = (
    collections.abc.Sequence,
    collections.abc.Set,
    collections.abc.MappingView,
)

MUTABLE_CONTAINER_TYPES = (
    collections.abc.MutableMapping,
    collections.abc.MutableSequence,
    collections.abc.MutableSet,
)


def classify(value) -> str:
    """Return the kind name for ``value``."""
    if isinstance(value, RESOURCE_TYPES):
        return RESOURCE
    if isinstance(value, CALLABLE_TYPES):
        return CALLABLE
    if isinstance(value, DATETIME_TYPES):
        return DATETIME
    # Enum before scalars so IntEnum/StrEnum members show as members
    if isinstance(value, STRINGABLE_TYPES):
        return STRINGABLE
    if isinstance(value, SCALAR_TYPES):
        return SCALAR
    if isinstance(value, collections.abc.Mapping):
        return MAPPING
    if isinstance(value, SEQUENCE_TYPES):
        return SEQUENCE
    return AGGREGATE


def has_identity(value, kind: str) -> bool:
    """Whether ``value`` takes part in cycle detection.

    Aggregates always do. Of the structural kinds only mutable containers
    can end up containing themselves, so tuples, frozensets and ranges are
    left to the depth guard.
    """
    if kind == AGGREGATE:
        return True
    if kind in (MAPPING, SEQUENCE):
        return isinstance(value, MUTABLE_CONTAINER_TYPES)
    return False


def type_name(value) -> str:
    return type(value).__name__


def zone_name(value):
    """Name of the zone attached to a date/time value, or None if naive."""
    tzinfo = getattr(value, "tzinfo", None)
    if tzinfo is None:
        return None

    # zoneinfo.ZoneInfo exposes the IANA key, pytz zones use .zone
    key = getattr(tzinfo, "key", None) or getattr(tzinfo, "zone", None)
    if key:
        return str(key)
    return value.tzname()


def datetime_marker(value) -> dict:
    return {
        "datetime": value.isoformat(),
        "timezone": zone_name(value),
    }


def stringable_text(value) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="backslashreplace")
    return str(value)


def plain_scalar(value):
    """Strip scalar subclasses down to their builtin type."""
    if type(value) in SCALAR_TYPES:
        return value
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return int.__int__(value)
    if isinstance(value, float):
        return float.__float__(value)
    return str.__str__(value)
