"""
Browser console logger.

Sends server-side values to the browser's developer console. Values are
flattened into a bounded, JSON-safe tree first, so deep, cyclic or huge
object graphs and things like open files or functions never break the
page or the request.

Quick Start:
    from console_logger import maybe_console_log

    maybe_console_log("cart", cart)

    # Shows up in the console of the page rendered for this request when
    # logging is enabled and the URL carries ?console_logger

Flask Setup:
    from console_logger import init_app

    app = Flask(__name__)
    init_app(app)

Advanced Usage:
    from console_logger import ConsoleLogger, StaticGate, MemoryTransport

    # Always-on logger that records entries in memory
    transport = MemoryTransport()
    console = ConsoleLogger(gate=StaticGate(True), transport=transport)
    console.maybe_console_log("order", order)
    label, node = transport.last()
"""

from .core import (
    CLOSURE_TEXT,
    MAX_DEPTH,
    MAX_ITEMS,
    GraphFlattener,
    PrettyLogger,
    TraversalState,
)
from .console import ConsoleLogger, configure, get_console_logger, maybe_console_log
from .gate import EnablementGate, RequestGate, SettingGate, StaticGate
from .settings import SettingsStore
from .transport import FileTransport, MemoryTransport, ScriptTransport, Transport
from .formatters import format_as_json, format_console_call, format_script_tag
from .web import current_console, init_app

__all__ = [
    # Entry point
    "maybe_console_log",
    "ConsoleLogger",
    "get_console_logger",
    "configure",

    # Flattening
    "GraphFlattener",
    "TraversalState",
    "MAX_DEPTH",
    "MAX_ITEMS",
    "CLOSURE_TEXT",

    # Gates and settings
    "EnablementGate",
    "StaticGate",
    "SettingGate",
    "RequestGate",
    "SettingsStore",

    # Transports
    "Transport",
    "ScriptTransport",
    "FileTransport",
    "MemoryTransport",
    "PrettyLogger",

    # Formatters
    "format_as_json",
    "format_console_call",
    "format_script_tag",

    # Flask
    "init_app",
    "current_console",
]

__version__ = "0.1.1"
