"""
Transports for flattened console log entries.

A transport receives ``(label, node)`` once the value has been flattened
and takes care of rendering and delivery. The browser transport buffers
script tags for the current request; the file transport writes through
PrettyLogger; the memory transport just records entries for tests.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from flask import g, has_app_context

from .core.logger import PrettyLogger
from .formatters import DEFAULT_STYLE, format_as_json, format_script_tag, format_summary

SCRIPTS_KEY = "_console_logger_scripts"


class Transport(ABC):
    """Abstract base class for transports."""

    @abstractmethod
    def emit(self, label: str, node: Any) -> None:
        """
        Deliver one flattened entry.

        Args:
            label: Entry label (unescaped; the transport escapes it)
            node: Flattened node
        """
        pass


class ScriptTransport(Transport):
    """
    Browser console transport.

    Renders each entry as a ``<script>`` tag calling ``console.log`` and
    keeps it until ``drain()`` is called, normally by the after_request
    hook installed with ``console_logger.web.init_app``. Inside a Flask
    app context the buffer lives on ``flask.g`` so each request only sees
    its own entries.
    """

    def __init__(self, style: str = DEFAULT_STYLE):
        self.style = style
        self._fallback: List[str] = []

    def emit(self, label: str, node: Any) -> None:
        self._buffer().append(format_script_tag(label, node, self.style))

    def pending(self) -> List[str]:
        return list(self._buffer())

    def drain(self) -> List[str]:
        """Return buffered script tags and clear the buffer."""
        scripts = list(self._buffer())
        self._buffer().clear()
        return scripts

    def _buffer(self) -> List[str]:
        if has_app_context():
            return g.setdefault(SCRIPTS_KEY, [])
        return self._fallback


class FileTransport(Transport):
    """Appends entries to a pretty log file."""

    def __init__(
        self,
        logger: Optional[PrettyLogger] = None,
        log_dir: str = "logs",
        filename: str = "console.log"
    ):
        self.logger = logger or PrettyLogger(log_dir=log_dir, filename=filename)

    def emit(self, label: str, node: Any) -> None:
        self.logger.log(format_summary(label, node), format_as_json(node))


class MemoryTransport(Transport):
    """
    In-memory transport for testing.

    Keeps every emitted entry in order.
    """

    def __init__(self):
        self.entries: List[Tuple[str, Any]] = []

    def emit(self, label: str, node: Any) -> None:
        self.entries.append((label, node))

    def labels(self) -> List[str]:
        return [label for label, _ in self.entries]

    def last(self) -> Optional[Tuple[str, Any]]:
        if not self.entries:
            return None
        return self.entries[-1]

    def clear(self):
        self.entries.clear()
