"""
The ``maybe_console_log`` entry point.

Instrumentation code calls ``maybe_console_log(label, value)`` anywhere in
the application. When the gate says no, the call returns immediately
without touching ``value``. Otherwise the value is flattened with a fresh
traversal state and handed to the transport. Nothing raised by the gate,
the flattener or the transport reaches the caller.
"""

from typing import Any, Optional

from .core.flattener import GraphFlattener
from .gate import EnablementGate, RequestGate
from .transport import ScriptTransport, Transport


class ConsoleLogger:
    """Gate, flattener and transport wired together."""

    def __init__(
        self,
        gate: Optional[EnablementGate] = None,
        transport: Optional[Transport] = None,
        flattener: Optional[GraphFlattener] = None
    ):
        """
        Args:
            gate: Enablement gate (defaults to RequestGate)
            transport: Transport (defaults to ScriptTransport)
            flattener: Flattener (defaults to GraphFlattener with stock limits)
        """
        self.gate = gate or RequestGate()
        self.transport = transport or ScriptTransport()
        self.flattener = flattener or GraphFlattener()

    def enabled(self) -> bool:
        try:
            return bool(self.gate.should_log())
        except Exception as e:
            print(f"Warning: Console logger gate failed, logging disabled: {e}")
            return False

    def maybe_console_log(self, label: str = "", value: Any = None) -> None:
        """
        Log ``value`` under ``label`` if the gate allows it.

        Args:
            label: Label shown in front of the value
            value: Anything; flattened before it leaves this call
        """
        if not self.enabled():
            return

        node = self.flattener.flatten(value)

        try:
            self.transport.emit(str(label), node)
        except Exception as e:
            print(f"Warning: Could not emit console log '{label}': {e}")


# Global console logger instance
_global_console = None


def get_console_logger() -> ConsoleLogger:
    """Get or create the global console logger instance."""
    global _global_console
    if _global_console is None:
        _global_console = ConsoleLogger()
    return _global_console


def configure(
    gate: Optional[EnablementGate] = None,
    transport: Optional[Transport] = None,
    flattener: Optional[GraphFlattener] = None
) -> ConsoleLogger:
    """Replace the global console logger and return it."""
    global _global_console
    _global_console = ConsoleLogger(gate=gate, transport=transport, flattener=flattener)
    return _global_console


def maybe_console_log(label: str = "", value: Any = None) -> None:
    """Log through the global console logger."""
    get_console_logger().maybe_console_log(label, value)
