"""
Enablement gates.

A gate is asked once per ``maybe_console_log`` call, before any
flattening happens. Answering False skips the work entirely.
"""

from abc import ABC, abstractmethod
from typing import Optional

from flask import has_request_context, request

from .settings import SettingsStore


class EnablementGate(ABC):
    """Abstract base class for enablement gates."""

    @abstractmethod
    def should_log(self) -> bool:
        """
        Decide whether the current call should be logged.

        Returns:
            True to flatten and emit, False to do nothing
        """
        pass


class StaticGate(EnablementGate):
    """Fixed answer. Handy for scripts and tests."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def should_log(self) -> bool:
        return self.enabled


class SettingGate(EnablementGate):
    """Follows the persisted enable flag only."""

    def __init__(self, settings: Optional[SettingsStore] = None):
        self.settings = settings or SettingsStore()

    def should_log(self) -> bool:
        return self.settings.is_enabled()


class RequestGate(SettingGate):
    """
    Enable flag plus a marker on the incoming request.

    Logging happens only when the flag is on and the current Flask request
    carries the query parameter (``?console_logger`` by default), so turning
    the flag on does not leak data to every visitor.
    """

    def __init__(
        self,
        settings: Optional[SettingsStore] = None,
        query_param: Optional[str] = None
    ):
        super().__init__(settings)
        self.query_param = query_param or self.settings.query_param()

    def should_log(self) -> bool:
        if not has_request_context():
            return False
        if self.query_param not in request.args:
            return False
        return super().should_log()
