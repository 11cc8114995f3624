"""Bridge from the diagnostic log to the TUI.

Hides the details of how the TUI receives diagnostic entries.
Uses thread-safe methods so entries written from other threads still land
on the UI thread.
"""

import threading
from typing import TYPE_CHECKING, Any

from .config import LogLevel

if TYPE_CHECKING:
    from textual.app import App

    from ..diagnostics import DiagnosticLog
    from .widgets import DebugPanel


class DiagnosticsBridge:
    """Forwards DiagnosticLog entries into the DebugPanel.

    Usage:
        bridge = DiagnosticsBridge(panel, app)
        bridge.attach(session_log)
        ...
        bridge.detach()
    """

    def __init__(self, panel: "DebugPanel", app: "App | None" = None) -> None:
        self.panel = panel
        self.app = app
        self._log: DiagnosticLog | None = None

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app is not None and self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def __call__(self, level: str, component: str, message: str) -> None:
        self._call_thread_safe(
            self.panel.log_entry, component, message, LogLevel.parse(level)
        )

    def attach(self, log: "DiagnosticLog") -> None:
        self.detach()
        log.subscribe(self)
        self._log = log

    def detach(self) -> None:
        if self._log is not None:
            self._log.unsubscribe(self)
            self._log = None
