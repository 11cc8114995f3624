"""Terminal UI module for heavengpt.

Provides a Textual-based TUI around a ChatSession.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (input history, status, error banner, messages)
- formatting.py: Segment rendering and code highlighting
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- screens.py: Modal dialogs (save dialog)
- callbacks.py: Diagnostic log integration
- app.py: Application orchestration (user interaction flow)
"""

from .app import HeavenChatApp, run_textual_tui
from .callbacks import DiagnosticsBridge
from .config import LogLevel
from .formatting import highlight_code, render_message, render_segment
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ErrorBanner, StatusBar

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "DiagnosticsBridge",
    "ErrorBanner",
    "HeavenChatApp",
    "LogLevel",
    "StatusBar",
    "highlight_code",
    "render_message",
    "render_segment",
    "run_textual_tui",
]
