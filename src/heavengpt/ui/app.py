"""Main Textual TUI application.

Orchestrates the UI components around a ChatSession: submitting prompts,
rendering replies, surfacing errors and per-message actions.
"""

import asyncio
import contextlib
import time
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..chat import ChatSession, code_blocks
from .callbacks import DiagnosticsBridge
from .config import EXPORT_DEFAULT_NAME, NOTIFY_ERROR, NOTIFY_SHORT, LogLevel
from .screens import SaveMessageScreen
from .styles import APP_CSS
from .themes import HEAVEN_NIGHT, THEMES
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    ErrorBanner,
    MessageView,
    StatusBar,
)


class HeavenChatApp(App):
    """Textual TUI for chatting with a completion endpoint."""

    CSS = APP_CSS
    TITLE = "HeavenGPT"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+y", "copy_last_code", "Copy Code", priority=True),
        Binding("ctrl+s", "save_last_response", "Save Response"),
        Binding("escape", "cancel_request", "Cancel"),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        session: ChatSession,
        log_level: str | None = None,
        export_dir: str | Path | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._export_dir = Path(export_dir) if export_dir else Path.cwd()
        self._bridge: DiagnosticsBridge | None = None

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ErrorBanner(id="error-banner")
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        with Vertical(id="bottom-bar"):
            yield StatusBar(id="status-bar", model=self._session.builder.model)
            yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        for theme in THEMES:
            self.register_theme(theme)
        self.theme = HEAVEN_NIGHT.name

        log_panel = self.query_one("#debug-panel", DebugPanel)
        self._bridge = DiagnosticsBridge(log_panel, app=self)
        self._bridge.attach(self._session.log)

        if self._log_level is not None:
            log_panel.log_level = LogLevel.parse(self._log_level)
            log_panel.show()
            log_panel.log_entry("TUI", f"Log panel enabled with level: {self._log_level.upper()}", LogLevel.INFO)

        history_mode = "with history" if self._session.builder.include_history else "single turn"
        self.sub_title = f"{self._session.builder.model} | {history_mode}"

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.add_notice(
            "Type a prompt and press Ctrl+J or Send. "
            "Replies can be copied, saved or deleted from their header buttons."
        )
        for message in self._session.conversation:
            chat.add_message(message)
        self._refresh_status()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach from the diagnostic log when the app exits."""
        if self._bridge is not None:
            self._bridge.detach()
            self._bridge = None

    def _refresh_status(self, last_duration: float | None = None) -> None:
        status = self.query_one("#status-bar", StatusBar)
        count = len(self._session.conversation)
        status.update_status(busy=self._session.busy, messages=count, last_duration=last_duration)
        status.set_class(self._session.busy, "-busy")
        self.query_one("#chat-history", ChatHistoryWidget).update_count(count)

    def _show_error(self, message: str) -> None:
        self.query_one("#error-banner", ErrorBanner).show_error(message)
        self.notify(message[:80], severity="error", timeout=NOTIFY_ERROR)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._send(event.value)

    @work(group="chat", exit_on_error=False)
    async def _send(self, prompt: str) -> None:
        """Send a prompt as a background worker on the app's event loop.

        The session rejects overlapping sends, so this worker is not exclusive.
        """
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        banner = self.query_one("#error-banner", ErrorBanner)
        started = time.monotonic()

        pending = self._session.send(prompt)
        # busy is set before the first await inside send
        task = asyncio.ensure_future(pending)
        await asyncio.sleep(0)
        self._refresh_status()

        try:
            result = await task
        except asyncio.CancelledError:
            task.cancel()
            self._session.cancel_pending()
            self._refresh_status()
            raise

        if result.ok:
            banner.dismiss()
            for message in result.messages:
                chat.add_message(message)
            if not result.replies:
                self.notify("The server returned no choices", severity="warning", timeout=NOTIFY_SHORT)
            self._refresh_status(last_duration=time.monotonic() - started)
            return

        self._refresh_status()
        self._show_error(result.error.message)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        if prompt.strip():
            input_bar.restore(prompt)

    def on_message_view_action_requested(self, event: MessageView.ActionRequested) -> None:
        message = self._session.conversation.get(event.message_id)
        if message is None:
            return

        if event.action == "copy":
            self.copy_to_clipboard(message.content)
            self.notify("Copied to clipboard", timeout=NOTIFY_SHORT)
        elif event.action == "save":
            self._prompt_export(message.id)
        elif event.action == "delete":
            if self._session.conversation.delete(message.id):
                self.query_one("#chat-history", ChatHistoryWidget).remove_message(message.id)
                self._session.log.info("TUI", f"Deleted message {message.id}")
                self._refresh_status()

    def _prompt_export(self, message_id: str) -> None:
        message = self._session.conversation.get(message_id)
        if message is None:
            return

        def _on_path(path: str | None) -> None:
            if path:
                self._export(message_id, path)

        preview = message.content[:160]
        default_path = str(self._export_dir / EXPORT_DEFAULT_NAME)
        self.push_screen(SaveMessageScreen(default_path, preview=preview), _on_path)

    def _export(self, message_id: str, path: str) -> None:
        try:
            destination = self._session.conversation.export(message_id, path)
        except (KeyError, OSError) as e:
            self._session.log.error("Export", f"Could not save message {message_id}: {e}")
            self._show_error(f"Could not save message: {e}")
            return
        self._session.log.info("Export", f"Saved message {message_id} to {destination}")
        self.notify(f"Saved to {destination}", timeout=NOTIFY_SHORT)

    def action_clear_chat(self) -> None:
        """Clear the chat history and drop any pending reply."""
        self.workers.cancel_group(self, "chat")
        self._session.reset()
        self.query_one("#chat-history", ChatHistoryWidget).clear_history()
        self.query_one("#error-banner", ErrorBanner).dismiss()
        self._refresh_status()
        self.notify("Chat cleared", timeout=NOTIFY_SHORT)

    def action_cancel_request(self) -> None:
        """Cancel the pending request, if any."""
        if self._session.cancel_pending():
            self.workers.cancel_group(self, "chat")
            self._refresh_status()
            self.notify("Request cancelled", severity="warning", timeout=NOTIFY_SHORT)

    def action_toggle_debug(self) -> None:
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=NOTIFY_SHORT)

    def action_copy_last_response(self) -> None:
        reply = self._session.conversation.last_reply()
        if reply is None:
            self.notify("No response to copy", severity="warning")
            return
        self.copy_to_clipboard(reply.content)
        self.notify("Response copied", timeout=NOTIFY_SHORT)

    def action_copy_last_code(self) -> None:
        reply = self._session.conversation.last_reply()
        blocks = code_blocks(reply.content) if reply else []
        if not blocks:
            self.notify("No code block to copy", severity="warning")
            return
        self.copy_to_clipboard(blocks[-1].text)
        self.notify("Code copied", timeout=NOTIFY_SHORT)

    def action_save_last_response(self) -> None:
        reply = self._session.conversation.last_reply()
        if reply is None:
            self.notify("No response to save", severity="warning")
            return
        self._prompt_export(reply.id)


async def run_textual_tui(session: ChatSession, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session to drive
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = HeavenChatApp(session=session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await session.close()
