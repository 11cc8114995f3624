"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Prompt recall in the input bar
- Status and error display
- Diagnostics rendering and level filtering
- Chat message rendering (segments, per-message actions)
"""

from datetime import datetime

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click, Key
from textual.message import Message
from textual.widgets import Button, RichLog, Static, TextArea

from ..chat import ChatMessage
from .config import (
    COMPONENT_STYLES,
    INPUT_HISTORY_MAX_SIZE,
    LEVEL_STYLES,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    LogLevel,
)
from .formatting import render_message


def message_widget_id(message_id: str) -> str:
    """Widget id for a chat message (Textual ids cannot start with a digit)."""
    return f"msg-{message_id}"


class InputHistory:
    """Previously submitted prompts, newest last.

    ``back`` and ``forward`` walk the list like shell history; walking past
    the newest entry returns an empty draft.
    """

    def __init__(self, max_size: int = INPUT_HISTORY_MAX_SIZE) -> None:
        self._entries: list[str] = []
        self._max_size = max_size
        self._cursor: int | None = None

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, value: str) -> None:
        if not self._entries or self._entries[-1] != value:
            self._entries.append(value)
            del self._entries[:-self._max_size]
        self._cursor = None

    def back(self) -> str | None:
        if not self._entries:
            return None
        if self._cursor is None:
            self._cursor = len(self._entries) - 1
        else:
            self._cursor = max(self._cursor - 1, 0)
        return self._entries[self._cursor]

    def forward(self) -> str | None:
        if self._cursor is None:
            return None
        if self._cursor >= len(self._entries) - 1:
            self._cursor = None
            return ""
        self._cursor += 1
        return self._entries[self._cursor]


class ChatInputBar(Horizontal):
    """Multi-line prompt input with a Send button.

    Ctrl+J submits (terminals do not report modifiers on Enter). Up on the
    first character and Down on the last one recall earlier prompts.
    """

    class Submitted(Message):
        """Posted with the raw input text, blank or not."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.history = InputHistory()

    def compose(self) -> ComposeResult:
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="primary").with_tooltip("Send prompt (Ctrl+J)")

    @property
    def text_area(self) -> TextArea:
        return self.query_one("#chat-input", TextArea)

    def on_mount(self) -> None:
        self.text_area.highlight_cursor_line = False
        self.text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event: Key) -> None:
        text_area = self.text_area
        recalled: str | None = None
        if event.key == "ctrl+j":
            self._submit()
        elif event.key == "up" and text_area.cursor_location == (0, 0):
            recalled = self.history.back()
        elif event.key == "down" and text_area.cursor_location == text_area.document.end:
            recalled = self.history.forward()
        else:
            return

        event.prevent_default()
        event.stop()
        if recalled is not None:
            text_area.text = recalled
            text_area.move_cursor(text_area.document.end)

    def _submit(self) -> None:
        value = self.text_area.text
        if value.strip():
            self.history.record(value)
            self.text_area.text = ""
        self.post_message(self.Submitted(value))

    def restore(self, value: str) -> None:
        """Put a prompt back after a failed send unless the user typed a new one."""
        if not self.text_area.text.strip():
            self.text_area.text = value

    def focus_input(self) -> None:
        self.text_area.focus()


class StatusBar(Static):
    """One-line status: model, message count and request state."""

    def __init__(self, *args, model: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._model = model
        self._messages = 0
        self._busy = False
        self._last_duration: float | None = None

    def on_mount(self) -> None:
        self._update_display()

    def update_status(
        self,
        busy: bool | None = None,
        messages: int | None = None,
        last_duration: float | None = None,
    ) -> None:
        """Update any subset of the displayed values."""
        if busy is not None:
            self._busy = busy
        if messages is not None:
            self._messages = messages
        if last_duration is not None:
            self._last_duration = last_duration
        self._update_display()

    def _update_display(self) -> None:
        state = "[bold yellow]Waiting for response...[/]" if self._busy else "[bold green]Ready[/]"
        parts = [
            f"[bold cyan]Model:[/] {self._model}",
            f"[bold magenta]Messages:[/] {self._messages}",
            state,
        ]
        if self._last_duration is not None and not self._busy:
            parts.append(f"[dim]last reply {self._last_duration:.2f}s[/]")
        self.update("  ".join(parts))

    def get_plain_text(self) -> str:
        state = "busy" if self._busy else "ready"
        return f"Model: {self._model}  Messages: {self._messages}  State: {state}"


class ErrorBanner(Static):
    """Persistent error message shown above the chat until dismissed.

    Click to dismiss; a successful send also clears it.
    """

    def on_mount(self) -> None:
        self.display = False

    def show_error(self, message: str) -> None:
        self.update(Text(f"Error: {message}"))
        self.display = True

    def dismiss(self) -> None:
        self.update("")
        self.display = False

    def on_click(self, event: Click) -> None:
        event.stop()
        self.dismiss()


class DebugPanel(RichLog):
    """Diagnostic entries at or above a level threshold.

    Hidden until ``--log-level`` is given or Ctrl+D toggles it.
    """

    BORDER_TITLE = "Diagnostics"

    def __init__(self, *args, log_level: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=False, highlight=False, wrap=True, **kwargs)
        self._log_level = log_level

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level
        self._refresh_subtitle()

    def on_mount(self) -> None:
        self.display = False
        self._refresh_subtitle()

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = f">= {self._log_level.name}" if self.display else "hidden"

    def log_entry(self, component: str, message: str, level: LogLevel = LogLevel.DEBUG) -> None:
        """Write an entry if it passes the threshold; long messages are cut."""
        if level < self._log_level:
            return
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        self.write(Text.assemble(
            (datetime.now().strftime(LOG_TIMESTAMP_FORMAT), "dim"),
            " ",
            (f"{level.name:<7}", LEVEL_STYLES.get(level, "")),
            (f"[{component}] ", COMPONENT_STYLES.get(component, "white")),
            message,
        ))

    def set_visible(self, visible: bool) -> None:
        self.display = visible
        self._refresh_subtitle()

    def show(self) -> None:
        self.set_visible(True)

    def hide(self) -> None:
        self.set_visible(False)

    def toggle(self) -> bool:
        """Flip visibility and return the new state."""
        self.set_visible(not self.display)
        return self.display


class MessageView(Vertical):
    """A rendered chat message with Copy, Save and Delete actions."""

    class ActionRequested(Message):
        """Posted when one of the message buttons is pressed."""

        def __init__(self, action: str, message_id: str) -> None:
            super().__init__()
            self.action = action
            self.message_id = message_id

    def __init__(self, message: ChatMessage, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.message = message

    def compose(self) -> ComposeResult:
        msg = self.message
        author = "You" if msg.is_user else msg.role.capitalize()

        with Horizontal(classes="message-header"):
            yield Static(f"{author}  [{msg.created_at:%H:%M:%S}]", classes="message-title", markup=False)
            yield Button("Copy", name="copy", classes="message-action")
            yield Button("Save", name="save", classes="message-action")
            yield Button("Delete", name="delete", classes="message-action", variant="error")

        body = Text(msg.content) if msg.is_user else render_message(msg.content)
        yield Static(body, classes="message-content")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.name:
            self.post_message(self.ActionRequested(event.button.name, self.message.id))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable list of MessageViews in conversation order."""

    BORDER_TITLE = "Chat"

    def add_message(self, message: ChatMessage) -> None:
        role_class = "user-message" if message.is_user else "assistant-message"
        self.mount(
            MessageView(
                message,
                id=message_widget_id(message.id),
                classes=f"chat-message {role_class}",
            )
        )
        self.scroll_end(animate=False)

    def add_notice(self, text: str) -> None:
        """Show a hint line that is not part of the conversation."""
        self.mount(Static(text, classes="chat-notice"))

    def remove_message(self, message_id: str) -> None:
        self.query(f"#{message_widget_id(message_id)}").remove()

    def update_count(self, count: int) -> None:
        self.border_subtitle = f"{count} messages" if count else ""

    def clear_history(self) -> None:
        self.remove_children()
        self.border_subtitle = ""
