"""Modal screens for the TUI.

Only the save dialog lives here; it returns a path and leaves the writing
to the app.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static


class SaveMessageScreen(ModalScreen[str | None]):
    """Modal dialog asking where to save a message.

    Dismisses with the entered path, or None when cancelled.
    """

    CSS = """
    SaveMessageScreen {
        align: center middle;
    }

    #save-dialog {
        width: 72;
        height: auto;
        padding: 1 2;
        border: thick $primary 70%;
        background: $surface;

        #save-title {
            text-style: bold;
            margin-bottom: 1;
        }

        #save-preview {
            max-height: 4;
            margin-bottom: 1;
            color: $text-muted;
        }

        #save-buttons {
            height: auto;
            margin-top: 1;
            align-horizontal: right;

            Button {
                margin-left: 1;
            }
        }
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, default_path: str, preview: str = "") -> None:
        super().__init__()
        self._default_path = default_path
        self._preview = preview

    def compose(self) -> ComposeResult:
        with Vertical(id="save-dialog"):
            yield Static("Save Message", id="save-title")
            if self._preview:
                yield Static(self._preview, id="save-preview", markup=False)
            yield Input(value=self._default_path, placeholder="File path", id="save-path")
            with Horizontal(id="save-buttons"):
                yield Button("Save", id="btn-save", variant="success")
                yield Button("Cancel", id="btn-cancel", variant="error")

    def on_mount(self) -> None:
        self.query_one("#save-path", Input).focus()

    def _submit(self) -> None:
        path = self.query_one("#save-path", Input).value.strip()
        self.dismiss(path or None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            self._submit()
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
