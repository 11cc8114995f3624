"""Textual CSS for the chat app.

Single column, top to bottom: error banner, chat history (takes the spare
height), diagnostics panel when shown, then the status line and input bar.
"""

APP_CSS = """
Screen {
    layout: vertical;
}

#error-banner {
    height: auto;
    padding: 0 1;
    color: $text-error;
    background: $error 15%;
    border-left: outer $error;
}

/* Conversation */

#chat-history {
    height: 1fr;
    padding: 0 1;
    border: round $border;
    border-title-color: $primary;
    border-subtitle-color: $text-muted;
    scrollbar-size-vertical: 1;

    &:focus-within {
        border: round $primary;
    }
}

.chat-notice {
    padding: 1 1 0 1;
    color: $text-muted;
    text-style: italic;
}

.chat-message {
    height: auto;
    margin-top: 1;
    padding: 0 1;

    &.user-message {
        border-left: wide $accent;
    }

    &.assistant-message {
        border-left: wide $primary;
        background: $surface;
    }
}

.message-header {
    height: 1;

    .message-title {
        width: 1fr;
        color: $text-muted;
    }

    .message-action {
        min-width: 0;
        width: auto;
        height: 1;
        padding: 0 1;
        border: none;
        background: transparent;
        color: $text-muted;

        &:hover {
            color: $text;
            background: $boost;
        }
    }
}

.message-content {
    height: auto;
    padding: 1 0;
}

/* Diagnostics */

#debug-panel {
    height: 10;
    border: round $warning 50%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
}

/* Status and input */

#bottom-bar {
    height: auto;
}

#status-bar {
    height: 1;
    padding: 0 1;
    background: $panel;

    &.-busy {
        background: $warning 25%;
    }
}

ChatInputBar {
    height: 6;
    padding: 0 1;

    #chat-input {
        width: 1fr;
        border: round $border;

        &:focus {
            border: round $accent;
        }
    }

    #send-btn {
        height: 100%;
        margin-left: 1;
    }
}

Toast.-error {
    border-left: outer $error;
}
"""
