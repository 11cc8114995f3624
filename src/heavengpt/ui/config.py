"""UI constants: diagnostics levels, limits and timeouts."""

from enum import IntEnum


class LogLevel(IntEnum):
    """Diagnostics panel threshold; values match the stdlib ``logging`` levels."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def parse(cls, value: str | None) -> "LogLevel":
        """Level for a name such as ``"warning"``; unknown names show everything."""
        if not value:
            return cls.DEBUG
        return cls.__members__.get(value.strip().upper(), cls.DEBUG)


# Rich styles for the diagnostics panel
LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
COMPONENT_STYLES = {
    "TUI": "bright_cyan",
    "Session": "green",
    "Export": "bright_blue",
}

INPUT_HISTORY_MAX_SIZE = 100
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500

EXPORT_DEFAULT_NAME = "message.txt"

# Toast timeouts in seconds
NOTIFY_SHORT = 2
NOTIFY_ERROR = 5
