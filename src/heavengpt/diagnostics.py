"""Diagnostic logging.

Two pieces:
- ``DiagnosticLog``: an explicit collaborator that appends timestamped lines
  to a local file. The file is opened and closed around every write, so no
  handle outlives a call.
- ``setup_logging``: root logger configuration for console/file output.
"""

import logging
import sys
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = Path.home() / ".heavengpt" / "heavengpt.log"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# (level, component, message)
DiagnosticListener = Callable[[str, str, str], None]


class DiagnosticLog:
    """Append-only diagnostic log backed by a text file.

    Example:
        log = DiagnosticLog("~/.heavengpt/heavengpt.log")
        log.error("HTTP", "Server returned status 500")
        # 2026-01-31 12:00:00: [ERROR] [HTTP] Server returned status 500
    """

    def __init__(self, path: str | Path | None = DEFAULT_LOG_FILE) -> None:
        """Create a log.

        Args:
            path: File to append to; None keeps entries in listeners only
        """
        self._path = Path(path).expanduser() if path is not None else None
        self._listeners: list[DiagnosticListener] = []

    @property
    def path(self) -> Path | None:
        return self._path

    def subscribe(self, listener: DiagnosticListener) -> None:
        """Receive every entry as ``listener(level, component, message)``."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: DiagnosticListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def write(self, level: str, component: str, message: str) -> None:
        """Record an entry.

        Write failures are reported through ``logging`` and never raised.
        """
        level = level.lower()
        for listener in list(self._listeners):
            listener(level, component, message)

        if self._path is None:
            return

        timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        line = f"{timestamp}: [{level.upper()}] [{component}] {message}\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        except OSError as e:
            logger.warning("Error writing to log file %s: %s", self._path, e)

    def debug(self, component: str, message: str) -> None:
        self.write("debug", component, message)

    def info(self, component: str, message: str) -> None:
        self.write("info", component, message)

    def warning(self, component: str, message: str) -> None:
        self.write("warning", component, message)

    def error(self, component: str, message: str) -> None:
        self.write("error", component, message)


def setup_logging(
    log_level: str = "WARNING",
    log_file: str | Path | None = None,
    use_console: bool = True,
) -> logging.Logger:
    """Configure the root logger with console and optional file handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for a file handler
        use_console: Whether to add a stderr handler

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))
    root_logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if use_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        root_logger.addHandler(console)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file = logging.FileHandler(path)
        file.setFormatter(formatter)
        root_logger.addHandler(file)

    if not root_logger.handlers:
        # Keeps logging.lastResort from writing warnings to stderr
        root_logger.addHandler(logging.NullHandler())

    return root_logger
