"""In-memory conversation history.

Session-only: messages live as long as the process. Exporting a single
message to a text file is an explicit user action, not persistence.
"""

from collections.abc import Iterator
from pathlib import Path

from .models import ChatMessage


class Conversation:
    """Ordered list of chat messages addressed by id.

    Insertion order is display order.
    """

    def __init__(self, messages: list[ChatMessage] | None = None) -> None:
        self._messages: list[ChatMessage] = list(messages or [])

    @property
    def messages(self) -> list[ChatMessage]:
        """Snapshot of the messages in display order."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(list(self._messages))

    def append(self, *messages: ChatMessage) -> None:
        """Append messages, preserving their order."""
        self._messages.extend(messages)

    def get(self, message_id: str) -> ChatMessage | None:
        for msg in self._messages:
            if msg.id == message_id:
                return msg
        return None

    def delete(self, message_id: str) -> bool:
        """Remove the message with the given id.

        Returns:
            True if a message was removed, False if the id is unknown
        """
        for index, msg in enumerate(self._messages):
            if msg.id == message_id:
                del self._messages[index]
                return True
        return False

    def last_reply(self) -> ChatMessage | None:
        """Most recent message that was not sent by the user."""
        for msg in reversed(self._messages):
            if not msg.is_user:
                return msg
        return None

    def clear(self) -> None:
        self._messages.clear()

    def export(self, message_id: str, path: str | Path) -> Path:
        """Write one message's content to a text file.

        Args:
            message_id: Id of the message to export
            path: Destination file; parent directories are created

        Returns:
            The resolved destination path

        Raises:
            KeyError: If no message has the given id
            OSError: If the file cannot be written
        """
        msg = self.get(message_id)
        if msg is None:
            raise KeyError(message_id)

        destination = Path(path).expanduser()
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(msg.content, encoding="utf-8")
        return destination.resolve()
