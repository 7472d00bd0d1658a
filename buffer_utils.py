import logging
from dataclasses import dataclass, field
from datetime import datetime

import pytz

logger = logging.getLogger(__name__)


@dataclass
class StoredMessage:
    text: str
    username: str
    date: datetime = field(default_factory=lambda: datetime.now(pytz.utc))


class ChatBuffer:
    """Messages collected per chat since the last report."""

    def __init__(self):
        self._buffers: dict[int, list[StoredMessage]] = {}

    def add_message(self, chat_id: int, text: str, username: str) -> int:
        """Appends a message and returns the chat's new message count."""
        buffer = self._buffers.setdefault(chat_id, [])
        buffer.append(StoredMessage(text=text, username=username))
        return len(buffer)

    def get_messages_text(self, chat_id: int) -> list[str]:
        return [m.text for m in self._buffers.get(chat_id, [])]

    def get_messages(self, chat_id: int) -> list[dict]:
        return [{"text": m.text, "username": m.username} for m in self._buffers.get(chat_id, [])]

    def get_count(self, chat_id: int) -> int:
        return len(self._buffers.get(chat_id, []))

    def clear(self, chat_id: int) -> None:
        self._buffers.pop(chat_id, None)
        logger.info(f"[Chat {chat_id}] Buffer cleared")
