"""
Bounded conversation history.
"""
from collections import deque
from typing import Deque, List

from models.api_models import ChatMessage
from models.chat_models import ClientOptions
from utils.events import EventHook
from utils.logger import app_logger


class ConversationHistory:
    """
    Ordered FIFO buffer of conversation turns.

    The capacity is read from ``options.max_history_size`` on every append
    (0 means unbounded). Oldest messages are evicted only after the new
    message has been stored and announced, so observers always see it.
    """

    def __init__(self, options: ClientOptions, on_message_added: EventHook, on_cleared: EventHook):
        self._options = options
        self._messages: Deque[ChatMessage] = deque()
        self._on_message_added = on_message_added
        self._on_cleared = on_cleared

    def append(self, message: ChatMessage) -> None:
        """Store a message, notify observers, then trim to the configured bound."""
        self._messages.append(message)
        self._on_message_added.emit(message)

        max_size = self._options.max_history_size
        if max_size > 0:
            evicted = 0
            while len(self._messages) > max_size:
                self._messages.popleft()
                evicted += 1
            if evicted:
                app_logger.debug(f"History trimmed: evicted {evicted} oldest message(s), keeping {max_size}")

    def add(self, role: str, content: str) -> ChatMessage:
        """Build a message from role and content and append it."""
        message = ChatMessage(role=role, content=content)
        self.append(message)
        return message

    def snapshot(self) -> List[ChatMessage]:
        """Return an independent copy of the stored messages."""
        return [message.model_copy() for message in self._messages]

    def clear(self) -> None:
        self._messages.clear()
        self._on_cleared.emit()

    def __len__(self) -> int:
        return len(self._messages)
