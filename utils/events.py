"""
Synchronous observer hooks used by the chat client.
Handlers run on the caller's task, in registration order, as events occur.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, List


Handler = Callable[..., Any]


class EventHook:
    """A named list of callbacks fired in order."""

    def __init__(self, name: str):
        self.name = name
        self._handlers: List[Handler] = []

    def subscribe(self, handler: Handler) -> Handler:
        """Register a handler. Returns it so it can be used as a decorator."""
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: Handler) -> None:
        """Remove a previously registered handler. Unknown handlers are ignored."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, *args: Any) -> None:
        """Invoke every handler with the given payload."""
        # copy so a handler may unsubscribe itself while firing
        for handler in list(self._handlers):
            handler(*args)

    def clear(self) -> None:
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)

    def __bool__(self) -> bool:
        return bool(self._handlers)

    def __repr__(self) -> str:
        return f"EventHook({self.name!r}, handlers={len(self._handlers)})"


@dataclass
class ClientEvents:
    """
    The observable channels of a chat client.

    chunk_received(text), error(exception), debug_info(message),
    token_usage(usage), message_added(message), history_cleared()
    """
    chunk_received: EventHook = field(default_factory=lambda: EventHook("chunk_received"))
    error: EventHook = field(default_factory=lambda: EventHook("error"))
    debug_info: EventHook = field(default_factory=lambda: EventHook("debug_info"))
    token_usage: EventHook = field(default_factory=lambda: EventHook("token_usage"))
    message_added: EventHook = field(default_factory=lambda: EventHook("message_added"))
    history_cleared: EventHook = field(default_factory=lambda: EventHook("history_cleared"))

    def clear_all(self) -> None:
        """Drop every registered handler."""
        for hook in (
            self.chunk_received,
            self.error,
            self.debug_info,
            self.token_usage,
            self.message_added,
            self.history_cleared,
        ):
            hook.clear()
