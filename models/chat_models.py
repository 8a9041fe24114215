"""
Data models for chat processing.
Contains client options, completion results and the typed stream events.
"""
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.api_models import Usage


class Role(str, Enum):
    """Conversation roles understood by the API."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class FinishReason(str, Enum):
    """Why the model stopped generating."""
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: Optional[str]) -> Optional["FinishReason"]:
        """Map a wire finish_reason; unknown values become OTHER."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class ClientOptions(BaseModel):
    """
    Mutable configuration snapshot owned by one client.
    Every assignment is validated, so a bad value fails where it is set.
    """
    model_config = ConfigDict(validate_assignment=True)

    model: str = Field("deepseek-chat", min_length=1)
    max_tokens: Optional[int] = Field(None, gt=0)
    temperature: Optional[float] = Field(0.7, ge=0.0, le=2.0)
    timeout: float = Field(300.0, gt=0, description="Request timeout in seconds")
    show_debug_info: bool = False
    show_token_usage: bool = False
    max_history_size: int = Field(50, ge=0, description="0 keeps every message")

    @field_validator("model")
    @classmethod
    def _strip_model(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("model must not be blank")
        return value

    @contextmanager
    def overridden(self, **changes) -> Iterator["ClientOptions"]:
        """Apply changes for the duration of the block, then restore the previous values."""
        previous = {name: getattr(self, name) for name in changes}
        try:
            for name, value in changes.items():
                setattr(self, name, value)
            yield self
        finally:
            for name, value in previous.items():
                setattr(self, name, value)


@dataclass
class ChatResult:
    """Outcome of one chat completion call."""
    content: str = ""
    role: str = Role.ASSISTANT.value
    usage: Optional[Usage] = None
    was_streamed: bool = False
    finish_reason: Optional[FinishReason] = None

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "role": self.role,
            "usage": self.usage.model_dump() if self.usage else None,
            "was_streamed": self.was_streamed,
            "finish_reason": self.finish_reason.value if self.finish_reason else None,
        }


@dataclass(frozen=True)
class ContentDelta:
    text: str


@dataclass(frozen=True)
class RoleAnnounced:
    role: str


@dataclass(frozen=True)
class FinishReasonSet:
    reason: FinishReason


@dataclass(frozen=True)
class UsageReported:
    usage: Usage


@dataclass(frozen=True)
class ChunkError:
    """A data line whose payload could not be parsed. Non-fatal."""
    error: Exception
    payload: str


@dataclass(frozen=True)
class DebugNote:
    """Raw observation for the debug channel."""
    message: str


@dataclass(frozen=True)
class StreamEnded:
    """Always the last event of a decoded stream."""
    finish_reason: Optional[FinishReason]
    done_sentinel: bool
    lines_read: int


StreamEvent = Union[
    ContentDelta,
    RoleAnnounced,
    FinishReasonSet,
    UsageReported,
    ChunkError,
    DebugNote,
    StreamEnded,
]
