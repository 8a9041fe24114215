"""
Models package exports.
"""
from models.api_models import (
    ChatMessage,
    ChatRequest,
    Usage,
    ChatCompletion,
    ChatCompletionChunk,
    PromptRequest,
    HistoryMessageRequest,
)
from models.chat_models import (
    Role,
    FinishReason,
    ClientOptions,
    ChatResult,
    ContentDelta,
    RoleAnnounced,
    FinishReasonSet,
    UsageReported,
    ChunkError,
    DebugNote,
    StreamEnded,
    StreamEvent,
)

__all__ = [
    'ChatMessage',
    'ChatRequest',
    'Usage',
    'ChatCompletion',
    'ChatCompletionChunk',
    'PromptRequest',
    'HistoryMessageRequest',
    'Role',
    'FinishReason',
    'ClientOptions',
    'ChatResult',
    'ContentDelta',
    'RoleAnnounced',
    'FinishReasonSet',
    'UsageReported',
    'ChunkError',
    'DebugNote',
    'StreamEnded',
    'StreamEvent',
]
