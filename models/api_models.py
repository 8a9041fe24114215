"""
Pydantic data models for the chat completions wire format and the bridge API.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """Chat message model."""
    role: str  # "user", "assistant" or "system"
    content: str


class Usage(BaseModel):
    """Token usage reported by the server."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatRequest(BaseModel):
    """Request body for POST /chat/completions."""
    model: str
    messages: List[ChatMessage]
    stream: bool = True
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None

    def to_payload(self) -> dict:
        """Serialize for the wire, leaving out unset optional parameters."""
        return self.model_dump(exclude_none=True)


class _ResponseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Delta(_ResponseModel):
    """Incremental message fragment of a streamed chunk."""
    role: Optional[str] = None
    content: Optional[str] = None


class StreamChoice(_ResponseModel):
    delta: Optional[Delta] = None
    finish_reason: Optional[str] = None


class ChatCompletionChunk(_ResponseModel):
    """One `data:` payload of a streamed response."""
    choices: List[StreamChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None


class ResponseMessage(_ResponseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class Choice(_ResponseModel):
    message: Optional[ResponseMessage] = None
    finish_reason: Optional[str] = None


class ChatCompletion(_ResponseModel):
    """Body of a non-streamed response."""
    choices: List[Choice] = Field(default_factory=list)
    usage: Optional[Usage] = None


class PromptRequest(BaseModel):
    """Bridge request carrying one user prompt."""
    prompt: str = Field(..., min_length=1)
    managed: bool = Field(True, description="Read and update the shared conversation history")


class HistoryMessageRequest(BaseModel):
    """Bridge request for adding a message to history by hand."""
    role: str
    content: str
