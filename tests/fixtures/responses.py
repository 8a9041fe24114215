"""Canned chat completion payloads."""

USAGE_5_2_7 = {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7}


def content_chunk(content=None, role=None, finish_reason=None, usage=None, with_choice=True) -> dict:
    """One streamed chunk as the API sends it."""
    chunk = {
        "id": "chatcmpl-test",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "deepseek-chat",
        "choices": [],
    }
    if with_choice:
        delta = {}
        if role is not None:
            delta["role"] = role
        if content is not None:
            delta["content"] = content
        chunk["choices"].append({"index": 0, "delta": delta, "finish_reason": finish_reason})
    if usage is not None:
        chunk["usage"] = usage
    return chunk


def completion_body(content, role="assistant", finish_reason="stop", usage=None) -> dict:
    """A full non-streamed response body."""
    body = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "deepseek-chat",
        "choices": [
            {
                "index": 0,
                "message": {"role": role, "content": content},
                "finish_reason": finish_reason,
            }
        ],
    }
    if usage is not None:
        body["usage"] = usage
    return body


NON_STREAM_HI_BODY = (
    '{"choices":[{"message":{"role":"assistant","content":"Hi"},"finish_reason":"stop"}],'
    '"usage":{"prompt_tokens":5,"completion_tokens":2,"total_tokens":7}}'
)

HELLO_STREAM_LINES = [
    'data: {"choices":[{"delta":{"content":"Hel"}}]}',
    '',
    'data: {"choices":[{"delta":{"content":"lo"}}]}',
    '',
    'data: [DONE]',
    '',
]

UNAUTHORIZED_BODY = {
    "error": {
        "message": "Authentication Fails (no such user)",
        "type": "authentication_error",
        "code": "invalid_request_error",
    }
}
