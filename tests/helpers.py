import re
import json


def sse_body(*chunks, done=True) -> bytes:
    """Encode chunk dicts (or raw strings) as an SSE response body."""
    lines = []
    for chunk in chunks:
        payload = chunk if isinstance(chunk, str) else json.dumps(chunk)
        lines.append(f"data: {payload}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


async def async_lines(lines):
    """Feed a list of lines as an async iterator."""
    for line in lines:
        yield line


def parse_sse_events(body):
    """Return (event_type, data) pairs from a bridge SSE body."""
    pattern = re.compile(r'event: (\w+)\ndata: (.*?)\n\n')
    return [(m.group(1), json.loads(m.group(2))) for m in pattern.finditer(body)]


def assert_sse_event(body, event_type, **expected_data):
    """
    Assert that an SSE event with the given type and expected data exists in the body.
    Checks all occurrences of the event type.
    """
    for ev_type, data in parse_sse_events(body):
        if ev_type != event_type:
            continue
        if all(key in data and data[key] == value for key, value in expected_data.items()):
            return

    assert False, f"No '{event_type}' event found with all expected data: {expected_data} in SSE body:\n{body}"


def token_contents(body):
    """Contents of all token events, in order."""
    return [data["content"] for ev_type, data in parse_sse_events(body) if ev_type == "token"]
