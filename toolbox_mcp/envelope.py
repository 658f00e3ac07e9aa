"""
Response envelopes returned by every tool handler.

Two shapes exist: a single text item, and a single image item. Text
envelopes also carry a `structuredContent` mirror of the same item so that
clients reading either field see identical text.
"""

from __future__ import annotations

import base64

from mcp import types


def text_envelope(text: str) -> types.CallToolResult:
    item = types.TextContent(type="text", text=text)
    return types.CallToolResult(
        content=[item],
        structuredContent={"content": [{"type": "text", "text": text}]},
    )


def image_envelope(
    data: bytes,
    mime_type: str = "image/png",
    priority: float = 0.9,
) -> types.CallToolResult:
    """Wrap raw image bytes as a base64 image item addressed to the user."""
    item = types.ImageContent(
        type="image",
        data=base64.b64encode(data).decode("ascii"),
        mimeType=mime_type,
        annotations=types.Annotations(audience=["user"], priority=priority),
    )
    return types.CallToolResult(content=[item])


def describe_error(exc: BaseException) -> str:
    """Human-readable message for an exception, never empty."""
    return str(exc) or type(exc).__name__
