"""
Tool implementations.

Each module in this package exposes a `register_tools(registry, ...)`
function that adds its tools to the central `ToolRegistry` used by the
MCP server. Handlers receive already validated arguments and always
return an envelope; failures of outbound calls are reported as text.
"""

from __future__ import annotations

from typing import Union

Number = Union[int, float]


def format_number(value: Number) -> str:
    """Render a number like its repr, minus a trailing `.0`: `3.0` as `3`, `1e300` as `1e+300`."""
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text
