"""
Toolbox MCP server package.

This package exposes, over the Model Context Protocol:
- tools: greeting, calculator, time lookup, geocoding, weather forecast,
  and text-to-image generation
- prompts: a code-review request template
- resources: `server://info`, a JSON snapshot of the server and its tools

Every tool call goes through the same path: argument validation against
the tool's pydantic model, the handler, and a normalized response envelope.
"""
