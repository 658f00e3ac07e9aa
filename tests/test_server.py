import json
import logging
import sys

import pytest
from mcp import types
from mcp.server import Server

from toolbox_mcp.config import ServerConfig, Settings, resolve_hf_token
from toolbox_mcp.logging_config import setup_logging
from toolbox_mcp.main import SERVER_NAME, SERVER_VERSION, create_server
from toolbox_mcp.validation import ToolInputError

TOOL_NAMES = {"greet", "calculator", "get-time", "geocode", "get-weather", "generate-image"}


@pytest.mark.asyncio
async def test_all_tools_are_listed_with_schemas(toolbox):
    tools = await toolbox.list_tools()

    assert {tool.name for tool in tools} == TOOL_NAMES
    for tool in tools:
        assert tool.description
        assert tool.inputSchema["type"] == "object"
        assert tool.inputSchema["additionalProperties"] is False


@pytest.mark.asyncio
async def test_invalid_arguments_reject_the_call(toolbox):
    with pytest.raises(ToolInputError) as exc_info:
        await toolbox.call_tool("calculator", {"num1": 1, "num2": 2, "operator": "%"})

    assert exc_info.value.operation == "calculator"
    assert "operator" in str(exc_info.value)


@pytest.mark.asyncio
async def test_unknown_tool(toolbox):
    with pytest.raises(KeyError):
        await toolbox.call_tool("teleport", {})


@pytest.mark.asyncio
async def test_each_call_gets_its_own_envelope(toolbox):
    first = await toolbox.call_tool("greet", {"name": "A"})
    second = await toolbox.call_tool("greet", {"name": "B"})

    assert first is not second
    assert first.content[0].text != second.content[0].text


def test_facade_identity(toolbox):
    assert toolbox.name == SERVER_NAME
    assert toolbox.version == SERVER_VERSION


def test_create_server_returns_named_low_level_server(monkeypatch):
    monkeypatch.delenv("HF_TOKEN", raising=False)
    monkeypatch.delenv("TOOLBOX_HF_TOKEN", raising=False)

    server = create_server(settings=Settings(_env_file=None))

    assert isinstance(server, Server)
    assert server.name == SERVER_NAME
    assert server.version == SERVER_VERSION


def test_injected_token_wins_over_environment(monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "from-env")
    settings = Settings(_env_file=None)

    assert settings.hf_token == "from-env"
    assert resolve_hf_token(ServerConfig(hf_token="injected"), settings) == "injected"
    assert resolve_hf_token(ServerConfig(), settings) == "from-env"
    assert resolve_hf_token(None, settings) == "from-env"


def test_absent_token_is_none(monkeypatch):
    monkeypatch.delenv("HF_TOKEN", raising=False)
    monkeypatch.delenv("TOOLBOX_HF_TOKEN", raising=False)

    assert resolve_hf_token(None, Settings(_env_file=None)) is None


def test_setup_logging_writes_to_stderr():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug")

        [handler] = root.handlers
        assert root.level == logging.DEBUG
        assert handler.stream is sys.stderr
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


@pytest.fixture
def low_level_server(monkeypatch):
    monkeypatch.delenv("HF_TOKEN", raising=False)
    monkeypatch.delenv("TOOLBOX_HF_TOKEN", raising=False)
    return create_server(settings=Settings(_env_file=None))


async def _call_through_runtime(server, name, arguments):
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    return (await handler(request)).root


@pytest.mark.asyncio
async def test_runtime_returns_tool_envelope(low_level_server):
    result = await _call_through_runtime(
        low_level_server, "calculator", {"num1": 6, "num2": 3, "operator": "/"}
    )

    assert isinstance(result, types.CallToolResult)
    assert not result.isError
    assert result.content[0].text == "6 / 3 = 2"
    assert result.structuredContent == {"content": [{"type": "text", "text": "6 / 3 = 2"}]}


@pytest.mark.asyncio
async def test_runtime_reports_model_validation_errors(low_level_server):
    result = await _call_through_runtime(
        low_level_server, "calculator", {"num1": "6", "num2": 3, "operator": "/"}
    )

    assert result.isError
    text = result.content[0].text
    assert text.startswith("Invalid arguments for 'calculator'")
    assert "num1" in text


@pytest.mark.asyncio
async def test_runtime_rejects_fractional_forecast_days(low_level_server):
    result = await _call_through_runtime(
        low_level_server, "get-weather", {"latitude": 0, "longitude": 0, "forecastDays": 2.5}
    )

    assert result.isError
    assert "forecastDays" in result.content[0].text


@pytest.mark.asyncio
async def test_runtime_reports_unknown_tool(low_level_server):
    result = await _call_through_runtime(low_level_server, "teleport", {})

    assert result.isError


@pytest.mark.asyncio
async def test_runtime_reads_server_info(low_level_server):
    handler = low_level_server.request_handlers[types.ReadResourceRequest]
    request = types.ReadResourceRequest(
        method="resources/read",
        params=types.ReadResourceRequestParams(uri="server://info"),
    )

    result = (await handler(request)).root

    [contents] = result.contents
    assert contents.mimeType == "application/json"
    payload = json.loads(contents.text)
    assert payload["server"]["name"] == SERVER_NAME
    assert payload["totalTools"] == len(TOOL_NAMES)


@pytest.mark.asyncio
async def test_runtime_renders_code_review_prompt(low_level_server):
    handler = low_level_server.request_handlers[types.GetPromptRequest]
    request = types.GetPromptRequest(
        method="prompts/get",
        params=types.GetPromptRequestParams(name="code-review", arguments={"code": "x = 1"}),
    )

    result = (await handler(request)).root

    [message] = result.messages
    assert message.role == "user"
    assert "x = 1" in message.content.text
