from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import anyio
from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from .config import ServerConfig, Settings, get_settings, resolve_hf_token
from .http_client import HttpClient
from .image_client import ImageClient
from .logging_config import setup_logging
from .prompts import register_prompts
from .registry import PromptRegistry, ResourceRegistry, ToolRegistry
from .resources import register_resources
from .tools import (
    calculator_tools,
    geocode_tools,
    greeting_tools,
    image_tools,
    time_tools,
    weather_tools,
)
from .validation import ToolInputError

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-server-251215"
SERVER_VERSION = "1.0.0"


class ToolboxServer:
    """
    Server facade: a fixed identity plus the tool, prompt and resource tables.

    Each dispatch method looks the entry up, validates the arguments against
    the entry's model and invokes it. Validation errors and unknown names
    propagate; the MCP runtime reports them to the client as errors.
    """

    def __init__(
        self,
        tools: ToolRegistry,
        prompts: PromptRegistry,
        resources: ResourceRegistry,
        name: str = SERVER_NAME,
        version: str = SERVER_VERSION,
    ) -> None:
        self.name = name
        self.version = version
        self.tools = tools
        self.prompts = prompts
        self.resources = resources

    async def list_tools(self) -> List[types.Tool]:
        return self.tools.list_tools()

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]],
    ) -> types.CallToolResult:
        tool = self.tools.get(name)
        try:
            validated = tool.validate(arguments)
        except ToolInputError:
            logger.info("Rejected call to tool %s: invalid arguments", name)
            raise
        logger.debug("Calling tool %s", name)
        return await tool.handler(validated)

    async def list_prompts(self) -> List[types.Prompt]:
        return self.prompts.list_prompts()

    async def get_prompt(
        self,
        name: str,
        arguments: Optional[Dict[str, str]],
    ) -> types.GetPromptResult:
        prompt = self.prompts.get(name)
        logger.debug("Rendering prompt %s", name)
        return prompt.render(arguments)

    async def list_resources(self) -> List[types.Resource]:
        return self.resources.list_resources()

    async def read_resource(self, uri: str) -> List[ReadResourceContents]:
        resource = self.resources.get(str(uri))
        text = await resource.supplier()
        return [ReadResourceContents(content=text, mime_type=resource.mime_type)]

    def build(self) -> Server:
        """Bind this facade to a low-level MCP `Server`."""
        server = Server(self.name, version=self.version)

        @server.list_tools()
        async def list_tools() -> List[types.Tool]:
            return await self.list_tools()

        # Arguments are validated by the tool's own model, not by the runtime.
        @server.call_tool(validate_input=False)
        async def call_tool(
            name: str,
            arguments: Dict[str, Any],
        ) -> types.CallToolResult:
            return await self.call_tool(name, arguments)

        @server.list_prompts()
        async def list_prompts() -> List[types.Prompt]:
            return await self.list_prompts()

        @server.get_prompt()
        async def get_prompt(
            name: str,
            arguments: Optional[Dict[str, str]],
        ) -> types.GetPromptResult:
            return await self.get_prompt(name, arguments)

        @server.list_resources()
        async def list_resources() -> List[types.Resource]:
            return await self.list_resources()

        @server.read_resource()
        async def read_resource(uri: AnyUrl) -> List[ReadResourceContents]:
            return await self.read_resource(str(uri))

        return server


def build_toolbox(
    http_client: HttpClient,
    image_client: Optional[ImageClient],
) -> ToolboxServer:
    """
    Register every tool, prompt and resource and return the facade.

    `image_client` is `None` when no Hugging Face token is configured.
    """
    tools = ToolRegistry()
    greeting_tools.register_tools(tools)
    calculator_tools.register_tools(tools)
    time_tools.register_tools(tools)
    geocode_tools.register_tools(tools, http=http_client)
    weather_tools.register_tools(tools, http=http_client)
    image_tools.register_tools(tools, image_client=image_client)

    prompts = PromptRegistry()
    register_prompts(prompts)

    resources = ResourceRegistry()
    register_resources(resources, name=SERVER_NAME, version=SERVER_VERSION)

    return ToolboxServer(tools, prompts, resources)


def create_server(
    config: Optional[ServerConfig] = None,
    settings: Optional[Settings] = None,
) -> Server:
    """
    Create the MCP server with all tools, prompts and resources registered.
    """
    settings = settings or get_settings()

    token = resolve_hf_token(config, settings)
    if token is None:
        logger.info("No Hugging Face token configured; image generation disabled")
    image_client = ImageClient(token) if token else None

    toolbox = build_toolbox(HttpClient.from_settings(settings), image_client)
    return toolbox.build()


async def _run_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """Entrypoint: serve over stdio."""
    settings = get_settings()
    setup_logging(settings.log_level)
    server = create_server(settings=settings)
    logger.info("Starting %s %s on stdio", SERVER_NAME, SERVER_VERSION)
    anyio.run(_run_stdio, server)


if __name__ == "__main__":
    main()
