"""
In-memory registries for the tools, prompts and resources the server exposes.

Entries are added once while the server is being built and are read-only
afterwards. Registering a name (or resource URI) twice is a programming
error and raises `ValueError`; nothing is overwritten.

The registries never invoke handlers. The server facade looks an entry up,
validates the call arguments with the entry's model, and awaits the handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type

from mcp import types
from pydantic import AnyUrl

from .validation import ToolInput, input_schema, validate_arguments

ToolHandler = Callable[[Any], Awaitable[types.CallToolResult]]
PromptTemplate = Callable[[Any], List[types.PromptMessage]]
ResourceSupplier = Callable[[], Awaitable[str]]


@dataclass(frozen=True)
class RegisteredTool:
    name: str
    description: str
    input_model: Type[ToolInput]
    handler: ToolHandler

    def spec(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=input_schema(self.input_model),
        )

    def validate(self, arguments: Optional[Mapping[str, Any]]) -> ToolInput:
        return validate_arguments(self.name, self.input_model, arguments)


@dataclass(frozen=True)
class RegisteredPrompt:
    name: str
    title: str
    description: str
    args_model: Type[ToolInput]
    template: PromptTemplate

    def spec(self) -> types.Prompt:
        arguments = [
            types.PromptArgument(
                name=field.alias or field_name,
                description=field.description,
                required=field.is_required(),
            )
            for field_name, field in self.args_model.model_fields.items()
        ]
        return types.Prompt(
            name=self.name,
            title=self.title,
            description=self.description,
            arguments=arguments,
        )

    def render(self, arguments: Optional[Mapping[str, Any]]) -> types.GetPromptResult:
        args = validate_arguments(self.name, self.args_model, arguments)
        return types.GetPromptResult(
            description=self.description,
            messages=self.template(args),
        )


@dataclass(frozen=True)
class RegisteredResource:
    name: str
    uri: str
    title: str
    description: str
    mime_type: str
    supplier: ResourceSupplier

    def spec(self) -> types.Resource:
        return types.Resource(
            name=self.name,
            uri=AnyUrl(self.uri),
            title=self.title,
            description=self.description,
            mimeType=self.mime_type,
        )


class ToolRegistry:
    """
    Maps tool names to their argument model and async handler.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, RegisteredTool] = {}

    def add_tool(
        self,
        name: str,
        description: str,
        input_model: Type[ToolInput],
        handler: ToolHandler,
    ) -> None:
        if name in self._tools:
            raise ValueError(f"Tool '{name}' already registered")
        self._tools[name] = RegisteredTool(
            name=name,
            description=description,
            input_model=input_model,
            handler=handler,
        )

    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[types.Tool]:
        return [tool.spec() for tool in self._tools.values()]

    def get(self, name: str) -> RegisteredTool:
        if name not in self._tools:
            raise KeyError(f"Unknown tool '{name}'")
        return self._tools[name]


class PromptRegistry:
    def __init__(self) -> None:
        self._prompts: Dict[str, RegisteredPrompt] = {}

    def add_prompt(
        self,
        name: str,
        title: str,
        description: str,
        args_model: Type[ToolInput],
        template: PromptTemplate,
    ) -> None:
        if name in self._prompts:
            raise ValueError(f"Prompt '{name}' already registered")
        self._prompts[name] = RegisteredPrompt(
            name=name,
            title=title,
            description=description,
            args_model=args_model,
            template=template,
        )

    def list_prompts(self) -> List[types.Prompt]:
        return [prompt.spec() for prompt in self._prompts.values()]

    def get(self, name: str) -> RegisteredPrompt:
        if name not in self._prompts:
            raise KeyError(f"Unknown prompt '{name}'")
        return self._prompts[name]


class ResourceRegistry:
    """
    Maps resource URIs to suppliers. Names are unique as well as URIs.
    """

    def __init__(self) -> None:
        self._resources: Dict[str, RegisteredResource] = {}

    def add_resource(
        self,
        name: str,
        uri: str,
        title: str,
        description: str,
        mime_type: str,
        supplier: ResourceSupplier,
    ) -> None:
        if uri in self._resources:
            raise ValueError(f"Resource URI '{uri}' already registered")
        if any(res.name == name for res in self._resources.values()):
            raise ValueError(f"Resource '{name}' already registered")
        self._resources[uri] = RegisteredResource(
            name=name,
            uri=uri,
            title=title,
            description=description,
            mime_type=mime_type,
            supplier=supplier,
        )

    def list_resources(self) -> List[types.Resource]:
        return [res.spec() for res in self._resources.values()]

    def get(self, uri: str) -> RegisteredResource:
        if uri not in self._resources:
            raise KeyError(f"Unknown resource '{uri}'")
        return self._resources[uri]
