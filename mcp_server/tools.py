from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp import types
from pydantic import BaseModel, ValidationError, create_model

from core.errors import DuplicateToolError, InvalidToolArgumentsError
from core.swapi import SwapiClient


JSON_TYPES = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
}


def text_result(text: str) -> types.CallToolResult:
    return types.CallToolResult(content=[types.TextContent(type="text", text=text)])


ToolHandler = Callable[[Dict[str, Any]], Awaitable[types.CallToolResult]]


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    title: str
    description: str
    input_shape: Dict[str, type]
    handler: ToolHandler

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                param: {"type": JSON_TYPES[kind]}
                for param, kind in self.input_shape.items()
            },
            "required": list(self.input_shape),
        }

    def schema(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.input_schema(),
        )

    def arguments_model(self) -> type[BaseModel]:
        fields = {param: (kind, ...) for param, kind in self.input_shape.items()}
        return create_model(f"{self.name}_arguments", **fields)

    def validate_arguments(self, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Check presence and primitive type of every declared parameter.
        Unknown keys are dropped, not rejected.
        """
        try:
            parsed = self.arguments_model().model_validate(arguments or {})
        except ValidationError as exc:
            problems = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            ]
            raise InvalidToolArgumentsError(
                f"Invalid arguments for tool {self.name}: " + "; ".join(problems),
                details={"tool": self.name, "errors": problems},
            ) from exc
        return parsed.model_dump()


class ToolRegistry:
    """
    Fixed catalog of tools for one server instance.
    Names are unique; registration order is kept for tools/list.
    """

    def __init__(self):
        self._tools: Dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        if descriptor.name in self._tools:
            raise DuplicateToolError(f"Tool '{descriptor.name}' already registered")
        self._tools[descriptor.name] = descriptor

    def lookup(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def list_tools(self) -> List[ToolDescriptor]:
        return list(self._tools.values())

    def names(self) -> List[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def render_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


# -------- SWAPI TOOLS --------

def _search_character(client: SwapiClient) -> ToolHandler:
    async def handler(arguments: Dict[str, Any]) -> types.CallToolResult:
        data = await client.search_character(arguments["name"])
        return text_result(render_json(data))

    return handler


def _get_planet(client: SwapiClient) -> ToolHandler:
    async def handler(arguments: Dict[str, Any]) -> types.CallToolResult:
        data = await client.get_planet(arguments["id"])
        return text_result(render_json(data))

    return handler


def _get_film(client: SwapiClient) -> ToolHandler:
    async def handler(arguments: Dict[str, Any]) -> types.CallToolResult:
        data = await client.get_film(arguments["id"])
        return text_result(render_json(data))

    return handler


# -------- REGISTRY --------

def build_registry(client: SwapiClient) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(
        ToolDescriptor(
            name="search_character",
            title="Search Star Wars Character",
            description="Search for a Star Wars character by name",
            input_shape={"name": str},
            handler=_search_character(client),
        )
    )
    registry.register(
        ToolDescriptor(
            name="get_planet",
            title="Get Planet by ID",
            description="Get detailed planet info by its ID",
            input_shape={"id": str},
            handler=_get_planet(client),
        )
    )
    registry.register(
        ToolDescriptor(
            name="get_film",
            title="Get Film by ID",
            description="Get detailed film info by its ID",
            input_shape={"id": str},
            handler=_get_film(client),
        )
    )
    return registry
