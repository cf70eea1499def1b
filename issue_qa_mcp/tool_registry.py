"""
Tool registry: maps tool names to their input model and async handler
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp.shared.exceptions import McpError
from mcp.types import TextContent, Tool
from pydantic import BaseModel, ConfigDict, ValidationError

from issue_qa_mcp.errors import internal_error, invalid_params, method_not_found

logger = logging.getLogger(__name__)


class ToolInput(BaseModel):
    """Base class for tool arguments. Field aliases are the camelCase wire names."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


ToolHandler = Callable[[Any], Awaitable[str]]


@dataclass
class ToolDefinition:
    name: str
    description: str
    input_model: Type[ToolInput]
    handler: ToolHandler

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


def text_content(text: str) -> List[TextContent]:
    return [TextContent(type="text", text=text)]


def to_json(payload: Any) -> str:
    """Serialize a provider payload; values JSON can't represent are stringified"""
    return json.dumps(payload, default=str, ensure_ascii=False)


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        problems.append(f"{location}: {item.get('msg')}")
    return "; ".join(problems)


class ToolRegistry:
    """Static name -> tool mapping with protocol-level error semantics"""

    def __init__(self, tools: Optional[List[ToolDefinition]] = None):
        self._tools: Dict[str, ToolDefinition] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: ToolDefinition):
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def extend(self, tools: List[ToolDefinition]):
        for tool in tools:
            self.register(tool)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[Tool]:
        return [tool.to_tool() for tool in self._tools.values()]

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Validate arguments and run the named tool.

        Raises McpError: METHOD_NOT_FOUND for unknown names, INVALID_PARAMS for bad
        arguments, INTERNAL_ERROR wrapping any untyped failure. Typed errors raised by
        handlers pass through unchanged.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise method_not_found(f"Herramienta desconocida: {name}")

        try:
            args = tool.input_model.model_validate(arguments or {})
        except ValidationError as e:
            raise invalid_params(f"Parámetros inválidos para {name}: {_describe_validation_error(e)}")

        logger.info(f"🔧 Executing tool '{name}'")
        try:
            text = await tool.handler(args)
        except McpError as e:
            logger.error(f"Tool '{name}' failed: {e.error.message}")
            raise
        except Exception as e:
            logger.error(f"Tool '{name}' raised {type(e).__name__}: {e}")
            raise internal_error(f"Error ejecutando {name}: {e}")

        return text_content(text)
