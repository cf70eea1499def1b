"""
MCP Server for GitHub/GitLab issue QA analysis
Provides QA analysis tools plus generic HTTP, database and web search tools
"""
import asyncio
import logging
import sys
from typing import Any, List, Optional

from mcp import types
from mcp.server import Server
from mcp.types import TextContent, Tool

from issue_qa_mcp.settings import Settings
from issue_qa_mcp.tool_registry import ToolRegistry
from issue_qa_mcp.tools import (
    create_db_tools,
    create_github_tools,
    create_gitlab_tools,
    create_http_tools,
    create_web_tools,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[str] = None):
    """Log to stderr; stdout carries the MCP stdio stream"""
    logging.basicConfig(
        level=level or Settings.LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_registry() -> ToolRegistry:
    """Assemble the tool set from current settings. GitLab tools need GITLAB_ACCESS_TOKEN."""
    registry = ToolRegistry()

    if Settings.GITLAB_ACCESS_TOKEN:
        registry.extend(create_gitlab_tools(Settings.GITLAB_URL, Settings.GITLAB_ACCESS_TOKEN))
        logger.info(f"[MCP] GitLab tools enabled for {Settings.GITLAB_URL}")
    else:
        logger.warning("⚠️  GitLab tools not available (GITLAB_ACCESS_TOKEN missing)")

    registry.extend(create_http_tools())
    registry.extend(create_db_tools())
    registry.extend(create_web_tools())
    registry.extend(create_github_tools(default_access_token=Settings.GITHUB_ACCESS_TOKEN))
    return registry


class QAMCPServer:
    """MCP Server exposing the issue QA tools"""

    def __init__(self, registry: Optional[ToolRegistry] = None):
        Settings.reload_config()
        for warning in Settings.validate():
            logger.warning(f"[MCP] {warning}")

        self.server = Server(Settings.SERVER_NAME, version=Settings.SERVER_VERSION)
        self.registry = registry if registry is not None else build_registry()
        self._register_handlers()

    def _register_handlers(self):
        """Register MCP protocol handlers"""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            return self.registry.list_tools()

        # McpError must reach the session as a JSON-RPC error, not an isError result
        async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
            content = await self.call_tool(request.params.name, request.params.arguments)
            return types.ServerResult(types.CallToolResult(content=content, isError=False))

        self.server.request_handlers[types.CallToolRequest] = call_tool

    async def call_tool(self, name: str, arguments: Any) -> List[TextContent]:
        return await self.registry.dispatch(name, arguments)

    async def run(self):
        """Run the MCP server over stdio"""
        from mcp.server.stdio import stdio_server

        logger.info(f"🚀 MCP server started with {len(self.registry)} tools available")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


async def main():
    """Entry point for MCP server"""
    server = QAMCPServer()
    await server.run()


def cli():
    configure_logging()
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


if __name__ == "__main__":
    cli()
