"""Workflow MCP Server: tools are activated one workflow at a time."""

import asyncio
import sys
from typing import Any, Dict, Optional

import structlog
from mcp import types
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool

from . import __version__
from .config import WorkflowServerConfig
from .discovery.activator import ToolActivator
from .discovery.classifier import TaskClassifier
from .discovery.live_tools import LiveToolTable
from .discovery.meta_tools import META_TOOL_NAMES, MetaTools
from .discovery.workflow_registry import WorkflowRegistry
from .utils.log_setup import configure_logging

logger = structlog.get_logger(__name__)

SERVER_NAME = "workflow-mcp-server"


class WorkflowMCPServer:
    """MCP server whose callable tools follow the active workflows."""

    def __init__(
        self,
        config: Optional[WorkflowServerConfig] = None,
        registry: Optional[WorkflowRegistry] = None,
    ):
        self.config = config or WorkflowServerConfig()
        self.server = Server(SERVER_NAME)

        # Registry is metadata only until a workflow is activated
        self.registry = registry or WorkflowRegistry.from_generated()
        self.tool_table = LiveToolTable(self.server, reserved_names=META_TOOL_NAMES)
        self.activator = ToolActivator(self.registry)
        self.classifier = TaskClassifier(self.registry, self.activator, self.config)
        self.meta_tools = MetaTools(
            self.registry,
            self.activator,
            self.classifier,
            self.tool_table,
            dynamic=self.config.dynamic_tools,
        )

        self._register_handlers()

    # ------------------------------------------------------------------
    # Start-up activation
    # ------------------------------------------------------------------

    async def seed_workflows(self) -> None:
        """Activate the configured workflows (all of them in static mode)."""
        if self.config.dynamic_tools:
            workflow_ids = self.config.enabled_workflow_ids
        else:
            workflow_ids = self.registry.list_workflow_ids()
        if not workflow_ids:
            logger.info("No workflows seeded; waiting for discovery")
            return

        outcome = await self.activator.activate(self.tool_table, workflow_ids, additive=True)
        if outcome.unknown or outcome.failed or outcome.conflicts:
            logger.warning("Workflow seeding incomplete", summary=outcome.summary())
        logger.info(
            "Seeded workflows",
            workflows=outcome.enabled,
            tool_count=len(self.tool_table),
        )

    # ------------------------------------------------------------------
    # MCP handlers
    # ------------------------------------------------------------------

    def _register_handlers(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            tools = self.meta_tools.get_tools() + self.tool_table.list_tools()
            logger.info("list_tools", count=len(tools))
            return tools

        @self.server.call_tool()
        async def call_tool(name: str, arguments: Dict[str, Any]) -> list[types.TextContent]:
            return await self.handle_call(name, arguments or {})

    async def handle_call(self, name: str, arguments: Dict[str, Any]) -> list[types.TextContent]:
        """Run one tool call; every failure becomes a text response."""
        try:
            logger.info("call_tool", tool=name)

            # Meta tools
            if name in META_TOOL_NAMES:
                text = await self.meta_tools.call_tool(name, arguments, self._current_session())
                return [types.TextContent(type="text", text=text)]

            # Workflow tools
            definition = self.tool_table.get(name)
            if definition is None:
                return [types.TextContent(
                    type="text",
                    text=(
                        f"Unknown tool: {name}. It may belong to a workflow that is not "
                        "active; use discover_tools or enable_workflows first."
                    ),
                )]

            result = await definition.handler(arguments)
            if isinstance(result, str):
                return [types.TextContent(type="text", text=result)]
            return list(result)

        except Exception as e:
            logger.error("Unexpected error", error=str(e), tool=name, exc_info=True)
            return [types.TextContent(
                type="text",
                text=f"Error: {e}",
            )]

    def _current_session(self) -> Any:
        try:
            return self.server.request_context.session
        except LookupError:
            return None

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self) -> None:
        logger.info(
            "Starting workflow MCP server",
            dynamic_tools=self.config.dynamic_tools,
            workflow_count=len(self.registry),
        )
        await self.seed_workflows()
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=types.ServerCapabilities(
                        tools=types.ToolsCapability(listChanged=True),
                    ),
                ),
            )


# ------------------------------------------------------------------
# Entry points
# ------------------------------------------------------------------


async def async_main() -> None:
    config = WorkflowServerConfig()
    configure_logging(config.log_level)

    try:
        server = WorkflowMCPServer(config)
        await server.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error("Server error", error=str(e), exc_info=True)
        sys.exit(1)


def main() -> None:
    """Synchronous entry point for console script."""
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
