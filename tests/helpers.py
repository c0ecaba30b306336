"""Builders shared by the test modules."""

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

from mcp import types

from workflow_mcp_server.discovery.live_tools import LiveToolTable
from workflow_mcp_server.discovery.workflow_registry import WorkflowRegistry
from workflow_mcp_server.models.schemas import ToolDefinition


def make_tool(name: str) -> ToolDefinition:
    async def handler(arguments):
        return f"{name} ran with {sorted(arguments)}"

    return ToolDefinition(
        name=name,
        description=f"The {name} tool",
        input_schema={"type": "object", "properties": {}},
        handler=handler,
    )


def make_loader(workflow_id: str, tools: dict) -> AsyncMock:
    return AsyncMock(return_value={
        "workflow": {"name": workflow_id.title(), "description": f"The {workflow_id} workflow"},
        "tools": dict(tools),
    })


def build_registry(catalogue: dict) -> WorkflowRegistry:
    loaders = {wid: make_loader(wid, tools) for wid, tools in catalogue.items()}
    metadata = {
        wid: {"name": wid.title(), "description": f"The {wid} workflow"}
        for wid in catalogue
    }
    return WorkflowRegistry(loaders, metadata)


def make_session(*, sampling: bool = True, reply_text: str | None = None) -> MagicMock:
    session = MagicMock()
    session.check_client_capability = MagicMock(return_value=sampling)
    session.send_tool_list_changed = AsyncMock()
    if reply_text is not None:
        session.create_message = AsyncMock(return_value=types.CreateMessageResult(
            role="assistant",
            content=types.TextContent(type="text", text=reply_text),
            model="test-model",
        ))
    else:
        session.create_message = AsyncMock()
    return session


def make_host(session: MagicMock | None = None, reserved=()) -> LiveToolTable:
    server = MagicMock()
    server.request_context.session = session or make_session()
    return LiveToolTable(server, reserved_names=reserved)


def write_workflow(root: Path, dirname: str, declaration: str | None, tools: dict[str, str]) -> Path:
    """Create ``root/dirname`` with an optional declaration and tool modules."""
    directory = root / dirname
    directory.mkdir(parents=True)
    if declaration is not None:
        (directory / "__init__.py").write_text(textwrap.dedent(declaration))
    for filename, body in tools.items():
        (directory / filename).write_text(textwrap.dedent(body))
    return directory


TOOL_BODY = """\
from workflow_mcp_server.models.schemas import ToolDefinition

tool = ToolDefinition(name="x", description="x", input_schema={}, handler=None)
"""


