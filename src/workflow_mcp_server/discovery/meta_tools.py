"""Always-registered tools for selecting which workflows are active."""

from __future__ import annotations

import json
from typing import Any

from mcp.server.session import ServerSession
from mcp.types import Tool
from pydantic import ValidationError

from ..models.schemas import DiscoverToolsRequest, EnableWorkflowsRequest
from .activator import ToolActivator
from .classifier import TaskClassifier
from .live_tools import LiveToolTable
from .workflow_registry import WorkflowRegistry

# ─── Tool definitions ────────────────────────────────────────────────

DISCOVER_TOOLS = Tool(
    name="discover_tools",
    description=(
        "Analyzes a natural language task description and enables the most relevant "
        "development workflow. Prefers project/workspace workflows (simulator, macOS) "
        "and also covers task-based workflows (simulator management, diagnostics) "
        "and Swift packages."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "task_description": {
                "type": "string",
                "description": (
                    "A detailed description of the development task, e.g. 'Build my iOS "
                    "app and run it on the iPhone 16 simulator.' State whether you use "
                    "a .xcworkspace or a .xcodeproj."
                ),
            },
            "additive": {
                "type": "boolean",
                "description": (
                    "If true, add the discovered tools to the active workflows. "
                    "If false (default), replace the active workflows."
                ),
            },
        },
        "required": ["task_description"],
    },
)

ENABLE_WORKFLOWS = Tool(
    name="enable_workflows",
    description=(
        "Enable one or more workflows by id without automatic discovery. "
        "Use list_workflows to see the available ids."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "workflow_ids": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 1,
                "description": "Workflow ids, e.g. [\"simulator-workspace\"]",
            },
            "additive": {
                "type": "boolean",
                "description": (
                    "If true, add to the active workflows. "
                    "If false (default), replace the active workflows."
                ),
            },
        },
        "required": ["workflow_ids"],
    },
)

LIST_WORKFLOWS = Tool(
    name="list_workflows",
    description="Show every available workflow, whether it is active, and the active tools.",
    inputSchema={"type": "object", "properties": {}},
)

META_TOOL_DEFINITIONS: list[Tool] = [DISCOVER_TOOLS, ENABLE_WORKFLOWS, LIST_WORKFLOWS]

META_TOOL_NAMES: set[str] = {t.name for t in META_TOOL_DEFINITIONS}


class MetaTools:
    """Handles the workflow selection tools."""

    def __init__(
        self,
        registry: WorkflowRegistry,
        activator: ToolActivator,
        classifier: TaskClassifier,
        host: LiveToolTable,
        *,
        dynamic: bool = True,
    ):
        self._registry = registry
        self._activator = activator
        self._classifier = classifier
        self._host = host
        self._dynamic = dynamic

    def get_tools(self) -> list[Tool]:
        if self._dynamic:
            return list(META_TOOL_DEFINITIONS)
        return [t for t in META_TOOL_DEFINITIONS if t.name != DISCOVER_TOOLS.name]

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any],
        session: ServerSession | None = None,
    ) -> str:
        """Dispatch a meta tool call. Returns a text string."""
        if name == DISCOVER_TOOLS.name and self._dynamic:
            return await self._discover_tools(arguments, session)
        if name == ENABLE_WORKFLOWS.name:
            return await self._enable_workflows(arguments)
        if name == LIST_WORKFLOWS.name:
            return self._list_workflows()
        raise ValueError(f"Unknown meta tool: {name}")

    # ─── Handlers ──────────────────────────────────────────────────

    async def _discover_tools(
        self, arguments: dict[str, Any], session: ServerSession | None
    ) -> str:
        try:
            request = DiscoverToolsRequest(**arguments)
        except ValidationError as e:
            return f"Invalid arguments for discover_tools: {e}"
        if session is None:
            return "discover_tools requires an active client session."
        return await self._classifier.classify(
            session, self._host, request.task_description, additive=request.additive
        )

    async def _enable_workflows(self, arguments: dict[str, Any]) -> str:
        try:
            request = EnableWorkflowsRequest(**arguments)
        except ValidationError as e:
            return f"Invalid arguments for enable_workflows: {e}"
        outcome = await self._activator.activate(
            self._host, request.workflow_ids, additive=request.additive
        )
        return outcome.summary()

    def _list_workflows(self) -> str:
        active = set(self._activator.active_workflows())
        workflows = []
        for workflow_id in self._registry.list_workflow_ids():
            descriptor = self._registry.get_metadata(workflow_id)
            record: dict[str, Any] = {"id": workflow_id, "active": workflow_id in active}
            if descriptor is not None:
                record.update(descriptor.to_metadata())
            workflows.append(record)
        return json.dumps({
            "workflows": workflows,
            "active_workflows": sorted(active),
            "active_tools": self._activator.active_tool_names(),
        }, indent=2)
