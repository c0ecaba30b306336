"""Data model for workflows, tools and operator requests.

Workflow metadata and operator requests are pydantic models; tool
definitions are plain dataclasses compared by identity so that the same
tool referenced from two workflows is recognisably the same object.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from mcp import types
from pydantic import BaseModel, Field, field_validator

ToolResult = Union[str, List[types.TextContent]]
ToolHandler = Callable[[Dict[str, Any]], Awaitable[ToolResult]]

# Optional list-valued declaration fields, in declaration order.
OPTIONAL_LIST_FIELDS = ("platforms", "targets", "project_types", "capabilities")


def workflow_id_from_dirname(dirname: str) -> str:
    """``simulator_workspace`` -> ``simulator-workspace``."""
    return dirname.replace("_", "-")


class WorkflowDescriptor(BaseModel):
    """Immutable metadata for one workflow, usable without loading it."""

    id: str = Field(description="Workflow id derived from its directory name")
    display_name: str = Field(description="Human-readable workflow name")
    description: str = Field(description="What the workflow is for")
    platforms: Optional[List[str]] = Field(default=None)
    targets: Optional[List[str]] = Field(default=None)
    project_types: Optional[List[str]] = Field(default=None)
    capabilities: Optional[List[str]] = Field(default=None)

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def from_metadata(cls, workflow_id: str, metadata: Dict[str, Any]) -> "WorkflowDescriptor":
        """Build a descriptor from a generated ``WORKFLOW_METADATA`` record."""
        extras = {key: metadata[key] for key in OPTIONAL_LIST_FIELDS if key in metadata}
        return cls(
            id=workflow_id,
            display_name=metadata["name"],
            description=metadata["description"],
            **extras,
        )

    def to_metadata(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"name": self.display_name, "description": self.description}
        for key in OPTIONAL_LIST_FIELDS:
            value = getattr(self, key)
            if value is not None:
                record[key] = list(value)
        return record


@dataclass(frozen=True, eq=False)
class ToolDefinition:
    """One invocable tool: name, description, JSON input schema, handler."""

    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: ToolHandler

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


@dataclass
class LoadedWorkflow:
    """Result of resolving a workflow loader."""

    descriptor: WorkflowDescriptor
    tools: Dict[str, ToolDefinition] = field(default_factory=dict)


# ─── Operator requests ───────────────────────────────────────────────


class DiscoverToolsRequest(BaseModel):
    """Arguments of the ``discover_tools`` meta tool."""

    task_description: str = Field(
        description="Natural-language description of the development task"
    )
    additive: bool = Field(
        default=False,
        description="Add to the active workflows instead of replacing them",
    )

    model_config = {"extra": "forbid"}


class EnableWorkflowsRequest(BaseModel):
    """Arguments of the ``enable_workflows`` meta tool."""

    workflow_ids: List[str] = Field(description="Workflow ids to activate")
    additive: bool = Field(
        default=False,
        description="Add to the active workflows instead of replacing them",
    )

    model_config = {"extra": "forbid"}

    @field_validator("workflow_ids")
    @classmethod
    def validate_workflow_ids(cls, v: List[str]) -> List[str]:
        cleaned = [item.strip() for item in v if item.strip()]
        if not cleaned:
            raise ValueError("workflow_ids must contain at least one workflow id")
        return cleaned
