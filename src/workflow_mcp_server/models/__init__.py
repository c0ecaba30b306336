"""Pydantic models and dataclasses shared across the runtime."""

from .schemas import (
    DiscoverToolsRequest,
    EnableWorkflowsRequest,
    LoadedWorkflow,
    ToolDefinition,
    WorkflowDescriptor,
)

__all__ = [
    "DiscoverToolsRequest",
    "EnableWorkflowsRequest",
    "LoadedWorkflow",
    "ToolDefinition",
    "WorkflowDescriptor",
]
