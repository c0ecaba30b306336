"""Exceptions raised by the workflow runtime."""

from typing import Optional


class WorkflowMCPError(Exception):
    """Base exception for workflow runtime errors."""


class ScanError(WorkflowMCPError):
    """The tool source tree cannot be scanned at all."""


class WorkflowLoadError(WorkflowMCPError):
    """A workflow loader raised or returned something unusable."""

    def __init__(self, workflow_id: str, message: str):
        super().__init__(f"Failed to load workflow '{workflow_id}': {message}")
        self.workflow_id = workflow_id


class RegistrationConflictError(WorkflowMCPError):
    """A tool name is already bound to a different definition."""

    def __init__(self, tool_name: str, message: Optional[str] = None):
        super().__init__(
            message or f"Tool '{tool_name}' is already registered with a different definition"
        )
        self.tool_name = tool_name


class ClassificationParseError(WorkflowMCPError):
    """The client's completion reply is not a JSON array of strings."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text
