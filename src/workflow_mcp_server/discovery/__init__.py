"""Workflow discovery: scanning, registry, activation and classification."""

from .activator import ActivationOutcome, ActiveToolSet, ToolActivator
from .classifier import TaskClassifier
from .live_tools import LiveToolTable
from .meta_tools import MetaTools
from .workflow_registry import WorkflowLoader, WorkflowRegistry

__all__ = [
    "ActivationOutcome",
    "ActiveToolSet",
    "LiveToolTable",
    "MetaTools",
    "TaskClassifier",
    "ToolActivator",
    "WorkflowLoader",
    "WorkflowRegistry",
]
