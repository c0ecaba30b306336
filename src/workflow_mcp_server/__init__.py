"""Workflow-scoped MCP server with lazily activated tool bundles."""

__version__ = "0.1.0"
