"""Workflow packages.

Each subpackage declares a ``workflow`` dict in its ``__init__`` and exposes
one ``tool`` per module. Run ``workflow-mcp-scan`` after adding or removing
workflows or tool modules.
"""
