"""The set of workflow tools currently callable on the MCP server."""

from __future__ import annotations

from typing import Iterable

import structlog
from mcp.server import Server
from mcp.types import Tool

from ..errors import RegistrationConflictError
from ..models.schemas import ToolDefinition

logger = structlog.get_logger(__name__)


class LiveToolTable:
    """Registration surface the activator drives.

    ``list_tools`` feeds the server's ``tools/list`` handler and ``get``
    feeds ``tools/call``, so a tool is callable exactly while it is
    registered here.
    """

    def __init__(self, server: Server | None = None, reserved_names: Iterable[str] = ()):
        self._server = server
        self._reserved = frozenset(reserved_names)
        self._tools: dict[str, ToolDefinition] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, definition: ToolDefinition) -> None:
        """Bind ``definition.name``. Re-registering the same object is a no-op."""
        name = definition.name
        if name in self._reserved:
            raise RegistrationConflictError(name, f"Tool name '{name}' is reserved by the server")
        existing = self._tools.get(name)
        if existing is not None and existing is not definition:
            raise RegistrationConflictError(name)
        self._tools[name] = definition
        logger.debug("Registered tool", tool=name)

    def unregister(self, name: str) -> bool:
        removed = self._tools.pop(name, None) is not None
        if removed:
            logger.debug("Unregistered tool", tool=name)
        return removed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    @property
    def tool_names(self) -> list[str]:
        return sorted(self._tools)

    def list_tools(self) -> list[Tool]:
        return [self._tools[name].to_mcp_tool() for name in self.tool_names]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    # ------------------------------------------------------------------
    # Notification
    # ------------------------------------------------------------------

    async def notify_list_changed(self) -> bool:
        """Send ``notifications/tools/list_changed`` to the connected client.

        Returns False when there is no request in flight (start-up seeding);
        the client reads the full list on its first ``tools/list`` anyway.
        """
        if self._server is None:
            return False
        try:
            session = self._server.request_context.session
        except LookupError:
            logger.debug("No active session; tool list change not sent")
            return False
        await session.send_tool_list_changed()
        logger.info("Sent tool list changed notification", tool_count=len(self._tools))
        return True
