"""Shared fixtures for tests."""

from unittest.mock import MagicMock

import pytest

from workflow_mcp_server.discovery.live_tools import LiveToolTable
from workflow_mcp_server.discovery.workflow_registry import WorkflowRegistry
from workflow_mcp_server.models.schemas import ToolDefinition

from helpers import build_registry, make_host, make_session, make_tool


@pytest.fixture
def shared_tool() -> ToolDefinition:
    return make_tool("list_sims")


@pytest.fixture
def catalogue(shared_tool) -> dict:
    return {
        "alpha": {"a_build": make_tool("a_build"), "a_run": make_tool("a_run")},
        "beta": {"b_build": make_tool("b_build"), "b_test": make_tool("b_test")},
        "gamma": {"list_sims": shared_tool, "g_boot": make_tool("g_boot")},
        "delta": {"list_sims": shared_tool},
    }


@pytest.fixture
def registry(catalogue) -> WorkflowRegistry:
    return build_registry(catalogue)


@pytest.fixture
def session() -> MagicMock:
    return make_session()


@pytest.fixture
def host(session) -> LiveToolTable:
    return make_host(session)
