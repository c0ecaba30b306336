"""Static workflow registry.

AUTO-GENERATED - DO NOT EDIT. Regenerate with ``workflow-mcp-scan``.
"""

from __future__ import annotations

from typing import Any


async def _load_diagnostics() -> dict[str, Any]:
    from workflow_mcp_server.tools.diagnostics import workflow
    from workflow_mcp_server.tools.diagnostics import doctor as _tool_0

    return {
        "workflow": workflow,
        "tools": {
            "doctor": _tool_0.tool,
        },
    }


async def _load_macos_project() -> dict[str, Any]:
    from workflow_mcp_server.tools.macos_project import workflow
    from workflow_mcp_server.tools.macos_project import build_mac_proj as _tool_0

    return {
        "workflow": workflow,
        "tools": {
            "build_mac_proj": _tool_0.tool,
        },
    }


async def _load_macos_workspace() -> dict[str, Any]:
    from workflow_mcp_server.tools.macos_workspace import workflow
    from workflow_mcp_server.tools.macos_workspace import build_mac_ws as _tool_0
    from workflow_mcp_server.tools.macos_workspace import run_tests_mac_ws as _tool_1

    return {
        "workflow": workflow,
        "tools": {
            "build_mac_ws": _tool_0.tool,
            "run_tests_mac_ws": _tool_1.tool,
        },
    }


async def _load_simulator_management() -> dict[str, Any]:
    from workflow_mcp_server.tools.simulator_management import workflow
    from workflow_mcp_server.tools.simulator_management import boot_sim as _tool_0
    from workflow_mcp_server.tools.simulator_management import list_sims as _tool_1
    from workflow_mcp_server.tools.simulator_management import open_sim as _tool_2

    return {
        "workflow": workflow,
        "tools": {
            "boot_sim": _tool_0.tool,
            "list_sims": _tool_1.tool,
            "open_sim": _tool_2.tool,
        },
    }


async def _load_simulator_project() -> dict[str, Any]:
    from workflow_mcp_server.tools.simulator_project import workflow
    from workflow_mcp_server.tools.simulator_project import build_sim_proj as _tool_0
    from workflow_mcp_server.tools.simulator_project import list_sims as _tool_1

    return {
        "workflow": workflow,
        "tools": {
            "build_sim_proj": _tool_0.tool,
            "list_sims": _tool_1.tool,
        },
    }


async def _load_simulator_workspace() -> dict[str, Any]:
    from workflow_mcp_server.tools.simulator_workspace import workflow
    from workflow_mcp_server.tools.simulator_workspace import boot_sim as _tool_0
    from workflow_mcp_server.tools.simulator_workspace import build_run_sim_ws as _tool_1
    from workflow_mcp_server.tools.simulator_workspace import build_sim_ws as _tool_2
    from workflow_mcp_server.tools.simulator_workspace import list_sims as _tool_3

    return {
        "workflow": workflow,
        "tools": {
            "boot_sim": _tool_0.tool,
            "build_run_sim_ws": _tool_1.tool,
            "build_sim_ws": _tool_2.tool,
            "list_sims": _tool_3.tool,
        },
    }


async def _load_swift_package() -> dict[str, Any]:
    from workflow_mcp_server.tools.swift_package import workflow
    from workflow_mcp_server.tools.swift_package import swift_package_build as _tool_0
    from workflow_mcp_server.tools.swift_package import swift_package_test as _tool_1

    return {
        "workflow": workflow,
        "tools": {
            "swift_package_build": _tool_0.tool,
            "swift_package_test": _tool_1.tool,
        },
    }


WORKFLOW_LOADERS = {
    "diagnostics": _load_diagnostics,
    "macos-project": _load_macos_project,
    "macos-workspace": _load_macos_workspace,
    "simulator-management": _load_simulator_management,
    "simulator-project": _load_simulator_project,
    "simulator-workspace": _load_simulator_workspace,
    "swift-package": _load_swift_package,
}

WORKFLOW_METADATA: dict[str, dict[str, Any]] = {
    "diagnostics": {
        "name": "Diagnostics",
        "description": "Check the local toolchain: Xcode, command line tools and Swift versions. Use when builds fail for environment reasons.",
        "platforms": ["iOS", "macOS"],
        "capabilities": ["diagnostics"],
    },
    "macos-project": {
        "name": "macOS Project Development",
        "description": "Build macOS apps from .xcodeproj files.",
        "platforms": ["macOS"],
        "targets": ["native"],
        "project_types": ["project"],
        "capabilities": ["build"],
    },
    "macos-workspace": {
        "name": "macOS Workspace Development",
        "description": "Build and test macOS apps from .xcworkspace files.",
        "platforms": ["macOS"],
        "targets": ["native"],
        "project_types": ["workspace"],
        "capabilities": ["build", "test"],
    },
    "simulator-management": {
        "name": "Simulator Management",
        "description": "Tools for managing iOS simulators outside a project: list available simulators, boot them, and open the Simulator app.",
        "platforms": ["iOS"],
        "targets": ["simulator"],
        "capabilities": ["simulator-management"],
    },
    "simulator-project": {
        "name": "iOS Simulator Project Development",
        "description": "Complete iOS development workflow for .xcodeproj files targeting simulators. Build apps and manage simulators.",
        "platforms": ["iOS"],
        "targets": ["simulator"],
        "project_types": ["project"],
        "capabilities": ["build", "simulator-management"],
    },
    "simulator-workspace": {
        "name": "iOS Simulator Workspace Development",
        "description": "Complete iOS development workflow for .xcworkspace files (CocoaPods, SPM) targeting simulators. Build, run and manage simulators.",
        "platforms": ["iOS"],
        "targets": ["simulator"],
        "project_types": ["workspace"],
        "capabilities": ["build", "run", "simulator-management"],
    },
    "swift-package": {
        "name": "Swift Package Manager",
        "description": "Build and test Swift packages with the Swift Package Manager. Use when there is a Package.swift and no Xcode project.",
        "platforms": ["iOS", "macOS"],
        "project_types": ["swift-package"],
        "capabilities": ["build", "test"],
    },
}
