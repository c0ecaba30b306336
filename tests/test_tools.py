"""Tests for the workflow tool handlers, with commands stubbed out."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from workflow_mcp_server.tools.diagnostics import doctor
from workflow_mcp_server.tools.simulator_management import list_sims
from workflow_mcp_server.tools.simulator_workspace import build_run_sim_ws, build_sim_ws
from workflow_mcp_server.tools.swift_package import swift_package_build
from workflow_mcp_server.utils.command import CommandResult
from workflow_mcp_server.utils.schema import input_schema
from workflow_mcp_server.utils.xcodebuild import (
    SimulatorWorkspaceParams,
    simulator_destination,
    xcodebuild_command,
)


def ok(output: str = "") -> CommandResult:
    return CommandResult(["stub"], 0, output)


class TestXcodebuildCommand:
    def test_workspace_build(self):
        command = xcodebuild_command(
            workspace_path="App.xcworkspace",
            scheme="App",
            configuration="Debug",
            destination=simulator_destination("UDID-1"),
            extra_args=["-quiet"],
        )

        assert command == [
            "xcodebuild",
            "-workspace", "App.xcworkspace",
            "-scheme", "App",
            "-configuration", "Debug",
            "-destination", "platform=iOS Simulator,id=UDID-1",
            "-skipMacroValidation",
            "-quiet",
            "build",
        ]

    def test_no_action(self):
        command = xcodebuild_command(
            project_path="App.xcodeproj",
            scheme="App",
            configuration="Release",
            destination="platform=macOS",
            extra_args=["-showBuildSettings"],
            action=None,
        )

        assert command[1:3] == ["-project", "App.xcodeproj"]
        assert command[-1] == "-showBuildSettings"

    def test_workspace_path_is_validated(self):
        with pytest.raises(ValidationError):
            SimulatorWorkspaceParams(workspace_path="App.xcodeproj", scheme="App", simulator_id="x")


class TestInputSchema:
    def test_strips_titles(self):
        schema = input_schema(SimulatorWorkspaceParams)

        assert schema["type"] == "object"
        assert "title" not in schema
        assert set(schema["required"]) == {"workspace_path", "scheme", "simulator_id"}
        assert "title" not in schema["properties"]["scheme"]
        assert schema["properties"]["scheme"]["description"] == "Scheme to build"


class TestListSims:
    async def test_formats_devices(self):
        payload = {"devices": {
            "com.apple.CoreSimulator.SimRuntime.iOS-18-0": [
                {"name": "iPhone 16", "udid": "ABC", "state": "Shutdown"},
            ],
            "com.apple.CoreSimulator.SimRuntime.iOS-17-0": [],
        }}
        runner = AsyncMock(return_value=ok(json.dumps(payload)))

        with patch.object(list_sims, "run_command", runner):
            text = await list_sims.tool.handler({})

        assert text == "iOS-18-0\n  - iPhone 16 (ABC) Shutdown"
        assert "available" in runner.await_args.args[0]

    async def test_tolerates_stderr_noise_and_partial_records(self):
        payload = {"devices": {
            "com.apple.CoreSimulator.SimRuntime.iOS-18-0": [
                {"name": "iPhone 16", "udid": "ABC", "state": "Booted"},
                {"udid": "NO-NAME"},
            ],
        }}
        output = "simctl: warning: stale runtime\n" + json.dumps(payload)
        runner = AsyncMock(return_value=ok(output))

        with patch.object(list_sims, "run_command", runner):
            text = await list_sims.tool.handler({})

        assert text == "iOS-18-0\n  - iPhone 16 (ABC) Booted"

    async def test_unreadable_output(self):
        runner = AsyncMock(return_value=ok("simctl: something went wrong"))

        with patch.object(list_sims, "run_command", runner):
            text = await list_sims.tool.handler({})

        assert text.startswith("Could not parse the simulator list.")
        assert "something went wrong" in text

    async def test_command_failure(self):
        runner = AsyncMock(return_value=CommandResult(["xcrun"], 127, "Command not found: xcrun"))

        with patch.object(list_sims, "run_command", runner):
            text = await list_sims.tool.handler({"available_only": False})

        assert text.startswith("Listing simulators failed (exit code 127).")
        assert "available" not in runner.await_args.args[0]


class TestBuildTools:
    async def test_build_sim_ws(self):
        runner = AsyncMock(return_value=ok("** BUILD SUCCEEDED **"))

        with patch.object(build_sim_ws, "run_command", runner):
            text = await build_sim_ws.tool.handler({
                "workspace_path": "App.xcworkspace",
                "scheme": "App",
                "simulator_id": "UDID-1",
            })

        assert text.startswith("iOS simulator build of App succeeded.")
        assert "platform=iOS Simulator,id=UDID-1" in runner.await_args.args[0]

    async def test_build_run_sim_ws(self):
        settings = (
            "    BUILT_PRODUCTS_DIR = /tmp/Build/Products/Debug-iphonesimulator\n"
            "    FULL_PRODUCT_NAME = App.app\n"
            "    PRODUCT_BUNDLE_IDENTIFIER = com.example.App\n"
        )
        runner = AsyncMock(side_effect=[ok(), ok(settings), ok(), ok("com.example.App: 123")])

        with patch.object(build_run_sim_ws, "run_command", runner):
            text = await build_run_sim_ws.tool.handler({
                "workspace_path": "App.xcworkspace",
                "scheme": "App",
                "simulator_id": "UDID-1",
            })

        assert text.startswith("Build and run of App succeeded.")
        install, launch = runner.await_args_list[2].args[0], runner.await_args_list[3].args[0]
        assert install[-1] == "/tmp/Build/Products/Debug-iphonesimulator/App.app"
        assert launch[-1] == "com.example.App"

    async def test_swift_package_build(self):
        runner = AsyncMock(return_value=ok())

        with patch.object(swift_package_build, "run_command", runner):
            await swift_package_build.tool.handler({"package_path": "/src/pkg", "target": "Core"})

        assert runner.await_args.args[0] == [
            "swift", "build", "--package-path", "/src/pkg", "-c", "debug", "--target", "Core",
        ]

    async def test_invalid_arguments_raise(self):
        with pytest.raises(ValidationError):
            await swift_package_build.tool.handler({"package_path": "/src", "configuration": "fast"})


class TestDoctor:
    async def test_reports_each_check(self):
        runner = AsyncMock(side_effect=[
            ok("Xcode 16.0"),
            ok("/Applications/Xcode.app"),
            CommandResult(["swift"], 127, "Command not found: swift"),
            ok("iOS 18.0"),
        ])

        with patch.object(doctor, "run_command", runner):
            text = await doctor.tool.handler({})

        assert "## Xcode: ok\nXcode 16.0" in text
        assert "## Swift: FAILED" in text
