from typing import Any, Dict

from ...models.schemas import ToolDefinition
from ...utils.command import format_result, run_command
from ...utils.schema import input_schema
from ...utils.xcodebuild import MACOS_DESTINATION, WorkspaceBuildParams, xcodebuild_command


async def run_tests_mac_ws(arguments: Dict[str, Any]) -> str:
    params = WorkspaceBuildParams(**arguments)
    command = xcodebuild_command(
        workspace_path=params.workspace_path,
        scheme=params.scheme,
        configuration=params.configuration,
        destination=MACOS_DESTINATION,
        derived_data_path=params.derived_data_path,
        extra_args=params.extra_args,
        action="test",
    )
    result = await run_command(command)
    return format_result(f"macOS tests of {params.scheme}", result)


tool = ToolDefinition(
    name="test_mac_ws",
    description="Runs the tests of a macOS workspace scheme.",
    input_schema=input_schema(WorkspaceBuildParams),
    handler=run_tests_mac_ws,
)
