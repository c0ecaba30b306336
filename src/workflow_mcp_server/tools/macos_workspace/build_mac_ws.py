from typing import Any, Dict

from ...models.schemas import ToolDefinition
from ...utils.command import format_result, run_command
from ...utils.schema import input_schema
from ...utils.xcodebuild import MACOS_DESTINATION, WorkspaceBuildParams, xcodebuild_command


async def build_mac_ws(arguments: Dict[str, Any]) -> str:
    params = WorkspaceBuildParams(**arguments)
    command = xcodebuild_command(
        workspace_path=params.workspace_path,
        scheme=params.scheme,
        configuration=params.configuration,
        destination=MACOS_DESTINATION,
        derived_data_path=params.derived_data_path,
        extra_args=params.extra_args,
    )
    result = await run_command(command)
    return format_result(f"macOS build of {params.scheme}", result)


tool = ToolDefinition(
    name="build_mac_ws",
    description="Builds a macOS app from a workspace.",
    input_schema=input_schema(WorkspaceBuildParams),
    handler=build_mac_ws,
)
