from typing import Any, Dict

from ...models.schemas import ToolDefinition
from ...utils.command import format_result, run_command
from ...utils.schema import input_schema
from ...utils.xcodebuild import MACOS_DESTINATION, ProjectBuildParams, xcodebuild_command


async def build_mac_proj(arguments: Dict[str, Any]) -> str:
    params = ProjectBuildParams(**arguments)
    command = xcodebuild_command(
        project_path=params.project_path,
        scheme=params.scheme,
        configuration=params.configuration,
        destination=MACOS_DESTINATION,
        derived_data_path=params.derived_data_path,
        extra_args=params.extra_args,
    )
    result = await run_command(command)
    return format_result(f"macOS build of {params.scheme}", result)


tool = ToolDefinition(
    name="build_mac_proj",
    description="Builds a macOS app from a project file.",
    input_schema=input_schema(ProjectBuildParams),
    handler=build_mac_proj,
)
