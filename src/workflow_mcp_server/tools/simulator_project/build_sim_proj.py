from typing import Any, Dict

from ...models.schemas import ToolDefinition
from ...utils.command import format_result, run_command
from ...utils.schema import input_schema
from ...utils.xcodebuild import SimulatorProjectParams, simulator_destination, xcodebuild_command


async def build_sim_proj(arguments: Dict[str, Any]) -> str:
    params = SimulatorProjectParams(**arguments)
    command = xcodebuild_command(
        project_path=params.project_path,
        scheme=params.scheme,
        configuration=params.configuration,
        destination=simulator_destination(params.simulator_id),
        derived_data_path=params.derived_data_path,
        extra_args=params.extra_args,
    )
    result = await run_command(command)
    return format_result(f"iOS simulator build of {params.scheme}", result)


tool = ToolDefinition(
    name="build_sim_proj",
    description="Builds an app from a project file for a specific simulator by UDID.",
    input_schema=input_schema(SimulatorProjectParams),
    handler=build_sim_proj,
)
