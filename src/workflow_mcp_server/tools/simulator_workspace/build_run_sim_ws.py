from typing import Any, Dict, Optional

from ...models.schemas import ToolDefinition
from ...utils.command import format_result, run_command
from ...utils.schema import input_schema
from ...utils.xcodebuild import SimulatorWorkspaceParams, simulator_destination, xcodebuild_command


async def build_run_sim_ws(arguments: Dict[str, Any]) -> str:
    params = SimulatorWorkspaceParams(**arguments)
    destination = simulator_destination(params.simulator_id)
    build = await run_command(xcodebuild_command(
        workspace_path=params.workspace_path,
        scheme=params.scheme,
        configuration=params.configuration,
        destination=destination,
        derived_data_path=params.derived_data_path,
        extra_args=params.extra_args,
    ))
    if not build.success:
        return format_result(f"iOS simulator build of {params.scheme}", build)

    settings = await run_command(xcodebuild_command(
        workspace_path=params.workspace_path,
        scheme=params.scheme,
        configuration=params.configuration,
        destination=destination,
        derived_data_path=params.derived_data_path,
        extra_args=["-showBuildSettings"],
        action=None,
    ), timeout=120)
    app_path = _app_path(settings.output)
    if app_path is None:
        return format_result("Reading build settings", settings)

    install = await run_command(["xcrun", "simctl", "install", params.simulator_id, app_path])
    if not install.success:
        return format_result(f"Installing {app_path}", install)

    launch = await run_command(
        ["xcrun", "simctl", "launch", params.simulator_id, _bundle_id(settings.output) or ""],
        timeout=120,
    )
    return format_result(f"Build and run of {params.scheme}", launch)


def _setting(output: str, key: str) -> Optional[str]:
    prefix = f"{key} = "
    for line in output.splitlines():
        line = line.strip()
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def _app_path(output: str) -> Optional[str]:
    products = _setting(output, "BUILT_PRODUCTS_DIR")
    name = _setting(output, "FULL_PRODUCT_NAME")
    if products and name:
        return f"{products}/{name}"
    return None


def _bundle_id(output: str) -> Optional[str]:
    return _setting(output, "PRODUCT_BUNDLE_IDENTIFIER")


tool = ToolDefinition(
    name="build_run_sim_ws",
    description="Builds an app from a workspace, installs it on a simulator by UDID and launches it.",
    input_schema=input_schema(SimulatorWorkspaceParams),
    handler=build_run_sim_ws,
)
