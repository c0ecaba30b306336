from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

from ...models.schemas import ToolDefinition
from ...utils.command import format_result, run_command
from ...utils.schema import input_schema


class SwiftPackageBuildParams(BaseModel):
    package_path: str = Field(description="Directory containing Package.swift")
    configuration: Literal["debug", "release"] = Field(default="debug")
    target: Optional[str] = Field(default=None, description="Build only this target")

    model_config = {"extra": "forbid"}


async def swift_package_build(arguments: Dict[str, Any]) -> str:
    params = SwiftPackageBuildParams(**arguments)
    command = ["swift", "build", "--package-path", params.package_path, "-c", params.configuration]
    if params.target:
        command += ["--target", params.target]
    result = await run_command(command)
    return format_result("Swift package build", result)


tool = ToolDefinition(
    name="swift_package_build",
    description="Builds a Swift package with `swift build`.",
    input_schema=input_schema(SwiftPackageBuildParams),
    handler=swift_package_build,
)
