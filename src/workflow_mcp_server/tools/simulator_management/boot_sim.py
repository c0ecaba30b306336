from typing import Any, Dict

from pydantic import BaseModel, Field

from ...models.schemas import ToolDefinition
from ...utils.command import format_result, run_command
from ...utils.schema import input_schema


class BootSimParams(BaseModel):
    simulator_id: str = Field(description="UDID of the simulator to boot (see list_sims)")

    model_config = {"extra": "forbid"}


async def boot_sim(arguments: Dict[str, Any]) -> str:
    params = BootSimParams(**arguments)
    result = await run_command(["xcrun", "simctl", "boot", params.simulator_id], timeout=120)
    return format_result(f"Booting simulator {params.simulator_id}", result)


tool = ToolDefinition(
    name="boot_sim",
    description="Boots an iOS simulator by UDID.",
    input_schema=input_schema(BootSimParams),
    handler=boot_sim,
)
