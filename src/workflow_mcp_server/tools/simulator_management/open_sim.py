from typing import Any, Dict

from ...models.schemas import ToolDefinition
from ...utils.command import format_result, run_command


async def open_sim(arguments: Dict[str, Any]) -> str:
    result = await run_command(["open", "-a", "Simulator"], timeout=30)
    return format_result("Opening the Simulator app", result)


tool = ToolDefinition(
    name="open_sim",
    description="Opens the Simulator app.",
    input_schema={"type": "object", "properties": {}},
    handler=open_sim,
)
