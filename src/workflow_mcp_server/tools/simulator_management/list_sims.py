import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ...models.schemas import ToolDefinition
from ...utils.command import format_result, run_command
from ...utils.schema import input_schema


class ListSimsParams(BaseModel):
    available_only: bool = Field(default=True, description="Only list available simulators")

    model_config = {"extra": "forbid"}


async def list_sims(arguments: Dict[str, Any]) -> str:
    params = ListSimsParams(**arguments)
    command = ["xcrun", "simctl", "list", "devices", "--json"]
    if params.available_only:
        command.insert(4, "available")
    result = await run_command(command, timeout=60)
    if not result.success:
        return format_result("Listing simulators", result)

    devices = _parse_devices(result.output)
    if devices is None:
        return f"Could not parse the simulator list.\n\n{result.output.strip()[:2000]}"

    lines = []
    for runtime, entries in sorted(devices.items()):
        if not isinstance(entries, list):
            continue
        rows = []
        for device in entries:
            if not isinstance(device, dict) or "name" not in device or "udid" not in device:
                continue
            rows.append(f"  - {device['name']} ({device['udid']}) {device.get('state', '')}".rstrip())
        if rows:
            lines.append(runtime.rsplit(".", 1)[-1])
            lines.extend(rows)
    return "\n".join(lines) if lines else "No simulators found."


def _parse_devices(output: str) -> Optional[Dict[str, Any]]:
    # stderr is merged into stdout, so warnings may surround the JSON object
    start, end = output.find("{"), output.rfind("}")
    if start == -1 or end < start:
        return None
    try:
        payload = json.loads(output[start:end + 1])
    except json.JSONDecodeError:
        return None
    devices = payload.get("devices") if isinstance(payload, dict) else None
    return devices if isinstance(devices, dict) else None


tool = ToolDefinition(
    name="list_sims",
    description="Lists iOS simulators with their UUIDs and boot state.",
    input_schema=input_schema(ListSimsParams),
    handler=list_sims,
)
