from typing import Any, Dict

from ...models.schemas import ToolDefinition
from ...utils.command import run_command

_CHECKS = [
    ("Xcode", ["xcodebuild", "-version"]),
    ("Developer directory", ["xcode-select", "-p"]),
    ("Swift", ["swift", "--version"]),
    ("Simulator runtimes", ["xcrun", "simctl", "list", "runtimes"]),
]


async def doctor(arguments: Dict[str, Any]) -> str:
    sections = []
    for title, command in _CHECKS:
        result = await run_command(command, timeout=60)
        status = "ok" if result.success else "FAILED"
        sections.append(f"## {title}: {status}\n{result.output.strip()}")
    return "\n\n".join(sections)


tool = ToolDefinition(
    name="doctor",
    description="Reports Xcode, Swift and simulator runtime versions for troubleshooting.",
    input_schema={"type": "object", "properties": {}},
    handler=doctor,
)
