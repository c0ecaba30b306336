"""Run external toolchain commands for workflow tools."""

import asyncio
import shlex
from dataclasses import dataclass
from typing import Optional, Sequence

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 600
MAX_OUTPUT_CHARS = 20_000


@dataclass
class CommandResult:
    command: list[str]
    returncode: int
    output: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out


async def run_command(
    command: Sequence[str],
    cwd: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> CommandResult:
    """Run *command* with stderr merged into stdout.

    A missing executable is reported as a failed result (exit code 127)
    rather than raised, so tool handlers can format it like any failure.
    """
    argv = list(command)
    logger.info("Running command", command=shlex.join(argv), cwd=cwd)
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except FileNotFoundError as e:
        logger.error("Command not found", command=argv[0], error=str(e))
        return CommandResult(argv, 127, f"Command not found: {argv[0]}")

    try:
        stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        stdout, _ = await proc.communicate()
        logger.error("Command timed out", command=argv[0], timeout=timeout)
        return CommandResult(argv, -1, stdout.decode(errors="replace"), timed_out=True)

    output = stdout.decode(errors="replace")
    logger.info("Command finished", command=argv[0], returncode=proc.returncode)
    return CommandResult(argv, proc.returncode if proc.returncode is not None else -1, output)


def format_result(title: str, result: CommandResult) -> str:
    """Render *result* as the text response of a tool call."""
    if result.timed_out:
        status = "timed out"
    elif result.success:
        status = "succeeded"
    else:
        status = f"failed (exit code {result.returncode})"

    output = result.output.strip()
    if len(output) > MAX_OUTPUT_CHARS:
        output = "… (truncated)\n" + output[-MAX_OUTPUT_CHARS:]

    text = f"{title} {status}.\n$ {shlex.join(result.command)}"
    if output:
        text += f"\n\n{output}"
    return text
