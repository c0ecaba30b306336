"""Map a natural-language task to workflows via client-side sampling."""

from __future__ import annotations

import json
import re
from typing import Any

import structlog
from mcp import types
from mcp.server.session import ServerSession

from ..config import WorkflowServerConfig
from ..errors import ClassificationParseError
from .activator import ToolActivator
from .live_tools import LiveToolTable
from .workflow_registry import WorkflowRegistry

logger = structlog.get_logger(__name__)

MAX_TASK_LENGTH = 2000
EXCERPT_LENGTH = 200

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_SUSPICIOUS_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\bignore\s+previous\s+instructions\b",
        r"\bforget\s+everything\b",
        r"\bsystem\s*:",
        r"\bassistant\s*:",
        r"\byou\s+are\s+now\b",
        r"\bact\s+as\b",
    )
]

_SELECTION_GUIDE = """\
Primary (project/workspace-based) workflows:
- iOS simulator with .xcworkspace: choose "simulator-workspace"
- iOS simulator with .xcodeproj: choose "simulator-project"
- macOS with .xcworkspace: choose "macos-workspace"
- macOS with .xcodeproj: choose "macos-project"
- Swift Package Manager (no Xcode project): choose "swift-package"

Secondary (task-based, no project/workspace needed):
- Simulator management (boot, list, open): choose "simulator-management"
- System/environment diagnostics or validation: choose "diagnostics"
"""


def sanitize_task_description(text: str) -> str:
    """Normalise *text* for inclusion in the classification prompt.

    Raises :class:`ValueError` if nothing usable remains.
    """
    if not isinstance(text, str) or not text:
        raise ValueError("Task description must be a non-empty string")

    sanitized = re.sub(r"\s+", " ", text)
    sanitized = _CONTROL_CHARS.sub("", sanitized).strip()
    if not sanitized:
        raise ValueError("Task description cannot be empty after sanitization")

    if len(sanitized) > MAX_TASK_LENGTH:
        sanitized = sanitized[:MAX_TASK_LENGTH]
        logger.warning("Task description truncated", max_length=MAX_TASK_LENGTH)

    for pattern in _SUSPICIOUS_PATTERNS:
        if pattern.search(sanitized):
            logger.warning("Suspicious pattern in task description", pattern=pattern.pattern)
            sanitized = pattern.sub("[filtered]", sanitized)

    return sanitized


def parse_selection(text: str) -> list[str]:
    """Parse a reply that must be a JSON array of strings.

    Raises :class:`ClassificationParseError`.
    """
    stripped = text.strip()
    if not stripped:
        raise ClassificationParseError("Empty response text", text)
    try:
        parsed: Any = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise ClassificationParseError(f"Response is not JSON: {e.msg}", text) from e
    if not isinstance(parsed, list):
        raise ClassificationParseError("Response is not an array", text)
    if not all(isinstance(item, str) for item in parsed):
        raise ClassificationParseError("Response array contains non-string items", text)
    return parsed


def extract_text(result: Any) -> str:
    """Concatenate the text blocks of a ``create_message`` result."""
    content = getattr(result, "content", None)
    if content is None:
        raise ClassificationParseError("No content in sampling response")
    blocks = content if isinstance(content, list) else [content]
    texts = [
        block.text
        for block in blocks
        if getattr(block, "type", None) == "text" and isinstance(getattr(block, "text", None), str)
    ]
    if not texts:
        raise ClassificationParseError("Sampling response has no text content")
    return "".join(texts)


class TaskClassifier:
    """Select and activate workflows for a free-text task description."""

    def __init__(
        self,
        registry: WorkflowRegistry,
        activator: ToolActivator,
        config: WorkflowServerConfig | None = None,
    ):
        self.registry = registry
        self.activator = activator
        self.config = config or WorkflowServerConfig()

    async def classify(
        self,
        session: ServerSession,
        host: LiveToolTable,
        task_description: str,
        additive: bool = False,
    ) -> str:
        """Return the text response for one ``discover_tools`` call."""
        try:
            task = sanitize_task_description(task_description)
        except ValueError as e:
            logger.error("Task description rejected", error=str(e))
            return f"Invalid task description: {e}"

        logger.info("Classifying task", task=task, additive=additive)

        if not self._supports_sampling(session):
            logger.warning("Client does not support sampling")
            return (
                "Your client does not support the sampling feature required for "
                "automatic workflow discovery. Call enable_workflows with one or more "
                f"of these workflow ids instead: {', '.join(self.registry.list_workflow_ids())}."
            )

        raw_text = ""
        try:
            result = await session.create_message(**self._sampling_request(task))
            raw_text = extract_text(result)
            logger.debug("Sampling response", text=raw_text)
            selection = parse_selection(raw_text)
        except ClassificationParseError as e:
            logger.error("Failed to parse sampling response", error=str(e))
            excerpt = (e.raw_text or raw_text or "Unknown response format")[:EXCERPT_LENGTH]
            return (
                "I was unable to determine the right tools for your task. "
                f'The model returned: "{excerpt}". '
                "Could you rephrase the request or describe the task more specifically?"
            )
        except Exception as e:
            logger.error("Sampling request failed", error=str(e), exc_info=True)
            return f"An error occurred while discovering tools: {e}"

        selected = [wid for wid in dict.fromkeys(selection) if wid in self.registry]
        invalid = [wid for wid in selection if wid not in self.registry]
        if invalid:
            logger.warning("Model selected unknown workflows", workflows=invalid)

        if not selected:
            logger.info("Empty workflow selection")
            note = f" (ignored unknown workflows: {', '.join(invalid)})" if invalid else ""
            return (
                f"No specific tools seem necessary for that task{note}. "
                "Could you provide more details about what you would like to accomplish?"
            )

        outcome = await self.activator.activate(host, selected, additive=additive)
        if not outcome.enabled:
            return f"Could not enable the selected workflows.\n{outcome.summary()}"

        names = ", ".join(outcome.enabled)
        if additive:
            mode = f"Added tools from {names} to your existing workflow tools."
            head = f"Added tools for: {names}."
        else:
            mode = f"Replaced previous tools with {names} workflow tools."
            head = f"Enabled tools for: {names}."

        parts = [head, mode]
        if invalid:
            parts.append(f"Ignored unknown workflows: {', '.join(invalid)}.")
        if outcome.failed or outcome.conflicts or outcome.unknown:
            parts.append(outcome.summary())
        parts.append("Call tools/list to see the tools now available.")
        return "\n\n".join(parts)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _supports_sampling(session: ServerSession) -> bool:
        return bool(
            session.check_client_capability(
                types.ClientCapabilities(sampling=types.SamplingCapability())
            )
        )

    def build_prompt(self, task: str) -> str:
        return (
            "You are an expert assistant for a developer-tools MCP server. "
            "Your task is to select the most relevant workflow for the user's request.\n\n"
            f'The user wants to perform the following task: "{task}"\n\n'
            "IMPORTANT: Select EXACTLY ONE workflow that best matches the task. "
            "Most users work with a project (.xcodeproj) or a workspace (.xcworkspace); "
            "use the project file kind and the target platform to disambiguate.\n\n"
            f"{_SELECTION_GUIDE}\n"
            "All available workflows:\n"
            f"{self.registry.describe_workflows()}\n\n"
            "Respond with ONLY a JSON array containing the workflow id, "
            'for example ["simulator-workspace"].'
        )

    def _sampling_request(self, task: str) -> dict[str, Any]:
        request: dict[str, Any] = {
            "messages": [
                types.SamplingMessage(
                    role="user",
                    content=types.TextContent(type="text", text=self.build_prompt(task)),
                )
            ],
            "max_tokens": self.config.sampling_max_tokens,
        }
        if self.config.sampling_temperature is not None:
            request["temperature"] = self.config.sampling_temperature
        return request
