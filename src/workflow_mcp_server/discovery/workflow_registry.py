"""In-memory view of the generated workflow registry."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Mapping

import structlog

from ..errors import WorkflowLoadError
from ..models.schemas import LoadedWorkflow, ToolDefinition, WorkflowDescriptor

logger = structlog.get_logger(__name__)

RawLoader = Callable[[], Awaitable[Mapping[str, Any]]]


class WorkflowLoader:
    """Memoized wrapper around one generated loader coroutine function."""

    def __init__(self, descriptor: WorkflowDescriptor, raw_loader: RawLoader):
        self.descriptor = descriptor
        self._raw_loader = raw_loader
        self._result: LoadedWorkflow | None = None
        self._lock = asyncio.Lock()

    @property
    def workflow_id(self) -> str:
        return self.descriptor.id

    @property
    def is_loaded(self) -> bool:
        return self._result is not None

    async def load(self) -> LoadedWorkflow:
        """Import the workflow once; later calls return the cached result.

        Raises :class:`WorkflowLoadError`. Failures are not cached.
        """
        if self._result is not None:
            return self._result
        async with self._lock:
            if self._result is None:
                self._result = await self._load_uncached()
        return self._result

    async def _load_uncached(self) -> LoadedWorkflow:
        logger.info("Loading workflow", workflow=self.workflow_id)
        try:
            raw = await self._raw_loader()
        except Exception as e:
            raise WorkflowLoadError(self.workflow_id, f"{type(e).__name__}: {e}") from e

        if not isinstance(raw, Mapping) or not isinstance(raw.get("tools"), Mapping):
            raise WorkflowLoadError(self.workflow_id, "loader returned no tool mapping")

        tools: dict[str, ToolDefinition] = {}
        for local_name, candidate in raw["tools"].items():
            if not isinstance(candidate, ToolDefinition):
                logger.warning(
                    "Invalid tool definition",
                    workflow=self.workflow_id,
                    module=local_name,
                    type=type(candidate).__name__,
                )
                continue
            tools[local_name] = candidate

        logger.info("Workflow loaded", workflow=self.workflow_id, tool_count=len(tools))
        return LoadedWorkflow(descriptor=self.descriptor, tools=tools)


class WorkflowRegistry:
    """Workflow id → (metadata, lazy loader).

    Building a registry only reads metadata; no workflow module is imported
    until one of its loaders is awaited.
    """

    def __init__(
        self,
        loaders: Mapping[str, RawLoader],
        metadata: Mapping[str, Mapping[str, Any]],
    ):
        self._descriptors: dict[str, WorkflowDescriptor] = {}
        self._loaders: dict[str, WorkflowLoader] = {}

        for workflow_id in sorted(loaders):
            record = metadata.get(workflow_id)
            if record is None:
                logger.warning("Workflow has no metadata", workflow=workflow_id)
                continue
            descriptor = WorkflowDescriptor.from_metadata(workflow_id, dict(record))
            self._descriptors[workflow_id] = descriptor
            self._loaders[workflow_id] = WorkflowLoader(descriptor, loaders[workflow_id])

    @classmethod
    def from_generated(cls) -> "WorkflowRegistry":
        """Build the registry from the committed ``generated_registry`` module."""
        from .. import generated_registry

        return cls(generated_registry.WORKFLOW_LOADERS, generated_registry.WORKFLOW_METADATA)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_workflow_ids(self) -> list[str]:
        return list(self._descriptors)

    def get_metadata(self, workflow_id: str) -> WorkflowDescriptor | None:
        return self._descriptors.get(workflow_id)

    def get_loader(self, workflow_id: str) -> WorkflowLoader | None:
        return self._loaders.get(workflow_id)

    def describe_workflows(self) -> str:
        """One ``- **id**: description`` line per workflow."""
        return "\n".join(
            f"- **{d.id}**: {d.description}" for d in self._descriptors.values()
        )

    def __contains__(self, workflow_id: object) -> bool:
        return workflow_id in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)
