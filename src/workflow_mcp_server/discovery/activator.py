"""Activate workflows by reconciling the live tool table against them."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Iterable

import structlog

from ..errors import RegistrationConflictError, WorkflowLoadError
from ..models.schemas import LoadedWorkflow, ToolDefinition
from .live_tools import LiveToolTable
from .workflow_registry import WorkflowRegistry

logger = structlog.get_logger(__name__)


@dataclass
class ActiveTool:
    definition: ToolDefinition
    workflows: set[str] = field(default_factory=set)


class ActiveToolSet:
    """Tool name → active tool, annotated with contributing workflows.

    Only :class:`ToolActivator` mutates this; it is never persisted.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ActiveTool] = {}

    def get(self, name: str) -> ActiveTool | None:
        return self._tools.get(name)

    def add(self, definition: ToolDefinition, workflows: Iterable[str]) -> None:
        self._tools[definition.name] = ActiveTool(definition, set(workflows))

    def remove(self, name: str) -> None:
        self._tools.pop(name, None)

    @property
    def tool_names(self) -> list[str]:
        return sorted(self._tools)

    @property
    def workflows(self) -> list[str]:
        found: set[str] = set()
        for entry in self._tools.values():
            found |= entry.workflows
        return sorted(found)

    def tools_for(self, workflow_id: str) -> list[str]:
        return sorted(n for n, e in self._tools.items() if workflow_id in e.workflows)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


@dataclass
class ActivationOutcome:
    """What one ``activate`` call did."""

    additive: bool
    requested: list[str] = field(default_factory=list)
    enabled: list[str] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    registered: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)
    notified: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.registered or self.removed)

    @property
    def ok(self) -> bool:
        return bool(self.enabled) and not (self.unknown or self.failed or self.conflicts)

    def summary(self) -> str:
        """Human-readable report of the activation."""
        lines: list[str] = []
        if self.enabled:
            verb = "Added" if self.additive else "Enabled"
            lines.append(f"{verb} workflows: {', '.join(self.enabled)}.")
            if self.additive:
                lines.append("Tools were added to the existing active tool set.")
            else:
                lines.append("Previously active tools from other workflows were replaced.")
            lines.append(
                f"{len(self.registered)} tools registered, "
                f"{len(self.unchanged)} already active, {len(self.removed)} removed."
            )
        else:
            lines.append("No workflows were activated.")
        if self.unknown:
            lines.append(f"Unknown workflows: {', '.join(self.unknown)}.")
        for workflow_id, reason in self.failed.items():
            lines.append(f"Failed to load '{workflow_id}': {reason}")
        for conflict in self.conflicts:
            lines.append(f"Registration conflict: {conflict}")
        return "\n".join(lines)


class ToolActivator:
    """Loads workflows and keeps the live tool table in step with them.

    All mutation goes through :meth:`activate` under one lock, so concurrent
    additive calls are lossless and concurrent replace calls are
    last-write-wins. Registrations made by a superseded call are not rolled
    back.
    """

    def __init__(self, registry: WorkflowRegistry, state: ActiveToolSet | None = None):
        self.registry = registry
        self.state = state if state is not None else ActiveToolSet()
        self._lock = asyncio.Lock()

    def active_workflows(self) -> list[str]:
        return self.state.workflows

    def active_tool_names(self) -> list[str]:
        return self.state.tool_names

    async def activate(
        self,
        host: LiveToolTable,
        workflow_ids: Iterable[str],
        additive: bool = False,
    ) -> ActivationOutcome:
        requested = list(dict.fromkeys(workflow_ids))
        outcome = ActivationOutcome(additive=additive, requested=requested)

        async with self._lock:
            loaded = await self._load_all(requested, outcome)
            desired = self._collect_tools(loaded, outcome)

            # Nothing loaded means nothing to replace with
            if not additive and loaded:
                self._remove_stale(host, desired, outcome)

            for name, (definition, contributors) in desired.items():
                self._install(host, definition, contributors, additive, outcome)

            outcome.enabled = list(loaded)
            if outcome.changed or loaded:
                outcome.notified = await self._notify(host)

        logger.info(
            "Activation complete",
            mode="additive" if additive else "replace",
            enabled=outcome.enabled,
            unknown=outcome.unknown,
            failed=list(outcome.failed),
            registered=len(outcome.registered),
            removed=len(outcome.removed),
            conflicts=len(outcome.conflicts),
        )
        return outcome

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _load_all(
        self, requested: list[str], outcome: ActivationOutcome
    ) -> dict[str, LoadedWorkflow]:
        loaded: dict[str, LoadedWorkflow] = {}
        for workflow_id in requested:
            loader = self.registry.get_loader(workflow_id)
            if loader is None:
                logger.warning("Unknown workflow", workflow=workflow_id)
                outcome.unknown.append(workflow_id)
                continue
            try:
                loaded[workflow_id] = await loader.load()
            except WorkflowLoadError as e:
                logger.error("Workflow load failed", workflow=workflow_id, error=str(e))
                outcome.failed[workflow_id] = str(e.__cause__ or e)
        return loaded

    @staticmethod
    def _collect_tools(
        loaded: dict[str, LoadedWorkflow], outcome: ActivationOutcome
    ) -> dict[str, tuple[ToolDefinition, set[str]]]:
        desired: dict[str, tuple[ToolDefinition, set[str]]] = {}
        for workflow_id, workflow in loaded.items():
            for definition in workflow.tools.values():
                current = desired.get(definition.name)
                if current is None:
                    desired[definition.name] = (definition, {workflow_id})
                elif current[0] is definition:
                    current[1].add(workflow_id)
                else:
                    owners = ", ".join(sorted(current[1]))
                    logger.error(
                        "Duplicate tool definition",
                        tool=definition.name,
                        workflow=workflow_id,
                        first_owner=owners,
                    )
                    outcome.conflicts.append(
                        f"'{definition.name}' from '{workflow_id}' differs from the "
                        f"definition in '{owners}'; skipped"
                    )
        return desired

    def _remove_stale(
        self,
        host: LiveToolTable,
        desired: dict[str, tuple[ToolDefinition, set[str]]],
        outcome: ActivationOutcome,
    ) -> None:
        for name in self.state.tool_names:
            wanted = desired.get(name)
            # Same name from a different definition is replaced too
            if wanted is not None and wanted[0] is self.state.get(name).definition:
                continue
            host.unregister(name)
            self.state.remove(name)
            outcome.removed.append(name)

    def _install(
        self,
        host: LiveToolTable,
        definition: ToolDefinition,
        contributors: set[str],
        additive: bool,
        outcome: ActivationOutcome,
    ) -> None:
        name = definition.name
        active = self.state.get(name)

        if active is not None:
            if active.definition is not definition:
                outcome.conflicts.append(
                    f"'{name}' is already active from "
                    f"'{', '.join(sorted(active.workflows))}' with a different definition; skipped"
                )
                return
            if additive:
                active.workflows |= contributors
            else:
                active.workflows = set(contributors)
            outcome.unchanged.append(name)
            return

        try:
            host.register(definition)
        except RegistrationConflictError as e:
            logger.error("Registration conflict", tool=name, error=str(e))
            outcome.conflicts.append(f"{e}; skipped")
            return

        self.state.add(definition, contributors)
        outcome.registered.append(name)

    @staticmethod
    async def _notify(host: LiveToolTable) -> bool:
        try:
            return await host.notify_list_changed()
        except Exception as e:
            logger.warning("Tool list change notification failed", error=str(e))
            return False
