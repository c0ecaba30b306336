"""Scan the workflow tool tree and generate the static workflow registry.

Runs before the server starts (``workflow-mcp-scan``). The output is a plain
Python module whose loaders import each workflow with static ``import``
statements, so starting the server never walks the filesystem.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from ..errors import ScanError
from ..models.schemas import OPTIONAL_LIST_FIELDS, workflow_id_from_dirname
from .declaration_parser import has_module_binding, parse_declaration

logger = structlog.get_logger(__name__)

DECLARATION_FILE = "__init__.py"
TOOL_BINDING = "tool"
DEFAULT_DENYLIST: frozenset[str] = frozenset({"active_processes.py"})

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_TOOLS_DIR = _PACKAGE_ROOT / "tools"
DEFAULT_TOOLS_PACKAGE = "workflow_mcp_server.tools"
DEFAULT_OUTPUT = _PACKAGE_ROOT / "generated_registry.py"


@dataclass
class ScanWarning:
    """A workflow or tool file that was left out of the registry."""

    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


@dataclass
class ScannedWorkflow:
    workflow_id: str
    dirname: str
    metadata: dict[str, Any]
    tool_modules: list[str]


@dataclass
class ScanResult:
    package: str
    workflows: list[ScannedWorkflow] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)

    @property
    def workflow_ids(self) -> list[str]:
        return [wf.workflow_id for wf in self.workflows]

    @property
    def source(self) -> str:
        return render_registry(self.package, self.workflows)


# ------------------------------------------------------------------
# Scan
# ------------------------------------------------------------------


def scan(
    root_dir: str | Path,
    package: str = DEFAULT_TOOLS_PACKAGE,
    denylist: frozenset[str] = DEFAULT_DENYLIST,
) -> ScanResult:
    """Walk *root_dir* and collect every well-formed workflow.

    Raises :class:`ScanError` only if *root_dir* itself is missing.
    """
    root = Path(root_dir)
    if not root.is_dir():
        raise ScanError(f"Tool directory not found: {root}")

    result = ScanResult(package=package)

    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if not entry.is_dir() or entry.name.startswith(("_", ".")):
            continue
        workflow = _scan_workflow(entry, denylist, result.warnings)
        if workflow is not None:
            result.workflows.append(workflow)
            logger.info(
                "Discovered workflow",
                workflow=workflow.workflow_id,
                name=workflow.metadata["name"],
                tool_count=len(workflow.tool_modules),
            )

    for warning in result.warnings:
        logger.warning("Scan warning", source=warning.source, message=warning.message)
    logger.info(
        "Scan complete",
        workflow_count=len(result.workflows),
        warning_count=len(result.warnings),
    )
    return result


def _scan_workflow(
    directory: Path,
    denylist: frozenset[str],
    warnings: list[ScanWarning],
) -> ScannedWorkflow | None:
    name = directory.name

    if not name.isidentifier():
        warnings.append(ScanWarning(name, "directory name is not an importable identifier"))
        return None

    declaration = directory / DECLARATION_FILE
    if not declaration.is_file():
        warnings.append(ScanWarning(name, f"no {DECLARATION_FILE} declaration found"))
        return None

    try:
        text = declaration.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        warnings.append(ScanWarning(name, f"cannot read declaration: {e}"))
        return None

    parsed = parse_declaration(text, source=f"{name}/{DECLARATION_FILE}")
    warnings.extend(ScanWarning(name, message) for message in parsed.warnings)
    if parsed.metadata is None:
        return None

    tool_modules: list[str] = []
    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        if not _is_tool_source(path, denylist):
            continue
        if not path.stem.isidentifier():
            warnings.append(ScanWarning(name, f"{path.name}: not an importable module name"))
            continue
        try:
            ok = has_module_binding(path.read_text(encoding="utf-8"), TOOL_BINDING)
        except (SyntaxError, OSError, UnicodeDecodeError) as e:
            warnings.append(ScanWarning(name, f"{path.name}: cannot parse tool module: {e}"))
            continue
        if not ok:
            warnings.append(
                ScanWarning(name, f"{path.name}: no module-level '{TOOL_BINDING}' definition")
            )
            continue
        tool_modules.append(path.stem)

    if not tool_modules:
        warnings.append(ScanWarning(name, "no tool modules found"))
        return None

    return ScannedWorkflow(
        workflow_id=workflow_id_from_dirname(name),
        dirname=name,
        metadata=parsed.metadata,
        tool_modules=tool_modules,
    )


def _is_tool_source(path: Path, denylist: frozenset[str]) -> bool:
    name = path.name
    if not path.is_file() or path.suffix != ".py":
        return False
    if name == DECLARATION_FILE or name in denylist or name == "conftest.py":
        return False
    if name.startswith("test_"):
        return False
    return True


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------

_HEADER = '''"""Static workflow registry.

AUTO-GENERATED - DO NOT EDIT. Regenerate with ``workflow-mcp-scan``.
"""

from __future__ import annotations

from typing import Any
'''


def render_registry(package: str, workflows: list[ScannedWorkflow]) -> str:
    """Render the registry module source for *workflows*."""
    parts = [_HEADER]
    for wf in workflows:
        parts.append("\n\n" + _render_loader(package, wf))

    parts.append("\n\nWORKFLOW_LOADERS = {\n")
    for wf in workflows:
        parts.append(f"    {_q(wf.workflow_id)}: _load_{wf.dirname},\n")
    parts.append("}\n")

    parts.append("\nWORKFLOW_METADATA: dict[str, dict[str, Any]] = {\n")
    for wf in workflows:
        parts.append(f"    {_q(wf.workflow_id)}: {{\n")
        for key in ("name", "description") + OPTIONAL_LIST_FIELDS:
            if key in wf.metadata:
                parts.append(f"        {_q(key)}: {json.dumps(wf.metadata[key])},\n")
        parts.append("    },\n")
    parts.append("}\n")
    return "".join(parts)


def _render_loader(package: str, wf: ScannedWorkflow) -> str:
    module = f"{package}.{wf.dirname}"
    lines = [
        f"async def _load_{wf.dirname}() -> dict[str, Any]:",
        f"    from {module} import workflow",
    ]
    for index, stem in enumerate(wf.tool_modules):
        lines.append(f"    from {module} import {stem} as _tool_{index}")
    lines += [
        "",
        "    return {",
        '        "workflow": workflow,',
        '        "tools": {',
    ]
    for index, stem in enumerate(wf.tool_modules):
        lines.append(f"            {_q(stem)}: _tool_{index}.{TOOL_BINDING},")
    lines += [
        "        },",
        "    }",
    ]
    return "\n".join(lines) + "\n"


def _q(text: str) -> str:
    return json.dumps(text)


def write_registry(result: ScanResult, output: str | Path) -> bool:
    """Write the generated source to *output*. Returns True if it changed."""
    path = Path(output)
    source = result.source
    if path.is_file() and path.read_text(encoding="utf-8") == source:
        return False
    path.write_text(source, encoding="utf-8")
    return True


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-mcp-scan",
        description="Generate the static workflow registry from the tool tree",
    )
    parser.add_argument("--tools-dir", type=Path, default=DEFAULT_TOOLS_DIR)
    parser.add_argument(
        "--package",
        default=DEFAULT_TOOLS_PACKAGE,
        help="Import path of the tools directory",
    )
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT)
    parser.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if the registry on disk is out of date",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: list[str] | None = None) -> int:
    from ..utils.log_setup import configure_logging

    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        result = scan(args.tools_dir, package=args.package)
    except ScanError as e:
        logger.error("Scan failed", error=str(e))
        return 1

    if args.check:
        current = args.output.read_text(encoding="utf-8") if args.output.is_file() else ""
        if current != result.source:
            logger.error("Workflow registry is out of date", output=str(args.output))
            return 1
        logger.info("Workflow registry is up to date", output=str(args.output))
        return 0

    changed = write_registry(result, args.output)
    logger.info(
        "Generated workflow registry",
        output=str(args.output),
        workflow_count=len(result.workflows),
        changed=changed,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
