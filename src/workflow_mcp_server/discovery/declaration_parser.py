"""Extract workflow metadata from a declaration module without importing it.

A declaration is a workflow package's ``__init__.py`` binding a dict literal::

    workflow = {
        "name": "iOS Simulator Workspace Development",
        "description": "Build and run apps from an .xcworkspace on a simulator.",
        "platforms": ["iOS"],
        "targets": ["simulator"],
        "project_types": ["workspace"],
        "capabilities": ["build", "run"],
    }

The source is only parsed with :func:`ast.parse`; nothing is executed.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from typing import Any

from ..models.schemas import OPTIONAL_LIST_FIELDS

DECLARATION_NAME = "workflow"
_REQUIRED_FIELDS = ("name", "description")


@dataclass
class DeclarationParseResult:
    """Metadata record (``None`` when unusable) plus any warnings."""

    metadata: dict[str, Any] | None
    warnings: list[str] = field(default_factory=list)


def parse_declaration(text: str, source: str = "<declaration>") -> DeclarationParseResult:
    """Parse *text* and return the ``workflow`` metadata record it declares."""
    warnings: list[str] = []

    try:
        module = ast.parse(text, filename=source)
    except SyntaxError as e:
        warnings.append(f"{source}: syntax error on line {e.lineno}: {e.msg}")
        return DeclarationParseResult(None, warnings)

    node = _find_declaration(module)
    if node is None:
        warnings.append(f"{source}: no module-level '{DECLARATION_NAME} = {{...}}' dict literal")
        return DeclarationParseResult(None, warnings)

    raw: dict[str, ast.expr] = {}
    for key_node, value_node in zip(node.keys, node.values):
        # ``**other`` unpacking has no key
        if key_node is None:
            warnings.append(f"{source}: '**' unpacking in declaration ignored")
            continue
        key = _literal_str(key_node)
        if key is None:
            warnings.append(f"{source}: non-string key on line {key_node.lineno} ignored")
            continue
        raw[key] = value_node

    metadata: dict[str, Any] = {}
    for key in _REQUIRED_FIELDS:
        value_node = raw.get(key)
        value = _literal_str(value_node) if value_node is not None else None
        if value is None or not value.strip():
            warnings.append(f"{source}: required field '{key}' is missing or not a string literal")
            return DeclarationParseResult(None, warnings)
        metadata[key] = value

    for key in OPTIONAL_LIST_FIELDS:
        if key not in raw:
            continue
        values = _literal_str_list(raw[key])
        if values is None:
            warnings.append(
                f"{source}: field '{key}' is not a literal list of strings and was omitted"
            )
            continue
        metadata[key] = values

    for key in raw:
        if key not in _REQUIRED_FIELDS and key not in OPTIONAL_LIST_FIELDS:
            warnings.append(f"{source}: unknown field '{key}' ignored")

    return DeclarationParseResult(metadata, warnings)


def has_module_binding(text: str, name: str) -> bool:
    """True if *text* parses and binds *name* at module level.

    Raises :class:`SyntaxError` when *text* does not parse.
    """
    module = ast.parse(text)
    for stmt in module.body:
        if isinstance(stmt, ast.Assign):
            if any(isinstance(t, ast.Name) and t.id == name for t in stmt.targets):
                return True
        elif isinstance(stmt, ast.AnnAssign):
            if isinstance(stmt.target, ast.Name) and stmt.target.id == name and stmt.value:
                return True
        elif isinstance(stmt, ast.ImportFrom):
            if any((alias.asname or alias.name) == name for alias in stmt.names):
                return True
    return False


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _find_declaration(module: ast.Module) -> ast.Dict | None:
    # Last binding wins, as it would at import time
    found: ast.Dict | None = None
    for stmt in module.body:
        value: ast.expr | None = None
        if isinstance(stmt, ast.Assign):
            if any(isinstance(t, ast.Name) and t.id == DECLARATION_NAME for t in stmt.targets):
                value = stmt.value
        elif isinstance(stmt, ast.AnnAssign):
            if isinstance(stmt.target, ast.Name) and stmt.target.id == DECLARATION_NAME:
                value = stmt.value
        if value is not None:
            found = value if isinstance(value, ast.Dict) else None
    return found


def _literal_str(node: ast.expr | None) -> str | None:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    return None


def _literal_str_list(node: ast.expr) -> list[str] | None:
    if not isinstance(node, (ast.List, ast.Tuple)):
        return None
    values: list[str] = []
    for element in node.elts:
        value = _literal_str(element)
        if value is None:
            return None
        value = value.strip()
        if value:
            values.append(value)
    return values
