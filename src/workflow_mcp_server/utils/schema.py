"""Build MCP ``inputSchema`` dicts from pydantic parameter models."""

from typing import Any, Dict, Type

from pydantic import BaseModel


def input_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    """Return *model*'s JSON Schema without the pydantic-generated titles.

    A field's ``title`` becomes its ``description`` when it has none.
    """
    schema = model.model_json_schema()
    result = _strip_titles(schema)
    result.setdefault("properties", {})
    result["type"] = "object"
    return result


def _strip_titles(schema: Any) -> Any:
    if isinstance(schema, list):
        return [_strip_titles(item) for item in schema]
    if not isinstance(schema, dict):
        return schema

    result: Dict[str, Any] = {}
    for key, value in schema.items():
        if key == "title" and isinstance(value, str):
            continue
        if key == "properties" and isinstance(value, dict):
            result[key] = {name: _prepare_property(prop) for name, prop in value.items()}
        else:
            result[key] = _strip_titles(value)
    return result


def _prepare_property(prop: Any) -> Any:
    if not isinstance(prop, dict):
        return prop
    prepared = dict(prop)
    if "description" not in prepared and isinstance(prepared.get("title"), str):
        prepared["description"] = prepared.pop("title")
    return _strip_titles(prepared)
