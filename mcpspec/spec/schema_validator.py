"""Schema validator — structural validation using the package spec JSON Schema.

The registry validator collects every issue for hand-authored files. The
generator only asks for type mismatches (``types_only=True``) so that
ill-typed model output is rejected before it reaches the models.
"""

from __future__ import annotations

from mcpspec.spec.schema import get_schema


def validate_schema(data: dict, types_only: bool = False) -> list[str]:
    """Validate a parsed package spec dict against the JSON Schema.

    Args:
        data: Parsed package spec.
        types_only: Report only type mismatches, skipping required-key,
            length, and item-count checks.

    Returns:
        List of error messages. Empty list means valid.
    """
    issues: list[str] = []
    _validate_node(data, get_schema(), "", issues, types_only)
    return issues


def _validate_node(data, schema: dict, path: str, issues: list[str], types_only: bool):
    """Recursively validate data against a JSON Schema node."""
    schema_type = schema.get("type")
    where = path or "/"

    if schema_type and not _type_matches(data, schema_type):
        issues.append(f"{where}: expected type '{schema_type}', got {type(data).__name__}")
        return

    if schema_type == "string" and not types_only:
        min_len = schema.get("minLength", 0)
        if len(data) < min_len:
            issues.append(f"{where}: string too short (min {min_len}, got {len(data)})")

    if schema_type == "object":
        if not types_only:
            for req in schema.get("required", []):
                if req not in data:
                    issues.append(f"{where}: missing required property '{req}'")

        props = schema.get("properties", {})
        extra = schema.get("additionalProperties")
        for key, value in data.items():
            if key in props:
                _validate_node(value, props[key], f"{path}.{key}", issues, types_only)
            elif isinstance(extra, dict):
                _validate_node(value, extra, f"{path}.{key}", issues, types_only)

    if schema_type == "array":
        min_items = schema.get("minItems", 0)
        if len(data) < min_items and not types_only:
            issues.append(f"{where}: array too short (min {min_items}, got {len(data)})")

        items_schema = schema.get("items")
        if items_schema:
            for i, item in enumerate(data):
                _validate_node(item, items_schema, f"{path}[{i}]", issues, types_only)


def _type_matches(data, schema_type: str) -> bool:
    """Check if data matches the expected JSON Schema type."""
    if schema_type in ("integer", "number") and isinstance(data, bool):
        return False
    expected = _TYPE_MAP.get(schema_type)
    return expected is None or isinstance(data, expected)


_TYPE_MAP = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "array": list,
    "object": dict,
    "null": type(None),
}
