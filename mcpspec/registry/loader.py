"""Load definition files into an id-keyed mapping.

A definition file holds either one package spec (recognized by a
top-level ``installationMethods`` or ``installationOptions`` key) or a
mapping of server id to package spec. A single spec is keyed by its
``id``, falling back to the file stem.
"""

from __future__ import annotations

import json
from pathlib import Path

from mcpspec.utils.file_scanner import definition_key

SPEC_MARKER_KEYS = ("installationMethods", "installationOptions")


def is_single_spec(data: dict) -> bool:
    return any(key in data for key in SPEC_MARKER_KEYS)


def normalize_definitions(data: dict, path: Path) -> dict[str, object]:
    """Return ``{server_id: spec}`` for the parsed contents of ``path``."""
    if is_single_spec(data):
        key = data.get("id") or definition_key(path)
        return {str(key): data}
    return dict(data)


def load_definition_file(path: Path) -> dict[str, object]:
    """Read and normalize one file. JSON and shape errors propagate."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top-level JSON value must be an object")
    return normalize_definitions(data, Path(path))
