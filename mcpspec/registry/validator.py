"""Registry validator — check every definition file in a registry tree.

Unlike the generator's fail-fast validation, this collects all issues
per file so a maintainer sees everything at once:
- Files parse as JSON objects
- Each server has a name and at least one installation method
- Each method carries its required identifier (npmPackage, pipPackage, image)
- Structural types match the package spec JSON Schema
- Legacy list-based installationOptions are flagged for migration

nodeModule-without-docker is only a warning here; it is a hard rule for
generated specs. Pass ``strict=True`` to fail on warnings as well.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from mcpspec.registry.loader import normalize_definitions
from mcpspec.registry.models import (
    FileValidationResult,
    RegistryValidationReport,
    Severity,
)
from mcpspec.spec.models import DOCKER, KNOWN_METHODS, METHOD_REQUIRED_FIELDS, NODE_MODULE
from mcpspec.spec.schema_validator import validate_schema
from mcpspec.utils.file_scanner import scan_definition_files

logger = logging.getLogger(__name__)


def validate_registry(source_dir: str | Path, strict: bool = False) -> RegistryValidationReport:
    """Validate all definition files under ``source_dir``."""
    report = RegistryValidationReport(strict=strict)
    for path in scan_definition_files(Path(source_dir)):
        report.files.append(validate_definition_file(path))
    logger.info("Validated %d definition file(s) under %s", report.total_files, source_dir)
    return report


def validate_definition_file(path: Path) -> FileValidationResult:
    """Validate a single definition file."""
    result = FileValidationResult(path=path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        result.add(Severity.ERROR, "INVALID_JSON", f"Invalid JSON: {e}")
        return result

    if not isinstance(data, dict):
        result.add(
            Severity.ERROR,
            "NOT_AN_OBJECT",
            f"Top-level value must be an object, got {type(data).__name__}",
        )
        return result

    servers = normalize_definitions(data, path)
    if not servers:
        result.add(Severity.WARNING, "NO_DEFINITIONS", "No server definitions found")
        return result

    for server_id, server in servers.items():
        result.server_ids.append(server_id)
        _check_server(server_id, server, result)

    return result


def _check_server(server_id: str, server, result: FileValidationResult):
    if not isinstance(server, dict):
        result.add(
            Severity.ERROR,
            "NOT_AN_OBJECT",
            f"Definition for server {server_id} must be an object",
            path=server_id,
        )
        return

    _check_required_fields(server_id, server, result)
    if "installationOptions" in server:
        result.add(
            Severity.ERROR,
            "LEGACY_INSTALLATION_OPTIONS",
            f"Server {server_id} uses the list-based 'installationOptions' schema. "
            "Migrate each option to a keyed entry under 'installationMethods' "
            "(nodeModule / pythonModule / docker).",
            path=f"{server_id}.installationOptions",
        )
        return
    _check_installation_methods(server_id, server, result)
    _check_structure(server_id, server, result)


def _check_required_fields(server_id: str, server: dict, result: FileValidationResult):
    if not server.get("name"):
        result.add(
            Severity.ERROR,
            "MISSING_NAME",
            f"Missing 'name' for server {server_id}",
            path=f"{server_id}.name",
        )
    if not server.get("description"):
        result.add(
            Severity.WARNING,
            "MISSING_DESCRIPTION",
            f"Missing 'description' for server {server_id}",
            path=f"{server_id}.description",
        )


def _check_installation_methods(server_id: str, server: dict, result: FileValidationResult):
    methods = server.get("installationMethods")
    if not methods or not isinstance(methods, dict):
        result.add(
            Severity.ERROR,
            "NO_INSTALLATION_METHODS",
            f"No installation methods defined for server {server_id}",
            path=f"{server_id}.installationMethods",
        )
        return

    for method, config in methods.items():
        if method not in KNOWN_METHODS:
            result.add(
                Severity.WARNING,
                "UNKNOWN_METHOD",
                f"Unknown installation method '{method}' for server {server_id}",
                path=f"{server_id}.installationMethods.{method}",
            )
            continue
        required = METHOD_REQUIRED_FIELDS[method]
        if not isinstance(config, dict) or not config.get(required):
            result.add(
                Severity.ERROR,
                "MISSING_METHOD_FIELD",
                f"Missing '{required}' for {method} installation method of {server_id}",
                path=f"{server_id}.installationMethods.{method}.{required}",
            )

    if methods.get(NODE_MODULE) and not methods.get(DOCKER):
        result.add(
            Severity.WARNING,
            "NODE_MODULE_WITHOUT_DOCKER",
            f"Server {server_id} has a nodeModule installation method but no docker method",
            path=f"{server_id}.installationMethods",
        )


def _check_structure(server_id: str, server: dict, result: FileValidationResult):
    """Report type mismatches only; presence is covered by the checks above."""
    for issue in validate_schema(server, types_only=True):
        result.add(
            Severity.ERROR,
            "SCHEMA_VIOLATION",
            f"Server {server_id}: {issue}",
            path=server_id,
        )
