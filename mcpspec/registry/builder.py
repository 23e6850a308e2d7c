"""Registry builder — merge definition files into repository.json.

The build validates the source tree first and refuses to write anything
if validation fails. Files are merged in sorted path order; when two
files define the same server id, the later file wins and the id is
reported as a duplicate.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from mcpspec.errors import RegistryValidationError
from mcpspec.registry.loader import load_definition_file
from mcpspec.registry.models import BuildResult, RegistryValidationReport
from mcpspec.registry.validator import validate_registry
from mcpspec.utils.file_scanner import scan_definition_files

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_DIR = "mcp-servers"
DEFAULT_BUILD_DIR = "build"
REPOSITORY_FILE = "repository.json"
INDEX_FILE = "index.html"

INDEX_HTML = """\
<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>MCP Server Definitions</title>
    <style>
      body {
        font-family: Menlo, Monaco, Consolas, "Courier New", monospace;
        font-size: 12px;
      }
    </style>
  </head>
  <body>
    <p>
      <a href="repository.json">repository.json</a>
    </p>
  </body>
</html>
"""


class RegistryBuilder:
    """Builds the static registry artifacts from a definition tree."""

    def __init__(
        self,
        source_dir: str | Path = DEFAULT_SOURCE_DIR,
        output_dir: str | Path = DEFAULT_BUILD_DIR,
    ):
        self.source_dir = Path(source_dir)
        self.output_dir = Path(output_dir)
        self.last_report: RegistryValidationReport | None = None

    def build(self) -> BuildResult:
        """Validate, merge, and write ``repository.json`` and ``index.html``.

        Raises:
            RegistryValidationError: the source tree has validation errors.
        """
        self.last_report = validate_registry(self.source_dir)
        if not self.last_report.passed:
            raise RegistryValidationError(
                f"Validation failed for {self.source_dir}: {self.last_report.summary()}. "
                "Aborting build."
            )

        servers, duplicates, files = self.merge()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        repository_path = self.output_dir / REPOSITORY_FILE
        with open(repository_path, "w", encoding="utf-8") as f:
            json.dump(servers, f, indent=2)
            f.write("\n")

        index_path = self.output_dir / INDEX_FILE
        index_path.write_text(INDEX_HTML, encoding="utf-8")

        logger.info(
            "Combined %d definition file(s) into %s (%d servers)",
            len(files), repository_path, len(servers),
        )
        return BuildResult(
            repository_path=repository_path,
            index_path=index_path,
            file_count=len(files),
            server_count=len(servers),
            duplicate_ids=duplicates,
        )

    def merge(self) -> tuple[dict, list[str], list[Path]]:
        """Return ``(servers, duplicate_ids, files)`` for the source tree."""
        servers: dict = {}
        duplicates: list[str] = []
        files = scan_definition_files(self.source_dir)

        for path in files:
            for server_id, spec in load_definition_file(path).items():
                if server_id in servers:
                    logger.warning("Duplicate server id '%s' in %s overrides earlier definition", server_id, path)
                    duplicates.append(server_id)
                servers[server_id] = spec

        return servers, duplicates, files


def build_registry(
    source_dir: str | Path = DEFAULT_SOURCE_DIR,
    output_dir: str | Path = DEFAULT_BUILD_DIR,
) -> BuildResult:
    """Convenience wrapper around :class:`RegistryBuilder`."""
    return RegistryBuilder(source_dir, output_dir).build()
