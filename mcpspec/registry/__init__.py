"""Registry — the static catalog of MCP server definitions.

The registry provides:
- Validation: per-file field checks with errors and warnings
- Building: merge all definitions into one repository.json plus an index page
"""
