"""File scanner — discover server definition files in a registry tree."""

from pathlib import Path

# Directories to always skip
SKIP_DIRS = {
    ".git", "__pycache__", "node_modules", ".venv", "venv",
    ".tox", ".mypy_cache", ".pytest_cache", ".ruff_cache",
}

DEFINITION_SUFFIX = ".json"


def scan_definition_files(root: Path) -> list[Path]:
    """Recursively find ``*.json`` definition files under ``root``.

    Results are sorted so that merges are deterministic. A missing root
    yields an empty list.
    """
    root = Path(root)
    if not root.is_dir():
        return []
    return sorted(
        item for item in root.rglob(f"*{DEFINITION_SUFFIX}")
        if item.is_file() and _should_include(item.relative_to(root))
    )


def _should_include(relative: Path) -> bool:
    """Check if a file should be included, judged by its path inside the root."""
    for part in relative.parts:
        if part in SKIP_DIRS:
            return False
    return True


def definition_key(path: Path) -> str:
    """Filename-derived registry key for a spec file that has no id."""
    return Path(path).stem
