"""Registry data models — validation issues and per-file reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Severity(Enum):
    ERROR = "error"  # Fails validation and blocks the build
    WARNING = "warning"  # Reported; fails only in strict mode


@dataclass
class ValidationIssue:
    """A single issue found in a definition file."""

    severity: Severity
    code: str  # Machine-readable issue code
    message: str
    path: str = ""  # Location inside the file (e.g. "acme/tool.installationMethods.docker")


@dataclass
class FileValidationResult:
    """Validation outcome for one definition file."""

    path: Path
    issues: list[ValidationIssue] = field(default_factory=list)
    server_ids: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def passed(self) -> bool:
        return not self.errors

    def add(self, severity: Severity, code: str, message: str, path: str = "") -> None:
        self.issues.append(ValidationIssue(severity, code, message, path))


@dataclass
class RegistryValidationReport:
    """Result of validating every definition file in a registry tree."""

    files: list[FileValidationResult] = field(default_factory=list)
    strict: bool = False

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def valid_files(self) -> int:
        return sum(1 for f in self.files if self._file_ok(f))

    @property
    def passed(self) -> bool:
        return all(self._file_ok(f) for f in self.files)

    def _file_ok(self, result: FileValidationResult) -> bool:
        if self.strict:
            return not result.issues
        return result.passed

    def summary(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return (
            f"[{status}] {self.total_files} file(s), {self.valid_files} valid, "
            f"{self.total_files - self.valid_files} with errors"
        )


@dataclass
class BuildResult:
    """What the registry builder wrote."""

    repository_path: Path
    index_path: Path
    file_count: int = 0
    server_count: int = 0
    duplicate_ids: list[str] = field(default_factory=list)
