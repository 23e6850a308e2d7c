"""Error taxonomy for the spec generator and registry tooling.

Every error carries a human-readable message. The CLI matches on
substrings of these messages ("API key", "URL", "fetch", "JSON") to add
a suggestion line, so keep those words in the messages that need them.
"""

from __future__ import annotations


class SpecGeneratorError(Exception):
    """Base class for all mcpspec errors."""


class ConfigurationError(SpecGeneratorError):
    """Settings are missing or out of range."""


class InvalidUrlError(SpecGeneratorError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(
            f"Invalid URL format: {url}. "
            "Please provide a valid URL in the format http(s)://domain.com/path"
        )


class UnsupportedHostError(SpecGeneratorError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(
            f"Could not determine repository location for URL: {url}. "
            "Only GitHub and GitLab repositories are currently supported."
        )


class FetchError(SpecGeneratorError):
    """A raw-content fetch failed (both branches, or the only attempt)."""

    def __init__(self, url: str, status_code: int | None = None, detail: str = ""):
        self.url = url
        self.status_code = status_code
        if status_code == 404:
            message = (
                f"Failed to fetch {url} (404 error). The repository may be private, "
                "empty, or structured differently."
            )
        elif status_code == 403:
            message = (
                f"Failed to fetch {url} (403 error). The repository may require "
                "authentication or have access restrictions."
            )
        elif status_code == 429:
            message = (
                f"Failed to fetch {url} (429 error). Rate limit exceeded on the "
                "git hosting service."
            )
        else:
            message = f"Failed to fetch {url}" + (f": {detail}" if detail else "")
        super().__init__(message)


class LLMError(SpecGeneratorError):
    """The completion request could not be completed."""


# ── Extraction ───────────────────────────────────────────────────────


class ExtractionRefusedError(SpecGeneratorError):
    """The model signalled that it could not produce a spec."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "The URL does not appear to be a valid repository for an MCP server"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class NoJsonFoundError(SpecGeneratorError):
    def __init__(self):
        super().__init__(
            "Could not extract valid JSON from the LLM response. "
            "The model may not have generated a proper JSON structure."
        )


class MalformedJsonError(SpecGeneratorError):
    def __init__(self, parse_error: str):
        self.parse_error = parse_error
        super().__init__(f"Invalid JSON in LLM response: {parse_error}")


# ── Schema validation ────────────────────────────────────────────────


class SchemaValidationError(SpecGeneratorError):
    """A parsed package spec violates a validation rule."""

    code = "SCHEMA_INVALID"


class MissingFieldError(SchemaValidationError):
    code = "MISSING_FIELD"

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Package specification is missing required field: {field_name}")


class NoInstallationMethodError(SchemaValidationError):
    code = "NO_INSTALLATION_METHOD"

    def __init__(self):
        super().__init__("Package specification must define at least one installation method")


class NodeModuleWithoutDockerError(SchemaValidationError):
    code = "NODE_MODULE_WITHOUT_DOCKER"

    def __init__(self):
        super().__init__(
            "Package specification with nodeModule installation method must also "
            "provide a docker installation method"
        )


class MissingEnvVarsError(SchemaValidationError):
    code = "MISSING_ENV_VARS"

    def __init__(self, method: str):
        self.method = method
        super().__init__(
            f"API-based server must include environment variables in {method} installation method"
        )


class MissingMethodFieldError(SchemaValidationError):
    code = "MISSING_METHOD_FIELD"

    def __init__(self, method: str, field_name: str):
        self.method = method
        self.field_name = field_name
        super().__init__(
            f"{method} installation method is missing required field: {field_name}"
        )


class FieldTypeError(SchemaValidationError):
    code = "FIELD_TYPE"

    def __init__(self, issues: list[str]):
        self.issues = issues
        super().__init__(
            "Package specification has fields of the wrong type: " + "; ".join(issues)
        )


# ── Registry ─────────────────────────────────────────────────────────


class RegistryValidationError(SpecGeneratorError):
    """The registry tree failed validation, so the build was aborted."""
