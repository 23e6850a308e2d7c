"""Package spec generator — URL in, validated spec file out."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from mcpspec.errors import InvalidUrlError
from mcpspec.llm.extraction import extract_package_json
from mcpspec.llm.prompts import SYSTEM_PROMPT, build_package_spec_prompt
from mcpspec.sources.repository import (
    RepositoryContextFetcher,
    is_valid_url,
    parse_repository_url,
)
from mcpspec.spec.models import PackageSpec
from mcpspec.spec.rules import DEFAULT_RULES
from mcpspec.spec.validator import validate_package_spec

logger = logging.getLogger(__name__)

SPEC_FILE_EXTENSION = ".json"

_MCP_RE = re.compile(r"-?mcp-?")
_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_RE = re.compile(r"[^\w.-]+")
FALLBACK_FILENAME = "server"


class PackageSpecGenerator:
    """Drafts a package spec for a repository URL with a single LLM call.

    ``llm`` is anything with a ``complete(prompt, system_prompt=...)``
    method returning an object with a ``content`` attribute, normally
    :class:`mcpspec.llm.client.LLMClient`.
    """

    def __init__(self, llm, fetcher: RepositoryContextFetcher | None = None, rules=DEFAULT_RULES):
        self.llm = llm
        self.fetcher = fetcher
        self.rules = rules
        self.last_response = None

    def generate_from_url(self, url: str, prompt_override: str | None = None) -> PackageSpec:
        """Generate and validate a package spec for ``url``.

        When ``prompt_override`` is given, context fetch and prompt
        construction are skipped and the override is sent as-is.

        Raises:
            SpecGeneratorError: any subclass, from URL parsing through
                schema validation. Nothing is written on failure.
        """
        if not is_valid_url(url):
            raise InvalidUrlError(url)

        if prompt_override:
            logger.info("Using custom prompt for extraction")
            prompt = prompt_override
        else:
            prompt = self.build_prompt(url)

        self.last_response = self.llm.complete(prompt, system_prompt=SYSTEM_PROMPT)
        data = extract_package_json(self.last_response.content)
        return validate_package_spec(data, rules=self.rules)

    def build_prompt(self, url: str) -> str:
        location = parse_repository_url(url)
        if self.fetcher is None:
            with RepositoryContextFetcher() as fetcher:
                context = fetcher.gather(location)
        else:
            context = self.fetcher.gather(location)
        return build_package_spec_prompt(url, context.readme, context.manifest)

    def determine_output_path(self, spec: PackageSpec, output_dir: str | Path) -> Path:
        """Return ``{output_dir}/{first letter}/{filename}.json`` for a spec.

        The filename is the lowercased name with whitespace runs turned
        into hyphens, unless the first alias gives a cleaner one once
        "mcp" is stripped from it. Path separators and other unsafe
        characters become hyphens, and leading dots are dropped, so the
        file always lands inside ``output_dir``.
        """
        filename = _safe_filename(_WHITESPACE_RE.sub("-", spec.name.lower())) or FALLBACK_FILENAME

        if spec.aliases:
            alias = _MCP_RE.sub("-", spec.aliases[0], count=1).replace("--", "-", 1)
            if alias and not alias.startswith("-") and not alias.endswith("-"):
                filename = _safe_filename(alias) or filename

        first_letter = filename[:1].lower()
        return Path(output_dir) / first_letter / f"{filename}{SPEC_FILE_EXTENSION}"

    def save_to_file(self, spec: PackageSpec, output_path: str | Path) -> Path:
        """Write the spec as 2-space-indented JSON, creating parent dirs."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(spec.to_dict(), f, indent=2)
            f.write("\n")
        logger.info("Package specification saved to %s", path)
        return path


def _safe_filename(value: str) -> str:
    """Replace unsafe characters with hyphens and trim dots/hyphens from the ends."""
    return _UNSAFE_RE.sub("-", value).strip(".-")
