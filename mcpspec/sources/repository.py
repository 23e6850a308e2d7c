"""Repository context fetch — README and package.json from raw-content endpoints.

Only GitHub and GitLab URLs of the form ``host/{owner}/{repo}`` are
recognized. Each file is tried on ``main`` first and then on ``master``.
Fetch failures are soft at the :meth:`RepositoryContextFetcher.gather`
level: they are logged and the prompt is built without that context.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from urllib.parse import urlparse

import httpx

from mcpspec.errors import FetchError, InvalidUrlError, UnsupportedHostError

logger = logging.getLogger(__name__)

GITHUB = "github.com"
GITLAB = "gitlab.com"

BRANCH_FALLBACK = ("main", "master")

README_FILE = "README.md"
MANIFEST_FILE = "package.json"

_REPO_PATH_RE = re.compile(r"^/([^/#?]+)/([^/#?]+)")


def is_valid_url(url: str) -> bool:
    """Return True if ``url`` has both a scheme and a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


@dataclass(frozen=True)
class RepositoryLocation:
    """Owner and repo on a supported git host."""

    host: str
    owner: str
    repo: str

    def raw_url(self, path: str, branch: str) -> str:
        if self.host == GITHUB:
            return f"https://raw.githubusercontent.com/{self.owner}/{self.repo}/{branch}/{path}"
        return f"https://gitlab.com/{self.owner}/{self.repo}/-/raw/{branch}/{path}"


def parse_repository_url(url: str) -> RepositoryLocation:
    """Resolve a repository URL to a :class:`RepositoryLocation`.

    Raises:
        InvalidUrlError: the string is not a well-formed URL.
        UnsupportedHostError: the host is not GitHub or GitLab, or the path
            has no owner/repo segments.
    """
    if not is_valid_url(url):
        raise InvalidUrlError(url)

    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    if host not in (GITHUB, GITLAB):
        raise UnsupportedHostError(url)

    match = _REPO_PATH_RE.match(parsed.path)
    if not match:
        raise UnsupportedHostError(url)

    owner, repo = match.groups()
    if repo.endswith(".git"):
        repo = repo[:-4]
    return RepositoryLocation(host=host, owner=owner, repo=repo)


@dataclass
class RepositoryContext:
    """Whatever context could be fetched for the prompt. Empty strings mean none."""

    readme: str = ""
    manifest: str = ""


class RepositoryContextFetcher:
    """Fetches README and package.json content over HTTP.

    Pass an ``httpx.Client`` to control transport (tests use
    ``httpx.MockTransport``); otherwise one is created per fetcher.
    """

    def __init__(self, client: httpx.Client | None = None, timeout: float = 10.0):
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> RepositoryContextFetcher:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def gather(self, location: RepositoryLocation) -> RepositoryContext:
        """Fetch README and manifest, sequentially, logging any failure."""
        context = RepositoryContext()

        try:
            context.readme = self.fetch_readme(location)
            logger.info("Fetched README from %s/%s", location.owner, location.repo)
        except FetchError as e:
            logger.warning("Could not fetch README content: %s", e)

        if location.host == GITHUB:
            try:
                manifest = self.fetch_manifest(location)
                logger.info("Fetched package.json: %s", manifest.get("name", "<unnamed>"))
                context.manifest = json.dumps(manifest, indent=2)
            except FetchError as e:
                logger.warning("Could not fetch package.json: %s", e)

        return context

    def fetch_readme(self, location: RepositoryLocation) -> str:
        return self._fetch_with_fallback(location, README_FILE)

    def fetch_manifest(self, location: RepositoryLocation) -> dict:
        """Fetch and parse package.json. GitHub only."""
        if location.host != GITHUB:
            raise FetchError(
                location.raw_url(MANIFEST_FILE, BRANCH_FALLBACK[0]),
                detail="package.json is only fetched from GitHub repositories",
            )
        text = self._fetch_with_fallback(location, MANIFEST_FILE)
        try:
            manifest = json.loads(text)
        except json.JSONDecodeError as e:
            raise FetchError(
                location.raw_url(MANIFEST_FILE, BRANCH_FALLBACK[0]),
                detail=f"package.json is not valid JSON ({e})",
            ) from e
        if not isinstance(manifest, dict):
            raise FetchError(
                location.raw_url(MANIFEST_FILE, BRANCH_FALLBACK[0]),
                detail="package.json is not a JSON object",
            )
        return manifest

    def _fetch_with_fallback(self, location: RepositoryLocation, path: str) -> str:
        primary, secondary = BRANCH_FALLBACK
        try:
            return self._get(location.raw_url(path, primary))
        except FetchError as e:
            logger.debug("%s not on '%s' (%s), trying '%s'", path, primary, e, secondary)
        return self._get(location.raw_url(path, secondary))

    def _get(self, url: str) -> str:
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(url, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise FetchError(url, detail=str(e)) from e
        return response.text
