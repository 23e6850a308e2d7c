"""Prompt templates for package spec generation.

Each template uses ``{placeholder}`` syntax for variable substitution via
``str.format()``. Literal braces in the JSON examples are doubled.
"""

# The model is told to emit this prefix instead of JSON when it cannot
# produce a spec; ``mcpspec.llm.extraction`` looks for it.
FAILURE_MARKER = "Failed to extract package spec"

README_CHAR_LIMIT = 10_000

SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts MCP server package specifications "
    "from URLs. Your task is to analyze the provided URL and generate a valid "
    "package specification in JSON format."
)

# ---------------------------------------------------------------------------
# Package spec generation
# ---------------------------------------------------------------------------

PACKAGE_SPEC_PROMPT = """\
I need you to generate a package specification for an MCP server based on the following URL:
{url}

If this URL is not a git repository (or similar), please end in failure (just output \
"{failure_marker}: [reason]") where [reason] explains why you couldn't generate the spec.

The package specification should be in JSON format and include the following fields:
- id: A unique identifier for the server (if GitHub, use format "username/repo#subdirectory" \
for github, or "gitlab.com/user/repo" or similar for non-github)
- url: URL to the server's source code
- name: Name of the server
- aliases: List of alternative names for the server - use simple, short names without "mcp" \
in them (e.g., "mongodb" instead of "mongodb-mcp")
- description: Description of the server
- installationMethods: Methods to install the server (nodeModule, pythonModule, or docker)

IMPORTANT: YOU MUST INCLUDE ALL APPLICABLE INSTALLATION METHODS in the installationMethods object.

1. If you find references to npm packages, package.json, or npx commands, include a \
nodeModule installation method.
2. If you find references to Python, pip, requirements.txt, or .py files, include a \
pythonModule installation method.
3. If you find references to Docker, Dockerfile, docker-compose, or docker run commands, \
include a docker installation method.
4. CRITICAL: For any server that has a nodeModule installation method, ALWAYS INCLUDE a \
docker installation method as well, using the same package name but with a \
"modelcontextprotocol/" prefix for the Docker image.
5. IMPORTANT: For any server that interfaces with external APIs (search APIs, weather APIs, \
etc.), ALWAYS INCLUDE the necessary API key environment variables in BOTH nodeModule and \
docker installation methods. If the server name suggests it interfaces with a service \
(like "Brave Search", "Google Maps", etc.), assume it requires an API key even if not \
explicitly mentioned in the documentation.

Many repositories support multiple installation methods - be sure to include ALL that apply, \
not just one.

For nodeModule installation method, include:
- npmPackage: Name of the npm package (usually found in package.json, could include scope \
like @username/package-name)
- envVars: Key/value list of environment variables mentioned in documentation (if applicable)

For pythonModule installation method, include:
- pipPackage: Name of the pip package (usually found in setup.py or pyproject.toml)
- envVars: Key/value list of environment variables mentioned in documentation (if applicable)

For docker installation method, include:
- image: Docker image to use (often the repo name)
- envVars: Key/value list of environment variables mentioned in documentation (if applicable)

Examples of valid installationMethods objects:

For an npm package with an API key:
"installationMethods": {{
  "nodeModule": {{
    "npmPackage": "@username/package-name",
    "envVars": {{
      "API_KEY": "Description of the API key"
    }}
  }},
  "docker": {{
    "image": "modelcontextprotocol/package-name",
    "envVars": {{
      "API_KEY": "Description of the API key"
    }}
  }}
}}

For a Python package:
"installationMethods": {{
  "pythonModule": {{
    "pipPackage": "package-name"
  }}
}}

Please respond with ONLY the JSON object, no additional text or explanations.
"""

README_SECTION = """
Here is the README content from the repository to help with your analysis:
{readme}
"""

MANIFEST_SECTION = """
Here is the package.json content from the repository:
{manifest}
"""


def build_package_spec_prompt(url: str, readme: str = "", manifest: str = "") -> str:
    """Compose the generation prompt, appending whatever context was fetched."""
    prompt = PACKAGE_SPEC_PROMPT.format(url=url, failure_marker=FAILURE_MARKER)
    if readme:
        prompt += README_SECTION.format(readme=readme[:README_CHAR_LIMIT])
    if manifest:
        prompt += MANIFEST_SECTION.format(manifest=manifest)
    return prompt
