"""mcpspec LLM integration module.

Provides a thin wrapper around the Anthropic API, the generation prompt,
and extraction of a JSON object from the model's free-text reply.
"""

from mcpspec.llm.client import LLMClient, LLMResponse
from mcpspec.llm.extraction import extract_package_json

__all__ = [
    "LLMClient",
    "LLMResponse",
    "extract_package_json",
]
