"""Pull a JSON object out of a free-text model reply.

Models sometimes wrap the JSON in prose or code fences. Rather than a
greedy first-``{``-to-last-``}`` match, candidates are found with a
balanced-bracket scan that skips braces inside JSON strings, and the
first candidate that parses to an object wins.
"""

from __future__ import annotations

import json
import re
from typing import Iterator

from mcpspec.errors import ExtractionRefusedError, MalformedJsonError, NoJsonFoundError
from mcpspec.llm.prompts import FAILURE_MARKER

_REFUSAL_RE = re.compile(re.escape(FAILURE_MARKER) + r"[ \t]*:?[ \t]*(.*)", re.IGNORECASE)


def extract_package_json(reply: str) -> dict:
    """Return the first JSON object in ``reply``.

    Raises:
        ExtractionRefusedError: the reply carries the failure marker.
        NoJsonFoundError: no balanced ``{...}`` block exists.
        MalformedJsonError: blocks exist but none parse as a JSON object.
    """
    refusal = _REFUSAL_RE.search(reply)
    if refusal:
        raise ExtractionRefusedError(refusal.group(1).strip())

    first_error = ""
    found = False
    for candidate in iter_json_candidates(reply):
        found = True
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError as e:
            first_error = first_error or str(e)
            continue
        if isinstance(value, dict):
            return value

    if not found:
        raise NoJsonFoundError()
    raise MalformedJsonError(first_error or "top-level value is not an object")


def iter_json_candidates(text: str) -> Iterator[str]:
    """Yield each top-level balanced ``{...}`` substring, left to right.

    Objects nested inside a yielded block are not yielded on their own.
    """
    start = text.find("{")
    while start != -1:
        end = _matching_brace(text, start)
        if end == -1:
            start = text.find("{", start + 1)
            continue
        yield text[start:end + 1]
        start = text.find("{", end + 1)


def _matching_brace(text: str, start: int) -> int:
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1
