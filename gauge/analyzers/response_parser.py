"""Pull a JSON object out of free-form model output.

Models often wrap the requested JSON in a markdown fence, prefix it with a
sentence of prose, or trail off with commentary. We look for the first
balanced ``{...}`` value, preferring one inside a fenced code block.
"""
from __future__ import annotations

import json
import re
from typing import Optional

from gauge.errors import ResponseParseError

_FENCE_RE = re.compile(r"```[A-Za-z0-9_-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)


def _balanced_object_at(text: str, start: int) -> Optional[str]:
    """Return the brace-balanced substring starting at ``text[start] == '{'``."""
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
                return text[start:i + 1]
    return None


def first_balanced_object(text: str) -> Optional[str]:
    """Find the first ``{`` that opens a balanced object and return that object."""
    start = text.find("{")
    while start != -1:
        candidate = _balanced_object_at(text, start)
        if candidate is not None:
            return candidate
        start = text.find("{", start + 1)
    return None


def extract_json_text(text: str) -> Optional[str]:
    """Locate JSON object text in a model response.

    Fenced code blocks are searched first, in order; the raw text is the
    fallback. Returns None when no balanced object exists anywhere.
    """
    for match in _FENCE_RE.finditer(text):
        candidate = first_balanced_object(match.group(1))
        if candidate is not None:
            return candidate
    return first_balanced_object(text)


def parse_json_object(text: str) -> dict:
    """Parse the JSON object embedded in ``text``.

    Raises:
        ResponseParseError: If no JSON object can be decoded.
    """
    candidate = extract_json_text(text)
    if candidate is None:
        candidate = text.strip()
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Invalid JSON in response: {e}", raw=text) from e
    if not isinstance(data, dict):
        raise ResponseParseError(
            f"Expected a JSON object, got {type(data).__name__}", raw=text,
        )
    return data
