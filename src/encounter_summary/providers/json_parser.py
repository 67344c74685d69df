"""Pull a JSON object out of free-form model output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from encounter_summary.exceptions import ResponseParseError

log = logging.getLogger(__name__)

_GREEDY_OBJECT = re.compile(r"\{[\s\S]*\}")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


def _try_parse(candidate: str) -> Any | None:
    """Attempt a JSON parse, retrying once with trailing commas removed."""
    candidate = candidate.strip()
    if not candidate:
        return None
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        pass
    try:
        return json.loads(_TRAILING_COMMA.sub(r"\1", candidate))
    except json.JSONDecodeError:
        return None


def _balanced_object(text: str) -> str | None:
    """Return the first brace-balanced ``{...}`` span, ignoring braces in strings."""
    start = text.find("{")
    if start == -1:
        return None
    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(text)):
        ch = text[i]
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def extract_json_object(text: str) -> dict[str, Any]:
    """Extract the first JSON object embedded in *text*.

    The widest ``{...}`` span is tried first (handles fenced blocks and
    surrounding prose); when that fails to parse, e.g. because prose after
    the object contains braces, a balanced-brace scan from the first ``{``
    is tried.

    Raises:
        ResponseParseError: No span parses to a JSON object.
    """
    match = _GREEDY_OBJECT.search(text)
    if match is None:
        raise ResponseParseError("No JSON object found in response", raw_response=text)

    parsed = _try_parse(match.group(0))
    if not isinstance(parsed, dict):
        balanced = _balanced_object(text)
        parsed = _try_parse(balanced) if balanced else None

    if not isinstance(parsed, dict):
        log.debug(f"Unparseable response preview: {text[:200]!r}")
        raise ResponseParseError("Response did not contain a valid JSON object", raw_response=text)
    return parsed
