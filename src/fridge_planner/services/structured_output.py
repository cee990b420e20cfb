"""Extract a JSON array from a model reply.

Replies are tried in order against three conventions, most strict first:

1. the whole reply is JSON (schema-constrained mode), either the array
   itself or an object wrapping it under ``key``;
2. a fenced ```json``` block holding the array;
3. the first ``[...]`` span that decodes as a JSON array.

Each stage that fails is recorded so the final error says why.
"""

import json
import logging
import re

from fridge_planner.errors import MalformedOutputError

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]+?)\s*```")
_RAW_PREVIEW = 300

_logger = logging.getLogger(__name__)


def extract_json_array(text: str, key: str = "items") -> list[object]:
    """Return the first JSON array found in text."""
    if not text or not text.strip():
        raise MalformedOutputError(stage="empty")

    stripped = text.strip()
    found = _from_document(stripped, key)
    if found is not None:
        return found

    for match in _FENCE_PATTERN.finditer(stripped):
        found = _from_document(match.group(1), key)
        if found is not None:
            return found

    found = _scan_for_array(stripped)
    if found is not None:
        return found

    _logger.warning("No JSON array in model reply: %s", stripped[:_RAW_PREVIEW])
    raise MalformedOutputError(stage="bracket_scan")


def _from_document(text: str, key: str) -> list[object] | None:
    try:
        document = json.loads(text)
    except json.JSONDecodeError:
        return None
    if isinstance(document, list):
        return document
    if isinstance(document, dict) and isinstance(document.get(key), list):
        return document[key]
    return None


def _scan_for_array(text: str) -> list[object] | None:
    decoder = json.JSONDecoder()
    start = text.find("[")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, list):
            return value
        start = text.find("[", start + 1)
    return None
