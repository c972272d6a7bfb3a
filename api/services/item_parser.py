"""
Item list extraction from free-form model text
"""
import json
import logging
import re
from typing import Any, List

logger = logging.getLogger(__name__)

# First bracketed array, possibly spanning lines. Models often wrap it in prose.
_ARRAY_PATTERN = re.compile(r"\[.*?\]", re.DOTALL)


def parse_item_list(raw_text: Any) -> List[str]:
    """
    Extract a list of item descriptions from model output.

    Only a JSON array whose elements are all strings is accepted. Anything
    else (no array, malformed JSON, numbers, objects, nested arrays) yields
    an empty list. Never raises.
    """
    if not isinstance(raw_text, str):
        return []

    match = _ARRAY_PATTERN.search(raw_text)
    if not match:
        logger.debug("No JSON array found in model text")
        return []

    try:
        parsed = json.loads(match.group())
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deeply nested brackets exhaust the decoder stack
        logger.warning(f"Failed to parse item list: {e}")
        return []

    if isinstance(parsed, list) and all(isinstance(item, str) for item in parsed):
        return parsed

    logger.warning("Item list contained non-string elements, discarding")
    return []
