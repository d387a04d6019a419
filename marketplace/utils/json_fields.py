"""Decoding of JSON blobs stored in text columns.

Malformed or mistyped blobs decode to an empty value instead of failing the
whole listing.
"""

from typing import Any, Dict, List, Optional
import json
import logging

logger = logging.getLogger(__name__)


def decode_json(raw: Optional[str]) -> Any:
    if raw is None or raw == "":
        return None
    if not isinstance(raw, (str, bytes)):
        return raw
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed JSON blob: {raw[:80]!r}")
        return None


def decode_json_list(raw: Optional[str]) -> List[Any]:
    value = decode_json(raw)
    return value if isinstance(value, list) else []


def decode_json_dict(raw: Optional[str]) -> Dict[str, Any]:
    value = decode_json(raw)
    return value if isinstance(value, dict) else {}


def decode_tags(raw: Optional[str]) -> List[str]:
    seen = []
    for tag in decode_json_list(raw):
        if isinstance(tag, str) and tag not in seen:
            seen.append(tag)
    return seen
