"""
Turn loosely-typed query parameters into a FilterSpec.

Pagination policy: limit and offset never fail validation. A value that is
not an integer falls back to the default, anything out of range is clamped
(limit to [1, MAX_PAGE_LIMIT], offset to [0, MAX_OFFSET]).
"""

from typing import Any, Mapping, Optional
import logging

from marketplace.core.config import settings
from marketplace.schemas.listing import FilterSpec
from marketplace.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENTITY_PRODUCT = "product"
ENTITY_MERCHANT = "merchant"
ENTITY_ORDER = "order"


def default_limit(entity_kind: str) -> int:
    defaults = {
        ENTITY_PRODUCT: settings.DEFAULT_PRODUCT_LIMIT,
        ENTITY_MERCHANT: settings.DEFAULT_MERCHANT_LIMIT,
        ENTITY_ORDER: settings.DEFAULT_ORDER_LIMIT,
    }
    if entity_kind not in defaults:
        raise ConfigurationError(f"No pagination defaults for {entity_kind!r}")
    return defaults[entity_kind]


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        pass
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        logger.debug(f"Non-numeric pagination value {value!r}, using {default}")
        return default


def clamp_limit(value: Any, default: int) -> int:
    return max(1, min(settings.MAX_PAGE_LIMIT, _coerce_int(value, default)))


def clamp_offset(value: Any) -> int:
    return max(0, min(settings.MAX_OFFSET, _coerce_int(value, 0)))


def build_filter_spec(params: Mapping[str, Any], entity_kind: str) -> FilterSpec:
    """Build the filter descriptor for one listing request (pure)."""
    return FilterSpec(
        category=_optional_text(params.get("category")),
        search=_optional_text(params.get("search")),
        limit=clamp_limit(params.get("limit"), default_limit(entity_kind)),
        offset=clamp_offset(params.get("offset")),
    )
