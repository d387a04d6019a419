from marketplace.utils.date_helpers import format_member_since, format_timestamp
from marketplace.utils.validators import (
    validate_phone,
    clean_phone_number,
    escape_like,
    contains_pattern,
)
from marketplace.utils.json_fields import (
    decode_json,
    decode_json_list,
    decode_json_dict,
    decode_tags,
)
from marketplace.utils.exceptions import (
    MarketplaceError,
    ValidationError,
    UnauthorizedError,
    NotFoundError,
    MethodNotAllowedError,
    ConflictError,
    StorageError,
    ConfigurationError,
)

__all__ = [
    "format_member_since",
    "format_timestamp",
    "validate_phone",
    "clean_phone_number",
    "escape_like",
    "contains_pattern",
    "decode_json",
    "decode_json_list",
    "decode_json_dict",
    "decode_tags",
    "MarketplaceError",
    "ValidationError",
    "UnauthorizedError",
    "NotFoundError",
    "MethodNotAllowedError",
    "ConflictError",
    "StorageError",
    "ConfigurationError",
]
