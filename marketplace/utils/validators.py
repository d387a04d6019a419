import re

PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-\(\)]{8,20}$")
LIKE_ESCAPE_CHAR = "\\"


def validate_phone(phone: str) -> bool:
    return bool(PHONE_PATTERN.match(phone))


def clean_phone_number(phone: str) -> str:
    """Keep digits only, preserving a leading ``+``."""
    phone = phone.strip()
    digits = re.sub(r"\D", "", phone)
    if phone.startswith("+"):
        return "+" + digits
    return digits


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input only ever matches literally.

    The returned string must be used with ``escape=LIKE_ESCAPE_CHAR``.
    """
    return (
        term.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )


def contains_pattern(term: str) -> str:
    return f"%{escape_like(term)}%"
