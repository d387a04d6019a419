from datetime import datetime
from typing import Optional


def format_member_since(dt: Optional[datetime]) -> str:
    if not dt:
        return ""
    return dt.strftime("%b %d, %Y")


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    if not dt:
        return None
    return dt.isoformat()
