from marketplace.core.config import settings
from marketplace.core.database import Base, engine, SessionLocal, get_db
from marketplace.core.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from marketplace.core.dependencies import get_current_user_id

__all__ = [
    "settings",
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "get_password_hash",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "get_current_user_id",
]
