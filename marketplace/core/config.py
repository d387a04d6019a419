from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    APP_NAME: str = "Local Marketplace API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    DATABASE_URL: str = "sqlite:///./marketplace.db"
    DB_TIMEOUT_SECONDS: int = 5

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    DEFAULT_PRODUCT_LIMIT: int = 20
    DEFAULT_MERCHANT_LIMIT: int = 10
    DEFAULT_ORDER_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100
    MAX_OFFSET: int = 2**31 - 1

    MIN_PASSWORD_LENGTH: int = 6

    LOG_LEVEL: str = "INFO"

    ALLOWED_ORIGINS: List[str] = ["http://localhost", "http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
