from typing import List, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # DB
    DATABASE_URL: str = "sqlite:///./catalog.db"

    # Security / JWT
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Catalog namespaces sharing the same category structure
    CATALOG_DATABASES: List[str] = ["retailers", "buyers"]
    SHOP_DATABASE: str = "buyers"
    RETAILER_DATABASE: str = "retailers"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Optional first admin, created at startup when both are set
    BOOTSTRAP_ADMIN_USERNAME: Optional[str] = None
    BOOTSTRAP_ADMIN_PASSWORD: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
