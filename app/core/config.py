# backend-server/app/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings; from dotenv import load_dotenv
load_dotenv()
class Settings(BaseSettings):
    DATABASE_URL: str
    JWT_SECRET_KEY: str; JWT_ALGORITHM: str = "HS256"
    JWT_REFRESH_SECRET_KEY: Optional[str] = None
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    SUPER_ADMIN_EMAIL: Optional[str] = None; SUPER_ADMIN_PASSWORD: Optional[str] = None
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    @property
    def refresh_secret_key(self) -> str:
        return self.JWT_REFRESH_SECRET_KEY or f"{self.JWT_SECRET_KEY}-refresh"
settings = Settings()
