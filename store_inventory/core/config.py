from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Store Inventory API"
    API_VERSION: str = "1.0.0"

    DATABASE_URL: str = "sqlite:///./inventory.db"
    DATABASE_ECHO: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 4000

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Comma-separated list of allowed browser origins
    CORS_ORIGINS: str = "http://localhost:3000"

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX: int = 120
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    # Any `limits` storage URI, e.g. redis://localhost:6379 (needs the redis extra)
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    REQUEST_TIMEOUT_SECONDS: float = 30.0

    SEED_ON_STARTUP: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="allow")

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def rate_limit(self) -> str:
        return f"{self.RATE_LIMIT_MAX} per {self.RATE_LIMIT_WINDOW_SECONDS} seconds"


settings = Settings()
