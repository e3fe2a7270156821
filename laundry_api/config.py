# laundry_api/config.py
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = Field(min_length=1)
    JWT_SECRET: str = Field(min_length=1)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: float = 60  # supports decimal durations
    BCRYPT_ROUNDS: int = 10

    HOST: str = "0.0.0.0"
    PORT: int = 5001
    LOG_LEVEL: str = "INFO"

    FRONTEND_URL: str = "http://localhost:3000"
    EXTRA_ORIGINS: List[str] = ["http://localhost:3001"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    @property
    def allowed_origins(self) -> List[str]:
        origins = [self.FRONTEND_URL]
        origins.extend(o for o in self.EXTRA_ORIGINS if o not in origins)
        return origins


@lru_cache
def get_settings() -> Settings:
    return Settings()
