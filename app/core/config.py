from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./tournament.db"
    DATABASE_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    RANDOM_SEED: Optional[int] = None # Pin the pairing draw, e.g. for demos
    API_PREFIX: str = "/api"

    class Config:
        env_file = ".env"

settings = Settings()
