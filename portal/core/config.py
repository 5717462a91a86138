# portal/core/config.py

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # Base URL of the college backend REST API
    API_URL: str = "http://localhost:8000"

    # Seconds before a backend call is abandoned
    REQUEST_TIMEOUT: float = 10.0

    # Worker threads used for batch attendance submission
    BATCH_WORKERS: int = 4

    # Callers remembered by the stale-response tracker
    TRACKER_MAX_KEYS: int = 1024

    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "COLLEGE_PORTAL_"
        case_sensitive = False


CONFIG = Settings()


def get_settings() -> Settings:
    return CONFIG
