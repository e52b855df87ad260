"""Application configuration using environment variables."""
import os
from functools import lru_cache
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Server
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS - Frontend URL
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

    # Generation limits
    MAX_MAP_DIMENSION: int = int(os.getenv("MAX_MAP_DIMENSION", "512"))

    # Fraction of rooms that must be reachable before the connectivity
    # diagnostic stays quiet (1.0 = warn on any unreachable room)
    CONNECTIVITY_THRESHOLD: float = float(os.getenv("CONNECTIVITY_THRESHOLD", "1.0"))


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
