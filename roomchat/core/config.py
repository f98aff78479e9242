# roomchat/core/config.py
import os
from typing import List, Optional
from dotenv import load_dotenv


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Setup environment variables.
        - REDIS_URL full connection URL for the key-value store (wins over host/port)
        - REDIS_HOST / REDIS_PORT / REDIS_ACCESS_KEY / REDIS_SSL used when no URL is set
        - API_PREFIX path prefix every REST route is mounted under
        - CORS_ORIGINS comma separated list of allowed origins
    """

    # Load environment variables from the .env file
    load_dotenv()

    REDIS_URL: Optional[str] = os.getenv("REDIS_URL") or None
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_ACCESS_KEY: str = os.getenv("REDIS_ACCESS_KEY", "")
    REDIS_SSL: bool = _as_bool(os.getenv("REDIS_SSL", "false"))

    API_PREFIX: str = os.getenv("API_PREFIX", "").rstrip("/")
    CORS_ORIGINS: List[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    def redis_url(self) -> str:
        """Connection URL for the key-value store."""
        if self.REDIS_URL:
            return self.REDIS_URL
        scheme = "rediss" if self.REDIS_SSL else "redis"
        auth = f":{self.REDIS_ACCESS_KEY}@" if self.REDIS_ACCESS_KEY else ""
        return f"{scheme}://{auth}{self.REDIS_HOST}:{self.REDIS_PORT}"

settings = Settings()
