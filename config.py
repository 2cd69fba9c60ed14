# config.py
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self, **overrides) -> None:
        self.mongo_uri: Optional[str] = os.getenv("MONGO_URI") or None
        self.database_name = os.getenv("DATABASE_NAME", "volei-app")
        self.collection_name = os.getenv("COLLECTION_NAME", "equipes")
        self.port = int(os.getenv("PORT", "3000"))

        # Public URL of this service's /ping route, e.g. https://<app>.onrender.com/ping
        self.self_url: Optional[str] = os.getenv("SELF_URL", "").strip() or None
        self.ping_interval_seconds = float(os.getenv("PING_INTERVAL_SECONDS", "180"))
        self.ping_timeout_seconds = float(os.getenv("PING_TIMEOUT_SECONDS", "10"))

        self.log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
        self.owner_scoping = _as_bool(os.getenv("OWNER_SCOPING", "true"))
        self.cors_origins: List[str] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)
