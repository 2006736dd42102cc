from __future__ import annotations

import os
from typing import List


class Settings:
    """Centralized configuration for the allergy scoring backend."""

    def __init__(self) -> None:
        self.log_level: str = (os.environ.get("ALLERGY_LOG_LEVEL") or "INFO").upper()
        self.max_records: int = int(os.environ.get("ALLERGY_MAX_RECORDS") or "5000")
        self.timeline_days: int = int(os.environ.get("ALLERGY_TIMELINE_DAYS") or "30")
        self.host: str = os.environ.get("ALLERGY_HOST") or "127.0.0.1"
        self.port_raw: str = os.environ.get("ALLERGY_PORT") or "8000"

        cors = os.environ.get("ALLERGY_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
