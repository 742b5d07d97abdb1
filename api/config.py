"""
Configuration management for the DART summary API.

Values are read once from the environment (and a root .env file) at import.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from sources.dart.provider import BASE_URL

BASE_DIR: Path = Path(__file__).parent.parent
load_dotenv(BASE_DIR / ".env")


class Settings:
    """API server configuration."""

    # Server
    API_TITLE: str = "DART Financial Summary API"
    API_DESCRIPTION: str = "Proxy for the DART Open API with a condensed financial summary"
    API_VERSION: str = "1.0.0"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_METHODS: List[str] = ["GET", "POST", "OPTIONS"]

    # Upstream
    DART_API_KEY: str = os.getenv("DART_API_KEY", "")
    DART_BASE_URL: str = BASE_URL
    UPSTREAM_TIMEOUT: float = float(os.getenv("DART_TIMEOUT", "10"))


settings = Settings()
