"""Application configuration.

Environment variables override all defaults. A `.env` file next to the
backend directory is loaded first for local development.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

_BACKEND_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_BACKEND_DIR / ".env", override=False)


class Settings:
    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./wiremill.db")

    # Runtime
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = ENVIRONMENT == "development"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO")

    # CORS (specific origins only, no wildcards)
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
        ).split(",")
        if origin.strip()
    ]

    # Server (python -m wiremill.main)
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Document numbering (CH0001, INV0001, ...)
    CHALLAN_PREFIX: str = os.getenv("CHALLAN_PREFIX", "CH")
    INVOICE_PREFIX: str = os.getenv("INVOICE_PREFIX", "INV")
    DOCUMENT_NUMBER_WIDTH: int = int(os.getenv("DOCUMENT_NUMBER_WIDTH", "4"))


settings = Settings()
