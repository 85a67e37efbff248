"""
Configuration settings for the hedge engine API

Loads environment variables and provides application configuration.
"""
import logging
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


class Settings:
    """Application settings"""

    # API Configuration
    API_VERSION: str = "0.1.0"
    API_TITLE: str = "CLMM Position & Hedge API"
    API_DESCRIPTION: str = "Token composition, delta and hedge sizing for Whirlpool concentrated liquidity positions"

    # Wallet whose live positions are reported by GET /positions
    WALLET_ADDRESS: str = os.getenv("WALLET_ADDRESS", "")

    # Position indexer (live positions and pool sqrt prices)
    POSITIONS_API_URL: str = os.getenv("POSITIONS_API_URL", "http://localhost:8080")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", 10))

    # Optional YAML pool registry (defaults to built-in pairs)
    POOLS_FILE: str = os.getenv("POOLS_FILE", "")

    # CORS Configuration
    CORS_ORIGINS: List[str] = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000"
    ).split(",")

    # Server Configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8000))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


# Create global settings instance
settings = Settings()


# Validate critical settings on import
if not settings.WALLET_ADDRESS:
    logger.warning("WALLET_ADDRESS not set; GET /api/v1/positions requires a ?wallet= parameter")
