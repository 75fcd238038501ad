from pydantic_settings import BaseSettings
from typing import List, Optional
import logging
import os
import boto3
from functools import lru_cache

logger = logging.getLogger(__name__)


def aws_client(service: str):
    """boto3 client with short timeouts; lookups happen on cold start"""
    return boto3.client(service, config=boto3.session.Config(
        retries={'max_attempts': 2, 'mode': 'standard'},
        read_timeout=10,
        connect_timeout=5
    ))


@lru_cache(maxsize=1)
def get_anthropic_api_key() -> str:
    """Anthropic API key from ANTHROPIC_API_KEY, else the SSM parameter named by ANTHROPIC_API_KEY_PARAM"""
    api_key = os.getenv("ANTHROPIC_API_KEY")
    param_name = os.getenv("ANTHROPIC_API_KEY_PARAM")
    if api_key or not param_name:
        return api_key or ""

    try:
        parameter = aws_client('ssm').get_parameter(Name=param_name, WithDecryption=True)
    except Exception as e:
        # Answers fall back to the apology text without a key
        logger.error(f"Failed to load API key from SSM: {e}")
        return ""
    return parameter['Parameter']['Value']


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = ""  # Resolved by get_database_url() when empty

    # Anthropic
    ANTHROPIC_DEFAULT_MODEL: str = "claude-sonnet-4-20250514"
    ANSWER_MAX_TOKENS: int = 400

    # Identity provider tokens (the provider signs, we only verify)
    IDENTITY_JWT_SECRET: str = "change-me-identity-provider-signing-secret"
    IDENTITY_JWT_ALGORITHM: str = "HS256"
    IDENTITY_JWT_ISSUER: Optional[str] = None
    IDENTITY_JWT_AUDIENCE: Optional[str] = None

    # Debug / logging
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Application
    APP_NAME: str = "Spendwise Expense Tracker"
    VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Dashboard panels held in memory per user
    MAX_PANELS_PER_USER: int = 5
    PANEL_IDLE_SECONDS: int = 1800  # Unused panels are dropped after this long

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()


def configure_logging() -> None:
    """Configure root logging from settings"""
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
