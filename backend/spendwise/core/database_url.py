"""
Database URL resolution; in Lambda the RDS credentials come from Secrets Manager
"""
import json
import logging
import os
import ssl
from typing import Any, Dict, Optional

from sqlalchemy.engine import make_url

from spendwise.core.config import aws_client, settings

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./spendwise.db"
DEFAULT_DATABASE_NAME = "spendwise"


def in_lambda() -> bool:
    return bool(os.environ.get("AWS_LAMBDA_FUNCTION_NAME"))


def get_rds_credentials() -> Optional[Dict[str, Any]]:
    """Username/password secret named by DB_SECRET_ARN, or None"""
    secret_arn = os.environ.get("DB_SECRET_ARN")
    if not secret_arn:
        return None

    try:
        response = aws_client('secretsmanager').get_secret_value(SecretId=secret_arn)
        return json.loads(response['SecretString'])
    except Exception as e:
        logger.error(f"Failed to get RDS credentials: {e}")
        return None


def rds_connect_args() -> Dict[str, Any]:
    """asyncpg connect args; RDS only accepts SSL from Lambda"""
    if not in_lambda():
        return {}
    ssl_context = ssl.create_default_context()
    ssl_context.check_hostname = False
    ssl_context.verify_mode = ssl.CERT_NONE
    return {"ssl": ssl_context}


def get_database_url() -> str:
    database_url = settings.DATABASE_URL or os.environ.get("DATABASE_URL") or DEFAULT_DATABASE_URL
    if not in_lambda():
        return database_url

    url = make_url(database_url)
    if url.get_backend_name() != "postgresql":
        return database_url

    credentials = get_rds_credentials()
    if not credentials:
        logger.warning("No RDS credentials found, using DATABASE_URL as-is")
        return database_url

    # URL.set quotes reserved characters in the secret when rendered
    url = url.set(
        username=credentials.get('username', DEFAULT_DATABASE_NAME),
        password=credentials.get('password', ''),
        port=url.port or 5432,
        database=url.database or DEFAULT_DATABASE_NAME,
    )
    logger.info(f"Database config: host={url.host}, port={url.port}, database={url.database}")
    return url.render_as_string(hide_password=False)
