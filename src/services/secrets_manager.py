"""
AWS Secrets Manager access and database settings resolution.

The shared secret is fetched at most once per SecretsManager instance. The
application builds one instance at startup (see src/api/dependencies.py), so a rotated
secret takes effect on the next process start.
"""

import json
from dataclasses import dataclass
from typing import Any

import boto3
from loguru import logger as log

from common import global_config
from src.utils.logging_config import setup_logging

setup_logging()


@dataclass(frozen=True)
class DatabaseSettings:
    uri: str
    name: str


class SecretsManager:
    def __init__(self, secret_id: str, client: Any):
        self.secret_id = secret_id
        self.client = client
        self._cached: dict[str, Any] | None = None

    @classmethod
    def from_config(cls) -> "SecretsManager":
        client = boto3.client(
            "secretsmanager",
            region_name=global_config.aws_region,
            **global_config.aws_credentials(),
        )
        return cls(global_config.secrets.secret_id, client)

    def get_secrets(self) -> dict[str, Any]:
        """
        Return the parsed shared secret.

        A failed fetch is logged and yields an empty dict without caching, so
        callers fall back to environment values and the next call tries again.
        """
        if self._cached is not None:
            return self._cached

        try:
            response = self.client.get_secret_value(SecretId=self.secret_id)
        except Exception as e:
            log.error(f"Error fetching secrets from AWS Secrets Manager: {str(e)}")
            return {}

        secret_string = response.get("SecretString")
        if not secret_string:
            return {}

        try:
            secrets = json.loads(secret_string)
        except json.JSONDecodeError as e:
            log.error(f"Secret {self.secret_id} is not valid JSON: {str(e)}")
            return {}

        self._cached = secrets if isinstance(secrets, dict) else {}
        return self._cached


def resolve_database_settings(secrets_manager: SecretsManager) -> DatabaseSettings:
    """
    Resolve the MongoDB connection string and database name.

    Environment first, then the shared secret, then configured defaults. The
    secrets store is only contacted when the environment lacks a value.
    """
    uri = global_config.MONGODB_URI
    name = global_config.DATABASE_NAME

    if not uri or not name:
        secrets = secrets_manager.get_secrets()
        uri = uri or secrets.get("MONGODB_URI")
        name = name or secrets.get("DATABASE_NAME")

    return DatabaseSettings(
        uri=uri or global_config.secrets.default_mongodb_uri,
        name=name or global_config.secrets.default_database_name,
    )
