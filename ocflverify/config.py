"""Production configuration — env-driven.

Centralized config using pydantic-settings for environment variable
support. Reads from .env file and OCFLVERIFY_* environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProdConfig(BaseSettings):
    """Production configuration with environment variable overrides.

    All settings can be overridden via OCFLVERIFY_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export OCFLVERIFY_BUCKET_NAME=preservation
        export OCFLVERIFY_ENDPOINT_OVERRIDE=http://localhost:9090
        export OCFLVERIFY_LOG_LEVEL=DEBUG

    Or via .env file::

        OCFLVERIFY_ENVIRONMENT=production
        OCFLVERIFY_REGION=us-east-1
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="OCFLVERIFY_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Object store
    bucket_name: str = "preservation"
    region: str = "us-east-1"
    access_key_id: str = ""
    secret_access_key: str = ""
    endpoint_override: str = ""   # e.g. an S3-compatible mock or MinIO URL
    inventory_name: str = "inventory.json"

    # Transport: per-request deadlines are enforced by botocore
    connect_timeout: float = 10.0
    read_timeout: float = 30.0
    max_attempts: int = 3

    # Verification fan-out
    max_workers: int = 8

    # HTTP surface
    host: str = "0.0.0.0"
    port: int = 9000

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"


# Module-level singleton; import as `from ocflverify.config import config`
config = ProdConfig()
