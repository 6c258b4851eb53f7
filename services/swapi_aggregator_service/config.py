"""
Configuration module for the SWAPI Aggregator Service.

Defines upstream addressing, pagination policy, retry policy and HTTP
serving settings. Values come from environment variables prefixed with
``SWAPI_AGGREGATOR_SERVICE_`` and from a ``.env`` file.
"""

from __future__ import annotations

from dotenv import find_dotenv, load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from services.swapi_aggregator_service.enums_api import Collection, Environment, MissPolicy

# Load .env file from repository root, regardless of current working directory
load_dotenv(find_dotenv(".env"))


class Settings(BaseSettings):
    """
    Configuration settings for the SWAPI Aggregator Service.

    Settings are loaded from .env files and environment variables.
    """

    # Service identity
    SERVICE_NAME: str = "swapi_aggregator_service"
    SERVICE_VERSION: str = "1.0.0"
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",  # Read from global ENVIRONMENT var
        description="Runtime environment for the service",
    )
    LOG_LEVEL: str = "INFO"

    # HTTP API configuration
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False

    # Upstream resource API
    SWAPI_BASE_URL: str = Field(default="https://swapi.dev/api", min_length=8)
    FETCH_TIMEOUT_SECONDS: float = Field(
        default=10.0, gt=0, description="Total timeout for a single upstream fetch."
    )
    HTTP_CONNECTION_LIMIT: int = Field(default=50, ge=1)

    # Pagination policy
    BATCH_WIDTH: int = Field(default=10, ge=1, le=100)
    PEOPLE_MISS_THRESHOLD: int = Field(default=5, ge=1)
    PLANETS_MISS_THRESHOLD: int = Field(default=3, ge=1)
    MISS_POLICY: MissPolicy = MissPolicy.CUMULATIVE
    MAX_BATCHES_PER_RUN: int = Field(
        default=50, ge=1, description="Safety ceiling on batches in one pagination run."
    )

    # Batch retry policy (same cursor, exponential backoff)
    BATCH_RETRY_ATTEMPTS: int = Field(default=3, ge=1, le=10)
    BATCH_RETRY_WAIT_MIN_SECONDS: float = Field(default=0.5, ge=0)
    BATCH_RETRY_WAIT_MAX_SECONDS: float = Field(default=4.0, ge=0)

    # Resident resolution
    RESIDENT_MAX_CONCURRENCY: int = Field(default=20, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="SWAPI_AGGREGATOR_SERVICE_",
    )

    def miss_threshold_for(self, collection: Collection) -> int:
        if collection is Collection.PLANETS:
            return self.PLANETS_MISS_THRESHOLD
        return self.PEOPLE_MISS_THRESHOLD


# Create a single instance for the application to use
settings = Settings()
