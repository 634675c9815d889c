"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class StepConfig(BaseSettings):
    """Step engine configuration."""

    model_config = {"env_prefix": "SERVICEKIT_STEP_"}

    backend: Literal["memory", "redis", "dynamodb"] = "memory"
    log_comment: str | None = None


class RedisConfig(BaseSettings):
    """Redis step-state backend configuration."""

    model_config = {"env_prefix": "SERVICEKIT_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    key_prefix: str = "servicekit:steps:"


class DynamoDBConfig(BaseSettings):
    """DynamoDB step-state backend configuration."""

    model_config = {"env_prefix": "SERVICEKIT_DYNAMO_"}

    table: str = "servicekit-step-state"
    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "SERVICEKIT_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    log_json: bool = True

    step: StepConfig = StepConfig()
    redis: RedisConfig = RedisConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
