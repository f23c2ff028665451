"""Configuration settings for the application."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Cluster
    user_namespace: str = Field(default="riju-user", description="Namespace holding user session pods")
    session_label: str = Field(
        default="riju.codes/user-session-id",
        description="Pod label carrying the session ID",
    )
    pod_name_prefix: str = Field(default="riju-user-session-", description="Prefix of session pod names")
    kubeconfig: str | None = Field(
        default=None,
        description="Kubeconfig path (defaults to $KUBECONFIG or ~/.kube/config)",
    )

    # Secrets
    minio_secret_name: str = Field(default="minio-user-login", description="Secret holding the mc config")
    registry_secret_name: str = Field(default="registry-user-login", description="Image pull secret")

    # Binary download (init container)
    download_image: str = Field(
        default="minio/mc:RELEASE.2022-12-13T00-23-28Z",
        description="Image of the init container that fetches binaries",
    )
    object_store_alias: str = Field(default="riju", description="mc alias the binaries are stored under")

    # Session container
    lang_image_registry: str = Field(default="localhost:30999", description="Registry of riju-lang images")
    session_cpu_limit: str = Field(default="1000m", description="CPU limit of the session container")
    session_memory_limit: str = Field(default="4Gi", description="Memory limit of the session container")
    agent_port: int = Field(default=869, description="Port of the agent health endpoint")

    # Application Settings
    log_level: str = Field(default="INFO", description="Logging level")
    environment: Literal["development", "production"] = Field(
        default="development", description="Environment"
    )

    # FastAPI Server
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Rate Limiting
    rate_limit_per_minute: int = Field(default=60, description="Rate limit per minute")
    session_create_rate_limit: str = Field(
        default="10/minute", description="Rate limit for session creation"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
