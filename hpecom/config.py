"""Configuration management for hpecom."""

from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_COM_ENDPOINTS: Dict[str, str] = {
    "us-west": "https://us-west2-api.compute.cloud.hpe.com",
    "eu-central": "https://eu-central1-api.compute.cloud.hpe.com",
    "ap-northeast": "https://ap-northeast1-api.compute.cloud.hpe.com",
}


class Settings(BaseSettings):
    """hpecom configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="HPECOM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Session (populated by an external connect step)
    token: Optional[str] = Field(
        default=None,
        description="Bearer token for the GreenLake and COM APIs"
    )
    workspace_id: Optional[str] = Field(
        default=None,
        description="Current GreenLake workspace ID"
    )
    regions: List[str] = Field(
        default_factory=list,
        description="COM regions provisioned in the current workspace"
    )

    # Endpoints
    glp_endpoint: str = Field(
        default="https://global.api.greenlake.hpe.com",
        description="GreenLake platform API base URL"
    )
    com_endpoints: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_COM_ENDPOINTS),
        description="COM API base URL per region"
    )

    # HTTP
    timeout: float = Field(default=60, description="Request timeout in seconds")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="console",
        description="Log format: json, console"
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (for testing)."""
    global _settings
    _settings = None
