"""
Configuration management for the D365 metadata CLI
"""

import os
from pathlib import Path
from typing import Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Bearer token used as-is when no --token flag is given
    dynamics_bearer_token: Optional[str] = None
    metadata_url: Optional[str] = None

    # Output locations
    metadata_path: str = str(Path('data') / 'metadata.json')
    markdown_path: str = str(Path('data') / 'entity.md')

    # Optional service principal (client credentials flow)
    azure_tenant_id: Optional[str] = None
    azure_client_id: Optional[str] = None
    azure_client_secret: Optional[str] = None

    request_timeout: float = 60.0
    log_level: Literal["debug", "info", "warning", "error"] = "info"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _lowercase_log_level(cls, value):
        return value.lower() if isinstance(value, str) else value

    @property
    def has_azure_credentials(self) -> bool:
        return bool(self.azure_tenant_id and self.azure_client_id and self.azure_client_secret)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get application settings singleton"""
    global _settings
    if _settings is None:
        # Ensure .env is loaded before creating settings
        load_dotenv_if_exists()

        import structlog
        logger = structlog.get_logger(__name__)

        try:
            _settings = Settings()
        except Exception as e:
            raise ValueError(f"Invalid configuration. Check your environment and .env file: {e}") from e

        logger.debug("Settings loaded",
                     metadata_path=_settings.metadata_path,
                     azure_credentials=_settings.has_azure_credentials,
                     cwd=os.getcwd())
    return _settings


def reset_settings() -> None:
    """Drop the cached settings instance (used by tests)"""
    global _settings
    _settings = None


def load_dotenv_if_exists() -> None:
    """Load .env file if it exists"""
    from dotenv import load_dotenv

    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)
    else:
        # Try to load from parent directories
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            env_path = parent / ".env"
            if env_path.exists():
                load_dotenv(env_path)
                break
