"""Application settings, read from the environment (``SWEETSHOP_*``) or a ``.env`` file."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SWEETSHOP_",
        env_file=".env",
        extra="ignore",
    )

    env: str = "development"
    # memory://, sqlite:///path.db or postgresql://...
    database_url: str = "sqlite:///sweetshop.db"
    api_prefix: str = "/api"

    # Pricing
    delivery_fee: float = Field(8.99, ge=0)
    free_delivery_threshold: float = Field(50.0, ge=0)

    # Admin routes are open unless a token is configured
    admin_token: str | None = None

    pool_timeout: int = 10

    log_level: str | None = None
    log_dir: str | None = None


def get_settings(**overrides) -> Settings:
    """Build settings from the environment, applying explicit overrides on top."""
    return Settings(**overrides)
