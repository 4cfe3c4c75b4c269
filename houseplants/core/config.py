"""House Plants configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Document store
    database_url: str = "sqlite:///./houseplants.db"
    store_lock_timeout_seconds: float = 15.0

    # Bearer token verification
    jwt_secret_key: str = "dev-only-change-me-please-dev-only-change-me"
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None
    jwt_issuer: str | None = None

    # HTTP
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = ["*"]

    # General
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {
        "env_file": ".env",
        "env_prefix": "HOUSEPLANTS_",
        "extra": "ignore",
    }


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
