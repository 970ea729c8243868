"""Application configuration from environment variables."""
from pathlib import Path
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./catalog.db"

    # Authentication
    jwt_secret: str = "change-me-in-production-use-random-string"
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Runtime
    environment: str = "development"  # development, production
    cors_origins: str = "*"

    # Artwork storage (uploaded files are served from artwork_base_url)
    artwork_dir: str = "./artwork"
    artwork_base_url: str = "http://localhost:8000/artwork"
    artwork_max_size: int = 10 * 1024 * 1024  # 10MB

    # Local CLI state (token, admin bootstrap flag)
    state_dir: str = str(Path.home() / ".label_catalog")

    # Logging
    log_level: str = "info"
    log_path: str = ""

    @property
    def is_development(self) -> bool:
        return self.environment.lower() != "production"

    class Config:
        env_file = (".env", "../.env")  # Check both backend/ and parent dir
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
