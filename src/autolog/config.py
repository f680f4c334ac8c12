"""Configuration management for AutoLog."""

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="AUTOLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "AutoLog"
    debug: bool = False
    log_level: str = "INFO"

    # Paths
    data_dir: Path = Path("data")
    temp_dir: Path = Path("data/temp")  # Staging area for multipart uploads

    # Database
    database_url: str = "sqlite+aiosqlite:///data/autolog.db"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    public_base_url: str = "http://localhost:8000"

    # Authentication
    jwt_secret: str = "autolog-jwt-secret-change-me-in-production"

    # Object storage (S3 is used when bucket and credentials are set)
    s3_bucket: str = ""
    s3_region: str = "us-east-1"
    s3_endpoint_url: str = ""  # Empty = AWS; set for MinIO/other S3-compatible stores
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_acl: str = "public-read"
    local_storage_dir: Path = Path("data/uploads")

    # Rate limiting (requests per minute)
    rate_limit_enabled: bool = True
    rate_limit_uploads: str = "10/minute"

    # CORS (Cross-Origin Resource Sharing)
    cors_enabled: bool = True
    cors_allow_origins: list[str] = []  # Empty = same-origin only; use ["*"] for any origin
    cors_allow_methods: list[str] = ["GET", "POST", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["*"]
    cors_allow_credentials: bool = False

    @property
    def s3_enabled(self) -> bool:
        """Check whether a complete S3 configuration is present."""
        return bool(
            self.s3_bucket.strip()
            and self.s3_access_key_id.strip()
            and self.s3_secret_access_key.strip()
        )

    def setup_directories(self) -> None:
        """Ensure required directories exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        if not self.s3_enabled:
            self.local_storage_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    settings.setup_directories()
    return settings
