# Standard library imports
import os
from typing import Final, List, Optional
from dotenv import load_dotenv

from app.core.errors import ConfigurationError


VALID_ENVIRONMENTS = ("development", "production", "test")


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    MONGODB_URI has no default; its absence is reported when the database
    connection is first requested (see require_mongodb_uri).
    """

    def __init__(self) -> None:
        # Load environment variables from .env file
        load_dotenv()

        # Environment
        self.environment: Final[str] = os.getenv("APP_ENV", "development").lower()
        if self.environment not in VALID_ENVIRONMENTS:
            raise ConfigurationError(
                f"Invalid APP_ENV '{self.environment}'. "
                f"Expected one of: {', '.join(VALID_ENVIRONMENTS)}"
            )

        # Timezone Configuration
        # Default to UTC, but can be set via TIMEZONE env var (e.g., "UTC", "America/New_York")
        self.timezone: Final[str] = os.getenv("TIMEZONE", "UTC")
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()

        # Database Configuration
        self.mongodb_uri: Final[Optional[str]] = os.getenv("MONGODB_URI") or None
        self.mongo_database_name: Final[str] = os.getenv("DB_NAME", "student_management")
        self.students_collection: Final[str] = os.getenv("STUDENTS_COLLECTION", "students")
        self.mongo_max_pool_size: Final[int] = int(os.getenv("MONGO_MAX_POOL_SIZE", "10"))
        self.mongo_server_selection_timeout_ms: Final[int] = int(
            os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "30000")
        )
        # Atlas free tier clusters pause when idle and need ~20 seconds to wake up
        self.mongo_retry_delay_seconds: Final[float] = float(
            os.getenv("MONGO_RETRY_DELAY_SECONDS", "20")
        )

        # Photo Storage Configuration
        self.photo_storage: Final[str] = os.getenv("PHOTO_STORAGE", "local").lower()
        self.upload_root: Final[str] = os.getenv(
            "UPLOAD_ROOT",
            os.path.join(os.getcwd(), "public")
        )
        self.max_photo_bytes: Final[int] = int(os.getenv("MAX_PHOTO_BYTES", str(1024 * 1024)))

        # S3 Configuration (only used when PHOTO_STORAGE=s3)
        self.s3_bucket_name: Final[Optional[str]] = os.getenv("S3_BUCKET_NAME")
        self.aws_region: Final[str] = os.getenv("AWS_REGION", "us-east-1")
        self.aws_access_key_id: Final[Optional[str]] = os.getenv("AWS_ACCESS_KEY_ID")
        self.aws_secret_access_key: Final[Optional[str]] = os.getenv("AWS_SECRET_ACCESS_KEY")
        self.s3_public_base_url: Final[Optional[str]] = os.getenv("S3_PUBLIC_BASE_URL")

        # HTTP Configuration
        self.cors_origins: Final[List[str]] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def require_mongodb_uri(self) -> str:
        """
        Get the MongoDB connection string.

        Raises:
            ConfigurationError: If MONGODB_URI is not set
        """
        if not self.mongodb_uri:
            raise ConfigurationError(
                "MONGODB_URI is required. Please configure it in your .env file."
            )
        return self.mongodb_uri


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
