# config/settings.py - APPLICATION SETTINGS

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List, Any
from pathlib import Path
import shutil


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # ============================================================================
    # APPLICATION
    # ============================================================================

    APP_NAME: str = "Deezl"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3001)

    # ============================================================================
    # LOGGING
    # ============================================================================

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_TO_FILE: bool = Field(
        default=False,
        description="Enable file logging"
    )
    LOG_FILE: str = Field(
        default="deezl",
        description="Log file name prefix"
    )

    # ============================================================================
    # CORS
    # ============================================================================

    ALLOWED_ORIGINS: str = Field(default="http://localhost:5173,http://localhost:3000")

    # ============================================================================
    # EXTRACTOR (yt-dlp)
    # ============================================================================

    EXTRACTOR_BINARY: str = Field(
        default="yt-dlp",
        description="Executable invoked to resolve audio URLs and metadata"
    )
    EXTRACTOR_TIMEOUT: float = Field(
        default=60.0,
        description="Seconds before a running extractor process is killed"
    )
    WATCH_URL_TEMPLATE: str = Field(default="https://www.youtube.com/watch?v={video_id}")
    DEFAULT_QUALITY: str = Field(default="bestaudio")
    VIDEO_ID_MAX_LENGTH: int = Field(default=64)

    # ============================================================================
    # CACHE
    # ============================================================================

    CACHE_TTL_SECONDS: float = Field(default=1800.0)
    SINGLE_FLIGHT_ENABLED: bool = Field(
        default=True,
        description="Coalesce concurrent identical extractions into one process"
    )

    # ============================================================================
    # HTTP
    # ============================================================================

    GZIP_MINIMUM_SIZE: int = Field(default=1000)

    # ============================================================================
    # DIRECTORIES
    # ============================================================================

    BASE_DIR: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[1])

    @property
    def LOGS_DIR(self) -> Path:
        """Logs directory path"""
        return self.BASE_DIR / "logs"

    # ============================================================================
    # PYDANTIC CONFIG
    # ============================================================================

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    # ============================================================================
    # COMPUTED PROPERTIES
    # ============================================================================

    @property
    def allowed_origins_list(self) -> List[str]:
        """Get ALLOWED_ORIGINS as a list"""
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(',') if origin.strip()]

    # ============================================================================
    # VALIDATORS (Pydantic v2)
    # ============================================================================

    @field_validator('PORT')
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port number"""
        if not (1 <= v <= 65535):
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator('EXTRACTOR_TIMEOUT', 'CACHE_TTL_SECONDS')
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Timeouts and TTLs must be positive"""
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator('WATCH_URL_TEMPLATE')
    @classmethod
    def validate_watch_url_template(cls, v: str) -> str:
        if "{video_id}" not in v:
            raise ValueError("WATCH_URL_TEMPLATE must contain '{video_id}'")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return v

    # ============================================================================
    # POST-INIT
    # ============================================================================

    def model_post_init(self, __context: Any) -> None:
        """Create the logs directory when file logging is on"""
        if not self.LOG_TO_FILE:
            return
        try:
            self.LOGS_DIR.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print(f"⚠️  Warning: Failed to create logs directory: {e}")

    # ============================================================================
    # VALIDATION METHODS
    # ============================================================================

    def validate(self) -> bool:
        """
        Validate runtime settings

        Returns:
            True if no critical problem was found, False otherwise
        """
        errors = []
        warnings = []

        if shutil.which(self.EXTRACTOR_BINARY) is None:
            errors.append(f"Extractor '{self.EXTRACTOR_BINARY}' was not found on PATH")

        if self.allowed_origins_list == ["*"]:
            warnings.append("CORS allows every origin")

        if self.EXTRACTOR_TIMEOUT > 300:
            warnings.append(f"EXTRACTOR_TIMEOUT is very long ({self.EXTRACTOR_TIMEOUT}s)")

        if errors or warnings:
            from config.logging_config import logger

            for error in errors:
                logger.error(f"❌ Configuration error: {error}")

            for warning in warnings:
                logger.warning(f"⚠️  Configuration warning: {warning}")

        return len(errors) == 0

    def get_info(self) -> dict:
        """
        Get configuration information (safe for logging)

        Returns:
            Dictionary with non-sensitive configuration info
        """
        return {
            "app_name": self.APP_NAME,
            "version": self.APP_VERSION,
            "environment": self.ENVIRONMENT,
            "debug": self.DEBUG,
            "host": self.HOST,
            "port": self.PORT,
            "extractor": self.EXTRACTOR_BINARY,
            "extractor_timeout": self.EXTRACTOR_TIMEOUT,
            "cache_ttl_seconds": self.CACHE_TTL_SECONDS,
            "single_flight": self.SINGLE_FLIGHT_ENABLED,
            "allowed_origins": self.allowed_origins_list,
        }


# ============================================================================
# GLOBAL SETTINGS INSTANCE
# ============================================================================

settings = Settings()
