"""
Configuration management for resumesync.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent
PACKAGE_DIR = ROOT_DIR / "resumesync"
DATA_DIR = ROOT_DIR / "data"


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "resumesync"
    username: str | None = None
    password: str | None = None

    @property
    def connection_string(self) -> str:
        """Generate MongoDB connection string."""
        if self.username and self.password:
            return f"mongodb://{self.username}:{self.password}@{self.host}:{self.port}"
        return f"mongodb://{self.host}:{self.port}"


class MLSettings(BaseSettings):
    """Embedding model configuration."""

    model_config = SettingsConfigDict(env_prefix="ML_")

    # Which backend produces vectors
    embedding_provider: Literal["sentence_transformers", "gemini"] = "sentence_transformers"

    # Local sentence-transformers model (768-dimensional)
    embedding_model: str = "sentence-transformers/all-mpnet-base-v2"
    embedding_dimension: int = 768

    # Hosted Gemini embedding model
    gemini_api_key: str | None = None
    gemini_model: str = "models/text-embedding-004"

    # Device settings
    device: Literal["cpu", "cuda", "mps", "auto"] = "auto"

    @field_validator("device")
    @classmethod
    def validate_device(cls, v: str) -> str:
        """Auto-detect device if set to auto."""
        if v == "auto":
            try:
                import torch

                if torch.cuda.is_available():
                    return "cuda"
                elif torch.backends.mps.is_available():
                    return "mps"
            except ImportError:
                pass
            return "cpu"
        return v


class PersistenceSettings(BaseSettings):
    """Write policy for resume saves."""

    model_config = SettingsConfigDict(env_prefix="PERSIST_")

    # best_effort: every section is attempted independently and failures are recorded.
    # atomic: metadata and all sections commit in a single transaction (needs a replica set).
    save_policy: Literal["best_effort", "atomic"] = "best_effort"


class JobQuerySettings(BaseSettings):
    """Job listing configuration."""

    model_config = SettingsConfigDict(env_prefix="JOBS_")

    default_page_size: int = Field(default=10, ge=1)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "resumesync.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "resumesync"
    version: str = "0.1.0"
    description: str = "Resume/job synchronization and semantic embedding pipeline"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    ml: MLSettings = Field(default_factory=MLSettings)
    persistence: PersistenceSettings = Field(default_factory=PersistenceSettings)
    jobs: JobQuerySettings = Field(default_factory=JobQuerySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
