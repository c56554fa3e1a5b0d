"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class DatabaseConfig(BaseModel):
    """SQLite database configuration."""

    path: str = Field("~/.local/share/feedshelf/feedshelf.db", description="SQLite database file")


class FetchConfig(BaseModel):
    """Remote feed fetch settings."""

    timeout: float = Field(20.0, description="Per-feed fetch timeout in seconds", gt=0, le=300)
    user_agent: str = Field(
        "feedshelf/1.0 (+https://github.com/feedshelf/feedshelf)",
        description="User-Agent header sent with feed requests",
    )


class ReaderConfig(BaseModel):
    """Reader defaults."""

    user_id: int = Field(1, description="User the CLI acts as", ge=1)
    read_collection: str = Field("Read", description="Collection that records read entries")

    @field_validator("read_collection")
    @classmethod
    def validate_read_collection(cls, v: str) -> str:
        """Reject blank collection titles."""
        if not v.strip():
            raise ValueError("read_collection must not be blank")
        return v.strip()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Console log level")
    log_dir: Optional[str] = Field(None, description="Directory for daily log files")
    retention_days: int = Field(30, description="Days of log files to keep", ge=1)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class ConfigModel(BaseModel):
    """Main configuration model."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
