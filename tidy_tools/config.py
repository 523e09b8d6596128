"""Application configuration."""

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from TIDY_* environment variables."""

    # Undo journal written into the organized directory
    journal_name: str = ".tidy_tools_log.txt"

    # Prefix for extension folders (tidy_jpg) unless quiet naming is used
    folder_prefix: str = "tidy_"

    # Generated report artifacts
    report_name: str = "tidy_report.md"
    duplicates_report_name: str = "tidy_dups.md"

    # Content digest for duplicate detection
    hash_algorithm: str = "md5"

    # Upper bound for "name (n).ext" probing
    max_collision_attempts: int = 9999

    model_config = ConfigDict(
        env_prefix="TIDY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
