"""Configuration management for bookshelf.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


@dataclass
class Config:
    """Application configuration."""

    # Storage
    db_path: Path

    # Google Books
    google_books_api_key: Optional[str]
    search_timeout: int  # seconds

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "BOOKSHELF_DB_PATH",
            str(Path.home() / ".bookshelf" / "bookshelf.db"),
        )
        db_path = Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            google_books_api_key=os.environ.get("GOOGLE_BOOKS_API_KEY") or None,
            search_timeout=int(os.environ.get("BOOKSHELF_SEARCH_TIMEOUT", "10")),
            log_level=os.environ.get("BOOKSHELF_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        # Check database directory is writable
        if not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if self.search_timeout <= 0:
            errors.append(f"Search timeout must be positive, got {self.search_timeout}")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def has_api_key(self) -> bool:
        """Check if a Google Books API key is configured."""
        return bool(self.google_books_api_key)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
