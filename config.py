"""Configuration settings for the server."""

import tomllib
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Server configuration from environment variables or a .env file."""

    # Server settings
    port: int = 3456

    # Completion endpoint settings
    secret_key: str = ""
    base_url: Optional[str] = None
    model: str = ""
    temperature: float = 0.2
    max_tokens: int = 256

    # Language identifiers completions are offered for
    languages: list[str] = ["typescript", "javascript", "python"]

    # Logging settings
    log_retention_days: int = 7

    # Completion settings (unset means the HTTP client's default)
    completion_timeout_ms: Optional[int] = None

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"
        case_sensitive = False


# Settings instance for the server entry point
settings = Settings()


def get_version() -> str:
    """Read version from pyproject.toml."""
    try:
        pyproject_path = Path(__file__).parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return data.get("project", {}).get("version", "unknown")
    except (OSError, tomllib.TOMLDecodeError):
        return "unknown"


# Server version (read from pyproject.toml)
VERSION = get_version()
