"""
Taskboard Server Configuration

This file contains all server-side configurable settings.
Values marked with an environment variable name can be overridden
from the process environment or a local .env file.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List
import os

from dotenv import load_dotenv


load_dotenv()

# Get the backend directory path (parent of taskboard directory)
BACKEND_DIR = Path(__file__).parent.parent
DATA_DIR = BACKEND_DIR / "data"


@dataclass
class ServerConfig:
    """Server networking configuration."""
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: List[str] = field(default_factory=lambda: [
        "http://localhost:3000",  # Next.js dev server
        "http://localhost:5173",  # Vite default port
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ])


@dataclass
class DatabaseConfig:
    """Database configuration."""
    DATABASE_URL: str = os.getenv("TASKBOARD_DATABASE_URL", f"sqlite:///{DATA_DIR / 'taskboard.db'}")
    ECHO_SQL: bool = os.getenv("ECHO_SQL", "false").lower() == "true"  # Log SQL queries


@dataclass
class AuthConfig:
    """Password hashing and access token settings."""
    SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "dev-secret-change-me")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Credential policy
    USERNAME_MAX_LENGTH: int = 255
    EMAIL_MAX_LENGTH: int = 255
    PASSWORD_MIN_LENGTH: int = 6
    PASSWORD_MAX_LENGTH: int = 128


@dataclass
class TodoConfig:
    """Todo item limits."""
    TITLE_MAX_LENGTH: int = 255


@dataclass
class Settings:
    """Main settings container."""
    server: ServerConfig = None
    database: DatabaseConfig = None
    auth: AuthConfig = None
    todo: TodoConfig = None

    # Application info
    APP_NAME: str = "Taskboard"
    VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self):
        self.server = self.server or ServerConfig()
        self.database = self.database or DatabaseConfig()
        self.auth = self.auth or AuthConfig()
        self.todo = self.todo or TodoConfig()


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
