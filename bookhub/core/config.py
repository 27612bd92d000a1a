# Standard library imports
import os
from typing import Final, List, Optional
from dotenv import load_dotenv


STORAGE_BACKEND_SQL = "sql"
STORAGE_BACKEND_MONGO = "mongo"


class Settings:
    """
    BookHub runtime settings.
    
    Read once from the environment (and a local .env file) when first requested;
    every value has a development default.
    """
    
    def __init__(self) -> None:
        # Load environment variables from .env file
        load_dotenv()
        
        self.app_name: Final[str] = os.getenv("APP_NAME", "BookHub API")
        
        # Timezone Configuration
        # Default to UTC, but can be set via TIMEZONE env var (e.g., "UTC", "America/Sao_Paulo")
        self.timezone: Final[str] = os.getenv("TIMEZONE", "UTC")
        
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()
        
        # Storage backend selected at startup: "sql" or "mongo"
        self.storage_backend: Final[str] = os.getenv(
            "STORAGE_BACKEND", STORAGE_BACKEND_SQL
        ).strip().lower()
        
        # Relational database (any SQLAlchemy URL)
        self.database_url: Final[str] = os.getenv("DATABASE_URL", "sqlite:///./bookhub.db")
        self.db_pool_size: Final[int] = int(os.getenv("DB_POOL_SIZE", "5"))
        self.db_echo: Final[bool] = os.getenv("DB_ECHO", "false").lower() in ("true", "1", "yes")
        
        # Document database
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DATABASE", "bookhub")
        self.mongo_max_pool_size: Final[int] = int(os.getenv("MONGO_MAX_POOL_SIZE", "100"))
        self.mongo_min_pool_size: Final[int] = int(os.getenv("MONGO_MIN_POOL_SIZE", "10"))
        
        # Collection Names
        self.users_collection: Final[str] = os.getenv("USERS_COLLECTION", "users")
        self.books_collection: Final[str] = os.getenv("BOOKS_COLLECTION", "books")
        self.loans_collection: Final[str] = os.getenv("LOANS_COLLECTION", "loans")
        
        # Token Configuration
        self.jwt_secret_key: Final[str] = os.getenv(
            "JWT_SECRET_KEY",
            "your-super-secret-key-change-in-production"
        )
        self.jwt_token_duration_minutes: Final[int] = int(
            os.getenv("JWT_TOKEN_DURATION_MINUTES", "1440")  # 24 hours
        )
        self.jwt_issuer: Final[str] = os.getenv("JWT_ISSUER", "bookhub")
        
        # Password hashing cost (pbkdf2_sha256 rounds)
        self.password_hash_rounds: Final[int] = int(
            os.getenv("PASSWORD_HASH_ROUNDS", "29000")
        )
        
        # CORS, comma separated list or "*"
        cors_env = os.getenv("CORS_ORIGINS", "*")
        self.cors_origins: Final[List[str]] = (
            ["*"] if cors_env.strip() == "*"
            else [o.strip() for o in cors_env.split(",") if o.strip()]
        )
        
        # Optional admin account seeded at startup when missing
        self.admin_email: Final[Optional[str]] = os.getenv("ADMIN_EMAIL")
        self.admin_password: Final[Optional[str]] = os.getenv("ADMIN_PASSWORD")
        self.admin_name: Final[str] = os.getenv("ADMIN_NAME", "Admin")


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
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
