import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./social_feed.db")
SQL_ECHO = _flag("SQL_ECHO", "false")
AUTO_CREATE_TABLES = _flag("AUTO_CREATE_TABLES", "true")

# Authentication
JWT_SECRET = os.getenv("JWT_SECRET", "default_secret_please_change_in_production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "1440"))

# HTTP layer
API_PREFIX = os.getenv("API_PREFIX", "/api")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG = _flag("DEBUG", "false")

# Pagination bounds
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))
