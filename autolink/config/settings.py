"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- MediaWiki API ---
AUTOLINK_API_URL: str = os.getenv("AUTOLINK_API_URL", "http://localhost/w/api.php")
AUTOLINK_NAMESPACE: int = int(os.getenv("AUTOLINK_NAMESPACE", "0"))
AUTOLINK_MAX_PAGES: int = int(os.getenv("AUTOLINK_MAX_PAGES", "100"))
AUTOLINK_HTTP_TIMEOUT: float = float(os.getenv("AUTOLINK_HTTP_TIMEOUT", "10.0"))

# --- Redis name cache ---
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
NAME_CACHE_ENABLED: bool = os.getenv("NAME_CACHE_ENABLED", "false").lower() == "true"
NAME_CACHE_TTL_SECONDS: int = int(os.getenv("NAME_CACHE_TTL_SECONDS", "86400"))

# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
