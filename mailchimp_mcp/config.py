"""
Runtime configuration.

Values come from the process environment, optionally seeded from a `.env`
file in the working directory:
  - MAILCHIMP_API_KEY: Mailchimp API key in the form <key>-<dc> (e.g., abc123-us14)
  - PORT: Listen port for standalone HTTP hosting (default 3000)
  - LOG_LEVEL: Logging level name (default INFO)
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

SERVER_NAME = "mailchimp-mcp-server"
SERVER_VERSION = "1.0.0"

DEFAULT_DATA_CENTER = "us1"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings once per process. Call `get_settings.cache_clear()` to reload."""
    load_dotenv()
    return Settings(
        api_key=os.getenv("MAILCHIMP_API_KEY", "").strip(),
        port=int(os.getenv("PORT", str(DEFAULT_PORT))),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
