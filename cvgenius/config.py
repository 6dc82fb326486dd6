"""Engine configuration settings."""

import os
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class EngineSettings(BaseSettings):
    """Templating engine configuration settings."""
    
    default_template: str = os.getenv("CVGENIUS_DEFAULT_TEMPLATE", "classic")
    default_locale: str = os.getenv("CVGENIUS_DEFAULT_LOCALE", "en-IE")
    catalogue_path: Optional[str] = os.getenv("CVGENIUS_CATALOGUE_PATH", None)
    max_pages: int = int(os.getenv("CVGENIUS_MAX_PAGES", "2"))
    log_level: str = os.getenv("CVGENIUS_LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("CVGENIUS_LOG_FILE", None)
    session_cookie: str = os.getenv("CVGENIUS_SESSION_COOKIE", "cvgenius_template")
    host: str = os.getenv("CVGENIUS_HOST", "127.0.0.1")
    port: int = int(os.getenv("CVGENIUS_PORT", "8000"))
    
    class Config:
        env_prefix = "CVGENIUS_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """
    Get the cached engine settings.
    
    Returns:
        EngineSettings: Settings read from the environment and .env file
    """
    return EngineSettings()
