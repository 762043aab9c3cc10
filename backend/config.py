"""
Configuration Module for the Apple Music Link Resolver
Handles logging setup and environment-driven settings
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from apple_music_client import (
    DEFAULT_LOOKUP_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = None):
    """
    Configure application logging with standard format

    Args:
        level: Level name; falls back to $LOG_LEVEL, then INFO

    Returns:
        Logger instance for the config module
    """
    level_name = (level or os.environ.get('LOG_LEVEL') or 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT
    )
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read once at startup"""

    itunes_base_url: str = 'https://itunes.apple.com'
    itunes_country: Optional[str] = None
    itunes_search_limit: int = DEFAULT_SEARCH_LIMIT
    itunes_lookup_limit: int = DEFAULT_LOOKUP_LIMIT
    http_timeout: float = DEFAULT_TIMEOUT
    http_user_agent: str = DEFAULT_USER_AGENT
    port: int = 5001


def _env_int(environ, name: str, default: int) -> int:
    value = environ.get(name)
    if value is None or value.strip() == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _env_float(environ, name: str, default: float) -> float:
    value = environ.get(name)
    if value is None or value.strip() == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


def load_settings(environ=None) -> Settings:
    """
    Build Settings from environment variables

    Call load_dotenv() first if .env support is wanted.

    Args:
        environ: Mapping to read from (default: os.environ)

    Raises:
        ValueError: If a numeric variable can't be parsed
    """
    environ = os.environ if environ is None else environ

    return Settings(
        itunes_base_url=environ.get('ITUNES_BASE_URL') or Settings.itunes_base_url,
        itunes_country=environ.get('ITUNES_COUNTRY') or None,
        itunes_search_limit=_env_int(environ, 'ITUNES_SEARCH_LIMIT', DEFAULT_SEARCH_LIMIT),
        itunes_lookup_limit=_env_int(environ, 'ITUNES_LOOKUP_LIMIT', DEFAULT_LOOKUP_LIMIT),
        http_timeout=_env_float(environ, 'HTTP_TIMEOUT', DEFAULT_TIMEOUT),
        http_user_agent=environ.get('HTTP_USER_AGENT') or DEFAULT_USER_AGENT,
        port=_env_int(environ, 'PORT', 5001),
    )


def init_app_config(app, settings: Settings = None):
    """
    Initialize Flask app configuration

    Stores the resolver Settings on app.config['SETTINGS'] so routes can
    build clients from them.

    Args:
        app: Flask application instance
        settings: Settings to use (default: load_settings())
    """
    app.config['SETTINGS'] = settings or load_settings()
    app.json.sort_keys = False
