"""
Dashboard configuration read from environment variables
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import pandas as pd

TRUE_VALUES = {'1', 'true', 'yes', 'on'}


class ConfigurationError(Exception):
    """Raised when a required setting is missing or malformed"""


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_key: str
    request_timeout: Optional[float] = None
    host: str = '0.0.0.0'
    port: int = 8050
    debug: bool = False
    timezone: str = 'UTC'
    page_size: Optional[int] = None
    strict_nulls: bool = False
    max_sessions: int = 256
    log_level: str = 'INFO'


def _first(environ, *names):
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def _as_int(environ, name, default):
    raw = environ.get(name)
    if raw in (None, ''):
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _as_float(environ, name, default):
    raw = environ.get(name)
    if raw in (None, ''):
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def _as_timezone(environ, name, default):
    zone = environ.get(name) or default
    try:
        pd.Timestamp.now(tz=zone)
    except Exception:
        raise ConfigurationError(f"{name} is not a known time zone: {zone!r}")
    return zone


def _as_bool(environ, name, default=False):
    raw = environ.get(name)
    if raw in (None, ''):
        return default
    return raw.strip().lower() in TRUE_VALUES


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment

    The service URL and public API key are required; the VITE_ prefixed
    names are accepted so an existing frontend .env can be reused.

    Raises:
        ConfigurationError: if the URL or key is missing, or a numeric
            setting cannot be parsed
    """
    if environ is None:
        environ = os.environ

    url = _first(environ, 'SUPABASE_URL', 'VITE_SUPABASE_URL')
    key = _first(environ, 'SUPABASE_ANON_KEY', 'VITE_SUPABASE_ANON_KEY')
    missing = [name for name, value in (('SUPABASE_URL', url), ('SUPABASE_ANON_KEY', key)) if not value]
    if missing:
        raise ConfigurationError(f"Missing required setting(s): {', '.join(missing)}")

    page_size = _as_int(environ, 'DASHBOARD_PAGE_SIZE', None)
    if page_size is not None and page_size <= 0:
        raise ConfigurationError("DASHBOARD_PAGE_SIZE must be positive")

    return Settings(
        supabase_url=url.rstrip('/'),
        supabase_key=key,
        request_timeout=_as_float(environ, 'SUPABASE_TIMEOUT', None),
        host=environ.get('DASHBOARD_HOST') or '0.0.0.0',
        port=_as_int(environ, 'DASHBOARD_PORT', 8050),
        debug=_as_bool(environ, 'DASHBOARD_DEBUG'),
        timezone=_as_timezone(environ, 'DASHBOARD_TIMEZONE', 'UTC'),
        page_size=page_size,
        strict_nulls=_as_bool(environ, 'DASHBOARD_STRICT_NULLS'),
        max_sessions=_as_int(environ, 'DASHBOARD_MAX_SESSIONS', 256),
        log_level=(environ.get('LOG_LEVEL') or 'INFO').upper(),
    )
