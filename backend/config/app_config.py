"""
Runtime Configuration

Reads application settings from environment variables.

Includes:
- Database URL (SQLite file under the user's home directory by default)
- Query limits (autocomplete cap, page size clamp, interested-users cap)
- Invitation master key
- Logging level and optional log file
"""
import os
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from constants import Defaults

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".campus_community" / "community.db"


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


@dataclass(frozen=True)
class AppConfig:
    """Settings resolved once per process."""

    database_url: str
    autocomplete_max: int = Defaults.AUTOCOMPLETE_MAX
    max_page_size: int = Defaults.MAX_PAGE_SIZE
    interested_users_max: int = Defaults.INTERESTED_USERS_MAX
    invitation_master_key: Optional[str] = None
    log_level: str = Defaults.LOG_LEVEL
    log_file: Optional[str] = None


def load_config() -> AppConfig:
    """
    Build an AppConfig from the current environment.

    Returns:
        AppConfig with every unset value replaced by its default

    Raises:
        ConfigurationError: If a value is present but unusable
    """
    from services.config_validator import ConfigValidator

    config = AppConfig(
        database_url=os.environ.get('DATABASE_URL', f'sqlite:///{DEFAULT_DB_PATH}'),
        autocomplete_max=_int_from_env('AUTOCOMPLETE_MAX', Defaults.AUTOCOMPLETE_MAX),
        max_page_size=_int_from_env('MAX_PAGE_SIZE', Defaults.MAX_PAGE_SIZE),
        interested_users_max=_int_from_env('INTERESTED_USERS_MAX', Defaults.INTERESTED_USERS_MAX),
        invitation_master_key=os.environ.get('INVITATION_MASTER_KEY') or None,
        log_level=os.environ.get('LOG_LEVEL', Defaults.LOG_LEVEL).upper(),
        log_file=os.environ.get('LOG_FILE') or None,
    )
    ConfigValidator.validate_app_config(config)
    return config


@lru_cache
def get_config() -> AppConfig:
    return load_config()
