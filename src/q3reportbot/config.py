"""
Configuration management using Pydantic Settings.

Loads runtime settings from environment variables and a .env file:
- Telegram bot token and target chat
- Folder to watch for new report files
- Delivery timeouts, write-settle delay and log level
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.
    
    Environment Variables (from .env):
        TELEGRAM_BOT_TOKEN: Bot API token issued by @BotFather
        CHAT_ID: Target chat id (negative for groups and channels)
        WATCH_FOLDER: Folder the game server writes match reports into
        SETTLE_DELAY_SEC: Wait after file creation before reading it
        TELEGRAM_API_BASE: Bot API base URL
        REQUEST_TIMEOUT_SEC: HTTP timeout for message delivery
        LOG_LEVEL: Root logging level name
    
    Example:
        >>> config = get_app_config()
        >>> config.settle_delay_sec
        1.0
        >>> config.telegram_api_base
        'https://api.telegram.org'
    """
    
    telegram_bot_token: Optional[str] = Field(
        default=None,
        description="Telegram Bot API token"
    )
    
    chat_id: Optional[int] = Field(
        default=None,
        description="Telegram chat id that receives match reports"
    )
    
    watch_folder: Optional[str] = Field(
        default=None,
        description="Folder watched (recursively) for new report files"
    )
    
    settle_delay_sec: float = Field(
        default=1.0,
        ge=0,
        description="Delay before reading a new file so the writer can finish"
    )
    
    telegram_api_base: str = Field(
        default="https://api.telegram.org",
        description="Telegram Bot API base URL"
    )
    
    request_timeout_sec: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout for Telegram requests"
    )
    
    log_level: str = Field(
        default="INFO",
        description="Logging level name (DEBUG, INFO, WARNING, ...)"
    )
    
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )
    
    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level name and reject unknown levels."""
        level = v.upper()
        if level not in ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG'):
            raise ValueError(f"Unknown log level: '{v}'")
        return level
    
    @field_validator('telegram_api_base')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')


# Singleton pattern - loaded once, cached forever
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """
    Get global application config instance (lazy-loaded singleton).
    
    Configuration is loaded from environment variables and .env file.
    Cached after first access.
    
    Returns:
        Singleton AppConfig instance
    
    Example:
        >>> config = get_app_config()
        >>> config2 = get_app_config()
        >>> config is config2  # Same instance
        True
    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config


def reset_app_config() -> None:
    """Drop the cached config so the next access re-reads the environment."""
    global _app_config
    _app_config = None
