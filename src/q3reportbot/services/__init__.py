"""
Service layer for q3reportbot.

- TelegramClient: Bot API message delivery
- ReportWatcher: folder watching for new report files
"""

from q3reportbot.services.telegram_client import TelegramClient, TelegramDeliveryError
from q3reportbot.services.report_watcher import ReportWatcher, NewFileHandler

__all__ = [
    'TelegramClient',
    'TelegramDeliveryError',
    'ReportWatcher',
    'NewFileHandler',
]
