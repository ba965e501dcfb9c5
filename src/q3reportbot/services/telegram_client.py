"""
Telegram Bot API client for delivering match reports.

Only sendMessage is used. Messages are sent with parse_mode=MarkdownV2,
which is the escaping convention the report formatter targets.
"""

import logging
from typing import Any, Dict, Optional

import requests

from q3reportbot.config import AppConfig

logger = logging.getLogger(__name__)


DEFAULT_PARSE_MODE = "MarkdownV2"


class TelegramDeliveryError(RuntimeError):
    """Raised when Telegram does not accept a message."""
    
    def __init__(self, message: str, description: Optional[str] = None):
        self.description = description
        super().__init__(message)


class TelegramClient:
    """
    Minimal Bot API client.
    
    Usage:
        client = TelegramClient(token="123:abc")
        client.send_message(chat_id=-100123, text="*hello*")
    """
    
    def __init__(
        self,
        token: str,
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize client.
        
        Args:
            token: Bot API token
            api_base: Bot API base URL (without trailing slash)
            timeout: HTTP timeout in seconds
            session: Optional requests session (tests inject a mock)
        
        Raises:
            ValueError: If token is empty
        """
        if not token:
            raise ValueError("Telegram bot token is required")
        
        self._token = token
        self.api_base = api_base.rstrip('/')
        self.timeout = timeout
        self._session = session or requests.Session()
    
    @classmethod
    def from_config(cls, config: AppConfig) -> 'TelegramClient':
        """
        Build a client from AppConfig.
        
        Raises:
            ValueError: If TELEGRAM_BOT_TOKEN is not configured
        """
        if not config.telegram_bot_token:
            raise ValueError(
                "TELEGRAM_BOT_TOKEN is not set. "
                "Add it to the environment or .env file."
            )
        return cls(
            token=config.telegram_bot_token,
            api_base=config.telegram_api_base,
            timeout=config.request_timeout_sec
        )
    
    def _method_url(self, method: str) -> str:
        return f"{self.api_base}/bot{self._token}/{method}"
    
    def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: str = DEFAULT_PARSE_MODE
    ) -> Dict[str, Any]:
        """
        Send a text message.
        
        Args:
            chat_id: Target chat id
            text: Message text, already escaped for parse_mode
            parse_mode: Telegram parse mode (default: MarkdownV2)
        
        Returns:
            The 'result' object from the Bot API response
        
        Raises:
            TelegramDeliveryError: On transport failure, non-JSON reply,
                                   or a response with ok=false
        """
        payload = {
            'chat_id': chat_id,
            'text': text,
            'parse_mode': parse_mode,
        }
        
        try:
            response = self._session.post(
                self._method_url('sendMessage'),
                json=payload,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise TelegramDeliveryError(f"sendMessage request failed: {e}") from e
        
        try:
            body = response.json()
        except ValueError as e:
            raise TelegramDeliveryError(
                f"sendMessage returned non-JSON response (HTTP {response.status_code})"
            ) from e
        
        if not isinstance(body, dict):
            raise TelegramDeliveryError(
                f"sendMessage returned unexpected JSON (HTTP {response.status_code}): {body!r}"
            )
        
        if not body.get('ok'):
            description = body.get('description')
            raise TelegramDeliveryError(
                f"sendMessage rejected (HTTP {response.status_code}): {description}",
                description=description
            )
        
        logger.debug(f"Message delivered to chat {chat_id} ({len(text)} chars)")
        return body.get('result', {})
