"""
Pipeline from a new report file to a delivered chat message.

ReportPipeline coordinates one document at a time:
- Wait for the writer to finish (settle delay)
- Read the file
- Parse XML to MatchReport
- Format as MarkdownV2
- Deliver via TelegramClient

Design Philosophy:
- Resilient processing (a bad file is logged and skipped, never retried)
- No state shared between documents
- Result records instead of exceptions for per-file failures
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from q3reportbot.formatters.markdown import format_match_report
from q3reportbot.parsers.xml_parser import ReportParseError, parse_match_report
from q3reportbot.services.telegram_client import TelegramClient, TelegramDeliveryError

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Result of processing a single report file."""
    path: Path
    status: str  # 'sent', 'read_failed', 'parse_failed', 'send_failed'
    message: Optional[str] = None
    error: Optional[str] = None
    
    @property
    def ok(self) -> bool:
        return self.status == 'sent'


def render_report(document: Union[str, bytes]) -> str:
    """
    Parse a document and format it in one step.
    
    Raises:
        ReportParseError: If the document is malformed or empty
    """
    return format_match_report(parse_match_report(document))


class ReportPipeline:
    """
    Turns report files into chat messages.
    
    Usage:
        client = TelegramClient(token="...")
        pipeline = ReportPipeline(client, chat_id=-100123)
        result = pipeline.process_file(Path("stats/2024-05-01_q3dm6.xml"))
    """
    
    def __init__(
        self,
        client: TelegramClient,
        chat_id: int,
        settle_delay_sec: float = 1.0,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize pipeline.
        
        Args:
            client: Delivery client (anything with send_message(chat_id, text))
            chat_id: Target chat id
            settle_delay_sec: Seconds to wait before reading a new file
            sleep: Sleep function (tests pass a no-op)
        """
        self.client = client
        self.chat_id = chat_id
        self.settle_delay_sec = settle_delay_sec
        self._sleep = sleep
        
        self.stats = {'sent': 0, 'failed': 0}
    
    def process_file(self, path: Union[str, Path]) -> ProcessResult:
        """
        Read, parse, format and send one report file.
        
        Never raises for per-file failures; they are logged and reported
        through the returned status.
        
        Args:
            path: Path to the newly created report file
        
        Returns:
            ProcessResult with status and, on success, the sent text
        """
        path = Path(path)
        logger.info(f"New file detected: {path}")
        
        if self.settle_delay_sec > 0:
            self._sleep(self.settle_delay_sec)
        
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error(f"Unable to read file {path}: {e}")
            return self._failed(path, 'read_failed', e)
        
        try:
            message = render_report(data)
        except ReportParseError as e:
            logger.error(f"Error parsing content of {path.name}: {e}")
            return self._failed(path, 'parse_failed', e)
        
        try:
            self.client.send_message(self.chat_id, message)
        except TelegramDeliveryError as e:
            logger.error(f"Failed to send message for {path.name}: {e}")
            return self._failed(path, 'send_failed', e, message=message)
        
        self.stats['sent'] += 1
        logger.info(f"Sent match report for {path.name} to chat {self.chat_id}")
        return ProcessResult(path=path, status='sent', message=message)
    
    def _failed(
        self,
        path: Path,
        status: str,
        error: Exception,
        message: Optional[str] = None
    ) -> ProcessResult:
        self.stats['failed'] += 1
        return ProcessResult(path=path, status=status, message=message, error=str(error))
