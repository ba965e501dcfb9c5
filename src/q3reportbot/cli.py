"""
Command-line entry point.

Usage:
    q3reportbot --folder-path /srv/q3/stats --chat-id -1001234567890

TELEGRAM_BOT_TOKEN must be set in the environment or .env file.
"""

import argparse
import logging
from typing import List, Optional

from dotenv import load_dotenv

from q3reportbot.api.pipeline import ReportPipeline
from q3reportbot.config import get_app_config
from q3reportbot.services.report_watcher import ReportWatcher
from q3reportbot.services.telegram_client import TelegramClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="q3reportbot",
        description="Post Quake 3 end-of-match reports to a Telegram chat."
    )
    parser.add_argument(
        "-f", "--folder-path",
        help="Folder to watch for new match report files (default: WATCH_FOLDER)"
    )
    parser.add_argument(
        "-c", "--chat-id",
        type=int,
        help="Target Telegram chat id, negative for groups (default: CHAT_ID)"
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the watcher until interrupted.
    
    Returns:
        Process exit status
    """
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    
    config = get_app_config()
    configure_logging(config.log_level)
    logger.info("Starting q3reportbot...")
    
    folder = args.folder_path or config.watch_folder
    chat_id = args.chat_id if args.chat_id is not None else config.chat_id
    
    if not folder:
        parser.error("--folder-path is required (or set WATCH_FOLDER)")
    if chat_id is None:
        parser.error("--chat-id is required (or set CHAT_ID)")
    
    try:
        client = TelegramClient.from_config(config)
    except ValueError as e:
        parser.error(str(e))
    
    logger.info(f"Monitoring folder: {folder}")
    logger.info(f"Target chat ID: {chat_id}")
    
    pipeline = ReportPipeline(
        client=client,
        chat_id=chat_id,
        settle_delay_sec=config.settle_delay_sec
    )
    
    try:
        watcher = ReportWatcher(folder, pipeline)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    
    watcher.run()
    return 0
