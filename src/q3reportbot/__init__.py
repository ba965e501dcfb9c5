"""
q3reportbot: Quake 3 match report parsing and Telegram delivery.

Main package exports for user-facing API.
"""

from q3reportbot.models import MatchReport, Team, Player, Weapon
from q3reportbot.parsers import (
    parse_match_report,
    ReportParseError,
    MalformedReportError,
    EmptyReportError,
)
from q3reportbot.formatters import format_match_report, escape_markdown
from q3reportbot.api import ReportPipeline, ProcessResult, render_report
from q3reportbot.services import TelegramClient, ReportWatcher

__version__ = "0.1.0"

__all__ = [
    'MatchReport',
    'Team',
    'Player',
    'Weapon',
    'parse_match_report',
    'ReportParseError',
    'MalformedReportError',
    'EmptyReportError',
    'format_match_report',
    'escape_markdown',
    'ReportPipeline',
    'ProcessResult',
    'render_report',
    'TelegramClient',
    'ReportWatcher',
]
