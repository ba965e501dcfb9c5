"""
Report formatters.

Only Telegram MarkdownV2 output is supported.
"""

from .markdown import (
    format_match_report,
    escape_markdown,
    weapon_accuracy,
    team_label,
    RESERVED_CHARS,
)

__all__ = [
    'format_match_report',
    'escape_markdown',
    'weapon_accuracy',
    'team_label',
    'RESERVED_CHARS',
]
