"""
Match report parsing.

- Streaming scan over <match>/<team>/<player>/<stat>/<weapon>
- Unknown elements and attributes are ignored
- Malformed markup and empty results are the only failures
"""

from .xml_parser import (
    parse_match_report,
    decode_document,
    parse_count,
    parse_flag,
    BANNED_STATS,
    ReportParseError,
    MalformedReportError,
    EmptyReportError,
)

__all__ = [
    'parse_match_report',
    'decode_document',
    'parse_count',
    'parse_flag',
    'BANNED_STATS',
    # Errors
    'ReportParseError',
    'MalformedReportError',
    'EmptyReportError',
]
