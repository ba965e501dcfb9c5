"""
Streaming XML parser for end-of-match report files.

Report structure (OSP / CPMA style stats export):
1. One <match> element carries map, type, duration and isTeamGame
2. Team games wrap players in <team score="..."> elements
3. Solo formats (1v1, FFA) list <player> elements with no team wrapper
4. <stat> and <weapon> are attribute-only leaves inside <player>

Anything else in the document is ignored. Per-field irregularities are
absorbed by defaults; only malformed markup or an empty result fails.
"""

import io
from dataclasses import dataclass
from typing import Optional, Union

from lxml import etree

from q3reportbot.models.match import MatchReport, Player, Team, Weapon


# Power-up pickups and flag carries are noise in a chat summary
BANNED_STATS = frozenset([
    'MH',
    'RA',
    'YA',
    'GA',
    'Quad',
    'Haste',
    'Blue Flag',
    'Red Flag',
])

SCORE_STAT = 'Score'

# Weapon counters are unsigned 32-bit in the server export
_MAX_COUNT = 2 ** 32 - 1

_BOOL_LITERALS = {'true': True, 'false': False}


class ReportParseError(ValueError):
    """Base class for documents that cannot produce a MatchReport."""


class MalformedReportError(ReportParseError):
    """
    Raised when the markup itself cannot be scanned.
    
    Attributes:
        position: (line, column) reported by the XML scanner, if known
        cause: Underlying lxml syntax error
    """
    
    def __init__(self, position: Optional[tuple], cause: Exception):
        self.position = position
        self.cause = cause
        super().__init__(f"Error at position {position}: {cause}")


class EmptyReportError(ReportParseError):
    """Raised when a document yields no map name and no teams."""
    
    def __init__(self):
        super().__init__("no output generated from XML")


def decode_document(document: Union[str, bytes]) -> str:
    """
    Decode raw document bytes without ever failing.
    
    Invalid UTF-8 sequences are replaced with U+FFFD so that encoding
    damage in a player name cannot be mistaken for broken markup.
    
    Args:
        document: Raw file bytes or already-decoded text
    
    Returns:
        Document text
    
    Example:
        >>> decode_document(b'caf\\xc3') == 'caf\\ufffd'
        True
    """
    if isinstance(document, bytes):
        return document.decode('utf-8', errors='replace')
    return document


def _attr_text(elem, name: str) -> str:
    """Attribute value or empty string."""
    value = elem.get(name)
    return value if value is not None else ''


def parse_count(raw: Optional[str]) -> int:
    """
    Parse a weapon counter, defaulting to 0.
    
    Accepts an optional leading '+' followed by ASCII digits, within the
    unsigned 32-bit range. Anything else (missing, negative, decimal,
    overflow, garbage) yields 0.
    
    Example:
        >>> parse_count('29')
        29
        >>> parse_count('-3')
        0
        >>> parse_count(None)
        0
    """
    if raw is None:
        return 0
    digits = raw[1:] if raw.startswith('+') else raw
    if not digits or not (digits.isascii() and digits.isdigit()):
        return 0
    value = int(digits)
    return value if value <= _MAX_COUNT else 0


def parse_flag(raw: Optional[str]) -> bool:
    """
    Parse a boolean literal, defaulting to False.
    
    Only the exact literals 'true' and 'false' are recognized.
    
    Example:
        >>> parse_flag('true')
        True
        >>> parse_flag('1')
        False
    """
    if raw is None:
        return False
    return _BOOL_LITERALS.get(raw, False)


def _attr_int(elem, name: str) -> int:
    return parse_count(elem.get(name))


def _attr_bool(elem, name: str) -> bool:
    return parse_flag(elem.get(name))


@dataclass
class _ScanState:
    """Report under construction plus the currently open team/player."""
    report: MatchReport
    team: Optional[Team] = None
    player: Optional[Player] = None


def _open_match(state: _ScanState, elem) -> None:
    state.report.map = _attr_text(elem, 'map')
    state.report.match_type = _attr_text(elem, 'type')
    state.report.duration = _attr_text(elem, 'duration')
    state.report.is_team_game = _attr_bool(elem, 'isTeamGame')


def _add_stat(state: _ScanState, elem) -> None:
    name = elem.get('name')
    value = elem.get('value')
    if name is None or value is None:
        return
    if name in BANNED_STATS:
        return
    if state.player is not None:
        state.player.stats.append((name, value))


def _add_weapon(state: _ScanState, elem) -> None:
    name = elem.get('name')
    if name is None:
        return
    weapon = Weapon(
        name=name,
        hits=_attr_int(elem, 'hits'),
        shots=_attr_int(elem, 'shots'),
        kills=_attr_int(elem, 'kills'),
    )
    if state.player is not None:
        state.player.weapons.append(weapon)


def _close_player(state: _ScanState) -> None:
    player, state.player = state.player, None
    if player is None:
        return
    if state.team is not None:
        state.team.players.append(player)
        return
    # Player outside of a team (1v1, FFA): give it a team of its own
    team = Team(score=player.get_stat(SCORE_STAT) or '')
    team.players.append(player)
    state.report.teams.append(team)


def _close_team(state: _ScanState) -> None:
    team, state.team = state.team, None
    if team is not None:
        state.report.teams.append(team)


def parse_match_report(document: Union[str, bytes]) -> MatchReport:
    """
    Parse a match report document into a MatchReport.
    
    Single forward pass over start/end events; the document tree is
    cleared as elements close so large exports stay cheap.
    
    Args:
        document: Full document text (or raw bytes, decoded lossily)
    
    Returns:
        Parsed MatchReport
    
    Raises:
        MalformedReportError: If the markup is not well-formed
        EmptyReportError: If the document has no map name and no teams
    
    Example:
        >>> report = parse_match_report(
        ...     '<match map="q3dm6" type="1v1" duration="10:00">'
        ...     '<player name="anarki"><stat name="Score" value="7"/></player>'
        ...     '</match>'
        ... )
        >>> report.teams[0].score
        '7'
    """
    text = decode_document(document)
    # Declared encoding is overridden: the text is already decoded
    source = io.BytesIO(text.encode('utf-8', errors='replace'))
    
    state = _ScanState(report=MatchReport())
    
    events = etree.iterparse(
        source,
        events=('start', 'end'),
        encoding='utf-8',
        huge_tree=True,
        resolve_entities=False,
        no_network=True,
    )
    
    started = False
    try:
        for event, elem in events:
            kind = etree.QName(elem).localname
            
            if event == 'start':
                started = True
                if kind == 'match':
                    _open_match(state, elem)
                elif kind == 'team':
                    state.team = Team(score=_attr_text(elem, 'score'))
                elif kind == 'player':
                    state.player = Player(name=_attr_text(elem, 'name'))
                elif kind == 'stat':
                    _add_stat(state, elem)
                elif kind == 'weapon':
                    _add_weapon(state, elem)
                continue
            
            # A childless <player/> or <team/> is a leaf, not an open scope
            if kind == 'player':
                if len(elem):
                    _close_player(state)
                else:
                    state.player = None
            elif kind == 'team':
                if len(elem):
                    _close_team(state)
                else:
                    state.team = None
            elem.clear()
    except etree.XMLSyntaxError as e:
        if not started:
            # No element at all: blank, text-only or comment-only input
            raise EmptyReportError() from e
        raise MalformedReportError(getattr(e, 'position', None), e) from e
    
    if state.report.is_empty:
        raise EmptyReportError()
    
    return state.report
