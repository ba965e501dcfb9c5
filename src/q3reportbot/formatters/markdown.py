"""
Telegram MarkdownV2 rendering of a MatchReport.

Layout:
- Bold header, then a one-line summary (map, type, duration)
- Team label with score (team games only)
- One fenced block per player: name, stats, weapon lines

Free text is escaped per character. Player names are written verbatim
inside the fenced block, where escaping would show up as backslashes.
"""

from typing import List

from q3reportbot.models.match import MatchReport, Player, Team, Weapon


# Characters MarkdownV2 treats as formatting directives
RESERVED_CHARS = frozenset('*_[]()~>#+-=|{}.!')

HEADER = "*Match concluded*"

# Escaped pipe used as a field separator in the rendered text
SEPARATOR = " \\| "

TEAM_LABELS = ("Team One", "Team Two")


def escape_markdown(text: str) -> str:
    """
    Backslash-escape every MarkdownV2 reserved character.
    
    Pure per-character transform; neighbouring characters are not
    inspected, so already-escaped input is escaped again.
    
    Args:
        text: Raw free text (map name, stat value, weapon name, ...)
    
    Returns:
        Escaped text
    
    Example:
        >>> escape_markdown("q3dm6.bsp")
        'q3dm6\\\\.bsp'
        >>> escape_markdown("10:00")
        '10:00'
    """
    return ''.join('\\' + c if c in RESERVED_CHARS else c for c in text)


def weapon_accuracy(weapon: Weapon) -> int:
    """
    Integer accuracy percentage for a weapon.
    
    Hits at or above shots always reads 100, since the server counters
    can drift past each other; otherwise the result is floored.
    
    Example:
        >>> weapon_accuracy(Weapon(name="MG", hits=13, shots=29))
        44
        >>> weapon_accuracy(Weapon(name="RG", hits=50, shots=40))
        100
        >>> weapon_accuracy(Weapon(name="BFG"))
        0
    """
    if weapon.hits >= weapon.shots and weapon.hits > 0:
        return 100
    if weapon.shots > 0:
        return weapon.hits * 100 // weapon.shots
    return 0


def team_label(index: int) -> str:
    """'Team One' for the first team, 'Team Two' for any other position."""
    return TEAM_LABELS[0] if index == 0 else TEAM_LABELS[1]


def _format_weapon(weapon: Weapon) -> str:
    return (
        f"{escape_markdown(weapon.name)}: Shots: {weapon.shots}"
        f"{SEPARATOR}Acc. {weapon_accuracy(weapon)}%"
        f"{SEPARATOR}Kills: {weapon.kills}"
    )


def _format_player(player: Player) -> List[str]:
    lines = ["```", f"Player: {player.name}"]
    
    for stat_name, stat_value in player.stats:
        lines.append(f"{escape_markdown(stat_name)}: {escape_markdown(stat_value)}")
    
    if player.weapons:
        lines.append("Weapons: ")
        lines.extend(_format_weapon(w) for w in player.weapons)
    
    lines.append("```")
    return lines


def _format_team(team: Team, index: int, is_team_game: bool) -> List[str]:
    lines = []
    if is_team_game:
        lines.append(f"*{team_label(index)}*: *{escape_markdown(team.score)}*")
    for player in team.players:
        lines.extend(_format_player(player))
    return lines


def format_match_report(report: MatchReport) -> str:
    """
    Render a MatchReport as MarkdownV2 text.
    
    Deterministic and order-preserving: teams and players appear in the
    order stored on the model.
    
    Args:
        report: Parsed match report
    
    Returns:
        Message text ready to send with parse_mode=MarkdownV2
    
    Example:
        >>> print(format_match_report(MatchReport(map="q3dm6", match_type="1v1", duration="10:00")))
        *Match concluded*
        Map: q3dm6 \\| Type: 1v1 \\| Duration: 10:00
        <BLANKLINE>
    """
    summary = SEPARATOR.join([
        f"Map: {escape_markdown(report.map)}",
        f"Type: {escape_markdown(report.match_type)}",
        f"Duration: {escape_markdown(report.duration)}",
    ])
    
    lines = [HEADER, summary, ""]
    for index, team in enumerate(report.teams):
        lines.extend(_format_team(team, index, report.is_team_game))
    
    return "\n".join(lines) + "\n"
