"""
Pydantic models for parsed match reports.

The tree is strictly nested: MatchReport -> Team -> Player -> Weapon.
"""

from q3reportbot.models.match import MatchReport, Team, Player, Weapon

__all__ = [
    'MatchReport',
    'Team',
    'Player',
    'Weapon',
]
