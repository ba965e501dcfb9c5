"""
Pydantic models for a single match report.

Schema Design:
- One MatchReport per parsed document, built fresh and discarded after formatting
- Ownership is exclusive and nested (report owns teams, team owns players,
  player owns stats and weapons)
- All free-text fields are kept as raw strings; escaping happens at format time
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class Weapon(BaseModel):
    """
    Per-weapon counters for one player.
    
    Counters are non-negative integers. The parser substitutes 0 for
    missing or unparsable values before the model is built.
    
    Example:
        >>> Weapon(name="MG", hits=13, shots=29, kills=2)
        Weapon(name='MG', hits=13, shots=29, kills=2)
    """
    
    name: str = Field(
        ...,
        description="Weapon label as written by the server",
        examples=["MG", "RL", "RG"]
    )
    
    hits: int = Field(default=0, ge=0, description="Shots that hit")
    
    shots: int = Field(default=0, ge=0, description="Shots fired")
    
    kills: int = Field(default=0, ge=0, description="Frags with this weapon")


class Player(BaseModel):
    """
    A player with ordered statistics and weapon records.
    
    Statistics are kept as (name, value) pairs in document order. Repeated
    names are not de-duplicated.
    """
    
    name: str = Field(default="", description="Player name, possibly with clan tag")
    
    stats: List[Tuple[str, str]] = Field(
        default_factory=list,
        description="Ordered (statistic name, statistic value) pairs",
        examples=[[("Score", "12"), ("Kills", "14")]]
    )
    
    weapons: List[Weapon] = Field(default_factory=list)
    
    def get_stat(self, name: str) -> Optional[str]:
        """
        Get the first value recorded under a statistic name.
        
        Args:
            name: Exact, case-sensitive statistic name (e.g., 'Score')
        
        Returns:
            Statistic value or None if the player has no such statistic
        
        Example:
            >>> Player(name="x", stats=[("Score", "3")]).get_stat("Score")
            '3'
        """
        for stat_name, value in self.stats:
            if stat_name == name:
                return value
        return None


class Team(BaseModel):
    """
    Ordered group of players sharing a score label.
    
    Solo formats (1v1, FFA) have no team wrapper in the document; the parser
    synthesizes one Team per player in that case.
    """
    
    score: str = Field(default="", description="Score label (text, not necessarily numeric)")
    
    players: List[Player] = Field(default_factory=list)


class MatchReport(BaseModel):
    """
    Fully parsed representation of one match.
    
    Attributes:
        map: Map name (e.g., 'q3dm6')
        match_type: Match type label (e.g., 'TDM', '1v1', 'CTF')
        duration: Duration label as written by the server
        is_team_game: True when players are grouped into two competing teams
        teams: Teams in document order (index 0 is the first team)
    
    Example:
        >>> report = MatchReport(map="q3dm6", match_type="1v1", duration="10:00")
        >>> report.is_team_game
        False
    """
    
    map: str = Field(default="", examples=["q3dm6"])
    
    match_type: str = Field(default="", examples=["TDM"])
    
    duration: str = Field(default="", examples=["10:00"])
    
    is_team_game: bool = Field(default=False)
    
    teams: List[Team] = Field(default_factory=list)
    
    @property
    def is_empty(self) -> bool:
        """True when the document produced neither a map name nor any team."""
        return not self.map and not self.teams
    
    @property
    def player_count(self) -> int:
        """Total number of players across all teams."""
        return sum(len(team.players) for team in self.teams)
    
    def __repr__(self) -> str:
        return (
            f"MatchReport(map='{self.map}', match_type='{self.match_type}', "
            f"duration='{self.duration}', is_team_game={self.is_team_game}, "
            f"teams={len(self.teams)}, players={self.player_count})"
        )
