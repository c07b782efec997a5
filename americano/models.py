"""
Data models for the tournament engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Generic, Hashable, List, Optional, TypeVar

# Participant identifier. Any hashable value with a stable str() works
# (names, UUIDs, database keys).
PlayerId = TypeVar("PlayerId", bound=Hashable)


class MatchStatus(str, Enum):
    """Match lifecycle states."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ScheduleMode(str, Enum):
    """Schedule generation modes."""
    FIXED_TEAMS = "fixed_teams"
    ROTATING = "rotating"


@dataclass
class Court:
    """A court that hosts at most one match per round."""
    id: str
    name: str


@dataclass
class Team(Generic[PlayerId]):
    """A group of players that share a side of the net."""
    team_id: str
    player_ids: List[PlayerId]

    @property
    def size(self) -> int:
        return len(self.player_ids)


@dataclass
class Match(Generic[PlayerId]):
    """A single match between two teams in a given round."""
    id: str
    round_number: int
    court_id: str
    team1: List[PlayerId]
    team2: List[PlayerId]
    status: MatchStatus = MatchStatus.SCHEDULED
    team1_score: Optional[int] = None
    team2_score: Optional[int] = None
    completed_at: Optional[datetime] = None

    @property
    def players(self) -> List[PlayerId]:
        """All players on both sides, team 1 first."""
        return list(self.team1) + list(self.team2)

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    def has_player(self, player_id: PlayerId) -> bool:
        return player_id in self.team1 or player_id in self.team2


@dataclass
class Standing(Generic[PlayerId]):
    """Aggregated record for one participant."""
    participant_id: PlayerId
    matches_played: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    points_scored: int = 0
    points_conceded: int = 0
    points_difference: int = 0

    def record(self, scored: int, conceded: int, won: bool) -> None:
        """Add one completed match to this standing."""
        self.matches_played += 1
        self.points_scored += scored
        self.points_conceded += conceded
        self.points_difference = self.points_scored - self.points_conceded
        if won:
            self.matches_won += 1
        else:
            self.matches_lost += 1


@dataclass
class SchedulingConfig(Generic[PlayerId]):
    """Input for schedule generation."""
    participant_ids: List[PlayerId]
    courts: List[Court]
    max_matches_per_player: int
    team_size: int
    predefined_teams: Optional[List[Team[PlayerId]]] = None


@dataclass
class GeneratedSchedule(Generic[PlayerId]):
    """Output of schedule generation.

    ``player_match_counts`` is keyed by ``str(participant_id)`` so it can be
    serialized without knowing the identifier type.
    """
    total_rounds: int
    matches: List[Match[PlayerId]] = field(default_factory=list)
    player_match_counts: Dict[str, int] = field(default_factory=dict)


@dataclass
class MatchResult:
    """A submitted score for one match."""
    match_id: str
    team1_score: int
    team2_score: int


@dataclass
class TournamentState(Generic[PlayerId]):
    """Snapshot of a running tournament."""
    current_round: int
    total_rounds: int
    matches: List[Match[PlayerId]] = field(default_factory=list)
    standings: List[Standing[PlayerId]] = field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


@dataclass
class PreviewSchedule(Generic[PlayerId]):
    """Schedule generated with placeholder players for unfilled spots."""
    total_rounds: int
    matches: List[Match[PlayerId]]
    standings: List[Standing[PlayerId]]
    placeholder_count: int
    is_preview: bool = True


@dataclass
class TournamentSummary(Generic[PlayerId]):
    """Display summary of a tournament state."""
    current_round: int
    total_rounds: int
    completed_matches: int
    total_matches: int
    is_complete: bool
    leader: Optional[Standing[PlayerId]] = None


@dataclass
class StandingPosition(Generic[PlayerId]):
    """A standing together with its 1-indexed position in the ranking."""
    standing: Standing[PlayerId]
    position: int
