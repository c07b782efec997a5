"""
Americano - Tournament scheduling and standings engine for padel.
"""

__version__ = "0.1.0"

from .config import TournamentConfig, load_config
from .exceptions import AmericanoError, ConfigurationError, IngestError, TournamentStateError
from .models import (
    Court, GeneratedSchedule, Match, MatchStatus, ScheduleMode, SchedulingConfig, Standing, Team,
    TournamentState,
)
from .engine import apply_match_result, create_default_courts, generate_schedule
from .standings import calculate_standings, sort_standings
from .tournament import advance_to_next_round, initialize_tournament_state, record_match_result
from .export import write_excel

__all__ = [
    "TournamentConfig",
    "load_config",
    "AmericanoError",
    "ConfigurationError",
    "IngestError",
    "TournamentStateError",
    "Court",
    "GeneratedSchedule",
    "Match",
    "MatchStatus",
    "ScheduleMode",
    "SchedulingConfig",
    "Standing",
    "Team",
    "TournamentState",
    "apply_match_result",
    "create_default_courts",
    "generate_schedule",
    "calculate_standings",
    "sort_standings",
    "advance_to_next_round",
    "initialize_tournament_state",
    "record_match_result",
    "write_excel",
]
