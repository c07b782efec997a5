"""
Configuration management for tournament events.
"""

from typing import Dict, List, Optional

import pytz
from pydantic import BaseModel, Field, field_validator, model_validator

from .engine import create_default_courts
from .models import Court, ScheduleMode, SchedulingConfig, Team


class CourtConfig(BaseModel):
    """A court supplied by the venue."""
    id: str
    name: str


class TeamConfig(BaseModel):
    """An organizer-chosen team."""
    team_id: str
    player_ids: List[str]


class ExcelOut(BaseModel):
    """Excel output configuration."""
    include_summaries: bool = Field(default=True, description="Include the workload sheet")
    sheets: Dict[str, str] = Field(
        default_factory=lambda: {
            "schedule": "Schedule",
            "standings": "Standings",
            "workload": "Workload",
        },
        description="Sheet names"
    )


class TournamentConfig(BaseModel):
    """Main configuration for one tournament."""
    name: str = Field(default="Americano", description="Tournament name")
    mode: ScheduleMode = Field(default=ScheduleMode.FIXED_TEAMS, description="fixed_teams or rotating")
    participants: List[str] = Field(default_factory=list, description="Participant ids")

    courts: List[CourtConfig] = Field(default_factory=list, description="Venue courts")
    court_count: int = Field(default=0, ge=0, description="Default courts to create when none are listed")

    max_matches_per_player: int = Field(default=7, ge=1, description="Cap on matches per player")
    team_size: int = Field(default=2, ge=1, description="Players per team")
    match_points: int = Field(default=21, ge=1, description="Nominal points played per match")
    predefined_teams: List[TeamConfig] = Field(default_factory=list, description="Fixed partnerships")

    # Random seed for a reproducible team shuffle
    seed: Optional[int] = Field(default=None, description="Random seed for team generation")
    timezone: str = Field(default="UTC", description="Timezone for displayed timestamps")

    excel: ExcelOut = Field(default_factory=ExcelOut)

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v):
        try:
            pytz.timezone(v)
            return v
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {v}")

    @field_validator('participants')
    @classmethod
    def validate_participants(cls, v):
        seen = set()
        for participant in v:
            if participant in seen:
                raise ValueError(f"Duplicate participant: {participant}")
            seen.add(participant)
        return v

    @model_validator(mode='after')
    def validate_court_ids(self):
        ids = [court.id for court in self.courts]
        duplicates = sorted({court_id for court_id in ids if ids.count(court_id) > 1})
        if duplicates:
            raise ValueError(f"Duplicate court ids: {duplicates}")
        return self

    def get_courts(self) -> List[Court]:
        """Listed courts, or court_count default courts when none are listed."""
        if self.courts:
            return [Court(id=c.id, name=c.name) for c in self.courts]
        return create_default_courts(self.court_count)

    def get_predefined_teams(self) -> List[Team]:
        return [Team(team_id=t.team_id, player_ids=list(t.player_ids)) for t in self.predefined_teams]

    def to_scheduling_config(self, participants: Optional[List[str]] = None) -> SchedulingConfig:
        """
        Build the engine input.

        Args:
            participants: Optional roster overriding the configured participants

        Returns:
            SchedulingConfig: Engine configuration
        """
        return SchedulingConfig(
            participant_ids=list(participants if participants is not None else self.participants),
            courts=self.get_courts(),
            max_matches_per_player=self.max_matches_per_player,
            team_size=self.team_size,
            predefined_teams=self.get_predefined_teams() or None,
        )


def load_config(config_path: str) -> TournamentConfig:
    """Load configuration from YAML file."""
    import yaml

    with open(config_path, 'r') as f:
        config_data = yaml.safe_load(f) or {}

    return TournamentConfig(**config_data)


def save_config(config: TournamentConfig, config_path: str) -> None:
    """Save configuration to YAML file."""
    import yaml

    with open(config_path, 'w') as f:
        yaml.dump(config.model_dump(mode='json'), f, default_flow_style=False, indent=2)
