"""
Tests for configuration management.
"""

import pytest
import tempfile
import yaml
from pathlib import Path
import sys

# Add the americano package to the path
sys.path.append(str(Path(__file__).parent.parent))

from americano.config import TournamentConfig, load_config, save_config
from americano.models import ScheduleMode


def test_basic_config_creation():
    """Test creating a basic configuration."""
    config_data = {
        "name": "Friday Americano",
        "mode": "rotating",
        "timezone": "Europe/Madrid",
        "participants": ["Ana", "Bea", "Carla", "Dani"],
        "courts": [
            {"id": "center", "name": "Center Court"},
            {"id": "side", "name": "Side Court"}
        ],
        "max_matches_per_player": 5,
        "match_points": 24
    }

    config = TournamentConfig(**config_data)

    assert config.name == "Friday Americano"
    assert config.mode == ScheduleMode.ROTATING
    assert config.timezone == "Europe/Madrid"
    assert config.team_size == 2
    assert config.match_points == 24
    assert [court.id for court in config.get_courts()] == ["center", "side"]


def test_config_defaults():
    """Test default values."""
    config = TournamentConfig()

    assert config.mode == ScheduleMode.FIXED_TEAMS
    assert config.max_matches_per_player == 7
    assert config.team_size == 2
    assert config.match_points == 21
    assert config.seed is None
    assert config.excel.include_summaries is True
    assert config.get_courts() == []


def test_config_validation():
    """Test configuration validation."""
    # Test invalid timezone
    with pytest.raises(ValueError, match="Unknown timezone"):
        TournamentConfig(timezone="Invalid/Timezone")

    # Test duplicate participant
    with pytest.raises(ValueError, match="Duplicate participant"):
        TournamentConfig(participants=["Ana", "Bea", "Ana"])

    # Test duplicate court ids
    with pytest.raises(ValueError, match="Duplicate court ids"):
        TournamentConfig(courts=[
            {"id": "c1", "name": "One"},
            {"id": "c1", "name": "Also One"}
        ])

    # Test invalid mode
    with pytest.raises(ValueError):
        TournamentConfig(mode="knockout")

    # Test out of range numbers
    with pytest.raises(ValueError):
        TournamentConfig(max_matches_per_player=0)
    with pytest.raises(ValueError):
        TournamentConfig(team_size=0)


def test_default_courts_from_count():
    """Test court_count creates lettered courts when none are listed."""
    config = TournamentConfig(court_count=3)
    courts = config.get_courts()

    assert [court.id for court in courts] == ["court_a", "court_b", "court_c"]
    assert courts[0].name == "Court A"


def test_to_scheduling_config():
    """Test building the engine configuration."""
    config = TournamentConfig(
        participants=["p1", "p2", "p3", "p4"],
        court_count=1,
        max_matches_per_player=3,
        predefined_teams=[
            {"team_id": "red", "player_ids": ["p1", "p2"]},
            {"team_id": "blue", "player_ids": ["p3", "p4"]}
        ]
    )

    scheduling_config = config.to_scheduling_config()

    assert scheduling_config.participant_ids == ["p1", "p2", "p3", "p4"]
    assert scheduling_config.max_matches_per_player == 3
    assert scheduling_config.team_size == 2
    assert [team.team_id for team in scheduling_config.predefined_teams] == ["red", "blue"]

    # Roster override
    overridden = config.to_scheduling_config(["x1", "x2", "x3", "x4"])
    assert overridden.participant_ids == ["x1", "x2", "x3", "x4"]


def test_no_predefined_teams_is_none():
    """Test an empty team list maps to no predefined teams."""
    config = TournamentConfig(participants=["p1", "p2", "p3", "p4"], court_count=1)

    assert config.to_scheduling_config().predefined_teams is None


def test_config_load_save():
    """Test loading and saving configuration."""
    config_data = {
        "name": "Sunday Social",
        "mode": "fixed_teams",
        "timezone": "Europe/London",
        "participants": ["p1", "p2", "p3", "p4", "p5", "p6", "p7", "p8"],
        "court_count": 2,
        "seed": 42
    }

    # Create temporary file
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_data, f)
        temp_path = f.name

    save_path = temp_path.replace('.yaml', '_saved.yaml')

    try:
        # Load configuration
        loaded_config = load_config(temp_path)

        # Verify loaded config matches original
        assert loaded_config.name == config_data["name"]
        assert loaded_config.timezone == config_data["timezone"]
        assert loaded_config.participants == config_data["participants"]
        assert loaded_config.seed == 42

        # Test saving configuration
        save_config(loaded_config, save_path)

        # Load saved configuration
        saved_config = load_config(save_path)
        assert saved_config.timezone == loaded_config.timezone
        assert saved_config.mode == ScheduleMode.FIXED_TEAMS
        assert saved_config.court_count == 2

    finally:
        # Clean up
        import os
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        if os.path.exists(save_path):
            os.unlink(save_path)


def test_load_empty_config():
    """Test an empty YAML file gives the defaults."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        temp_path = f.name

    try:
        config = load_config(temp_path)
        assert config.name == "Americano"
    finally:
        import os
        os.unlink(temp_path)
