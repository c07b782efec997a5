"""
Shared fixtures for the test suite.
"""

import sys
from pathlib import Path

import pytest

# Add the americano package to the path
sys.path.append(str(Path(__file__).parent.parent))

from americano.engine import create_default_courts
from americano.models import Match, MatchStatus, SchedulingConfig


@pytest.fixture
def participants():
    return [f"p{i}" for i in range(1, 9)]


@pytest.fixture
def courts():
    return create_default_courts(2)


@pytest.fixture
def scheduling_config(participants, courts):
    """8 players, 2 courts, doubles, 7 matches each."""
    return SchedulingConfig(
        participant_ids=participants,
        courts=courts,
        max_matches_per_player=7,
        team_size=2,
    )


@pytest.fixture
def sample_matches():
    """Two rounds on two courts; round 1 complete, round 2 scheduled."""
    return [
        Match(id="match_r1_c1", round_number=1, court_id="court_a",
              team1=["p1", "p2"], team2=["p3", "p4"],
              status=MatchStatus.COMPLETED, team1_score=21, team2_score=15),
        Match(id="match_r1_c2", round_number=1, court_id="court_b",
              team1=["p5", "p6"], team2=["p7", "p8"],
              status=MatchStatus.COMPLETED, team1_score=10, team2_score=21),
        Match(id="match_r2_c1", round_number=2, court_id="court_a",
              team1=["p1", "p2"], team2=["p5", "p6"]),
        Match(id="match_r2_c2", round_number=2, court_id="court_b",
              team1=["p3", "p4"], team2=["p7", "p8"]),
    ]
