"""
Team generation for fixed partnerships and rotating partners.
"""

import logging
import random
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from .core import shuffle_list
from .exceptions import ConfigurationError
from .models import PlayerId, Team

logger = logging.getLogger(__name__)


def validate_team_assignments(teams: List[Team], participant_ids: Sequence[PlayerId], team_size: int) -> None:
    """
    Validate that team assignments cover the participants exactly once.

    Args:
        teams: Teams to validate
        participant_ids: All valid participant ids
        team_size: Expected number of players per team

    Raises:
        ConfigurationError: If a team id repeats, a team has the wrong size, a player is not a
            participant, a player is on more than one team, or a participant
            is left unassigned
    """
    assigned = set()
    team_ids = set()
    participant_set = set(participant_ids)

    for team in teams:
        if team.team_id in team_ids:
            raise ConfigurationError(f"Team id {team.team_id} is used more than once")
        team_ids.add(team.team_id)

        if len(team.player_ids) != team_size:
            raise ConfigurationError(
                f"Team {team.team_id} has {len(team.player_ids)} players, expected {team_size}"
            )

        for player_id in team.player_ids:
            if player_id not in participant_set:
                raise ConfigurationError(f"Player {player_id} in team {team.team_id} is not a participant")
            if player_id in assigned:
                raise ConfigurationError(f"Player {player_id} is assigned to multiple teams")
            assigned.add(player_id)

    unassigned = [p for p in participant_ids if p not in assigned]
    if unassigned:
        raise ConfigurationError(
            f"Not all participants are assigned to teams. Unassigned: {', '.join(str(p) for p in unassigned)}"
        )


def _chunk(players: List[PlayerId], team_size: int, prefix: str) -> List[Team]:
    teams = []
    for i in range(len(players) // team_size):
        start = i * team_size
        teams.append(Team(team_id=f"{prefix}{i + 1}", player_ids=players[start:start + team_size]))
    return teams


def generate_fixed_teams(participant_ids: Sequence[PlayerId],
                         team_size: int,
                         predefined_teams: Optional[List[Team]] = None,
                         rng: Optional[random.Random] = None) -> List[Team]:
    """
    Generate fixed teams that stay together for the whole tournament.

    Predefined teams are validated and returned unchanged. Otherwise the
    participants are shuffled and cut into contiguous groups named
    team_1..team_k.

    Args:
        participant_ids: All participant ids
        team_size: Players per team
        predefined_teams: Optional organizer-chosen teams
        rng: Optional random generator for a reproducible shuffle

    Returns:
        List[Team]: Teams covering every participant once
    """
    if team_size < 1:
        raise ConfigurationError("Team size must be at least 1")
    if not participant_ids:
        raise ConfigurationError("At least one participant is required")
    if len(participant_ids) % team_size != 0:
        raise ConfigurationError(
            f"Cannot create teams of {team_size} with {len(participant_ids)} players (not evenly divisible)"
        )

    if predefined_teams:
        validate_team_assignments(predefined_teams, participant_ids, team_size)
        logger.debug("Using %d predefined teams", len(predefined_teams))
        return predefined_teams

    shuffled = shuffle_list(participant_ids, rng)
    return _chunk(shuffled, team_size, "team_")


def generate_rotating_teams(participant_ids: Sequence[PlayerId], round_number: int, team_size: int) -> List[Team]:
    """
    Generate the teams for one round using the circle method.

    The first participant stays fixed while the rest rotate by
    (round_number - 1) positions, so partners change every round and repeat
    only after n - 1 rounds.

    Args:
        participant_ids: All participant ids
        round_number: Round being generated (1-indexed)
        team_size: Players per team

    Returns:
        List[Team]: Teams for this round, ids prefixed with the round number
    """
    if team_size < 1:
        raise ConfigurationError("Team size must be at least 1")
    if round_number < 1:
        raise ConfigurationError("Round number must be at least 1")

    n = len(participant_ids)
    players_per_match = team_size * 2
    if n < players_per_match or n % team_size != 0:
        raise ConfigurationError(
            f"Need at least {players_per_match} players and count divisible by {team_size} "
            f"for teams of {team_size}"
        )

    fixed = participant_ids[0]
    rotating = list(participant_ids[1:])
    shift = (round_number - 1) % len(rotating)
    rotated = rotating[shift:] + rotating[:shift]

    return _chunk([fixed] + rotated, team_size, f"round_{round_number}_team_")


def generate_rotating_pairs(participant_ids: Sequence[PlayerId], round_number: int) -> List[Tuple[PlayerId, PlayerId]]:
    """Rotating teams of two, as (player, partner) tuples."""
    teams = generate_rotating_teams(participant_ids, round_number, 2)
    return [(team.player_ids[0], team.player_ids[1]) for team in teams]


def find_team_for_player(teams: List[Team], player_id: PlayerId) -> Optional[Team]:
    for team in teams:
        if player_id in team.player_ids:
            return team
    return None


def are_teammates(teams: List[Team], player1_id: PlayerId, player2_id: PlayerId) -> bool:
    """Check if two players are on the same team (a player is its own teammate)."""
    team = find_team_for_player(teams, player1_id)
    return team is not None and player2_id in team.player_ids


def get_all_team_matchups(teams: List[Team]) -> List[Tuple[str, str]]:
    """
    Get every unordered pair of teams once.

    Returns:
        List[Tuple[str, str]]: (team1_id, team2_id) pairs in team order
    """
    return [(t1.team_id, t2.team_id) for t1, t2 in combinations(teams, 2)]


def calculate_team_count(participant_count: int, team_size: int) -> int:
    """Number of complete teams that can be formed."""
    return participant_count // team_size
