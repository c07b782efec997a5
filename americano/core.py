"""
Round and match query utilities shared by the scheduler and its callers.

All functions are pure: they never mutate the match list they are given.
"""

import random
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar, Union

from .exceptions import ConfigurationError
from .models import Match, MatchStatus, PlayerId

T = TypeVar("T")


# Round management

def get_matches_for_round(matches: List[Match], round_number: int) -> List[Match]:
    """Get all matches for a round (1-indexed)."""
    return [m for m in matches if m.round_number == round_number]


def is_round_complete(matches: List[Match], round_number: int) -> bool:
    """
    Check if every match in a round is completed.

    A round with no matches is never complete.
    """
    round_matches = get_matches_for_round(matches, round_number)
    return len(round_matches) > 0 and all(m.status == MatchStatus.COMPLETED for m in round_matches)


def get_current_round(matches: List[Match]) -> int:
    """
    Get the current round number.

    Args:
        matches: All tournament matches

    Returns:
        int: First incomplete round, the last round when every round is
        complete, or 1 when there are no matches
    """
    if not matches:
        return 1

    max_round = get_total_rounds(matches)
    for round_number in range(1, max_round + 1):
        if not is_round_complete(matches, round_number):
            return round_number

    return max_round


def is_tournament_complete(matches: List[Match]) -> bool:
    """Check if all matches are completed (False for an empty list)."""
    if not matches:
        return False
    return all(m.status == MatchStatus.COMPLETED for m in matches)


def get_total_rounds(matches: List[Match]) -> int:
    """Highest round number in use, or 0 when there are no matches."""
    return max((m.round_number for m in matches), default=0)


def get_matches_by_status(matches: List[Match], status: Union[MatchStatus, str]) -> List[Match]:
    status = MatchStatus(status)
    return [m for m in matches if m.status == status]


def count_completed_matches(matches: List[Match]) -> int:
    return sum(1 for m in matches if m.status == MatchStatus.COMPLETED)


# Match utilities

def get_match_by_id(matches: List[Match], match_id: str) -> Optional[Match]:
    """Get a match by id, or None if it does not exist."""
    for match in matches:
        if match.id == match_id:
            return match
    return None


def get_matches_for_player(matches: List[Match], player_id: PlayerId) -> List[Match]:
    """Get matches where the player is on either team."""
    return [m for m in matches if m.has_player(player_id)]


def extract_participant_ids(matches: List[Match]) -> List[PlayerId]:
    """
    Extract unique participant ids from matches, in order of first appearance.
    """
    seen = {}
    for match in matches:
        for player_id in match.players:
            seen.setdefault(player_id, None)
    return list(seen)


def count_player_matches(matches: List[Match], participant_ids: Sequence[PlayerId] = ()) -> Dict[str, int]:
    """
    Count scheduled matches per player, keyed by str(player_id).

    Participants listed in participant_ids appear even with zero matches.
    """
    counts = {str(p): 0 for p in participant_ids}
    for match in matches:
        for player_id in match.players:
            counts[str(player_id)] = counts.get(str(player_id), 0) + 1
    return counts


# List utilities

def shuffle_list(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Fisher-Yates shuffle.

    Args:
        items: Items to shuffle
        rng: Optional random generator for reproducible shuffles

    Returns:
        List[T]: New shuffled list (the input is not mutated)
    """
    rng = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


# Validation utilities

def assert_team_size(team: Sequence[PlayerId], expected_size: int) -> None:
    """Raise ConfigurationError if the team does not have expected_size players."""
    if len(team) != expected_size:
        raise ConfigurationError(f"Expected team of {expected_size} players, got {len(team)}")


def as_doubles_team(team: Sequence[PlayerId]) -> Tuple[PlayerId, PlayerId]:
    assert_team_size(team, 2)
    return team[0], team[1]


def is_valid_participant_count(participant_count: int, team_size: int) -> bool:
    """
    Check if a participant count can fill at least one match of team_size vs team_size.
    """
    if team_size < 1:
        return False
    players_per_match = team_size * 2
    return participant_count >= players_per_match and participant_count % team_size == 0


def get_minimum_courts(participant_count: int, team_size: int) -> int:
    """Number of courts needed to run every player at once."""
    return participant_count // (team_size * 2)
