"""
Standings calculation from match results.
"""

from typing import Dict, List, Optional, Sequence

from .models import Match, MatchStatus, PlayerId, Standing, StandingPosition


def initialize_standings(participant_ids: Sequence[PlayerId]) -> List[Standing]:
    """Zeroed standings, one per participant, in input order."""
    return [Standing(participant_id=pid) for pid in participant_ids]


def calculate_standings(matches: List[Match], participant_ids: Sequence[PlayerId]) -> List[Standing]:
    """
    Calculate standings from completed matches.

    Only completed matches with both scores set are counted. Team 1 wins when
    its score is strictly greater; any other result counts as a team 2 win.
    Players that are not in participant_ids are ignored.

    Args:
        matches: All tournament matches
        participant_ids: All participant ids

    Returns:
        List[Standing]: Sorted standings, best first
    """
    standings: Dict[PlayerId, Standing] = {}
    for standing in initialize_standings(participant_ids):
        standings.setdefault(standing.participant_id, standing)

    for match in matches:
        if match.status != MatchStatus.COMPLETED:
            continue
        if match.team1_score is None or match.team2_score is None:
            continue

        team1_won = match.team1_score > match.team2_score

        for player_id in match.team1:
            if player_id in standings:
                standings[player_id].record(match.team1_score, match.team2_score, team1_won)

        for player_id in match.team2:
            if player_id in standings:
                standings[player_id].record(match.team2_score, match.team1_score, not team1_won)

    return sort_standings(list(standings.values()))


def sort_standings(standings: List[Standing]) -> List[Standing]:
    """
    Sort standings by points difference, then points scored, then matches won.

    All three are descending. The sort is stable, so remaining ties keep
    their input order. Returns a new list.
    """
    return sorted(
        standings,
        key=lambda s: (-s.points_difference, -s.points_scored, -s.matches_won),
    )


def get_leader(standings: List[Standing]) -> Optional[Standing]:
    return standings[0] if standings else None


def get_top_standings(standings: List[Standing], count: int) -> List[Standing]:
    if count <= 0:
        return []
    return standings[:count]


def find_participant_standing(standings: List[Standing], participant_id: PlayerId) -> Optional[StandingPosition]:
    """
    Find a participant's standing and its 1-indexed position.

    Returns:
        Optional[StandingPosition]: None when the participant is not ranked
    """
    for index, standing in enumerate(standings):
        if standing.participant_id == participant_id:
            return StandingPosition(standing=standing, position=index + 1)
    return None
