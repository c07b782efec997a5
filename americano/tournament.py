"""
Tournament lifecycle: state initialization, score recording, round advancement.

Every function returns a new TournamentState; the input state is never changed.
"""

import logging
import math
import random
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Sequence, Tuple, Union

import pytz

from .core import (
    count_completed_matches, is_round_complete, is_tournament_complete, is_valid_participant_count,
)
from .engine import apply_match_result, generate_schedule
from .exceptions import TournamentStateError
from .models import (
    PlayerId, PreviewSchedule, ScheduleMode, SchedulingConfig, TournamentState, TournamentSummary,
)
from .standings import calculate_standings, get_leader, initialize_standings

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "placeholder_"
MIN_ROTATING_MATCHES = 3


def initialize_tournament_state(config: SchedulingConfig,
                                mode: Union[ScheduleMode, str],
                                started_at: Optional[datetime] = None,
                                rng: Optional[random.Random] = None) -> TournamentState:
    """
    Generate the schedule and build the opening tournament state.

    Args:
        config: Scheduling configuration
        mode: 'fixed_teams' or 'rotating'
        started_at: Start time (defaults to now, UTC)
        rng: Optional random generator for the fixed team shuffle

    Returns:
        TournamentState: State on round 1 with zeroed standings
    """
    schedule = generate_schedule(config, mode, rng=rng)

    return TournamentState(
        current_round=1,
        total_rounds=schedule.total_rounds,
        matches=schedule.matches,
        standings=initialize_standings(config.participant_ids),
        started_at=started_at or datetime.now(pytz.utc),
    )


def record_match_result(state: TournamentState,
                        participant_ids: Sequence[PlayerId],
                        match_id: str,
                        team1_score: int,
                        team2_score: int,
                        timestamp: Optional[datetime] = None) -> TournamentState:
    """
    Apply a score and recompute standings.

    Does not advance the round; use advance_to_next_round() for that. The
    tournament is stamped complete once every match has a result.
    """
    timestamp = timestamp or datetime.now(pytz.utc)
    matches = apply_match_result(state.matches, match_id, team1_score, team2_score, timestamp)

    completed_at = state.completed_at
    if completed_at is None and is_tournament_complete(matches):
        completed_at = timestamp
        logger.info("Tournament complete after %d matches", len(matches))

    return replace(
        state,
        matches=matches,
        standings=calculate_standings(matches, participant_ids),
        completed_at=completed_at,
    )


def advance_to_next_round(state: TournamentState) -> TournamentState:
    """
    Move to the next round.

    Raises:
        TournamentStateError: If the current round is not complete or the
            tournament is already on its final round
    """
    if not is_round_complete(state.matches, state.current_round):
        raise TournamentStateError(f"Round {state.current_round} is not complete yet")
    if state.current_round >= state.total_rounds:
        raise TournamentStateError("Tournament is already on the final round")

    return replace(state, current_round=state.current_round + 1)


def generate_preview_schedule(participant_ids: Sequence[str],
                              config: SchedulingConfig,
                              target_count: int,
                              mode: Union[ScheduleMode, str],
                              rng: Optional[random.Random] = None) -> PreviewSchedule:
    """
    Generate a schedule before registration is full.

    Missing spots are filled with placeholder_1..placeholder_k up to
    target_count; extra participants beyond target_count are dropped.
    Predefined teams from the config are ignored since they cannot cover
    placeholders.

    Args:
        participant_ids: Registered participant ids (may be empty)
        config: Courts, cap and team size to schedule with
        target_count: Number of players the tournament expects
        mode: 'fixed_teams' or 'rotating'
        rng: Optional random generator for the fixed team shuffle

    Returns:
        PreviewSchedule: Matches and zeroed standings over the padded roster
    """
    placeholder_count = max(0, target_count - len(participant_ids))
    padded = list(participant_ids) + [f"{PLACEHOLDER_PREFIX}{i + 1}" for i in range(placeholder_count)]
    final_ids = padded[:target_count]

    preview_config = replace(config, participant_ids=final_ids, predefined_teams=None)
    schedule = generate_schedule(preview_config, mode, rng=rng)

    return PreviewSchedule(
        total_rounds=schedule.total_rounds,
        matches=schedule.matches,
        standings=initialize_standings(final_ids),
        placeholder_count=placeholder_count,
    )


def get_tournament_summary(state: TournamentState) -> TournamentSummary:
    return TournamentSummary(
        current_round=state.current_round,
        total_rounds=state.total_rounds,
        completed_matches=count_completed_matches(state.matches),
        total_matches=len(state.matches),
        is_complete=is_tournament_complete(state.matches),
        leader=get_leader(state.standings),
    )


def validate_tournament_config(config: SchedulingConfig, mode: Union[ScheduleMode, str]) -> Tuple[bool, List[str]]:
    """
    Collect every configuration problem instead of failing on the first.

    Returns:
        Tuple[bool, List[str]]: (is_valid, errors)
    """
    errors = []
    mode = ScheduleMode(mode)
    count = len(config.participant_ids)

    if not config.courts:
        errors.append("At least one court is required.")
    if count == 0:
        errors.append("At least one participant is required.")
    if config.team_size < 1:
        errors.append("Team size must be at least 1.")
    elif count and not is_valid_participant_count(count, config.team_size):
        errors.append(
            f"{count} participants cannot be split into matches of {config.team_size} vs {config.team_size}."
        )

    if config.team_size >= 1:
        if mode == ScheduleMode.FIXED_TEAMS:
            minimum = math.ceil((count // config.team_size - 1) / 2)
        else:
            minimum = MIN_ROTATING_MATCHES
        if config.max_matches_per_player < minimum:
            errors.append(
                f"Max matches per player ({config.max_matches_per_player}) is too low. Minimum: {minimum}"
            )

    return len(errors) == 0, errors
