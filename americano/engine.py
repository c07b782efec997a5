"""
Core scheduling engine using greedy fairness heuristics.
"""

import logging
import random
from collections import Counter
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Union

import pytz

from .core import get_total_rounds
from .exceptions import ConfigurationError
from .models import (
    Court, GeneratedSchedule, Match, MatchStatus, PlayerId, ScheduleMode, SchedulingConfig, Team,
)
from .teams import generate_fixed_teams, generate_rotating_teams, get_all_team_matchups

logger = logging.getLogger(__name__)

COURT_LETTERS = "ABCDEFGHIJKL"


class SchedulingEngine:
    """
    Builds round-by-round schedules for one configuration.

    Both modes are greedy: candidates are sorted by fairness and placed onto
    free courts until the round is full. Counters live on the engine for the
    duration of one generate() call only.
    """

    def __init__(self, config: SchedulingConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng
        self.player_match_counts: Dict[str, int] = {}

    def generate(self, mode: Union[ScheduleMode, str]) -> GeneratedSchedule:
        """
        Generate the full schedule.

        Args:
            mode: 'fixed_teams' or 'rotating'

        Returns:
            GeneratedSchedule: Matches, total rounds and per-player match counts
        """
        try:
            mode = ScheduleMode(mode)
        except ValueError:
            raise ConfigurationError(f"Unknown schedule mode: {mode}")

        self._validate()
        self.player_match_counts = {str(p): 0 for p in self.config.participant_ids}

        if mode == ScheduleMode.FIXED_TEAMS:
            matches = self._schedule_fixed_teams()
        else:
            matches = self._schedule_rotating()

        total_rounds = get_total_rounds(matches)
        logger.info("Scheduled %d matches over %d rounds (%s)", len(matches), total_rounds, mode.value)

        return GeneratedSchedule(
            total_rounds=total_rounds,
            matches=matches,
            player_match_counts=dict(self.player_match_counts),
        )

    def _validate(self):
        if not self.config.courts:
            raise ConfigurationError("At least one court is required for scheduling")
        if not self.config.participant_ids:
            raise ConfigurationError("At least one participant is required")

    def _count(self, player_id: PlayerId) -> int:
        return self.player_match_counts.get(str(player_id), 0)

    def _workload(self, players: Sequence[PlayerId]) -> int:
        """Combined matches already played by these players."""
        return sum(self._count(p) for p in players)

    def _is_capped(self, players: Sequence[PlayerId]) -> bool:
        return any(self._count(p) >= self.config.max_matches_per_player for p in players)

    def _record(self, players: Sequence[PlayerId]):
        for player_id in players:
            key = str(player_id)
            self.player_match_counts[key] = self.player_match_counts.get(key, 0) + 1

    def _create_match(self, round_number: int, court_index: int, team1: List, team2: List) -> Match:
        return Match(
            id=f"match_r{round_number}_c{court_index + 1}",
            round_number=round_number,
            court_id=self.config.courts[court_index].id,
            team1=list(team1),
            team2=list(team2),
            status=MatchStatus.SCHEDULED,
        )

    def _schedule_fixed_teams(self) -> List[Match]:
        """
        Schedule matches between stable teams.

        Candidates are ordered by how often the two teams have already met,
        then by the combined workload of their players.
        """
        teams = generate_fixed_teams(
            self.config.participant_ids,
            self.config.team_size,
            self.config.predefined_teams,
            rng=self.rng,
        )
        teams_by_id: Dict[str, Team] = {team.team_id: team for team in teams}
        all_matchups = get_all_team_matchups(teams)
        opponent_counts = Counter()
        courts_per_round = len(self.config.courts)

        matches = []
        round_number = 1

        while True:
            available = [
                (t1, t2) for t1, t2 in all_matchups
                if not self._is_capped(teams_by_id[t1].player_ids + teams_by_id[t2].player_ids)
            ]
            if not available:
                break

            available.sort(key=lambda pair: (
                opponent_counts[pair],
                self._workload(teams_by_id[pair[0]].player_ids + teams_by_id[pair[1]].player_ids),
            ))

            teams_this_round = set()
            round_matches = []

            for t1, t2 in available:
                if len(round_matches) >= courts_per_round:
                    break
                if t1 in teams_this_round or t2 in teams_this_round:
                    continue

                team1, team2 = teams_by_id[t1], teams_by_id[t2]
                round_matches.append(
                    self._create_match(round_number, len(round_matches), team1.player_ids, team2.player_ids)
                )
                teams_this_round.update((t1, t2))
                self._record(team1.player_ids + team2.player_ids)
                opponent_counts[(t1, t2)] += 1

            if not round_matches:
                break

            logger.debug("Round %d: %d matches (%d candidates)", round_number, len(round_matches), len(available))
            matches.extend(round_matches)
            round_number += 1

        return matches

    def _schedule_rotating(self) -> List[Match]:
        """
        Schedule matches with partners rotating every round.

        Opponent variety comes from the rotation itself, so candidates are
        ordered by workload only.
        """
        participant_ids = self.config.participant_ids
        team_size = self.config.team_size
        players_per_match = team_size * 2
        courts_per_round = min(len(self.config.courts), len(participant_ids) // players_per_match)
        max_rounds = len(participant_ids) - 1

        matches = []

        for round_number in range(1, max_rounds + 1):
            teams = generate_rotating_teams(participant_ids, round_number, team_size)
            potential = [
                (teams[i].player_ids, teams[i + 1].player_ids)
                for i in range(0, len(teams) - 1, 2)
            ]

            available = [(t1, t2) for t1, t2 in potential if not self._is_capped(t1 + t2)]
            available.sort(key=lambda pair: self._workload(pair[0] + pair[1]))

            players_this_round = set()
            round_matches = []

            for team1, team2 in available:
                players = team1 + team2
                if len(round_matches) >= courts_per_round:
                    break
                if any(p in players_this_round for p in players):
                    continue

                round_matches.append(self._create_match(round_number, len(round_matches), team1, team2))
                players_this_round.update(players)
                self._record(players)

            logger.debug("Round %d: %d matches", round_number, len(round_matches))
            matches.extend(round_matches)

            if all(self._count(p) >= self.config.max_matches_per_player for p in participant_ids):
                break

        return matches


def generate_schedule(config: SchedulingConfig,
                      mode: Union[ScheduleMode, str],
                      rng: Optional[random.Random] = None) -> GeneratedSchedule:
    """
    Convenience function to run the scheduler.

    Args:
        config: Scheduling configuration
        mode: 'fixed_teams' or 'rotating'
        rng: Optional random generator used for the fixed team shuffle

    Returns:
        GeneratedSchedule: Complete schedule
    """
    engine = SchedulingEngine(config, rng=rng)
    return engine.generate(mode)


def apply_match_result(matches: List[Match],
                       match_id: str,
                       team1_score: int,
                       team2_score: int,
                       timestamp: Optional[datetime] = None) -> List[Match]:
    """
    Apply a score to one match.

    Returns a new list; the matching entry is replaced by a completed copy and
    every other entry is the same object as before. An unknown match_id
    leaves the list unchanged.

    Args:
        matches: Current matches
        match_id: Id of the match to update
        team1_score: Score for team 1
        team2_score: Score for team 2
        timestamp: Completion time (defaults to now, UTC)

    Returns:
        List[Match]: Updated matches
    """
    if timestamp is None:
        timestamp = datetime.now(pytz.utc)

    updated = []
    found = False
    for match in matches:
        if match.id == match_id:
            found = True
            match = replace(
                match,
                team1=list(match.team1),
                team2=list(match.team2),
                team1_score=team1_score,
                team2_score=team2_score,
                status=MatchStatus.COMPLETED,
                completed_at=timestamp,
            )
        updated.append(match)

    if not found:
        logger.debug("No match with id %s, nothing to update", match_id)

    return updated


def create_default_courts(count: int) -> List[Court]:
    """
    Create sequentially named courts.

    The first twelve are lettered (Court A..Court L, ids court_a..court_l);
    the rest are numbered by position (Court 13, id court_13, ...).
    """
    courts = []
    for i in range(count):
        if i < len(COURT_LETTERS):
            letter = COURT_LETTERS[i]
            courts.append(Court(id=f"court_{letter.lower()}", name=f"Court {letter}"))
        else:
            courts.append(Court(id=f"court_{i + 1}", name=f"Court {i + 1}"))
    return courts


def get_matches_for_court(matches: List[Match], court_id: str) -> List[Match]:
    return [m for m in matches if m.court_id == court_id]


def validate_schedule(schedule: GeneratedSchedule, config: SchedulingConfig) -> Dict[str, List[str]]:
    """
    Check a generated schedule for constraint violations.

    Args:
        schedule: Schedule to validate
        config: Configuration the schedule was generated from

    Returns:
        Dict[str, List[str]]: 'errors' and 'warnings'
    """
    violations = {
        'errors': [],
        'warnings': []
    }

    if not schedule.matches:
        violations['warnings'].append("No matches scheduled")
        return violations

    players_by_round: Dict[int, set] = {}
    courts_by_round: Dict[int, set] = {}
    counts = Counter()

    for match in schedule.matches:
        if len(match.team1) != config.team_size or len(match.team2) != config.team_size:
            violations['errors'].append(
                f"Match {match.id} has teams of {len(match.team1)} and {len(match.team2)}, "
                f"expected {config.team_size}"
            )
        if set(match.team1) & set(match.team2):
            violations['errors'].append(f"Match {match.id} has a player on both teams")

        courts = courts_by_round.setdefault(match.round_number, set())
        if match.court_id in courts:
            violations['errors'].append(
                f"Court {match.court_id} used more than once in round {match.round_number}"
            )
        courts.add(match.court_id)

        players = players_by_round.setdefault(match.round_number, set())
        for player_id in match.players:
            if player_id in players:
                violations['errors'].append(
                    f"Player {player_id} scheduled multiple times in round {match.round_number}"
                )
            players.add(player_id)
            counts[str(player_id)] += 1

    for player_id, count in counts.items():
        if count > config.max_matches_per_player:
            violations['errors'].append(
                f"Player {player_id} plays {count} matches, cap is {config.max_matches_per_player}"
            )

    workloads = [counts.get(str(p), 0) for p in config.participant_ids]
    if workloads and max(workloads) - min(workloads) > 1:
        violations['warnings'].append(
            f"Uneven workload: players play between {min(workloads)} and {max(workloads)} matches"
        )

    return violations


def validate_results(matches: List[Match], match_points: int) -> Dict[str, List[str]]:
    """
    Check completed matches for suspicious scores.

    Scores are never rejected here; a total above match_points or a tied
    score (counted as a team 2 win in standings) is reported as a warning.
    """
    violations = {
        'errors': [],
        'warnings': []
    }

    for match in matches:
        if match.status != MatchStatus.COMPLETED:
            continue
        if match.team1_score is None or match.team2_score is None:
            violations['errors'].append(f"Match {match.id} is completed without both scores")
            continue
        if match.team1_score < 0 or match.team2_score < 0:
            violations['errors'].append(f"Match {match.id} has a negative score")
        if match.team1_score + match.team2_score > match_points:
            violations['warnings'].append(
                f"Match {match.id} totals {match.team1_score + match.team2_score} points, "
                f"more than {match_points}"
            )
        if match.team1_score == match.team2_score:
            violations['warnings'].append(f"Match {match.id} is tied and counts as a team 2 win")

    return violations
