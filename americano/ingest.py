"""
Data ingestion for rosters and match results.
"""

import logging
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from .exceptions import IngestError
from .models import MatchResult, Team

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["Match ID", "Team 1 Score", "Team 2 Score"]


def _parse_score(value) -> int:
    """Convert a score cell to int, rejecting fractional values."""
    number = float(value)
    if number != int(number):
        raise ValueError(f"score {value} is not a whole number")
    return int(number)


def _read_sheet(path: str) -> pd.DataFrame:
    """Read a .csv or Excel sheet into a DataFrame."""
    if not Path(path).exists():
        raise FileNotFoundError(path)
    if str(path).lower().endswith(".csv"):
        return pd.read_csv(path)
    return pd.read_excel(path)


def load_roster(path: str,
                column: str = "Participant",
                team_column: str = "Team") -> Tuple[List[str], List[Team]]:
    """
    Load participants, and optionally their teams, from a sheet.

    Args:
        path: Path to .xlsx or .csv file
        column: Column holding participant ids
        team_column: Optional column grouping participants into teams

    Returns:
        Tuple[List[str], List[Team]]: Participant ids in sheet order and the
        predefined teams (empty when the sheet has no team column)
    """
    df = _read_sheet(path)

    if column not in df.columns:
        raise IngestError(f"Missing required column: {column}. Found columns: {list(df.columns)}")

    df = df.dropna(subset=[column])
    participants = [str(value).strip() for value in df[column] if str(value).strip()]

    seen = set()
    for participant in participants:
        if participant in seen:
            raise IngestError(f"Duplicate participant: {participant}")
        seen.add(participant)

    teams = []
    if team_column in df.columns:
        grouped = {}
        for _, row in df.iterrows():
            if pd.isna(row[team_column]):
                continue
            grouped.setdefault(str(row[team_column]).strip(), []).append(str(row[column]).strip())
        teams = [Team(team_id=team_id, player_ids=players) for team_id, players in grouped.items()]

    logger.info("Loaded %d participants and %d teams from %s", len(participants), len(teams), path)
    return participants, teams


def load_results(path: str) -> List[MatchResult]:
    """
    Load submitted scores from a sheet.

    Rows without both scores are skipped, so an exported schedule can be
    filled in gradually and loaded back.
    """
    df = _read_sheet(path)

    missing_columns = [col for col in RESULT_COLUMNS if col not in df.columns]
    if missing_columns:
        raise IngestError(f"Missing required columns: {missing_columns}. Found columns: {list(df.columns)}")

    results = []
    for _, row in df.iterrows():
        if pd.isna(row["Team 1 Score"]) or pd.isna(row["Team 2 Score"]) or pd.isna(row["Match ID"]):
            continue
        try:
            results.append(MatchResult(
                match_id=str(row["Match ID"]).strip(),
                team1_score=_parse_score(row["Team 1 Score"]),
                team2_score=_parse_score(row["Team 2 Score"]),
            ))
        except (TypeError, ValueError, OverflowError) as e:
            raise IngestError(f"Invalid score in row {row.name}: {e}")

    return results
