"""
Tests for roster and results ingestion.
"""

import pandas as pd
import pytest

from americano.exceptions import IngestError
from americano.ingest import load_results, load_roster


def test_load_roster_csv(tmp_path):
    """Test participants are read in sheet order."""
    path = tmp_path / "roster.csv"
    pd.DataFrame({"Participant": [" Ana ", "Bea", None, "Carla", "Dani"]}).to_csv(path, index=False)

    participants, teams = load_roster(str(path))

    assert participants == ["Ana", "Bea", "Carla", "Dani"]
    assert teams == []


def test_load_roster_with_teams(tmp_path):
    """Test a Team column groups players into predefined teams."""
    path = tmp_path / "roster.xlsx"
    pd.DataFrame({
        "Participant": ["Ana", "Bea", "Carla", "Dani"],
        "Team": ["Red", "Blue", "Red", "Blue"],
    }).to_excel(path, index=False)

    participants, teams = load_roster(str(path))

    assert participants == ["Ana", "Bea", "Carla", "Dani"]
    assert [(t.team_id, t.player_ids) for t in teams] == [("Red", ["Ana", "Carla"]), ("Blue", ["Bea", "Dani"])]


def test_load_roster_custom_column(tmp_path):
    path = tmp_path / "roster.csv"
    pd.DataFrame({"Name": ["Ana", "Bea"]}).to_csv(path, index=False)

    participants, _ = load_roster(str(path), column="Name")

    assert participants == ["Ana", "Bea"]


def test_load_roster_errors(tmp_path):
    """Test missing files and columns."""
    with pytest.raises(FileNotFoundError):
        load_roster(str(tmp_path / "missing.xlsx"))

    path = tmp_path / "roster.csv"
    pd.DataFrame({"Player": ["Ana"]}).to_csv(path, index=False)
    with pytest.raises(IngestError, match="Missing required column: Participant"):
        load_roster(str(path))


def test_load_results(tmp_path):
    """Test rows without both scores are skipped."""
    path = tmp_path / "results.csv"
    pd.DataFrame({
        "Match ID": ["match_r1_c1", "match_r1_c2", "match_r2_c1"],
        "Team 1 Score": [21, None, 12],
        "Team 2 Score": [15, 21, 21],
    }).to_csv(path, index=False)

    results = load_results(str(path))

    assert [r.match_id for r in results] == ["match_r1_c1", "match_r2_c1"]
    assert (results[1].team1_score, results[1].team2_score) == (12, 21)


def test_load_results_errors(tmp_path):
    """Test missing columns and bad scores."""
    path = tmp_path / "results.csv"
    pd.DataFrame({"Match ID": ["m1"], "Score": [21]}).to_csv(path, index=False)
    with pytest.raises(IngestError, match="Missing required columns"):
        load_results(str(path))

    bad = tmp_path / "bad.csv"
    pd.DataFrame({
        "Match ID": ["m1"],
        "Team 1 Score": ["twenty"],
        "Team 2 Score": [15],
    }).to_csv(bad, index=False)
    with pytest.raises(IngestError, match="Invalid score"):
        load_results(str(bad))


def test_load_roster_duplicate(tmp_path):
    """Test a participant listed twice is rejected."""
    path = tmp_path / "roster.csv"
    pd.DataFrame({"Participant": ["p1", "p2", "p3", " p1"]}).to_csv(path, index=False)

    with pytest.raises(IngestError, match="Duplicate participant: p1"):
        load_roster(str(path))


def test_load_results_fractional_score(tmp_path):
    """Test fractional scores are rejected instead of truncated."""
    path = tmp_path / "results.csv"
    pd.DataFrame({
        "Match ID": ["m1", "m2"],
        "Team 1 Score": [21.0, 21.7],
        "Team 2 Score": [15, 15],
    }).to_csv(path, index=False)

    with pytest.raises(IngestError, match="not a whole number"):
        load_results(str(path))


def test_load_results_whole_float_scores(tmp_path):
    """Test scores stored as floats by a spreadsheet load as ints."""
    path = tmp_path / "results.csv"
    pd.DataFrame({
        "Match ID": ["m1", "m2"],
        "Team 1 Score": [21.0, None],
        "Team 2 Score": [15.0, 12.0],
    }).to_csv(path, index=False)

    results = load_results(str(path))

    assert [(r.match_id, r.team1_score, r.team2_score) for r in results] == [("m1", 21, 15)]
    assert isinstance(results[0].team1_score, int)
