"""
Export functionality for writing tournaments to Excel.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd
import pytz

from .config import TournamentConfig
from .core import count_player_matches
from .models import Court, Match, Standing, TournamentState

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = [
    'Round', 'Court', 'Match ID', 'Team 1', 'Team 2', 'Status',
    'Team 1 Score', 'Team 2 Score', 'Completed At',
]

STANDINGS_COLUMNS = [
    'Rank', 'Participant', 'Played', 'Won', 'Lost', 'Points For', 'Points Against', 'Difference',
]

COLUMN_WIDTHS = {
    'Round': 7,
    'Court': 12,
    'Match ID': 14,
    'Team 1': 28,
    'Team 2': 28,
    'Status': 12,
    'Team 1 Score': 12,
    'Team 2 Score': 12,
    'Completed At': 20,
    'Rank': 6,
    'Participant': 24,
}


def schedule_to_dataframe(matches: List[Match],
                          courts: Optional[List[Court]] = None,
                          timezone: str = "UTC") -> pd.DataFrame:
    """
    Convert matches to a DataFrame, one row per match, ordered by round and court.

    Args:
        matches: Matches to export
        courts: Optional courts used to show court names instead of ids
        timezone: Timezone used to render completion times

    Returns:
        pd.DataFrame: Schedule table
    """
    if not matches:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)

    court_names = {court.id: court.name for court in courts or []}
    tz = pytz.timezone(timezone)

    data = []
    for match in matches:
        completed_at = ''
        if match.completed_at is not None:
            completed_at = match.completed_at.astimezone(tz).strftime('%Y-%m-%d %H:%M')

        data.append({
            'Round': match.round_number,
            'Court': court_names.get(match.court_id, match.court_id),
            'Match ID': match.id,
            'Team 1': ' & '.join(str(p) for p in match.team1),
            'Team 2': ' & '.join(str(p) for p in match.team2),
            'Status': match.status.value,
            'Team 1 Score': match.team1_score,
            'Team 2 Score': match.team2_score,
            'Completed At': completed_at,
        })

    df = pd.DataFrame(data, columns=SCHEDULE_COLUMNS)
    return df.sort_values('Round', kind='stable').reset_index(drop=True)


def standings_to_dataframe(standings: List[Standing]) -> pd.DataFrame:
    """Convert sorted standings to a ranked DataFrame."""
    data = [
        {
            'Rank': i + 1,
            'Participant': str(s.participant_id),
            'Played': s.matches_played,
            'Won': s.matches_won,
            'Lost': s.matches_lost,
            'Points For': s.points_scored,
            'Points Against': s.points_conceded,
            'Difference': s.points_difference,
        }
        for i, s in enumerate(standings)
    ]
    return pd.DataFrame(data, columns=STANDINGS_COLUMNS)


def workload_to_dataframe(player_match_counts: Dict[str, int]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{'Participant': pid, 'Matches': count} for pid, count in player_match_counts.items()],
        columns=['Participant', 'Matches'],
    )
    return df.sort_values(['Matches', 'Participant'], ascending=[False, True]).reset_index(drop=True)


def write_excel(state: TournamentState, config: TournamentConfig, output_path: str,
                player_match_counts: Optional[Dict[str, int]] = None) -> None:
    """
    Write a tournament to an Excel workbook.

    Args:
        state: Tournament state to export
        config: Tournament configuration
        output_path: Path to output Excel file
        player_match_counts: Optional workload counts; derived from the
            matches when omitted
    """
    logger.info("Writing tournament to %s", output_path)
    sheets = config.excel.sheets

    with pd.ExcelWriter(output_path, engine='xlsxwriter') as writer:
        schedule_df = schedule_to_dataframe(state.matches, config.get_courts(), config.timezone)
        _write_sheet(writer, schedule_df, sheets.get('schedule', 'Schedule'))

        standings_df = standings_to_dataframe(state.standings)
        _write_sheet(writer, standings_df, sheets.get('standings', 'Standings'))

        if config.excel.include_summaries:
            if player_match_counts is None:
                participant_ids = [s.participant_id for s in state.standings]
                player_match_counts = count_player_matches(state.matches, participant_ids)
            workload_df = workload_to_dataframe(player_match_counts)
            _write_sheet(writer, workload_df, sheets.get('workload', 'Workload'))

            worksheet = writer.sheets[sheets.get('workload', 'Workload')]
            summary_row = len(workload_df) + 3
            worksheet.write(summary_row, 0, 'Summary Statistics')
            worksheet.write(summary_row + 1, 0, f'Total Rounds: {state.total_rounds}')
            worksheet.write(summary_row + 2, 0, f'Total Matches: {len(state.matches)}')
            if not workload_df.empty:
                spread = workload_df['Matches'].max() - workload_df['Matches'].min()
                worksheet.write(summary_row + 3, 0, f'Workload Spread: {spread}')

    logger.info("Tournament exported successfully to %s", output_path)


def _write_sheet(writer, df: pd.DataFrame, sheet_name: str) -> None:
    """Write a DataFrame and format its header row."""
    df.to_excel(writer, sheet_name=sheet_name, index=False)

    worksheet = writer.sheets[sheet_name]
    workbook = writer.book

    header_format = workbook.add_format({
        'bold': True,
        'text_wrap': True,
        'valign': 'top',
        'fg_color': '#D7E4BC',
        'border': 1
    })

    for i, col in enumerate(df.columns):
        worksheet.set_column(i, i, COLUMN_WIDTHS.get(col, 12))

    for col_num, value in enumerate(df.columns.values):
        worksheet.write(0, col_num, value, header_format)
