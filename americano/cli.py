"""
Command-line interface for the Americano tournament engine.
"""

import argparse
import logging
import random
import sys
from dataclasses import replace

import yaml
from pydantic import ValidationError

from .config import load_config
from .core import count_player_matches, get_match_by_id
from .engine import validate_results, validate_schedule
from .exceptions import AmericanoError
from .export import write_excel
from .ingest import load_results, load_roster
from .logger import setup_logging
from .models import GeneratedSchedule, ScheduleMode, TournamentState
from .standings import get_top_standings
from .tournament import (
    generate_preview_schedule, get_tournament_summary, initialize_tournament_state, record_match_result,
    validate_tournament_config,
)


def _print_violations(violations, label):
    if violations['errors']:
        print(f"ERRORS found in {label}:")
        for error in violations['errors']:
            print(f"  - {error}")

    if violations['warnings']:
        print(f"WARNINGS found in {label}:")
        for warning in violations['warnings']:
            print(f"  - {warning}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Americano - Padel tournament scheduling and standings engine"
    )

    parser.add_argument(
        "--config",
        required=True,
        help="Path to YAML configuration file"
    )

    parser.add_argument(
        "--out",
        required=True,
        help="Path to output Excel file"
    )

    parser.add_argument(
        "--roster",
        help="Path to Excel/CSV file with a Participant column and optional Team column"
    )

    parser.add_argument(
        "--results",
        help="Path to Excel/CSV file with Match ID, Team 1 Score and Team 2 Score columns"
    )

    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ScheduleMode],
        help="Override the schedule mode from the configuration"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for team generation (overrides the configuration)"
    )

    parser.add_argument(
        "--preview",
        type=int,
        metavar="N",
        help="Generate a preview schedule for N players, padding with placeholders"
    )

    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Only validate the configuration and schedule without exporting"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        # Load configuration
        print("Loading configuration...")
        config = load_config(args.config)
        mode = ScheduleMode(args.mode) if args.mode else config.mode
        seed = args.seed if args.seed is not None else config.seed
        rng = random.Random(seed)

        # Load roster
        participants = list(config.participants)
        roster_teams = []
        if args.roster:
            print("Loading roster...")
            participants, roster_teams = load_roster(args.roster)
        print(f"Loaded {len(participants)} participants")

        scheduling_config = config.to_scheduling_config(participants)
        if roster_teams:
            scheduling_config = replace(scheduling_config, predefined_teams=roster_teams)
            print(f"Using {len(roster_teams)} teams from roster")

        # Generate schedule
        if args.preview is not None:
            print(f"Generating preview schedule for {args.preview} players...")
            preview = generate_preview_schedule(participants, scheduling_config, args.preview, mode, rng=rng)
            print(f"Added {preview.placeholder_count} placeholder players")
            state = TournamentState(
                current_round=1,
                total_rounds=preview.total_rounds,
                matches=preview.matches,
                standings=preview.standings,
            )
            scheduling_config = replace(
                scheduling_config,
                participant_ids=[s.participant_id for s in preview.standings],
                predefined_teams=None,
            )
        else:
            is_valid, errors = validate_tournament_config(scheduling_config, mode)
            if not is_valid:
                print("ERRORS found in configuration:")
                for error in errors:
                    print(f"  - {error}")
                sys.exit(1)

            print(f"Generating {mode.value} schedule...")
            state = initialize_tournament_state(scheduling_config, mode, rng=rng)

        participant_ids = scheduling_config.participant_ids
        player_match_counts = count_player_matches(state.matches, participant_ids)
        print(f"Scheduled {len(state.matches)} matches over {state.total_rounds} rounds")

        # Validate schedule
        print("Validating schedule...")
        schedule = GeneratedSchedule(
            total_rounds=state.total_rounds,
            matches=state.matches,
            player_match_counts=player_match_counts,
        )
        violations = validate_schedule(schedule, scheduling_config)
        _print_violations(violations, "schedule")
        if not violations['errors']:
            print("No errors found in schedule!")

        if args.validate_only:
            print("Validation complete. Exiting.")
            return

        # Apply results
        if args.results:
            print("Loading results...")
            results = load_results(args.results)
            result_violations = {
                'errors': [],
                'warnings': []
            }
            applied = 0
            for result in results:
                if get_match_by_id(state.matches, result.match_id) is None:
                    result_violations['warnings'].append(f"Unknown match {result.match_id}, result skipped")
                    continue
                state = record_match_result(
                    state, participant_ids, result.match_id, result.team1_score, result.team2_score
                )
                applied += 1
            print(f"Applied {applied} results")

            score_violations = validate_results(state.matches, config.match_points)
            result_violations['errors'].extend(score_violations['errors'])
            result_violations['warnings'].extend(score_violations['warnings'])
            _print_violations(result_violations, "results")

        # Export to Excel
        print(f"\nExporting tournament to {args.out}...")
        write_excel(state, config, args.out, player_match_counts=player_match_counts)

        # Print summary
        summary = get_tournament_summary(state)
        print("\n" + "=" * 50)
        print("TOURNAMENT READY" if not summary.is_complete else "TOURNAMENT COMPLETE")
        print("=" * 50)

        print(f"Tournament: {config.name}")
        print(f"Rounds: {summary.total_rounds}")
        print(f"Matches completed: {summary.completed_matches}/{summary.total_matches}")
        if summary.completed_matches:
            print("Top standings:")
            for position, standing in enumerate(get_top_standings(state.standings, 3), start=1):
                print(f"  {position}. {standing.participant_id} "
                      f"({standing.points_difference:+d}, {standing.points_scored} pts)")

        print(f"\nTournament exported to: {args.out}")

    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Invalid YAML configuration: {e}")
        sys.exit(1)
    except ValidationError as e:
        print(f"ERROR: Invalid configuration: {e}")
        sys.exit(1)
    except AmericanoError as e:
        print(f"ERROR: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
