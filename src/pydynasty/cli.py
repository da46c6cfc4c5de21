"""Command-line interface for diagnosing a dynasty roster."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import date
from pathlib import Path
from typing import Sequence

from pydynasty.config import durability_config_from_env
from pydynasty.config_loader import TuningProfile
from pydynasty.diagnosis import UnsupportedPositionError, analyze_roster
from pydynasty.ingest import (
    InjuryHistoryStore,
    RosterSource,
    load_injury_histories,
    load_roster_csv,
    rows_to_inputs,
)
from pydynasty.models import TeamDiagnosis


logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from exc


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Diagnose a dynasty fantasy football roster")
    parser.add_argument("roster", type=Path, help="Path to roster CSV")
    parser.add_argument(
        "--injuries",
        type=Path,
        default=None,
        help="JSON file of injury histories keyed by player name",
    )
    parser.add_argument(
        "--as-of",
        type=_parse_date,
        default=None,
        help="Reference date for injury recovery timelines (default: today)",
    )
    parser.add_argument("--profile", type=Path, default=None, help="Load tuning profile JSON")
    parser.add_argument("--save-profile", type=Path, default=None, help="Save tuning profile JSON")
    parser.add_argument(
        "--strict-positions",
        action="store_true",
        help="Fail when the roster lists players outside QB/RB/WR/TE",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the full diagnosis as JSON")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def _print_section(title: str, lines: Sequence[str]) -> None:
    if not lines:
        return
    print(f"{title}:")
    for line in lines:
        print(f"  - {line}")


def _print_diagnosis(diagnosis: TeamDiagnosis) -> None:
    print(f"{diagnosis.classification.value} ({diagnosis.confidence}% confidence)")
    print(diagnosis.summary)
    print(diagnosis.outlook)
    for position, group in diagnosis.positions.items():
        names = ", ".join(player.name for player in group.starters) or "-"
        print(f"{position.value}: {group.strength_rating} ({group.avg_score} avg) {names}")
    _print_section("Strengths", diagnosis.strengths)
    _print_section("Weaknesses", diagnosis.weaknesses)
    _print_section("Moves", diagnosis.recommendations.moves)
    _print_section("Targets", diagnosis.recommendations.targets)
    _print_section("Sell", diagnosis.recommendations.sells)
    _print_section("Hold", diagnosis.recommendations.holds)
    if diagnosis.win_now is not None:
        print(f"Win now: {diagnosis.win_now.verdict.value} ({diagnosis.win_now.confidence}% confidence)")
        print(diagnosis.win_now.summary)
    if diagnosis.comparison is not None:
        print(f"Dynasty vs win now: {diagnosis.comparison.gap}")


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    profile = TuningProfile.load(args.profile) if args.profile else TuningProfile()
    durability_config = profile.durability_config(durability_config_from_env())
    diagnosis_config = profile.diagnosis_config()
    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved tuning profile to {args.save_profile}")

    rows = load_roster_csv(args.roster)
    players = rows_to_inputs(rows)
    source = RosterSource.from_rows(rows)
    injuries = load_injury_histories(args.injuries) if args.injuries else InjuryHistoryStore()
    logger.info("Loaded %d players and %d injury histories", len(players), len(injuries))

    try:
        diagnosis = analyze_roster(
            players,
            injury_lookup=injuries.get,
            value_provider=source.dynasty_value,
            sell_window_provider=source.sell_window,
            production_provider=source.production if source.has_production() else None,
            strict_positions=args.strict_positions,
            durability_config=durability_config,
            diagnosis_config=diagnosis_config,
            as_of=args.as_of,
        )
    except UnsupportedPositionError as exc:
        print(f"error: {exc}")
        return 2

    _print_diagnosis(diagnosis)

    if args.output:
        args.output.write_text(
            json.dumps(diagnosis.model_dump(mode="json"), indent=2),
            encoding="utf-8",
        )
        print(f"Wrote diagnosis to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
