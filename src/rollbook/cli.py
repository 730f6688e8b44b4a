"""Rollbook - command-line driver for the student repository."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from rollbook.config.loader import ConfigLoadError, resolve_config
from rollbook.config.schema import LOG_LEVELS
from rollbook.records.loader import RosterLoader, RosterValidationError
from rollbook.records.models import StudentRecord
from rollbook.store.repository import StudentRepository

SAMPLE_STUDENTS = (
    StudentRecord(101, "Aman", "9876543210", "Delhi", 92, 88, 95, 90),
    StudentRecord(102, "Priya", "9876501234", "Lucknow", 85, 91, 89, 93),
    StudentRecord(103, "Rohit", "9876512345", "Jaipur", 96, 90, 92, 94),
)


def format_student(record: StudentRecord) -> str:
    """One-line summary of a student."""
    return (
        f"Roll: {record.roll} | Name: {record.name} | Total: {record.total} | "
        f"%: {record.percentage:.2f}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rollbook student records")
    parser.add_argument("--config", default=None, help="YAML/JSON config file path")
    parser.add_argument("--csv", default=None, help="roster CSV to load instead of the sample students")
    parser.add_argument("--find", type=int, default=102, help="roll number to look up")
    parser.add_argument("--top", type=int, default=2, help="number of top students to show")
    parser.add_argument("--leaderboard", action="store_true", help="print the full leaderboard")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="override the configured log level",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args.config, overrides={"log_level": args.log_level})
    except (FileNotFoundError, ConfigLoadError) as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    repository = StudentRepository(config=config)
    if args.csv:
        try:
            records = RosterLoader().load_records(args.csv)
        except (FileNotFoundError, RosterValidationError) as exc:
            print(f"Roster error: {exc}", file=sys.stderr)
            return 1
    else:
        records = list(SAMPLE_STUDENTS)
    repository.add_many(records)

    print("Student System Ready")
    print(f"Loaded {len(repository)} students ({config.index_strategy} index)")

    found = repository.find(args.find)
    if found is not None:
        print(f"Found -> {format_student(found)}")
    else:
        print("Not found")

    print(f"\nTop {args.top} Students:")
    for record in repository.top_k(args.top):
        print(format_student(record))

    if args.leaderboard:
        print("\nLeaderboard:")
        for entry in repository.standings():
            print(f"{entry.rank:>3}. {format_student(entry.record)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
