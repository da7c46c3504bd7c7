"""
Student Roster Importer

Loads students and their grade history from a CSV file into the ledger.

CSV columns: id, name, attendance_percentage, study_hours, grades
where grades is a semicolon-separated list (e.g. "60;70;80").

Usage:
    python -m scripts.import_students roster.csv [--caller registrar] [--predict] [--dry-run]
"""

import argparse
import asyncio
import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path

from gradeledger.config import settings
from gradeledger.core.database import async_session_maker, close_db, init_db
from gradeledger.core.errors import LedgerError
from gradeledger.core.validation import MAX_GRADE_BATCH
from gradeledger.ledger import StudentLedger

logger = logging.getLogger(__name__)


@dataclass
class RosterRow:
    """One parsed CSV row."""

    student_id: int
    name: str
    attendance: int
    study_hours: int
    grades: list[int] = field(default_factory=list)


def parse_grades(raw: str | None) -> list[int]:
    """Parse a semicolon-separated grade list.

    Examples:
        >>> parse_grades("60; 70;80")
        [60, 70, 80]
        >>> parse_grades("")
        []
    """
    if not raw or not raw.strip():
        return []
    return [int(part) for part in raw.split(";") if part.strip()]


def parse_roster_row(row: dict[str, str]) -> RosterRow | None:
    """Convert a CSV row to a RosterRow.

    Returns:
        None if a numeric column cannot be parsed (range checks are left to
        the ledger)
    """
    try:
        return RosterRow(
            student_id=int(row["id"]),
            name=row.get("name", ""),
            attendance=int(row.get("attendance_percentage") or 0),
            study_hours=int(row.get("study_hours") or 0),
            grades=parse_grades(row.get("grades")),
        )
    except (KeyError, ValueError) as e:
        logger.warning(f"Skipping malformed row {row!r}: {e}")
        return None


def read_roster(path: Path) -> list[RosterRow]:
    """Read and parse every valid row of a roster CSV."""
    with path.open(newline="", encoding="utf-8") as csvfile:
        rows = [parse_roster_row(row) for row in csv.DictReader(csvfile)]
    return [row for row in rows if row is not None]


def chunk_grades(grades: list[int], size: int = MAX_GRADE_BATCH) -> list[list[int]]:
    """Split grades into batches the ledger accepts."""
    return [grades[i : i + size] for i in range(0, len(grades), size)]


async def import_roster(
    ledger: StudentLedger, rows: list[RosterRow], *, caller: str, predict: bool = False
) -> dict[str, int]:
    """Register each row and append its grades.

    Each ledger call commits on its own, so a row that fails part-way keeps
    whatever was applied before the failure. The failure is logged and the
    import moves on to the next row.

    Returns:
        Counts of imported and failed rows
    """
    stats = {"imported": 0, "failed": 0}

    for row in rows:
        try:
            await ledger.register(caller, row.student_id, row.name, row.attendance, row.study_hours)
            for batch in chunk_grades(row.grades):
                await ledger.add_grades(caller, row.student_id, batch)
            if predict and row.grades:
                await ledger.predict(caller, row.student_id)
            stats["imported"] += 1
        except LedgerError as e:
            logger.error(f"Student {row.student_id} not imported: {e.code} ({e.message})")
            stats["failed"] += 1

    return stats


async def main():
    """Main entry point for importer."""
    parser = argparse.ArgumentParser(description="Import a student roster into the ledger")
    parser.add_argument("roster", type=Path, help="Roster CSV file")
    parser.add_argument(
        "--caller",
        default=settings.LEDGER_OWNER,
        help="Identity performing the import (default: ledger owner)",
    )
    parser.add_argument(
        "--predict",
        action="store_true",
        help="Run a prediction for every student with grades",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse the roster without writing to the database",
    )

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    rows = read_roster(args.roster)
    logger.info(f"Parsed {len(rows)} students from {args.roster}")

    if args.dry_run:
        return

    await init_db()
    try:
        ledger = StudentLedger(async_session_maker, owner=settings.LEDGER_OWNER)
        stats = await import_roster(ledger, rows, caller=args.caller, predict=args.predict)
    finally:
        await close_db()

    print(f"\n{'='*60}")
    print("Import Complete!")
    print(f"{'='*60}")
    print(f"Imported: {stats['imported']}")
    print(f"Failed:   {stats['failed']}")
    print(f"{'='*60}\n")


if __name__ == "__main__":
    asyncio.run(main())
