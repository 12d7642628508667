"""
Main pipeline runner for certification question imports.
"""

import argparse
import sqlite3
import sys
import traceback
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from tqdm import tqdm

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import DATABASE_PATH, PROGRESS_EVERY
from database import (
    init_db,
    find_question_id_by_hash,
    insert_question,
    update_question,
    count_questions,
)
from pipeline.answer_resolver import resolve_correct_answers
from pipeline.classifier import classify
from pipeline.deduplicator import compute_hash
from pipeline.loader import QuestionFileError, find_files, load_question_file
from pipeline.models import QuestionRecord, RawQuestion
from pipeline.validator import validate_question


PROCESSED = "processed"
INSERTED = "inserted"
UPDATED = "updated"
SKIPPED = "skipped"
ERRORS = "errors"


class NoTargetsError(ValueError):
    """The run was started without any input files or patterns."""


@dataclass(frozen=True)
class RunStats:
    """Counters for one import run. Each update returns a new value."""
    processed: int = 0
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0

    def add(self, counter: str, amount: int = 1) -> "RunStats":
        return replace(self, **{counter: getattr(self, counter) + amount})


class Pipeline:
    """Loads question files and upserts their questions."""

    def __init__(self, db_path: Optional[Path] = None, verbose: bool = True):
        self.db_path = db_path or DATABASE_PATH
        self.verbose = verbose

    def _log(self, message: str):
        """Print message if verbose mode."""
        if self.verbose:
            tqdm.write(message)

    def _error(self, message: str):
        """Errors are printed even in quiet mode."""
        tqdm.write(f"[ERROR] {message}")

    def _skip(self, message: str):
        """Skipped records are reported even in quiet mode."""
        tqdm.write(f"  [SKIP] {message}")

    def build_record(self, question: RawQuestion, source_file: str) -> QuestionRecord:
        """Classify, resolve answers and hash one validated question."""
        classification = classify(question.text, source_file, question.options)
        resolution = resolve_correct_answers(question)
        for warning in resolution.warnings:
            self._log(f"  [WARN] {source_file} question {question.display_id}: {warning}")

        metadata = {"sourceFile": source_file}
        if question.source_id is not None:
            metadata["originalId"] = question.source_id
        metadata["hasCorrectAnswer"] = resolution.has_answer
        metadata["extractionDate"] = datetime.now(timezone.utc).isoformat()

        return QuestionRecord(
            question_text=question.text,
            explanation=question.explanation,
            classification=classification,
            is_multiple_choice=resolution.is_multiple_choice,
            content_hash=compute_hash(question.text, [o.text for o in question.options]),
            metadata=metadata,
            options=question.options,
            correct_indices=resolution.indices,
        )

    def process_question(self, question: RawQuestion, source_file: str) -> str:
        """
        Validate and upsert a single question.

        Returns the counter the outcome belongs to: inserted, updated,
        skipped or errors.
        """
        validation = validate_question(question)
        if not validation.is_valid:
            self._skip(
                f"{source_file} question {question.display_id}: {validation.message}"
            )
            return SKIPPED

        try:
            record = self.build_record(question, source_file)
            existing_id = find_question_id_by_hash(record.content_hash, self.db_path)

            if existing_id is None:
                insert_question(record, self.db_path)
                return INSERTED

            if update_question(existing_id, record, self.db_path):
                return UPDATED
            self._error(
                f"Question {question.display_id} from {source_file}: "
                f"row {existing_id} disappeared before update"
            )
            return ERRORS

        except sqlite3.Error as e:
            self._error(f"Question {question.display_id} from {source_file}: {e}")
            return ERRORS
        except Exception as e:
            self._error(f"Question {question.display_id} from {source_file}: {e}")
            traceback.print_exc()
            return ERRORS

    def process_file(self, path: Path, stats: RunStats) -> RunStats:
        """Process every question in one file, returning the updated counters."""
        self._log(f"\nProcessing: {path}")

        try:
            questions = load_question_file(path)
        except QuestionFileError as e:
            self._error(str(e))
            return stats.add(ERRORS)

        source_file = path.stem
        self._log(f"  Found {len(questions)} questions")

        for question in questions:
            stats = stats.add(PROCESSED)
            outcome = self.process_question(question, source_file)
            stats = stats.add(outcome)

            if stats.processed % PROGRESS_EVERY == 0:
                self._log(
                    f"  [{stats.processed}] inserted={stats.inserted} "
                    f"updated={stats.updated} skipped={stats.skipped} errors={stats.errors}"
                )

        self._log(f"  Completed: {path.name}")
        return stats

    def run(self, targets: Sequence[str]) -> RunStats:
        """Import every file matched by ``targets``."""
        if not targets:
            raise NoTargetsError("No input files given")

        files: List[Path] = []
        for target in targets:
            files.extend(find_files(target))
        self._log(f"Found {len(files)} files to process")

        stats = RunStats()
        for path in tqdm(files, desc="Files", disable=not self.verbose):
            stats = self.process_file(path, stats)
        return stats


def format_summary(stats: RunStats, total_in_db: Optional[int] = None) -> str:
    lines = [
        "=" * 50,
        "SUMMARY",
        "=" * 50,
        f"Processed: {stats.processed}",
        f"Inserted:  {stats.inserted}",
        f"Updated:   {stats.updated}",
        f"Skipped:   {stats.skipped}",
        f"Errors:    {stats.errors}",
    ]
    if total_in_db is not None:
        lines.append(f"\nTotal questions in database: {total_in_db}")
    lines.append("=" * 50)
    if stats.errors:
        lines.append("Some questions failed - see the errors above for details")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Import certification question banks (JSON) into the database"
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Question files or patterns, e.g. data/questions.json or data/*.json",
    )
    parser.add_argument(
        "--db",
        type=str,
        help=f"Database file (default: {DATABASE_PATH})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )

    args = parser.parse_args(argv)

    if not args.files:
        print("ERROR: no input files given")
        parser.print_usage()
        return 1

    db_path = Path(args.db) if args.db else DATABASE_PATH
    try:
        init_db(db_path)
    except (sqlite3.Error, OSError) as e:
        print(f"ERROR: cannot open database {db_path}: {e}")
        return 1

    pipeline = Pipeline(db_path=db_path, verbose=not args.quiet)
    stats = pipeline.run(args.files)

    total = None
    try:
        total = count_questions(db_path)
    except sqlite3.Error as e:
        print(f"ERROR: cannot read database {db_path}: {e}")

    print("\n" + format_summary(stats, total))
    return 0


if __name__ == "__main__":
    sys.exit(main())
