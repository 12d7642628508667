"""
SQLite database schema and operations for the certification question bank.
"""

import sqlite3
import json
from pathlib import Path
from typing import Optional, Dict, Any
from contextlib import contextmanager

from config import DATABASE_PATH, PROVIDERS, CATEGORIES, DIFFICULTIES


def _sql_in(values) -> str:
    return ", ".join(f"'{v}'" for v in values)


# Classification columns only accept the configured taxonomy labels
SCHEMA = f"""
CREATE TABLE IF NOT EXISTS questions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    question_text TEXT NOT NULL,
    explanation TEXT DEFAULT '',
    provider TEXT NOT NULL DEFAULT 'General'
        CHECK (provider IN ({_sql_in(PROVIDERS)})),
    certification TEXT NOT NULL DEFAULT 'General',
    category TEXT NOT NULL DEFAULT 'General'
        CHECK (category IN ({_sql_in(CATEGORIES)})),
    difficulty TEXT NOT NULL DEFAULT 'medium'
        CHECK (difficulty IN ({_sql_in(DIFFICULTIES)})),
    is_multiple_choice INTEGER NOT NULL DEFAULT 0,
    tags TEXT NOT NULL DEFAULT '[]',          -- JSON array
    content_hash TEXT NOT NULL UNIQUE CHECK (length(content_hash) = 64),
    metadata TEXT NOT NULL DEFAULT '{{}}',    -- JSON object
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    is_active INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS question_options (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    question_id INTEGER NOT NULL REFERENCES questions(id) ON DELETE CASCADE,
    option_label TEXT NOT NULL,
    option_text TEXT NOT NULL,
    is_correct INTEGER NOT NULL DEFAULT 0,
    option_order INTEGER NOT NULL            -- 1-based, input order
);

CREATE TABLE IF NOT EXISTS question_stats (
    question_id INTEGER PRIMARY KEY REFERENCES questions(id) ON DELETE CASCADE,
    total_attempts INTEGER DEFAULT 0,
    correct_attempts INTEGER DEFAULT 0,
    average_time_seconds INTEGER DEFAULT 0,
    last_attempted TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_questions_provider ON questions(provider);
CREATE INDEX IF NOT EXISTS idx_questions_certification ON questions(certification);
CREATE INDEX IF NOT EXISTS idx_questions_category ON questions(category);
CREATE INDEX IF NOT EXISTS idx_questions_difficulty ON questions(difficulty);
CREATE INDEX IF NOT EXISTS idx_questions_content_hash ON questions(content_hash);
CREATE INDEX IF NOT EXISTS idx_question_options_question_id ON question_options(question_id);
"""


@contextmanager
def get_connection(db_path: Optional[Path] = None):
    """Context manager for one database transaction.

    Commits when the block finishes, rolls back if it raises, and always
    closes the connection.
    """
    conn = sqlite3.connect(str(db_path or DATABASE_PATH))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Optional[Path] = None):
    """Initialize the database with schema."""
    path = Path(db_path or DATABASE_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    with get_connection(path) as conn:
        conn.executescript(SCHEMA)


def find_question_id_by_hash(content_hash: str, db_path: Optional[Path] = None) -> Optional[int]:
    """Return the id of the question with this content hash, if any."""
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT id FROM questions WHERE content_hash = ?",
            (content_hash,),
        ).fetchone()
        return row["id"] if row else None


def _question_params(record) -> tuple:
    c = record.classification
    return (
        record.question_text,
        record.explanation or "",
        c.provider,
        c.certification,
        c.category,
        c.difficulty,
        1 if record.is_multiple_choice else 0,
        json.dumps(list(c.tags)),
        json.dumps(record.metadata),
    )


def _insert_options(conn: sqlite3.Connection, question_id: int, record):
    conn.executemany(
        """
        INSERT INTO question_options (
            question_id, option_label, option_text, is_correct, option_order
        ) VALUES (?, ?, ?, ?, ?)
        """,
        [
            (question_id, label, text, 1 if is_correct else 0, order)
            for label, text, is_correct, order in record.option_rows()
        ],
    )


def insert_question(record, db_path: Optional[Path] = None) -> int:
    """Insert a question, its options and a fresh stats row in one transaction.

    Returns the new question id. Nothing is written if any statement fails.
    """
    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """
            INSERT INTO questions (
                question_text, explanation, provider, certification, category,
                difficulty, is_multiple_choice, tags, metadata, content_hash
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            _question_params(record) + (record.content_hash,),
        )
        question_id = cursor.lastrowid
        _insert_options(conn, question_id, record)
        conn.execute(
            "INSERT INTO question_stats (question_id) VALUES (?)",
            (question_id,),
        )
        return question_id


def update_question(question_id: int, record, db_path: Optional[Path] = None) -> bool:
    """Overwrite a question's fields and replace all of its options.

    The stats row is left alone. Returns False if no question has this id.
    """
    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """
            UPDATE questions SET
                question_text = ?,
                explanation = ?,
                provider = ?,
                certification = ?,
                category = ?,
                difficulty = ?,
                is_multiple_choice = ?,
                tags = ?,
                metadata = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            _question_params(record) + (question_id,),
        )
        if cursor.rowcount == 0:
            return False

        conn.execute("DELETE FROM question_options WHERE question_id = ?", (question_id,))
        _insert_options(conn, question_id, record)
        return True


def get_question(question_id: int, db_path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    """Get a question with its options in display order."""
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM questions WHERE id = ?", (question_id,)).fetchone()
        if not row:
            return None
        question = _row_to_dict(row)
        options = conn.execute(
            """
            SELECT option_label, option_text, is_correct, option_order
            FROM question_options WHERE question_id = ?
            ORDER BY option_order
            """,
            (question_id,),
        ).fetchall()
        question["options"] = [
            {
                "label": o["option_label"],
                "text": o["option_text"],
                "is_correct": bool(o["is_correct"]),
                "order": o["option_order"],
            }
            for o in options
        ]
        return question


def get_question_stats(question_id: int, db_path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM question_stats WHERE question_id = ?", (question_id,)
        ).fetchone()
        return dict(row) if row else None


def count_questions(db_path: Optional[Path] = None) -> int:
    with get_connection(db_path) as conn:
        return conn.execute("SELECT COUNT(*) AS count FROM questions").fetchone()["count"]


def get_statistics(db_path: Optional[Path] = None) -> Dict[str, Any]:
    """Get database statistics."""
    with get_connection(db_path) as conn:
        total = conn.execute("SELECT COUNT(*) as count FROM questions").fetchone()["count"]
        stats = {"total_questions": total}
        for column in ("provider", "certification", "category", "difficulty"):
            rows = conn.execute(
                f"SELECT {column}, COUNT(*) as count FROM questions "
                f"GROUP BY {column} ORDER BY count DESC, {column}"
            ).fetchall()
            stats[f"by_{column}"] = {row[column]: row["count"] for row in rows}
        return stats


def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    """Convert a database row to a dictionary with parsed JSON fields."""
    d = dict(row)
    d["tags"] = json.loads(d["tags"]) if d.get("tags") else []
    d["metadata"] = json.loads(d["metadata"]) if d.get("metadata") else {}
    d["is_multiple_choice"] = bool(d["is_multiple_choice"])
    d["is_active"] = bool(d["is_active"])
    return d


if __name__ == "__main__":
    init_db()
    print("Database schema created successfully.")
    stats = get_statistics()
    print(f"Current statistics: {stats}")
