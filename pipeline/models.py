"""
Shared record types for the import pipeline.
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field


@dataclass
class RawOption:
    """One answer option as read from an input file."""
    text: str
    label: Optional[str] = None
    is_correct: bool = False


@dataclass
class RawQuestion:
    """Canonical in-memory shape of one input question.

    Both accepted file shapes and both field-name variants (``question`` /
    ``text``, ``isCorrect`` / ``correct``) are normalized into this record
    by the loader.
    """
    text: str
    options: List[RawOption] = field(default_factory=list)
    source_id: Any = None
    explanation: str = ""
    correct_answer: Any = None       # single index signal
    correct_answers: Optional[List[Any]] = None  # index array signal
    malformed_options: List[int] = field(default_factory=list)

    @property
    def display_id(self) -> str:
        return str(self.source_id) if self.source_id is not None else "no-id"


@dataclass(frozen=True)
class Classification:
    """Classifier output for one question."""
    provider: str
    certification: str
    category: str
    difficulty: str
    tags: Tuple[str, ...] = ()


@dataclass
class QuestionRecord:
    """Everything the repository needs to write one question."""
    question_text: str
    explanation: str
    classification: Classification
    is_multiple_choice: bool
    content_hash: str
    metadata: Dict[str, Any]
    options: List[RawOption]
    correct_indices: Tuple[int, ...] = ()

    def option_rows(self) -> List[Tuple[str, str, bool, int]]:
        """(label, text, is_correct, order) rows, 1-based order in input order."""
        rows = []
        for i, option in enumerate(self.options):
            label = option.label or chr(ord("A") + i)
            rows.append((label, option.text, i in self.correct_indices, i + 1))
        return rows
