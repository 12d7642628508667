"""
Certification question import pipeline.

Modules:
- loader: file discovery and JSON normalization
- validator: per-record checks
- classifier: provider, certification, category, difficulty and tags
- answer_resolver: correct option indices
- deduplicator: content hash
- run: orchestration and CLI
"""

from .models import RawOption, RawQuestion, Classification, QuestionRecord
from .loader import QuestionFileError, find_files, load_question_file
from .validator import ValidationResult, validate_question
from .classifier import classify
from .answer_resolver import AnswerResolution, resolve_correct_answers
from .deduplicator import compute_hash

__all__ = [
    "RawOption",
    "RawQuestion",
    "Classification",
    "QuestionRecord",
    "QuestionFileError",
    "find_files",
    "load_question_file",
    "ValidationResult",
    "validate_question",
    "classify",
    "AnswerResolution",
    "resolve_correct_answers",
    "compute_hash",
]
