"""
Resolve which options of a question are correct.

Input files mark correct answers in up to four different ways. They are
tried in a fixed order and the first one that yields anything wins:

1. ``correctAnswer``  - a single option index
2. ``correctAnswers`` - a list of option indices
3. ``isCorrect`` / ``correct`` flags on the options themselves
4. letter-dot tokens ("A.", "B.") found in the explanation text
"""

import re
from typing import List, Tuple
from dataclasses import dataclass, field

from .models import RawQuestion

LETTER_TOKEN = re.compile(r"\b[A-Z]\.", re.ASCII)

METHOD_SINGLE = "correctAnswer"
METHOD_ARRAY = "correctAnswers"
METHOD_FLAGS = "option_flags"
METHOD_EXPLANATION = "explanation"


@dataclass
class AnswerResolution:
    """Resolved correct-answer set plus how it was found."""
    indices: Tuple[int, ...] = ()
    method: str = ""
    warnings: List[str] = field(default_factory=list)

    @property
    def has_answer(self) -> bool:
        return len(self.indices) > 0

    @property
    def is_multiple_choice(self) -> bool:
        return len(self.indices) > 1


def _is_index(value) -> bool:
    # bool is an int subclass; true/false are not indices
    return isinstance(value, int) and not isinstance(value, bool)


def _valid_indices(values, option_count: int, source: str, warnings: List[str]) -> List[int]:
    """Keep integer indices inside the option range, warning about the rest."""
    kept = []
    for value in values:
        if _is_index(value) and 0 <= value < option_count:
            kept.append(value)
        else:
            warnings.append(f"{source} value {value!r} is not a valid option index")
    return kept


def _from_flags(question: RawQuestion) -> List[int]:
    return [i for i, option in enumerate(question.options) if option.is_correct]


def _from_explanation(question: RawQuestion) -> List[int]:
    indices = []
    for token in LETTER_TOKEN.findall(question.explanation or ""):
        index = ord(token[0]) - ord("A")
        if 0 <= index < len(question.options):
            indices.append(index)
    return indices


def _dedupe(indices: List[int]) -> Tuple[int, ...]:
    return tuple(dict.fromkeys(indices))


def resolve_correct_answers(question: RawQuestion) -> AnswerResolution:
    """Resolve the correct option indices of ``question``.

    Later methods are not consulted once an earlier one produced a result.
    An empty resolution carries a warning; the question is still stored,
    just without a correct option.
    """
    warnings: List[str] = []
    option_count = len(question.options)
    indices: List[int] = []
    method = ""

    if question.correct_answer is not None:
        indices = _valid_indices([question.correct_answer], option_count, METHOD_SINGLE, warnings)
        method = METHOD_SINGLE

    if not indices and question.correct_answers:
        indices = _valid_indices(question.correct_answers, option_count, METHOD_ARRAY, warnings)
        method = METHOD_ARRAY

    flagged = _from_flags(question)
    if not indices and flagged:
        indices = flagged
        method = METHOD_FLAGS
    elif indices and flagged and set(flagged) != set(indices):
        # Precedence stands; the disagreement is only reported
        warnings.append(
            f"{method} {sorted(set(indices))} disagrees with option flags {flagged}"
        )

    if not indices:
        indices = _from_explanation(question)
        method = METHOD_EXPLANATION if indices else ""

    if not indices:
        warnings.append("No correct answer found")

    return AnswerResolution(indices=_dedupe(indices), method=method, warnings=warnings)
