"""
Question file discovery and loading.

Two top-level JSON shapes are accepted::

    {"questions": [ {...}, {...} ]}
    [ {...}, {...} ]

Every element is converted to a :class:`RawQuestion` here so nothing
downstream has to care which shape or field names a file used.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List

from config import QUESTION_FILE_EXTENSION
from .models import RawOption, RawQuestion


class QuestionFileError(ValueError):
    """A question file could not be read or has an unknown structure."""


def find_files(pattern: str) -> List[Path]:
    """
    Resolve a CLI argument to question files.

    A plain path is returned as-is (a missing file surfaces later as a load
    error). A basename containing ``*`` matches, as a substring with the
    ``*`` removed, every ``.json`` file in that directory.
    """
    if "*" not in pattern:
        return [Path(pattern)]

    directory = os.path.dirname(pattern) or "."
    fragment = os.path.basename(pattern).replace("*", "")
    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        print(f"[ERROR] Cannot list files for {pattern}: {e}")
        return []

    return [
        Path(directory) / name
        for name in names
        if fragment in name and name.endswith(QUESTION_FILE_EXTENSION)
    ]


def _first_text(element: Dict[str, Any]) -> str:
    for key in ("question", "text"):
        value = element.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def _to_option(value: Any):
    """Build a RawOption, or None when the entry has no usable text."""
    if not isinstance(value, dict) or not isinstance(value.get("text"), str):
        return None
    label = value.get("label")
    return RawOption(
        text=value["text"],
        label=str(label) if label not in (None, "") else None,
        is_correct=bool(value.get("isCorrect") or value.get("correct")),
    )


def normalize_question(element: Any) -> RawQuestion:
    """Convert one raw JSON element into the canonical record."""
    if not isinstance(element, dict):
        return RawQuestion(text="")

    options = []
    malformed = []
    raw_options = element.get("options")
    for position, value in enumerate(raw_options if isinstance(raw_options, list) else []):
        option = _to_option(value)
        if option is None:
            malformed.append(position)
        else:
            options.append(option)

    explanation = element.get("explanation")
    correct_answers = element.get("correctAnswers")

    return RawQuestion(
        text=_first_text(element),
        options=options,
        source_id=element.get("id"),
        explanation=explanation if isinstance(explanation, str) else "",
        correct_answer=element.get("correctAnswer"),
        correct_answers=correct_answers if isinstance(correct_answers, list) else None,
        malformed_options=malformed,
    )


def load_question_file(path: Path) -> List[RawQuestion]:
    """Read a question file and return its normalized records.

    Raises:
        QuestionFileError: unreadable file, invalid JSON, or a top-level
            structure that is neither a list nor ``{"questions": [...]}``.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise QuestionFileError(f"Cannot read {path}: {e}") from e
    except (ValueError, RecursionError) as e:
        # decode errors, oversized integer literals and very deep nesting
        raise QuestionFileError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("questions"), list):
        elements = data["questions"]
    elif isinstance(data, list):
        elements = data
    else:
        raise QuestionFileError(f"Unrecognized JSON structure in {path}")

    return [normalize_question(element) for element in elements]
