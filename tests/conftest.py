import os
import sys

# Ensure project root is on sys.path for test imports
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

import json  # noqa: E402

import pytest  # noqa: E402

from database import init_db  # noqa: E402
from pipeline.deduplicator import compute_hash  # noqa: E402
from pipeline.models import Classification, QuestionRecord, RawOption  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "questions.db"
    init_db(path)
    return path


@pytest.fixture
def write_json(tmp_path):
    def _write(name, payload):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


def make_record(text="What does Amazon S3 store?", option_texts=("Objects", "Blocks"),
                correct=(0,), provider="AWS", content_hash=None):
    options = [RawOption(text=t) for t in option_texts]
    return QuestionRecord(
        question_text=text,
        explanation="",
        classification=Classification(
            provider=provider,
            certification="General",
            category="Storage",
            difficulty="easy",
            tags=("aws-s3",),
        ),
        is_multiple_choice=len(correct) > 1,
        content_hash=content_hash or compute_hash(text, [t for t in option_texts if t]),
        metadata={"sourceFile": "test", "originalId": 1, "hasCorrectAnswer": bool(correct)},
        options=options,
        correct_indices=tuple(correct),
    )


@pytest.fixture
def record_factory():
    return make_record
